"""Price computation and currency formatting tests."""

from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from menuscarta.core.currencies import CURRENCIES, get_currency
from menuscarta.core.errors import ValidationError
from menuscarta.models.promotion import ScheduledDiscount
from menuscarta.services.pricing import compute_price, format_price, parse_price

SANTIAGO = "America/Santiago"
# Wednesday.
WEDNESDAY_18H = datetime(2026, 10, 21, 18, 0, tzinfo=ZoneInfo(SANTIAGO))
WEDNESDAY_19H = datetime(2026, 10, 21, 19, 0, tzinfo=ZoneInfo(SANTIAGO))


def _discount(discount_id: int, percentage: str, **overrides) -> ScheduledDiscount:
    values = {
        "id": discount_id,
        "restaurant_id": 1,
        "category_id": 10,
        "name": f"Descuento {discount_id}",
        "discount_percentage": Decimal(percentage),
        "days_of_week": [1, 2, 3, 4, 5],
        "start_time": "17:00",
        "end_time": "19:00",
        "is_active": True,
    }
    values.update(overrides)
    return ScheduledDiscount(**values)


def test_get_currency_falls_back_to_euro_for_unknown_codes() -> None:
    resolved = get_currency("XYZ")
    assert resolved.source == "default"
    assert resolved.currency.code == "EUR"

    configured = get_currency("clp")
    assert configured.source == "configured"
    assert configured.currency.decimals == 0


def test_format_price_uses_currency_separators() -> None:
    assert format_price(12.5, "EUR") == "€12,50"
    assert format_price(Decimal("1234.5"), "EUR") == "€1.234,50"
    assert format_price(1234.5, "USD") == "$1,234.50"
    assert format_price(1234, "CLP") == "$1.234"
    assert format_price(1000000, "BRL") == "R$1.000.000,00"
    assert format_price(0, "GBP") == "£0.00"
    assert format_price(Decimal("12.3"), "PEN") == "S/12.30"


def test_format_price_rounds_half_up_to_currency_decimals() -> None:
    assert format_price(Decimal("0.125"), "USD") == "$0.13"
    assert format_price(Decimal("1234.5"), "CLP") == "$1.235"
    assert format_price(Decimal("1234.4"), "COP") == "$1.234"


def test_format_price_unknown_currency_uses_euro_rules() -> None:
    assert format_price(5, "ZZZ") == "€5,00"
    assert format_price(5, None) == "€5,00"


def test_format_price_rejects_negative_amounts() -> None:
    with pytest.raises(ValidationError):
        format_price(-1, "EUR")


def test_format_price_rejects_amounts_beyond_precision() -> None:
    with pytest.raises(ValidationError):
        format_price(Decimal("1e30"), "USD")


@pytest.mark.parametrize("code", sorted(CURRENCIES))
def test_parse_price_reads_back_formatted_strings(code: str) -> None:
    text = format_price(Decimal("1234567.89"), code)
    assert format_price(parse_price(text, code), code) == text


def test_parse_price_handles_multi_character_symbols() -> None:
    assert parse_price("$U1.234,50", "UYU") == Decimal("1234.50")
    assert parse_price("R$10,00", "BRL") == Decimal("10.00")


def test_parse_price_rejects_text_without_symbol() -> None:
    with pytest.raises(ValidationError):
        parse_price("1234", "EUR")


def test_direct_discount_is_applied_and_rounded() -> None:
    quote = compute_price(1000, 10, currency_code="CLP")

    assert quote.final_price == 900
    assert quote.discount_source == "direct"
    assert quote.applied_discount_percentage == 10
    assert quote.display_price == "$900"
    assert quote.display_base_price == "$1.000"
    assert quote.has_discount is True


def test_no_discount_keeps_base_price() -> None:
    quote = compute_price(Decimal("12.5"), None, currency_code="EUR")

    assert quote.final_price == Decimal("12.50")
    assert quote.discount_source is None
    assert quote.applied_discount_percentage is None
    assert quote.display_price == "€12,50"
    assert quote.has_discount is False


def test_rounding_is_half_up_on_final_price() -> None:
    assert compute_price(Decimal("9.99"), 15, currency_code="USD").final_price == Decimal("8.49")
    assert compute_price(1990, 15, currency_code="CLP").final_price == Decimal("1692")


def test_scheduled_discount_applies_inside_window() -> None:
    quote = compute_price(
        2000,
        None,
        category_id=10,
        scheduled=[_discount(1, "20", name="Happy hour")],
        now=WEDNESDAY_18H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.final_price == 1600
    assert quote.discount_source == "scheduled"
    assert quote.scheduled_discount_name == "Happy hour"
    assert quote.display_price == "$1.600"


def test_scheduled_discount_end_time_is_exclusive() -> None:
    quote = compute_price(
        2000,
        None,
        category_id=10,
        scheduled=[_discount(1, "20")],
        now=WEDNESDAY_19H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.final_price == 2000
    assert quote.discount_source is None


def test_zero_direct_discount_lets_schedule_apply() -> None:
    quote = compute_price(
        2000,
        0,
        category_id=10,
        scheduled=[_discount(1, "20")],
        now=WEDNESDAY_18H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.discount_source == "scheduled"
    assert quote.final_price == 1600


def test_direct_discount_takes_precedence_over_schedule() -> None:
    quote = compute_price(
        2000,
        10,
        category_id=10,
        scheduled=[_discount(1, "50")],
        now=WEDNESDAY_18H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.discount_source == "direct"
    assert quote.final_price == 1800


def test_largest_active_scheduled_discount_wins() -> None:
    quote = compute_price(
        1000,
        None,
        category_id=10,
        scheduled=[_discount(1, "15"), _discount(2, "25"), _discount(3, "40", is_active=False)],
        now=WEDNESDAY_18H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.applied_discount_percentage == 25
    assert quote.final_price == 750


def test_equal_scheduled_discounts_resolve_to_lowest_id() -> None:
    quote = compute_price(
        1000,
        None,
        category_id=10,
        scheduled=[_discount(7, "20", name="Segundo"), _discount(3, "20", name="Primero")],
        now=WEDNESDAY_18H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.scheduled_discount_name == "Primero"


def test_scheduled_discount_on_other_category_is_ignored() -> None:
    quote = compute_price(
        1000,
        None,
        category_id=11,
        scheduled=[_discount(1, "20")],
        now=WEDNESDAY_18H,
        timezone_name=SANTIAGO,
        currency_code="CLP",
    )

    assert quote.final_price == 1000


@pytest.mark.parametrize(
    ("base_price", "discount"),
    [(-1, None), (100, 101), (100, -5), ("abc", None), (float("nan"), None), ("1e30", None)],
)
def test_invalid_inputs_raise_validation_error(base_price, discount) -> None:
    with pytest.raises(ValidationError):
        compute_price(base_price, discount)


def test_malformed_schedule_time_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        compute_price(
            1000,
            None,
            category_id=10,
            scheduled=[_discount(1, "20", start_time="25:00")],
            now=WEDNESDAY_18H,
            timezone_name=SANTIAGO,
        )


def test_base_price_limit_matches_stored_precision() -> None:
    quote = compute_price(Decimal("9999999999.99"), None, currency_code="USD")

    assert quote.display_price == "$9,999,999,999.99"
    with pytest.raises(ValidationError) as exc_info:
        compute_price(Decimal("10000000000"), None, currency_code="CLP")
    assert exc_info.value.field == "base_price"
