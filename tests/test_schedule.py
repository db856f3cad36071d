"""Scheduled discount window tests."""

from datetime import datetime, timezone
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from menuscarta.core.errors import ValidationError
from menuscarta.models.promotion import ScheduledDiscount
from menuscarta.services.schedule import describe_days, is_discount_active, next_activation

SANTIAGO = "America/Santiago"
ZONE = ZoneInfo(SANTIAGO)


def _discount(**overrides) -> ScheduledDiscount:
    values = {
        "id": 1,
        "restaurant_id": 1,
        "category_id": 10,
        "name": "Happy hour",
        "discount_percentage": Decimal("20"),
        "days_of_week": [1, 2, 3, 4, 5],
        "start_time": "17:00",
        "end_time": "19:00",
        "is_active": True,
    }
    values.update(overrides)
    return ScheduledDiscount(**values)


def test_weekday_window_is_start_inclusive_end_exclusive() -> None:
    discount = _discount()
    # 2026-10-21 is a Wednesday.
    assert is_discount_active(discount, datetime(2026, 10, 21, 17, 0, tzinfo=ZONE), SANTIAGO) is True
    assert is_discount_active(discount, datetime(2026, 10, 21, 18, 59, tzinfo=ZONE), SANTIAGO) is True
    assert is_discount_active(discount, datetime(2026, 10, 21, 19, 0, tzinfo=ZONE), SANTIAGO) is False
    assert is_discount_active(discount, datetime(2026, 10, 21, 16, 59, tzinfo=ZONE), SANTIAGO) is False


def test_window_is_evaluated_in_restaurant_timezone() -> None:
    discount = _discount()
    # 21:00 UTC is 18:00 in Santiago during southern summer time.
    now_utc = datetime(2026, 10, 21, 21, 0, tzinfo=timezone.utc)

    assert is_discount_active(discount, now_utc, SANTIAGO) is True
    assert is_discount_active(discount, now_utc, "UTC") is False


def test_weekend_is_excluded_from_weekday_schedule() -> None:
    saturday = datetime(2026, 10, 24, 18, 0, tzinfo=ZONE)
    assert is_discount_active(_discount(), saturday, SANTIAGO) is False


def test_window_spanning_midnight_belongs_to_previous_day() -> None:
    discount = _discount(days_of_week=[5], start_time="22:00", end_time="02:00")

    assert is_discount_active(discount, datetime(2026, 10, 23, 23, 0, tzinfo=ZONE), SANTIAGO) is True
    assert is_discount_active(discount, datetime(2026, 10, 24, 1, 0, tzinfo=ZONE), SANTIAGO) is True
    assert is_discount_active(discount, datetime(2026, 10, 24, 2, 0, tzinfo=ZONE), SANTIAGO) is False
    assert is_discount_active(discount, datetime(2026, 10, 24, 23, 0, tzinfo=ZONE), SANTIAGO) is False
    assert is_discount_active(discount, datetime(2026, 10, 23, 1, 0, tzinfo=ZONE), SANTIAGO) is False


def test_disabled_or_dayless_discount_is_never_active() -> None:
    now = datetime(2026, 10, 21, 18, 0, tzinfo=ZONE)
    assert is_discount_active(_discount(is_active=False), now, SANTIAGO) is False
    assert is_discount_active(_discount(days_of_week=[]), now, SANTIAGO) is False


def test_unknown_timezone_raises_validation_error() -> None:
    with pytest.raises(ValidationError):
        is_discount_active(_discount(), datetime(2026, 10, 21, 18, 0, tzinfo=ZONE), "Mars/Olympus")


def test_next_activation_reports_closing_time_while_active() -> None:
    result = next_activation(_discount(), datetime(2026, 10, 21, 18, 0, tzinfo=ZONE), SANTIAGO)

    assert result.is_active_now is True
    assert result.moment == datetime(2026, 10, 21, 19, 0, tzinfo=ZONE)


def test_next_activation_finds_next_opening_day() -> None:
    after_close = next_activation(_discount(), datetime(2026, 10, 21, 20, 0, tzinfo=ZONE), SANTIAGO)
    assert after_close.is_active_now is False
    assert after_close.moment == datetime(2026, 10, 22, 17, 0, tzinfo=ZONE)

    friday_night = next_activation(_discount(), datetime(2026, 10, 23, 20, 0, tzinfo=ZONE), SANTIAGO)
    assert friday_night.moment == datetime(2026, 10, 26, 17, 0, tzinfo=ZONE)


def test_next_activation_closing_time_after_midnight() -> None:
    discount = _discount(days_of_week=[5], start_time="22:00", end_time="02:00")

    result = next_activation(discount, datetime(2026, 10, 23, 23, 0, tzinfo=ZONE), SANTIAGO)

    assert result.is_active_now is True
    assert result.moment == datetime(2026, 10, 24, 2, 0, tzinfo=ZONE)


def test_next_activation_for_disabled_discount_is_empty() -> None:
    result = next_activation(_discount(is_active=False), datetime(2026, 10, 21, 18, 0, tzinfo=ZONE), SANTIAGO)
    assert result.is_active_now is False
    assert result.moment is None


def test_describe_days() -> None:
    assert describe_days([1, 2, 3, 4, 5]) == "Lun, Mar, Mié, Jue, Vie"
    assert describe_days(range(7)) == "Todos los días"
    assert describe_days([]) == "Ningún día"
    assert describe_days([6, 0]) == "Dom, Sáb"
