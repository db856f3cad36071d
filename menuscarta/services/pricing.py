"""Price computation and currency formatting."""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Literal

from pydantic import BaseModel

from menuscarta.core.config import settings
from menuscarta.core.currencies import get_currency
from menuscarta.core.errors import ValidationError
from menuscarta.models.promotion import ScheduledDiscount
from menuscarta.services.schedule import best_discount_for_category
from menuscarta.utils.time import utcnow

HUNDRED = Decimal("100")
# Largest value MenuItem.base_price (Numeric(12, 2)) can hold.
MAX_BASE_PRICE = Decimal("9999999999.99")


class PriceQuote(BaseModel):
    """Derived price for one item at one moment."""

    base_price: Decimal
    final_price: Decimal
    applied_discount_percentage: Decimal | None = None
    discount_source: Literal["direct", "scheduled"] | None = None
    scheduled_discount_name: str | None = None
    currency: str
    display_price: str
    display_base_price: str

    @property
    def has_discount(self) -> bool:
        return self.final_price < self.base_price


def to_decimal(value: Decimal | int | float | str, field: str = "amount") -> Decimal:
    if isinstance(value, bool):
        raise ValidationError(f"Valor numérico inválido en {field}", field=field)
    if isinstance(value, float) and not math.isfinite(value):
        raise ValidationError(f"Valor numérico inválido en {field}", field=field)
    try:
        result = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValidationError(f"Valor numérico inválido en {field}", field=field) from exc
    if not result.is_finite():
        raise ValidationError(f"Valor numérico inválido en {field}", field=field)
    return result


def validate_base_price(value: Decimal | int | float | str, field: str = "base_price") -> Decimal:
    amount = to_decimal(value, field)
    if amount < 0:
        raise ValidationError("El precio no puede ser negativo", field=field)
    if amount > MAX_BASE_PRICE:
        raise ValidationError("El precio supera el máximo permitido", field=field)
    return amount


def validate_percentage(
    value: Decimal | int | float | str | None,
    field: str = "discount_percentage",
) -> Decimal | None:
    if value is None:
        return None
    percentage = to_decimal(value, field)
    if percentage < 0 or percentage > HUNDRED:
        raise ValidationError("El descuento debe estar entre 0 y 100", field=field)
    return percentage


def round_amount(amount: Decimal, decimals: int) -> Decimal:
    """Round half-up to the currency precision."""
    try:
        return amount.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValidationError("Importe fuera de rango", field="amount") from exc


def format_price(amount: Decimal | int | float | str, currency_code: str | None = None) -> str:
    """Render an amount with the currency's separators and symbol."""
    currency = get_currency(currency_code).currency
    value = to_decimal(amount)
    if value < 0:
        raise ValidationError("El precio no puede ser negativo", field="amount")
    value = round_amount(value, currency.decimals)

    integer_part, _, decimal_part = f"{value:f}".partition(".")
    grouped = f"{int(integer_part):,}"
    if currency.thousands_separator != ",":
        grouped = grouped.replace(",", currency.thousands_separator)

    number = grouped
    if currency.decimals > 0 and decimal_part:
        number = f"{grouped}{currency.decimal_separator}{decimal_part}"

    if currency.position == "before":
        return f"{currency.symbol}{number}"
    return f"{number}{currency.symbol}"


def parse_price(text: str, currency_code: str | None = None) -> Decimal:
    """Read back the numeric value of a string produced by ``format_price``."""
    currency = get_currency(currency_code).currency
    raw = (text or "").strip()
    if currency.position == "before" and raw.startswith(currency.symbol):
        raw = raw[len(currency.symbol):]
    elif currency.position == "after" and raw.endswith(currency.symbol):
        raw = raw[: -len(currency.symbol)]
    else:
        raise ValidationError(f"Precio con formato inválido: {text!r}", field="amount")

    raw = raw.replace(currency.thousands_separator, "")
    if currency.decimals > 0 and currency.decimal_separator != ".":
        raw = raw.replace(currency.decimal_separator, ".")
    return validate_base_price(raw, "amount")


def compute_price(
    base_price: Decimal | int | float | str,
    discount_percentage: Decimal | int | float | str | None = None,
    *,
    category_id: int | None = None,
    scheduled: Iterable[ScheduledDiscount] = (),
    now: datetime | None = None,
    timezone_name: str | None = None,
    currency_code: str | None = None,
) -> PriceQuote:
    """Apply the direct discount, else the best active scheduled one, then round.

    A direct discount of zero counts as "no direct discount" so category
    schedules still apply to items saved with the default value.
    """
    base = validate_base_price(base_price)
    direct = validate_percentage(discount_percentage)
    currency = get_currency(currency_code).currency

    applied: Decimal | None = None
    source: Literal["direct", "scheduled"] | None = None
    scheduled_name: str | None = None

    if direct is not None and direct > 0:
        applied, source = direct, "direct"
    elif category_id is not None:
        best = best_discount_for_category(
            scheduled,
            category_id,
            now or utcnow(),
            timezone_name or settings.default_timezone,
        )
        if best is not None:
            applied = validate_percentage(best.discount_percentage, "scheduled_discount.discount_percentage")
            source = "scheduled"
            scheduled_name = best.name

    final = base if applied is None else base * (1 - applied / HUNDRED)
    final = round_amount(final, currency.decimals)

    return PriceQuote(
        base_price=base,
        final_price=final,
        applied_discount_percentage=applied,
        discount_source=source,
        scheduled_discount_name=scheduled_name,
        currency=currency.code,
        display_price=format_price(final, currency.code),
        display_base_price=format_price(base, currency.code),
    )
