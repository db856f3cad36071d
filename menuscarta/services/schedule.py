"""Scheduled discount evaluation against a caller-supplied moment.

Windows are ``[start_time, end_time)`` at minute granularity in the
restaurant's timezone. A window whose end is earlier than its start spans
midnight; the part after midnight belongs to the previous day's schedule, so
a Friday 22:00-02:00 discount is still active at 01:00 on Saturday.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta
from decimal import Decimal

from pydantic import BaseModel

from menuscarta.models.promotion import ScheduledDiscount
from menuscarta.utils.time import get_zone, minutes_of_day, parse_hhmm_time, sunday_based_weekday, to_local

DAY_NAMES_SHORT: list[str] = ["Dom", "Lun", "Mar", "Mié", "Jue", "Vie", "Sáb"]


class NextActivation(BaseModel):
    is_active_now: bool
    moment: datetime | None = None


def _window(discount: ScheduledDiscount) -> tuple[int, int]:
    start = minutes_of_day(parse_hhmm_time(discount.start_time, "start_time"))
    end = minutes_of_day(parse_hhmm_time(discount.end_time, "end_time"))
    return start, end


def _days(discount: ScheduledDiscount) -> set[int]:
    return {int(day) for day in (discount.days_of_week or [])}


def is_discount_active(discount: ScheduledDiscount, now: datetime, timezone_name: str) -> bool:
    """Return True when ``now`` falls inside the discount's weekly window."""
    if not discount.is_active:
        return False
    days = _days(discount)
    if not days:
        return False

    start, end = _window(discount)
    local = to_local(now, timezone_name)
    current = local.hour * 60 + local.minute
    today = sunday_based_weekday(local)

    if start < end:
        return today in days and start <= current < end
    if start > end:
        if current >= start:
            return today in days
        if current < end:
            return (today - 1) % 7 in days
    return False


def active_discounts(
    discounts: Iterable[ScheduledDiscount],
    now: datetime,
    timezone_name: str,
) -> list[ScheduledDiscount]:
    return [discount for discount in discounts if is_discount_active(discount, now, timezone_name)]


def best_discount_for_category(
    discounts: Iterable[ScheduledDiscount],
    category_id: int,
    now: datetime,
    timezone_name: str,
) -> ScheduledDiscount | None:
    """Pick the active discount for a category.

    When several windows overlap the largest percentage wins; equal
    percentages resolve to the oldest row (lowest id).
    """
    candidates = [
        discount
        for discount in active_discounts(discounts, now, timezone_name)
        if discount.category_id == category_id
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda d: (Decimal(str(d.discount_percentage)), -(d.id or 0)))


def _at(day: date, minutes: int, timezone_name: str) -> datetime:
    moment = datetime(day.year, day.month, day.day, tzinfo=get_zone(timezone_name))
    return moment + timedelta(minutes=minutes)


def next_activation(discount: ScheduledDiscount, now: datetime, timezone_name: str) -> NextActivation:
    """When active, the moment the window closes; otherwise the next opening."""
    days = _days(discount)
    if not discount.is_active or not days:
        return NextActivation(is_active_now=False)

    start, end = _window(discount)
    local = to_local(now, timezone_name)
    current = local.hour * 60 + local.minute

    if is_discount_active(discount, now, timezone_name):
        closing_day = local.date()
        if start > end and current >= start:
            closing_day += timedelta(days=1)
        return NextActivation(is_active_now=True, moment=_at(closing_day, end, timezone_name))

    for offset in range(0, 8):
        day = local.date() + timedelta(days=offset)
        if (day.weekday() + 1) % 7 not in days:
            continue
        opening = _at(day, start, timezone_name)
        if opening > local:
            return NextActivation(is_active_now=False, moment=opening)
    return NextActivation(is_active_now=False)


def describe_days(days: Iterable[int]) -> str:
    values = sorted({int(day) for day in days})
    if len(values) == 7:
        return "Todos los días"
    if not values:
        return "Ningún día"
    return ", ".join(DAY_NAMES_SHORT[day] for day in values)


def describe_time_range(discount: ScheduledDiscount) -> str:
    return f"{discount.start_time} - {discount.end_time}"
