"""Time helpers shared by the pricing engine and the schedule editor."""

from __future__ import annotations

import re
from datetime import datetime, time, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from menuscarta.core.errors import ValidationError

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def parse_hhmm_time(value: str, field: str = "time") -> time:
    """Parse a strict 24-hour ``HH:MM`` string."""
    match = HHMM_PATTERN.match(value or "")
    if match is None:
        raise ValidationError(f"Hora inválida, usa el formato HH:MM: {value!r}", field=field)
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def get_zone(name: str) -> ZoneInfo:
    """Return the tz database zone for ``name`` or raise ValidationError."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValidationError(f"Zona horaria desconocida: {name}", field="timezone") from exc


def to_local(moment: datetime, zone_name: str) -> datetime:
    """Convert ``moment`` to the given zone; naive values are taken as UTC."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(get_zone(zone_name))


def sunday_based_weekday(moment: datetime) -> int:
    """Weekday with 0=Sunday..6=Saturday."""
    return (moment.weekday() + 1) % 7


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
