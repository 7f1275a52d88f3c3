from __future__ import annotations

import re
from datetime import date, datetime

from roster.services.schedule_errors import InvalidFormat

MINUTES_PER_DAY = 24 * 60

_HHMM_RE = re.compile(r"(\d{1,2}):(\d{1,2})", re.ASCII)
_ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def time_to_minutes(value: str) -> int:
    if not isinstance(value, str):
        raise InvalidFormat(value, "HH:MM")
    match = _HHMM_RE.fullmatch(value.strip())
    if match is None:
        raise InvalidFormat(value, "HH:MM")
    hour = int(match.group(1))
    minute = int(match.group(2))
    if hour > 23 or minute > 59:
        raise InvalidFormat(value, "HH:MM")
    return hour * 60 + minute


def format_hhmm(minutes: int) -> str:
    if minutes < 0 or minutes >= MINUTES_PER_DAY:
        raise InvalidFormat(minutes, "minutes in [0, 1439]")
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def normalize_hhmm(value: str) -> str:
    return format_hhmm(time_to_minutes(value))


def within(window_start: str, window_end: str, check_start: str, check_end: str) -> bool:
    """Inclusive containment: touching either edge of the window is allowed."""
    return (
        time_to_minutes(window_start) <= time_to_minutes(check_start)
        and time_to_minutes(check_end) <= time_to_minutes(window_end)
    )


def overlaps(start1: str, end1: str, start2: str, end2: str) -> bool:
    """Open-interval overlap: windows that only share an endpoint do not overlap."""
    return time_to_minutes(start1) < time_to_minutes(end2) and time_to_minutes(start2) < time_to_minutes(end1)


def parse_iso_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or _ISO_DATE_RE.fullmatch(value.strip()) is None:
        raise InvalidFormat(value, "YYYY-MM-DD")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidFormat(value, "YYYY-MM-DD") from exc
