from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta

from roster.services.schedule_errors import EmptySelection, InvalidRange, MissingDate
from roster.services.time_windows import parse_iso_date


@dataclass(frozen=True, slots=True)
class SingleDay:
    day_date: date | str | None


@dataclass(frozen=True, slots=True)
class DateRange:
    start_date: date | str | None
    end_date: date | str | None


@dataclass(frozen=True, slots=True)
class DateSelection:
    days: tuple[date | str, ...]

    @classmethod
    def of(cls, days: Iterable[date | str]) -> DateSelection:
        return cls(days=tuple(days))


AbsenceShape = SingleDay | DateRange | DateSelection


def _required_date(value: date | str | None, field: str) -> date:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingDate(field)
    return parse_iso_date(value)


def iter_days(start_date: date, end_date: date) -> Iterable[date]:
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def expand_absence_dates(shape: AbsenceShape) -> list[date]:
    if isinstance(shape, SingleDay):
        return [_required_date(shape.day_date, "date")]

    if isinstance(shape, DateRange):
        start_date = _required_date(shape.start_date, "start_date")
        end_date = _required_date(shape.end_date, "end_date")
        if start_date > end_date:
            raise InvalidRange(start_date, end_date)
        return list(iter_days(start_date, end_date))

    if isinstance(shape, DateSelection):
        if not shape.days:
            raise EmptySelection()
        return sorted({_required_date(value, "dates") for value in shape.days})

    raise TypeError(f"Unsupported absence shape: {type(shape).__name__}")
