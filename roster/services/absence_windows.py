from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from roster.services.policies import FullDayPolicy, OverridePolicy
from roster.services.schedule_errors import EmptySelection, InvalidOrder, OutOfShift
from roster.services.shift_resolution import (
    EffectiveShift,
    RosterEmployee,
    ShiftOverride,
    resolve_effective_shift,
)
from roster.services.time_windows import normalize_hhmm, time_to_minutes, within


@dataclass(frozen=True, slots=True)
class FullDay:
    pass


@dataclass(frozen=True, slots=True)
class ExplicitWindow:
    start: str
    end: str


AbsenceTimeSelection = FullDay | ExplicitWindow


@dataclass(frozen=True, slots=True)
class DayWindow:
    day_date: date
    start: str
    end: str
    duration_minutes: int


@dataclass(frozen=True, slots=True)
class AbsenceWindowResult:
    start: str
    end: str
    duration_minutes: int
    days: tuple[DayWindow, ...]


def window_duration_minutes(start: str, end: str) -> int:
    return time_to_minutes(end) - time_to_minutes(start)


def _day_window(day_date: date, start: str, end: str) -> DayWindow:
    start = normalize_hhmm(start)
    end = normalize_hhmm(end)
    return DayWindow(
        day_date=day_date,
        start=start,
        end=end,
        duration_minutes=window_duration_minutes(start, end),
    )


def _full_day_windows(
    employee: RosterEmployee,
    *,
    dates: Sequence[date],
    overrides: Sequence[ShiftOverride],
    override_policy: OverridePolicy,
    full_day_policy: FullDayPolicy,
) -> list[DayWindow]:
    if full_day_policy == FullDayPolicy.PER_DAY:
        shifts = [
            resolve_effective_shift(employee, day_date=day_date, overrides=overrides, policy=override_policy)
            for day_date in dates
        ]
    else:
        anchor: EffectiveShift = resolve_effective_shift(
            employee,
            day_date=dates[0],
            overrides=overrides,
            policy=override_policy,
        )
        shifts = [anchor] * len(dates)
    return [_day_window(day_date, shift.start, shift.end) for day_date, shift in zip(dates, shifts)]


def _explicit_windows(
    employee: RosterEmployee,
    *,
    window: ExplicitWindow,
    dates: Sequence[date],
    overrides: Sequence[ShiftOverride],
    override_policy: OverridePolicy,
) -> list[DayWindow]:
    if time_to_minutes(window.start) >= time_to_minutes(window.end):
        raise InvalidOrder(window.start, window.end)

    for day_date in dates:
        shift = resolve_effective_shift(employee, day_date=day_date, overrides=overrides, policy=override_policy)
        if not within(shift.start, shift.end, window.start, window.end):
            raise OutOfShift(day_date, normalize_hhmm(shift.start), normalize_hhmm(shift.end))

    return [_day_window(day_date, window.start, window.end) for day_date in dates]


def validate_absence_window(
    employee: RosterEmployee,
    *,
    dates: Sequence[date],
    window: AbsenceTimeSelection,
    overrides: Sequence[ShiftOverride] = (),
    override_policy: OverridePolicy = OverridePolicy.FIRST_MATCH,
    full_day_policy: FullDayPolicy = FullDayPolicy.ANCHOR_FIRST_DAY,
) -> AbsenceWindowResult:
    """Check a requested absence window against the employee's effective shift.

    A full-day request takes its hours from the effective shift. Under
    ``ANCHOR_FIRST_DAY`` the first date's shift is reused for every date even
    when a shift change starts or ends inside the range; ``PER_DAY`` resolves
    each date on its own.

    An explicit window must fit inside the effective shift of every date.
    The top-level start, end and duration describe the first date.
    """
    if not dates:
        raise EmptySelection()

    if isinstance(window, FullDay):
        days = _full_day_windows(
            employee,
            dates=dates,
            overrides=overrides,
            override_policy=override_policy,
            full_day_policy=full_day_policy,
        )
    elif isinstance(window, ExplicitWindow):
        days = _explicit_windows(
            employee,
            window=window,
            dates=dates,
            overrides=overrides,
            override_policy=override_policy,
        )
    else:
        raise TypeError(f"Unsupported absence window: {type(window).__name__}")

    first = days[0]
    return AbsenceWindowResult(
        start=first.start,
        end=first.end,
        duration_minutes=first.duration_minutes,
        days=tuple(days),
    )
