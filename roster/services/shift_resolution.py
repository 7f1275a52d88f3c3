from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime

from roster.enums import Role, Squad
from roster.services.policies import OverridePolicy
from roster.services.schedule_errors import AmbiguousOverride
from roster.services.time_windows import time_to_minutes


@dataclass(frozen=True, slots=True)
class RosterEmployee:
    id: int
    role: Role
    squad: Squad
    shift_start: str
    shift_end: str


@dataclass(frozen=True, slots=True)
class ShiftOverride:
    employee_id: int
    start_date: date
    end_date: date
    new_shift_start: str
    new_shift_end: str
    id: int | None = None
    created_at: datetime | None = None

    def covers(self, day_date: date) -> bool:
        return self.start_date <= day_date <= self.end_date


@dataclass(frozen=True, slots=True)
class EffectiveShift:
    start: str
    end: str
    is_overridden: bool = False

    def same_window(self, other: EffectiveShift) -> bool:
        return (
            time_to_minutes(self.start) == time_to_minutes(other.start)
            and time_to_minutes(self.end) == time_to_minutes(other.end)
        )


def matching_overrides(
    overrides: Iterable[ShiftOverride],
    *,
    employee_id: int,
    day_date: date,
) -> list[ShiftOverride]:
    return [item for item in overrides if item.employee_id == employee_id and item.covers(day_date)]


def _select_override(
    matches: list[ShiftOverride],
    *,
    employee_id: int,
    day_date: date,
    policy: OverridePolicy,
) -> ShiftOverride:
    if policy == OverridePolicy.STRICT and len(matches) > 1:
        raise AmbiguousOverride(employee_id, day_date, [item.id for item in matches])
    if policy == OverridePolicy.LATEST_CREATED:
        # max() keeps the first maximum, so scan in reverse to let later entries win ties.
        return max(
            reversed(matches),
            key=lambda item: item.created_at.timestamp() if item.created_at else float("-inf"),
        )
    return matches[0]


def resolve_effective_shift(
    employee: RosterEmployee,
    *,
    day_date: date,
    overrides: Iterable[ShiftOverride],
    policy: OverridePolicy = OverridePolicy.FIRST_MATCH,
) -> EffectiveShift:
    matches = matching_overrides(overrides, employee_id=employee.id, day_date=day_date)
    if not matches:
        return EffectiveShift(start=employee.shift_start, end=employee.shift_end, is_overridden=False)

    selected = _select_override(matches, employee_id=employee.id, day_date=day_date, policy=policy)
    return EffectiveShift(start=selected.new_shift_start, end=selected.new_shift_end, is_overridden=True)
