from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from sqlalchemy.orm import Session

from roster.services.schedule_errors import InvalidOrder, InvalidRange
from roster.services.shift_resolution import ShiftOverride
from roster.services.snapshots import load_shift_overrides
from roster.services.time_windows import normalize_hhmm, time_to_minutes


def build_shift_override(
    *,
    employee_id: int,
    start_date: date,
    end_date: date,
    new_shift_start: str,
    new_shift_end: str,
    override_id: int | None = None,
) -> ShiftOverride:
    if time_to_minutes(new_shift_start) >= time_to_minutes(new_shift_end):
        raise InvalidOrder(new_shift_start, new_shift_end)
    if start_date > end_date:
        raise InvalidRange(start_date, end_date)
    return ShiftOverride(
        id=override_id,
        employee_id=employee_id,
        start_date=start_date,
        end_date=end_date,
        new_shift_start=normalize_hhmm(new_shift_start),
        new_shift_end=normalize_hhmm(new_shift_end),
    )


def date_ranges_intersect(first: ShiftOverride, second: ShiftOverride) -> bool:
    return first.start_date <= second.end_date and second.start_date <= first.end_date


def overlapping_shift_changes(
    candidate: ShiftOverride,
    existing: Sequence[ShiftOverride],
) -> list[ShiftOverride]:
    return [
        item
        for item in existing
        if item.employee_id == candidate.employee_id
        and (candidate.id is None or item.id != candidate.id)
        and date_ranges_intersect(candidate, item)
    ]


def find_overlapping_shift_changes(db: Session, candidate: ShiftOverride) -> list[ShiftOverride]:
    existing = load_shift_overrides(
        db,
        employee_ids=[candidate.employee_id],
        start_date=candidate.start_date,
        end_date=candidate.end_date,
    )
    return overlapping_shift_changes(candidate, existing)
