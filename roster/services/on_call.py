from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from roster.models import OnCallShift
from roster.services.schedule_errors import InvalidOrder, OnCallConflict
from roster.services.time_windows import normalize_hhmm, time_to_minutes


@dataclass(frozen=True, slots=True)
class OnCallAssignment:
    employee_id: int
    day_date: date
    start_time: str
    end_time: str
    id: int | None = None


def validate_on_call_assignment(
    candidate: OnCallAssignment,
    *,
    existing: Sequence[OnCallAssignment],
) -> OnCallAssignment:
    for item in existing:
        if item.employee_id != candidate.employee_id or item.day_date != candidate.day_date:
            continue
        if candidate.id is not None and item.id == candidate.id:
            continue
        raise OnCallConflict(candidate.employee_id, candidate.day_date, item.id)

    if time_to_minutes(candidate.start_time) >= time_to_minutes(candidate.end_time):
        raise InvalidOrder(candidate.start_time, candidate.end_time)

    return OnCallAssignment(
        id=candidate.id,
        employee_id=candidate.employee_id,
        day_date=candidate.day_date,
        start_time=normalize_hhmm(candidate.start_time),
        end_time=normalize_hhmm(candidate.end_time),
    )


def load_on_call_assignments(db: Session, *, employee_id: int, day_date: date) -> list[OnCallAssignment]:
    rows = db.scalars(
        select(OnCallShift)
        .where(
            OnCallShift.employee_id == employee_id,
            OnCallShift.day_date == day_date,
        )
        .order_by(OnCallShift.id.asc())
    ).all()
    return [
        OnCallAssignment(
            id=row.id,
            employee_id=row.employee_id,
            day_date=row.day_date,
            start_time=row.start_time,
            end_time=row.end_time,
        )
        for row in rows
    ]
