from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone

from sqlalchemy.orm import Session

from roster.models import Absence, Employee
from roster.services.absence_dates import AbsenceShape, expand_absence_dates
from roster.services.absence_windows import (
    AbsenceTimeSelection,
    AbsenceWindowResult,
    validate_absence_window,
)
from roster.services.coverage import missing_coverage_dates
from roster.services.policies import FullDayPolicy, OverridePolicy
from roster.services.shift_resolution import RosterEmployee, ShiftOverride
from roster.services.snapshots import load_roster, load_shift_overrides, to_roster_employee

logger = logging.getLogger("roster.absences")


@dataclass(frozen=True, slots=True)
class AbsencePlan:
    employee_id: int
    dates: tuple[date, ...]
    window: AbsenceWindowResult
    missing_coverage: tuple[date, ...]

    @property
    def requires_confirmation(self) -> bool:
        return bool(self.missing_coverage)


def plan_absence(
    employee: RosterEmployee,
    *,
    shape: AbsenceShape,
    window: AbsenceTimeSelection,
    roster: Sequence[RosterEmployee],
    overrides: Sequence[ShiftOverride],
    override_policy: OverridePolicy = OverridePolicy.FIRST_MATCH,
    full_day_policy: FullDayPolicy = FullDayPolicy.ANCHOR_FIRST_DAY,
) -> AbsencePlan:
    dates = expand_absence_dates(shape)
    resolved_window = validate_absence_window(
        employee,
        dates=dates,
        window=window,
        overrides=overrides,
        override_policy=override_policy,
        full_day_policy=full_day_policy,
    )
    missing = missing_coverage_dates(
        employee,
        dates=dates,
        roster=roster,
        overrides=overrides,
        override_policy=override_policy,
    )
    return AbsencePlan(
        employee_id=employee.id,
        dates=tuple(dates),
        window=resolved_window,
        missing_coverage=tuple(missing),
    )


def plan_absence_for_employee(
    db: Session,
    *,
    employee: Employee,
    shape: AbsenceShape,
    window: AbsenceTimeSelection,
    override_policy: OverridePolicy,
    full_day_policy: FullDayPolicy,
) -> AbsencePlan:
    dates = expand_absence_dates(shape)
    roster = load_roster(db, role=employee.role, squad=employee.squad)
    overrides = load_shift_overrides(
        db,
        employee_ids={item.id for item in roster} | {employee.id},
        start_date=dates[0],
        end_date=dates[-1],
    )
    plan = plan_absence(
        to_roster_employee(employee),
        shape=shape,
        window=window,
        roster=roster,
        overrides=overrides,
        override_policy=override_policy,
        full_day_policy=full_day_policy,
    )
    logger.info(
        "absence_plan_checked",
        extra={
            "employee_id": employee.id,
            "day_count": len(plan.dates),
            "start_time": plan.window.start,
            "end_time": plan.window.end,
            "missing_coverage": [day.isoformat() for day in plan.missing_coverage],
        },
    )
    return plan


def build_absence_records(
    plan: AbsencePlan,
    *,
    reason: str,
    observation: str | None,
    actor: str,
    now: datetime | None = None,
) -> list[Absence]:
    """One same-day record per date, sharing reason and observation."""
    created_at = now or datetime.now(timezone.utc)
    return [
        Absence(
            employee_id=plan.employee_id,
            reason=reason,
            day_date=day.day_date,
            end_date=day.day_date,
            start_time=day.start,
            end_time=day.end,
            duration_minutes=day.duration_minutes,
            observation=observation,
            approved=True,
            created_by=actor,
            created_at=created_at,
        )
        for day in plan.window.days
    ]


def create_absences(db: Session, records: list[Absence]) -> list[Absence]:
    for record in records:
        db.add(record)
    db.commit()
    for record in records:
        db.refresh(record)

    logger.info(
        "absence_records_created",
        extra={
            "employee_ids": sorted({record.employee_id for record in records}),
            "absence_ids": [record.id for record in records],
            "actor": records[0].created_by if records else None,
        },
    )
    return records
