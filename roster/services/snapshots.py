from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from roster.errors import ApiError
from roster.enums import Role, Squad
from roster.models import Employee, ShiftChange
from roster.services.shift_resolution import RosterEmployee, ShiftOverride


def to_roster_employee(employee: Employee) -> RosterEmployee:
    return RosterEmployee(
        id=employee.id,
        role=employee.role,
        squad=employee.squad,
        shift_start=employee.shift_start,
        shift_end=employee.shift_end,
    )


def to_shift_override(change: ShiftChange) -> ShiftOverride:
    return ShiftOverride(
        id=change.id,
        employee_id=change.employee_id,
        start_date=change.start_date,
        end_date=change.end_date,
        new_shift_start=change.new_shift_start,
        new_shift_end=change.new_shift_end,
        created_at=change.created_at,
    )


def get_employee_or_404(db: Session, employee_id: int) -> Employee:
    employee = db.get(Employee, employee_id)
    if employee is None:
        raise ApiError(status_code=404, code="EMPLOYEE_NOT_FOUND", message="Employee not found.")
    return employee


def load_roster(
    db: Session,
    *,
    role: Role | None = None,
    squad: Squad | None = None,
) -> list[RosterEmployee]:
    stmt = select(Employee).order_by(Employee.id.asc())
    if role is not None:
        stmt = stmt.where(Employee.role == role)
    if squad is not None:
        stmt = stmt.where(Employee.squad == squad)
    return [to_roster_employee(employee) for employee in db.scalars(stmt).all()]


def load_shift_overrides(
    db: Session,
    *,
    employee_ids: Iterable[int] | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[ShiftOverride]:
    # Creation order defines the first-match order of the resolver.
    stmt = select(ShiftChange).order_by(ShiftChange.created_at.asc(), ShiftChange.id.asc())
    if employee_ids is not None:
        stmt = stmt.where(ShiftChange.employee_id.in_(list(employee_ids)))
    if start_date is not None:
        stmt = stmt.where(ShiftChange.end_date >= start_date)
    if end_date is not None:
        stmt = stmt.where(ShiftChange.start_date <= end_date)
    return [to_shift_override(change) for change in db.scalars(stmt).all()]
