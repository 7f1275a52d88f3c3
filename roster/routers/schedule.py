from datetime import date

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from roster.db import get_db
from roster.schemas import (
    EffectiveShiftRead,
    OnCallCheckRequest,
    OnCallCheckResponse,
    ShiftChangeCheckRequest,
    ShiftChangeCheckResponse,
    ShiftChangeConflictRead,
)
from roster.services.on_call import (
    OnCallAssignment,
    load_on_call_assignments,
    validate_on_call_assignment,
)
from roster.services.shift_changes import build_shift_override, find_overlapping_shift_changes
from roster.services.shift_resolution import resolve_effective_shift
from roster.services.snapshots import get_employee_or_404, load_shift_overrides, to_roster_employee
from roster.settings import get_override_policy

router = APIRouter(prefix="/api", tags=["schedule"])


@router.get("/employees/{employee_id}/effective-shift", response_model=EffectiveShiftRead)
def effective_shift_endpoint(
    employee_id: int,
    day: date = Query(...),
    db: Session = Depends(get_db),
) -> EffectiveShiftRead:
    employee = get_employee_or_404(db, employee_id)
    overrides = load_shift_overrides(db, employee_ids=[employee.id], start_date=day, end_date=day)
    shift = resolve_effective_shift(
        to_roster_employee(employee),
        day_date=day,
        overrides=overrides,
        policy=get_override_policy(),
    )
    return EffectiveShiftRead(
        employee_id=employee.id,
        day_date=day,
        start=shift.start,
        end=shift.end,
        is_overridden=shift.is_overridden,
    )


@router.post("/shift-changes/check", response_model=ShiftChangeCheckResponse)
def check_shift_change_endpoint(
    payload: ShiftChangeCheckRequest,
    db: Session = Depends(get_db),
) -> ShiftChangeCheckResponse:
    get_employee_or_404(db, payload.employee_id)
    candidate = build_shift_override(
        override_id=payload.id,
        employee_id=payload.employee_id,
        start_date=payload.start_date,
        end_date=payload.end_date,
        new_shift_start=payload.new_shift_start,
        new_shift_end=payload.new_shift_end,
    )
    overlapping = find_overlapping_shift_changes(db, candidate)
    return ShiftChangeCheckResponse(
        employee_id=candidate.employee_id,
        start_date=candidate.start_date,
        end_date=candidate.end_date,
        new_shift_start=candidate.new_shift_start,
        new_shift_end=candidate.new_shift_end,
        overlapping=[
            ShiftChangeConflictRead(
                id=item.id,
                start_date=item.start_date,
                end_date=item.end_date,
                new_shift_start=item.new_shift_start,
                new_shift_end=item.new_shift_end,
            )
            for item in overlapping
        ],
    )


@router.post("/on-call/check", response_model=OnCallCheckResponse)
def check_on_call_endpoint(
    payload: OnCallCheckRequest,
    db: Session = Depends(get_db),
) -> OnCallCheckResponse:
    get_employee_or_404(db, payload.employee_id)
    candidate = OnCallAssignment(
        id=payload.id,
        employee_id=payload.employee_id,
        day_date=payload.day_date,
        start_time=payload.start_time,
        end_time=payload.end_time,
    )
    validated = validate_on_call_assignment(
        candidate,
        existing=load_on_call_assignments(db, employee_id=payload.employee_id, day_date=payload.day_date),
    )
    return OnCallCheckResponse(
        employee_id=validated.employee_id,
        day_date=validated.day_date,
        start_time=validated.start_time,
        end_time=validated.end_time,
    )
