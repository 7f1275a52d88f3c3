import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from roster.db import get_db
from roster.errors import ApiError
from roster.schemas import (
    AbsenceCheckRequest,
    AbsenceCheckResponse,
    AbsenceCreateRequest,
    AbsenceDayRead,
    AbsenceExpandRequest,
    AbsenceExpandResponse,
    AbsenceRead,
)
from roster.services.absence_dates import expand_absence_dates
from roster.services.absences import (
    AbsencePlan,
    build_absence_records,
    create_absences,
    plan_absence_for_employee,
)
from roster.services.snapshots import get_employee_or_404
from roster.settings import get_full_day_policy, get_override_policy, get_settings

router = APIRouter(prefix="/api/absences", tags=["absences"])
logger = logging.getLogger("roster.absences")


def get_actor_name(request: Request) -> str:
    header_value = (request.headers.get("X-User-Name") or "").strip()
    if header_value:
        return header_value
    return get_settings().default_actor_name


def _plan_response(plan: AbsencePlan) -> AbsenceCheckResponse:
    return AbsenceCheckResponse(
        employee_id=plan.employee_id,
        dates=list(plan.dates),
        start_time=plan.window.start,
        end_time=plan.window.end,
        duration_minutes=plan.window.duration_minutes,
        days=[
            AbsenceDayRead(
                day_date=day.day_date,
                start_time=day.start,
                end_time=day.end,
                duration_minutes=day.duration_minutes,
            )
            for day in plan.window.days
        ],
        missing_coverage_dates=list(plan.missing_coverage),
        requires_confirmation=plan.requires_confirmation,
    )


def _plan_from_payload(db: Session, payload: AbsenceCheckRequest) -> AbsencePlan:
    employee = get_employee_or_404(db, payload.employee_id)
    return plan_absence_for_employee(
        db,
        employee=employee,
        shape=payload.dates.to_shape(),
        window=payload.to_time_selection(),
        override_policy=get_override_policy(),
        full_day_policy=get_full_day_policy(),
    )


@router.post("/expand", response_model=AbsenceExpandResponse)
def expand_absence_endpoint(payload: AbsenceExpandRequest) -> AbsenceExpandResponse:
    return AbsenceExpandResponse(dates=expand_absence_dates(payload.dates.to_shape()))


@router.post("/check", response_model=AbsenceCheckResponse)
def check_absence_endpoint(
    payload: AbsenceCheckRequest,
    db: Session = Depends(get_db),
) -> AbsenceCheckResponse:
    return _plan_response(_plan_from_payload(db, payload))


@router.post("", response_model=list[AbsenceRead], status_code=status.HTTP_201_CREATED)
def create_absence_endpoint(
    payload: AbsenceCreateRequest,
    request: Request,
    db: Session = Depends(get_db),
) -> list[AbsenceRead]:
    plan = _plan_from_payload(db, payload)
    if plan.requires_confirmation:
        missing = [day.isoformat() for day in plan.missing_coverage]
        if not payload.confirm_without_coverage:
            raise ApiError(
                status_code=409,
                code="COVERAGE_CONFIRMATION_REQUIRED",
                message=(
                    f"No colleague with the exact shift ({plan.window.start} - {plan.window.end}) "
                    f"covers these dates: {', '.join(missing)}."
                ),
                details={"missing_coverage_dates": missing},
            )
        logger.warning(
            "absence_coverage_gap",
            extra={
                "request_id": getattr(request.state, "request_id", None),
                "employee_id": plan.employee_id,
                "missing_coverage": missing,
            },
        )

    records = build_absence_records(
        plan,
        reason=payload.reason.strip(),
        observation=payload.observation,
        actor=get_actor_name(request),
        now=datetime.now(timezone.utc),
    )
    return create_absences(db, records)
