from datetime import date, datetime
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from roster.services.absence_dates import AbsenceShape, DateRange, DateSelection, SingleDay
from roster.services.absence_windows import AbsenceTimeSelection, ExplicitWindow, FullDay

HHMM_PATTERN = r"^\d{2}:\d{2}$"


class EffectiveShiftRead(BaseModel):
    employee_id: int
    day_date: date
    start: str
    end: str
    is_overridden: bool


class SingleDayDates(BaseModel):
    type: Literal["single"]
    day_date: date | None = None

    def to_shape(self) -> AbsenceShape:
        return SingleDay(day_date=self.day_date)


class DateRangeDates(BaseModel):
    type: Literal["range"]
    start_date: date | None = None
    end_date: date | None = None

    def to_shape(self) -> AbsenceShape:
        return DateRange(start_date=self.start_date, end_date=self.end_date)


class SelectedDates(BaseModel):
    type: Literal["multi"]
    dates: list[date] = Field(default_factory=list)

    def to_shape(self) -> AbsenceShape:
        return DateSelection.of(self.dates)


AbsenceDatesPayload = Annotated[
    Union[SingleDayDates, DateRangeDates, SelectedDates],
    Field(discriminator="type"),
]


class AbsenceExpandRequest(BaseModel):
    dates: AbsenceDatesPayload


class AbsenceExpandResponse(BaseModel):
    dates: list[date]


class AbsenceCheckRequest(BaseModel):
    employee_id: int = Field(ge=1)
    dates: AbsenceDatesPayload
    full_day: bool = False
    start_time: str | None = Field(default=None, pattern=HHMM_PATTERN)
    end_time: str | None = Field(default=None, pattern=HHMM_PATTERN)

    @model_validator(mode="after")
    def validate_time_selection(self) -> "AbsenceCheckRequest":
        if not self.full_day and (self.start_time is None or self.end_time is None):
            raise ValueError("start_time and end_time are required unless full_day is set")
        return self

    def to_time_selection(self) -> AbsenceTimeSelection:
        if self.full_day:
            return FullDay()
        return ExplicitWindow(start=self.start_time or "", end=self.end_time or "")


class AbsenceCreateRequest(AbsenceCheckRequest):
    reason: str = Field(min_length=1, max_length=1000)
    observation: str | None = None
    confirm_without_coverage: bool = False

    @model_validator(mode="after")
    def validate_reason(self) -> "AbsenceCreateRequest":
        if not self.reason.strip():
            raise ValueError("reason must not be blank")
        return self


class AbsenceDayRead(BaseModel):
    day_date: date
    start_time: str
    end_time: str
    duration_minutes: int


class AbsenceCheckResponse(BaseModel):
    employee_id: int
    dates: list[date]
    start_time: str
    end_time: str
    duration_minutes: int
    days: list[AbsenceDayRead]
    missing_coverage_dates: list[date]
    requires_confirmation: bool


class AbsenceRead(BaseModel):
    id: int
    employee_id: int
    reason: str
    day_date: date
    end_date: date
    start_time: str
    end_time: str
    duration_minutes: int
    observation: str | None
    approved: bool
    created_by: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ShiftChangeCheckRequest(BaseModel):
    id: int | None = Field(default=None, ge=1)
    employee_id: int = Field(ge=1)
    start_date: date
    end_date: date
    new_shift_start: str = Field(pattern=HHMM_PATTERN)
    new_shift_end: str = Field(pattern=HHMM_PATTERN)


class ShiftChangeConflictRead(BaseModel):
    id: int | None
    start_date: date
    end_date: date
    new_shift_start: str
    new_shift_end: str


class ShiftChangeCheckResponse(BaseModel):
    employee_id: int
    start_date: date
    end_date: date
    new_shift_start: str
    new_shift_end: str
    overlapping: list[ShiftChangeConflictRead]


class OnCallCheckRequest(BaseModel):
    id: int | None = Field(default=None, ge=1)
    employee_id: int = Field(ge=1)
    day_date: date
    start_time: str = Field(pattern=HHMM_PATTERN)
    end_time: str = Field(pattern=HHMM_PATTERN)


class OnCallCheckResponse(BaseModel):
    employee_id: int
    day_date: date
    start_time: str
    end_time: str
