from __future__ import annotations

from datetime import date


class ScheduleValidationError(Exception):
    code = "SCHEDULE_VALIDATION_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidFormat(ScheduleValidationError):
    code = "INVALID_FORMAT"

    def __init__(self, value: object, expected: str):
        super().__init__(f"Invalid value {value!r}, expected {expected}.")
        self.value = value
        self.expected = expected


class MissingDate(ScheduleValidationError):
    code = "MISSING_DATE"

    def __init__(self, field: str = "date"):
        super().__init__(f"A value for '{field}' is required.")
        self.field = field


class EmptySelection(ScheduleValidationError):
    code = "EMPTY_SELECTION"

    def __init__(self) -> None:
        super().__init__("At least one date must be selected.")


class InvalidRange(ScheduleValidationError):
    code = "INVALID_RANGE"

    def __init__(self, start_date: date, end_date: date):
        super().__init__(
            f"Start date {start_date.isoformat()} must not be after end date {end_date.isoformat()}."
        )
        self.start_date = start_date
        self.end_date = end_date


class InvalidOrder(ScheduleValidationError):
    code = "INVALID_ORDER"

    def __init__(self, start: str, end: str):
        super().__init__(f"End time {end} must be after start time {start}.")
        self.start = start
        self.end = end


class OutOfShift(ScheduleValidationError):
    code = "OUT_OF_SHIFT"

    def __init__(self, day_date: date, shift_start: str, shift_end: str):
        super().__init__(
            f"On {day_date.isoformat()} the requested window is outside the active shift "
            f"({shift_start} - {shift_end})."
        )
        self.day_date = day_date
        self.shift_start = shift_start
        self.shift_end = shift_end


class AmbiguousOverride(ScheduleValidationError):
    code = "AMBIGUOUS_OVERRIDE"

    def __init__(self, employee_id: int, day_date: date, override_ids: list[int | None]):
        super().__init__(
            f"Employee {employee_id} has {len(override_ids)} shift changes active on {day_date.isoformat()}."
        )
        self.employee_id = employee_id
        self.day_date = day_date
        self.override_ids = override_ids


class OnCallConflict(ScheduleValidationError):
    code = "ON_CALL_CONFLICT"

    def __init__(self, employee_id: int, day_date: date, existing_id: int | None):
        super().__init__(f"Employee {employee_id} already has an on-call shift on {day_date.isoformat()}.")
        self.employee_id = employee_id
        self.day_date = day_date
        self.existing_id = existing_id
