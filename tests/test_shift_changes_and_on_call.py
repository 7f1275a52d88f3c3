from __future__ import annotations

import unittest
from datetime import date

from roster.services.on_call import OnCallAssignment, validate_on_call_assignment
from roster.services.schedule_errors import InvalidOrder, InvalidRange, OnCallConflict
from roster.services.shift_changes import build_shift_override, overlapping_shift_changes
from roster.services.shift_resolution import ShiftOverride


class ShiftChangeTests(unittest.TestCase):
    def test_build_normalizes_window(self) -> None:
        override = build_shift_override(
            employee_id=4,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 3),
            new_shift_start="7:00",
            new_shift_end="16:00",
        )

        self.assertEqual((override.new_shift_start, override.new_shift_end), ("07:00", "16:00"))
        self.assertIsNone(override.id)

    def test_build_rejects_bad_window_or_range(self) -> None:
        with self.assertRaises(InvalidOrder):
            build_shift_override(
                employee_id=4,
                start_date=date(2024, 3, 1),
                end_date=date(2024, 3, 3),
                new_shift_start="16:00",
                new_shift_end="16:00",
            )
        with self.assertRaises(InvalidRange):
            build_shift_override(
                employee_id=4,
                start_date=date(2024, 3, 4),
                end_date=date(2024, 3, 3),
                new_shift_start="07:00",
                new_shift_end="16:00",
            )

    def test_overlapping_reports_same_employee_intersections(self) -> None:
        candidate = ShiftOverride(
            id=None,
            employee_id=4,
            start_date=date(2024, 3, 5),
            end_date=date(2024, 3, 10),
            new_shift_start="07:00",
            new_shift_end="16:00",
        )
        touching = ShiftOverride(
            id=1,
            employee_id=4,
            start_date=date(2024, 3, 10),
            end_date=date(2024, 3, 12),
            new_shift_start="10:00",
            new_shift_end="19:00",
        )
        before = ShiftOverride(
            id=2,
            employee_id=4,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 4),
            new_shift_start="10:00",
            new_shift_end="19:00",
        )
        other_employee = ShiftOverride(
            id=3,
            employee_id=5,
            start_date=date(2024, 3, 5),
            end_date=date(2024, 3, 10),
            new_shift_start="10:00",
            new_shift_end="19:00",
        )

        overlapping = overlapping_shift_changes(candidate, [touching, before, other_employee])

        self.assertEqual([item.id for item in overlapping], [1])

    def test_editing_ignores_its_own_record(self) -> None:
        stored = ShiftOverride(
            id=9,
            employee_id=4,
            start_date=date(2024, 3, 5),
            end_date=date(2024, 3, 10),
            new_shift_start="07:00",
            new_shift_end="16:00",
        )
        edited = ShiftOverride(
            id=9,
            employee_id=4,
            start_date=date(2024, 3, 6),
            end_date=date(2024, 3, 11),
            new_shift_start="07:00",
            new_shift_end="16:00",
        )

        self.assertEqual(overlapping_shift_changes(edited, [stored]), [])


class OnCallTests(unittest.TestCase):
    existing = [
        OnCallAssignment(id=1, employee_id=4, day_date=date(2024, 3, 9), start_time="20:00", end_time="23:00"),
    ]

    def test_second_assignment_on_same_day_conflicts(self) -> None:
        candidate = OnCallAssignment(employee_id=4, day_date=date(2024, 3, 9), start_time="08:00", end_time="12:00")

        with self.assertRaises(OnCallConflict) as ctx:
            validate_on_call_assignment(candidate, existing=self.existing)
        self.assertEqual(ctx.exception.existing_id, 1)

    def test_editing_same_assignment_is_allowed(self) -> None:
        candidate = OnCallAssignment(id=1, employee_id=4, day_date=date(2024, 3, 9), start_time="19:00", end_time="23:30")

        validated = validate_on_call_assignment(candidate, existing=self.existing)

        self.assertEqual((validated.start_time, validated.end_time), ("19:00", "23:30"))

    def test_other_days_and_employees_do_not_conflict(self) -> None:
        for candidate in [
            OnCallAssignment(employee_id=4, day_date=date(2024, 3, 10), start_time="8:00", end_time="12:00"),
            OnCallAssignment(employee_id=5, day_date=date(2024, 3, 9), start_time="08:00", end_time="12:00"),
        ]:
            with self.subTest(candidate=candidate):
                validated = validate_on_call_assignment(candidate, existing=self.existing)
                self.assertEqual(validated.start_time, "08:00")

    def test_window_order_is_enforced(self) -> None:
        candidate = OnCallAssignment(employee_id=4, day_date=date(2024, 3, 10), start_time="12:00", end_time="08:00")

        with self.assertRaises(InvalidOrder):
            validate_on_call_assignment(candidate, existing=self.existing)


if __name__ == "__main__":
    unittest.main()
