from __future__ import annotations

import subprocess
import sys
import unittest
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

from roster.enums import Role, Squad
from roster.services.policies import OverridePolicy
from roster.services.schedule_errors import AmbiguousOverride
from roster.services.shift_resolution import (
    EffectiveShift,
    RosterEmployee,
    ShiftOverride,
    matching_overrides,
    resolve_effective_shift,
)


def _employee(employee_id: int = 1, shift_start: str = "09:00", shift_end: str = "18:00") -> RosterEmployee:
    return RosterEmployee(
        id=employee_id,
        role=Role.DBA,
        squad=Squad.LAKERS,
        shift_start=shift_start,
        shift_end=shift_end,
    )


class ShiftResolutionTests(unittest.TestCase):
    def test_permanent_shift_without_overrides(self) -> None:
        employee = _employee()
        start = date(2024, 1, 1)
        for offset in range(0, 366, 17):
            day_date = start + timedelta(days=offset)
            with self.subTest(day_date=day_date):
                shift = resolve_effective_shift(employee, day_date=day_date, overrides=[])
                self.assertEqual(shift, EffectiveShift(start="09:00", end="18:00", is_overridden=False))

    def test_override_applies_inside_inclusive_range(self) -> None:
        employee = _employee()
        override = ShiftOverride(
            id=10,
            employee_id=1,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 10),
            new_shift_start="07:00",
            new_shift_end="16:00",
        )

        for day_date in [date(2024, 3, 1), date(2024, 3, 4), date(2024, 3, 10)]:
            with self.subTest(day_date=day_date):
                shift = resolve_effective_shift(employee, day_date=day_date, overrides=[override])
                self.assertEqual(shift, EffectiveShift(start="07:00", end="16:00", is_overridden=True))

        for day_date in [date(2024, 2, 29), date(2024, 3, 11)]:
            with self.subTest(day_date=day_date):
                shift = resolve_effective_shift(employee, day_date=day_date, overrides=[override])
                self.assertFalse(shift.is_overridden)
                self.assertEqual((shift.start, shift.end), ("09:00", "18:00"))

    def test_ignores_overrides_of_other_employees(self) -> None:
        employee = _employee(employee_id=1)
        other = ShiftOverride(
            id=11,
            employee_id=2,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
            new_shift_start="12:00",
            new_shift_end="21:00",
        )

        shift = resolve_effective_shift(employee, day_date=date(2024, 3, 4), overrides=[other])

        self.assertFalse(shift.is_overridden)
        self.assertEqual(matching_overrides([other], employee_id=1, day_date=date(2024, 3, 4)), [])


class OverlappingOverridePolicyTests(unittest.TestCase):
    def setUp(self) -> None:
        self.employee = _employee()
        created = datetime(2024, 2, 1, 12, 0, tzinfo=timezone.utc)
        self.older_first = ShiftOverride(
            id=20,
            employee_id=1,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
            new_shift_start="07:00",
            new_shift_end="16:00",
            created_at=created + timedelta(days=5),
        )
        self.newer_second = ShiftOverride(
            id=21,
            employee_id=1,
            start_date=date(2024, 3, 4),
            end_date=date(2024, 3, 8),
            new_shift_start="10:00",
            new_shift_end="19:00",
            created_at=created + timedelta(days=9),
        )
        self.day_date = date(2024, 3, 5)

    def test_first_match_follows_list_order(self) -> None:
        shift = resolve_effective_shift(
            self.employee,
            day_date=self.day_date,
            overrides=[self.older_first, self.newer_second],
        )
        self.assertEqual((shift.start, shift.end), ("07:00", "16:00"))

        shift = resolve_effective_shift(
            self.employee,
            day_date=self.day_date,
            overrides=[self.newer_second, self.older_first],
        )
        self.assertEqual((shift.start, shift.end), ("10:00", "19:00"))

    def test_latest_created_ignores_list_order(self) -> None:
        for overrides in ([self.older_first, self.newer_second], [self.newer_second, self.older_first]):
            with self.subTest(order=[item.id for item in overrides]):
                shift = resolve_effective_shift(
                    self.employee,
                    day_date=self.day_date,
                    overrides=overrides,
                    policy=OverridePolicy.LATEST_CREATED,
                )
                self.assertEqual((shift.start, shift.end), ("10:00", "19:00"))
                self.assertTrue(shift.is_overridden)

    def test_latest_created_breaks_ties_by_later_position(self) -> None:
        first = ShiftOverride(
            id=30,
            employee_id=1,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
            new_shift_start="06:00",
            new_shift_end="15:00",
        )
        second = ShiftOverride(
            id=31,
            employee_id=1,
            start_date=date(2024, 3, 1),
            end_date=date(2024, 3, 31),
            new_shift_start="11:00",
            new_shift_end="20:00",
        )

        shift = resolve_effective_shift(
            self.employee,
            day_date=self.day_date,
            overrides=[first, second],
            policy=OverridePolicy.LATEST_CREATED,
        )

        self.assertEqual((shift.start, shift.end), ("11:00", "20:00"))

    def test_strict_rejects_ambiguous_day(self) -> None:
        with self.assertRaises(AmbiguousOverride) as ctx:
            resolve_effective_shift(
                self.employee,
                day_date=self.day_date,
                overrides=[self.older_first, self.newer_second],
                policy=OverridePolicy.STRICT,
            )

        self.assertEqual(ctx.exception.override_ids, [20, 21])
        self.assertEqual(ctx.exception.day_date, self.day_date)
        self.assertEqual(ctx.exception.code, "AMBIGUOUS_OVERRIDE")

    def test_strict_accepts_single_match(self) -> None:
        shift = resolve_effective_shift(
            self.employee,
            day_date=date(2024, 3, 20),
            overrides=[self.older_first, self.newer_second],
            policy=OverridePolicy.STRICT,
        )
        self.assertEqual((shift.start, shift.end), ("07:00", "16:00"))


class EngineImportTests(unittest.TestCase):
    def test_engine_modules_do_not_load_database_layer(self) -> None:
        code = (
            "import sys\n"
            "import roster.services.absence_windows\n"
            "import roster.services.coverage\n"
            "print('roster.db' in sys.modules, 'roster.models' in sys.modules)\n"
        )
        result = subprocess.run(
            [sys.executable, "-c", code],
            cwd=Path(__file__).resolve().parents[1],
            capture_output=True,
            text=True,
            check=True,
        )

        self.assertEqual(result.stdout.strip(), "False False")


if __name__ == "__main__":
    unittest.main()
