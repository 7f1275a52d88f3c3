from __future__ import annotations

import json
import logging
import sys
import unittest
from datetime import date

from roster.logging_utils import JsonFormatter


class JsonFormatterTests(unittest.TestCase):
    def _record(self, **extra: object) -> logging.LogRecord:
        record = logging.LogRecord("roster.absences", logging.INFO, __file__, 10, "absence_plan_checked", None, None)
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_extra_fields_are_merged_at_top_level(self) -> None:
        output = JsonFormatter().format(
            self._record(employee_id=7, missing_coverage=[date(2024, 3, 4)], day_count=1)
        )

        payload = json.loads(output)
        self.assertEqual(payload["message"], "absence_plan_checked")
        self.assertEqual(payload["logger"], "roster.absences")
        self.assertEqual(payload["level"], "INFO")
        self.assertEqual(payload["employee_id"], 7)
        self.assertEqual(payload["missing_coverage"], ["2024-03-04"])
        self.assertNotIn("lineno", payload)

    def test_exception_is_rendered(self) -> None:
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "roster.request", logging.ERROR, __file__, 20, "unhandled_error", None, sys.exc_info()
            )

        payload = json.loads(JsonFormatter().format(record))
        self.assertIn("RuntimeError: boom", payload["exception"])


if __name__ == "__main__":
    unittest.main()
