from __future__ import annotations

import enum


class OverridePolicy(str, enum.Enum):
    """How to pick a shift change when several cover the same employee and day."""

    FIRST_MATCH = "FIRST_MATCH"
    LATEST_CREATED = "LATEST_CREATED"
    STRICT = "STRICT"


class FullDayPolicy(str, enum.Enum):
    """Which effective shift a full-day absence takes its hours from."""

    ANCHOR_FIRST_DAY = "ANCHOR_FIRST_DAY"
    PER_DAY = "PER_DAY"
