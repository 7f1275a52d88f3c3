from __future__ import annotations

from collections.abc import Sequence
from datetime import date

from roster.services.policies import OverridePolicy
from roster.services.schedule_errors import ScheduleValidationError
from roster.services.shift_resolution import (
    EffectiveShift,
    RosterEmployee,
    ShiftOverride,
    resolve_effective_shift,
)


def select_backup_peers(employee: RosterEmployee, roster: Sequence[RosterEmployee]) -> list[RosterEmployee]:
    return [
        peer
        for peer in roster
        if peer.id != employee.id and peer.role == employee.role and peer.squad == employee.squad
    ]


def _backs_up(
    peer: RosterEmployee,
    absent_shift: EffectiveShift,
    *,
    day_date: date,
    overrides: Sequence[ShiftOverride],
    policy: OverridePolicy,
) -> bool:
    try:
        peer_shift = resolve_effective_shift(peer, day_date=day_date, overrides=overrides, policy=policy)
        return peer_shift.same_window(absent_shift)
    except ScheduleValidationError:
        return False


def missing_coverage_dates(
    employee: RosterEmployee,
    *,
    dates: Sequence[date],
    roster: Sequence[RosterEmployee],
    overrides: Sequence[ShiftOverride] = (),
    override_policy: OverridePolicy = OverridePolicy.FIRST_MATCH,
) -> list[date]:
    # A backup must work exactly the same hours as the absent employee on that day.
    peers = select_backup_peers(employee, roster)
    missing: list[date] = []
    for day_date in dates:
        try:
            absent_shift = resolve_effective_shift(
                employee,
                day_date=day_date,
                overrides=overrides,
                policy=override_policy,
            )
        except ScheduleValidationError:
            missing.append(day_date)
            continue

        has_backup = any(
            _backs_up(peer, absent_shift, day_date=day_date, overrides=overrides, policy=override_policy)
            for peer in peers
        )
        if not has_backup:
            missing.append(day_date)
    return missing
