"""
Active-day index.

An active day is a calendar day (in the fixed challenge timezone) with at
least one approved run. Every board reads active days from this index;
nothing else derives them.
"""

from collections.abc import Iterable
from datetime import date, tzinfo
from typing import Optional

from .models import ChallengeWindow, RunRecord
from .schemas import to_local_day

ActiveDayIndex = dict[str, set[date]]


def build_active_days(
    records: Iterable[RunRecord],
    timezone: Optional[tzinfo] = None,
) -> ActiveDayIndex:
    """
    Build the per-participant set of active days.

    Args:
        records: Normalized runs (any status, only approved ones count)
        timezone: Fixed zone for records whose date carries a time

    Returns:
        service_number -> set of local calendar days. Participants
        without approved runs are absent (use .get(sn, set())).
    """
    index: ActiveDayIndex = {}
    for record in records:
        if not record.is_approved:
            continue
        day = to_local_day(record.date, timezone)
        index.setdefault(record.service_number, set()).add(day)
    return index


def days_in_window(
    active: Iterable[date],
    window: ChallengeWindow,
    today: date,
) -> int:
    """Active days inside the elapsed window (start .. min(end, today))."""
    last = window.elapsed_end(today)
    return sum(1 for day in active if window.contains(day) and day <= last)


def active_on(index: ActiveDayIndex, day: date) -> set[str]:
    """Service numbers with an approved run on `day`."""
    return {service_number for service_number, days in index.items() if day in days}
