"""
Completion-day detector.

Walks a participant's approved runs in date order and finds the day the
cumulative distance first reaches the threshold ("100K finisher").
Accumulation stops at the crossing run: later runs never enter the log,
the total, or the active-day count.
"""

from collections.abc import Iterable, Sequence
from datetime import date, tzinfo
from typing import Optional

from runchallenge.shared.formulas import add_km

from .exceptions import require_positive
from .models import (
    CompletionResult,
    CumulativeLogEntry,
    Finisher,
    Journey,
    Participant,
    RankedEntry,
    RunRecord,
)
from .ranking import rank_finishers
from .schemas import to_local_day


def _walk(
    records: Iterable[RunRecord],
    threshold_km: float,
    timezone: Optional[tzinfo] = None,
) -> tuple[list[CumulativeLogEntry], set[date], Optional[date]]:
    """Cumulative log up to (and including) the crossing run."""
    # same local-day bucketing as build_active_days
    approved = [(to_local_day(r.date, timezone), r) for r in records if r.is_approved]
    approved.sort(key=lambda item: item[0])

    log: list[CumulativeLogEntry] = []
    days: set[date] = set()
    total = 0.0
    for day, record in approved:
        total = add_km(total, record.distance_km)
        days.add(day)
        log.append(CumulativeLogEntry(day, record.distance_km, total))
        if total >= threshold_km:
            return log, days, day
    return log, days, None


def find_completion(
    records: Iterable[RunRecord],
    threshold_km: float,
    timezone: Optional[tzinfo] = None,
) -> Optional[CompletionResult]:
    """
    Find when a participant's cumulative approved distance crossed the threshold.

    Args:
        records: One participant's runs (non-approved ones are ignored)
        threshold_km: Distance to reach (> 0)
        timezone: Fixed zone for records whose date carries a time

    Returns:
        CompletionResult, or None if the threshold was never reached.
        active_days_to_complete counts distinct days up to the crossing,
        not the participant's all-time active days.

    Raises:
        ChallengeConfigError: If threshold_km is not positive
    """
    require_positive("distance threshold", threshold_km)

    log, days, crossed_on = _walk(records, threshold_km, timezone)
    if crossed_on is None:
        return None
    return CompletionResult(
        completion_date=crossed_on,
        active_days_to_complete=len(days),
        cumulative_log=log,
    )


def journey(
    records: Iterable[RunRecord],
    participant: Participant,
    threshold_km: float,
    timezone: Optional[tzinfo] = None,
) -> Journey:
    """Audit view of one participant's runs up to the threshold crossing."""
    require_positive("distance threshold", threshold_km)

    own = [r for r in records if r.service_number == participant.service_number]
    log, days, crossed_on = _walk(own, threshold_km, timezone)
    return Journey(
        service_number=participant.service_number,
        name=participant.name,
        log=log,
        total_distance_km=log[-1].cumulative_km if log else 0.0,
        active_days=len(days),
        completed=crossed_on is not None,
    )


def list_finishers(
    records: Sequence[RunRecord],
    participants: Sequence[Participant],
    threshold_km: float,
    timezone: Optional[tzinfo] = None,
) -> list[RankedEntry[Finisher]]:
    """
    Ranked list of participants who crossed the distance threshold.

    Ordered by completion date, ties by registration order; finishers on
    the same day share a rank.
    """
    require_positive("distance threshold", threshold_km)

    by_runner: dict[str, list[RunRecord]] = {}
    for record in records:
        if record.is_approved:
            by_runner.setdefault(record.service_number, []).append(record)

    finishers: list[Finisher] = []
    for index, participant in enumerate(participants):
        completion = find_completion(
            by_runner.get(participant.service_number, []), threshold_km, timezone
        )
        if completion is not None:
            finishers.append(Finisher(participant, completion, registration_index=index))
    return rank_finishers(finishers)
