"""
Runner aggregator.

Folds approved runs into per-participant totals joined against the
registered roster, plus the dashboard headline numbers.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from datetime import tzinfo
from typing import TYPE_CHECKING, Optional

from runchallenge.shared.constants import RunStatus
from runchallenge.shared.formulas import add_km

from .active_days import ActiveDayIndex, build_active_days
from .exceptions import require_positive
from .models import ChallengeSummary, Participant, RankedEntry, RunnerTotals, RunRecord

if TYPE_CHECKING:
    from .stations import StationDirectory

logger = logging.getLogger(__name__)


def aggregate_runners(
    records: Sequence[RunRecord],
    participants: Iterable[Participant],
    active_days: Optional[ActiveDayIndex] = None,
    timezone: Optional[tzinfo] = None,
) -> list[RunnerTotals]:
    """
    Per-participant approved distance, run count and active-day count.

    Every roster participant appears exactly once (zero-run participants
    with 0 km). Approved runs whose service number is not on the roster
    are kept under a synthetic, unregistered entry, appended after the
    roster in first-seen order.

    Args:
        records: Normalized runs, any status
        participants: Registered roster
        active_days: Prebuilt active-day index (built from records if None)
        timezone: Passed to build_active_days when the index is built here

    Returns:
        Roster entries in roster order, then orphan entries.
    """
    if active_days is None:
        active_days = build_active_days(records, timezone)

    totals: dict[str, RunnerTotals] = {}
    for participant in participants:
        if participant.service_number in totals:
            continue
        totals[participant.service_number] = RunnerTotals(
            service_number=participant.service_number,
            name=participant.name,
            station=participant.station,
        )

    orphans = 0
    for record in records:
        if not record.is_approved:
            continue
        entry = totals.get(record.service_number)
        if entry is None:
            entry = RunnerTotals(
                service_number=record.service_number,
                name=record.name,
                station=record.station,
                registered=False,
            )
            totals[record.service_number] = entry
            orphans += 1
        entry.total_distance_km = add_km(entry.total_distance_km, record.distance_km)
        entry.run_count += 1

    for entry in totals.values():
        entry.active_day_count = len(active_days.get(entry.service_number, ()))

    if orphans:
        logger.warning(f"{orphans} service numbers with approved runs are not on the roster")
    return list(totals.values())


def orphan_count(totals: Iterable[RunnerTotals]) -> int:
    """Number of aggregated runners missing from the roster."""
    return sum(1 for entry in totals if not entry.registered)


def split_elite(
    ranked: Sequence[RankedEntry[RunnerTotals]],
    threshold_km: float,
) -> tuple[list[RankedEntry[RunnerTotals]], list[RankedEntry[RunnerTotals]]]:
    """
    Split a ranked leaderboard into (elite, chasing).

    Elite runners reached the distance threshold; ranks are kept as-is.
    """
    require_positive("distance threshold", threshold_km)
    elite = [item for item in ranked if item.entry.total_distance_km >= threshold_km]
    chasing = [item for item in ranked if item.entry.total_distance_km < threshold_km]
    return elite, chasing


def summarize(
    records: Iterable[RunRecord],
    participants: Sequence[Participant],
    directory: Optional["StationDirectory"] = None,
) -> ChallengeSummary:
    """
    Dashboard headline numbers.

    Distance and runs count approved runs only; pending/rejected runs
    are counted separately for the admin view. Participants with a blank
    station count toward participant_count but no station.
    """
    summary = ChallengeSummary(participant_count=len(participants))
    runners: set[str] = set()

    for record in records:
        if record.status == RunStatus.PENDING:
            summary.pending_runs += 1
        elif record.status == RunStatus.REJECTED:
            summary.rejected_runs += 1
        else:
            summary.total_distance_km = add_km(summary.total_distance_km, record.distance_km)
            summary.total_runs += 1
            runners.add(record.service_number)
    summary.unique_runners = len(runners)

    # blank stations are left out, as in score_stations
    counts = {station: 0 for station in directory.order} if directory is not None else {}
    for participant in participants:
        if not participant.station.strip():
            continue
        station = directory.canonical(participant.station) if directory is not None else participant.station
        counts[station] = counts.get(station, 0) + 1
    summary.participants_by_station = counts
    return summary
