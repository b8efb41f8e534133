"""
End-of-challenge awards.

Individual: highest total distance, silent grinder (most active days),
comeback (late starter with the most distance), fair play (many
submissions, none rejected). Station: best total distance and most
consistent (average active days per active runner).
"""

from collections.abc import Sequence
from datetime import date, tzinfo
from typing import Optional

from runchallenge.shared.constants import (
    CONSISTENT_STATION_MIN_RUNNERS,
    FAIR_PLAY_LIMIT,
    FAIR_PLAY_MIN_RUNS,
    RunStatus,
)
from runchallenge.shared.formulas import add_km

from .models import (
    Awards,
    ChallengeWindow,
    FairPlayEntry,
    Participant,
    RunnerTotals,
    RunRecord,
    StationAward,
)
from .ranking import rank_by_active_days, rank_by_distance
from .schemas import to_local_day
from .stations import StationDirectory


def compute_awards(
    records: Sequence[RunRecord],
    participants: Sequence[Participant],
    runner_totals: Sequence[RunnerTotals],
    window: ChallengeWindow,
    directory: Optional[StationDirectory] = None,
    timezone: Optional[tzinfo] = None,
) -> Awards:
    """
    Compute all awards from one snapshot.

    Args:
        records: Normalized runs, all statuses (fair play and comeback
            look at every submission)
        participants: Registered roster
        runner_totals: Output of aggregate_runners (orphans are ignored)
        window: Challenge window (its midpoint splits late starters)
        directory: Station aliases/exclusions
        timezone: Fixed zone for records whose date carries a time

    Returns:
        Awards; individual winners are None when nobody qualifies.
    """
    directory = directory or StationDirectory()
    roster = {p.service_number for p in participants}
    totals = [t for t in runner_totals if t.registered and t.service_number in roster]

    awards = Awards()

    leaders = rank_by_distance(totals)
    if leaders and leaders[0].entry.total_distance_km > 0:
        awards.highest_distance = leaders[0].entry

    grinders = rank_by_active_days(totals)
    if grinders and grinders[0].entry.active_day_count > 0:
        awards.silent_grinder = grinders[0].entry

    awards.comeback = _comeback(records, totals, window, timezone)
    awards.fair_play = _fair_play(records, participants)
    awards.best_station, awards.most_consistent_station = _station_awards(
        participants, totals, directory
    )
    return awards


def _comeback(
    records: Sequence[RunRecord],
    totals: Sequence[RunnerTotals],
    window: ChallengeWindow,
    timezone: Optional[tzinfo] = None,
) -> Optional[RunnerTotals]:
    """Highest distance among runners whose first submission is after the midpoint."""
    first_seen: dict[str, date] = {}
    for record in records:
        day = to_local_day(record.date, timezone)
        current = first_seen.get(record.service_number)
        if current is None or day < current:
            first_seen[record.service_number] = day

    midpoint = window.midpoint
    late = [
        t for t in totals
        if t.service_number in first_seen
        and first_seen[t.service_number] > midpoint
        and t.total_distance_km > 0
    ]
    ranked = rank_by_distance(late)
    return ranked[0].entry if ranked else None


def _fair_play(
    records: Sequence[RunRecord],
    participants: Sequence[Participant],
) -> list[FairPlayEntry]:
    submissions: dict[str, int] = {}
    rejected: set[str] = set()
    for record in records:
        submissions[record.service_number] = submissions.get(record.service_number, 0) + 1
        if record.status == RunStatus.REJECTED:
            rejected.add(record.service_number)

    candidates = [
        FairPlayEntry(p.service_number, p.name, p.station, submissions.get(p.service_number, 0))
        for p in participants
        if submissions.get(p.service_number, 0) >= FAIR_PLAY_MIN_RUNS
        and p.service_number not in rejected
    ]
    candidates.sort(key=lambda c: (-c.submissions, c.name.casefold(), c.service_number))
    return candidates[:FAIR_PLAY_LIMIT]


def _station_awards(
    participants: Sequence[Participant],
    totals: Sequence[RunnerTotals],
    directory: StationDirectory,
) -> tuple[Optional[StationAward], Optional[StationAward]]:
    totals_by_runner = {t.service_number: t for t in totals}
    distance: dict[str, float] = {}
    active_runners: dict[str, int] = {}
    active_days: dict[str, int] = {}

    for participant in participants:
        if not participant.station.strip() or directory.is_excluded(participant.station):
            continue
        station = directory.canonical(participant.station)
        entry = totals_by_runner.get(participant.service_number)
        distance.setdefault(station, 0.0)
        if entry is None or entry.total_distance_km <= 0:
            continue
        distance[station] = add_km(distance[station], entry.total_distance_km)
        active_runners[station] = active_runners.get(station, 0) + 1
        active_days[station] = active_days.get(station, 0) + entry.active_day_count

    best = None
    by_distance = sorted(distance.items(), key=lambda item: (-item[1], item[0].casefold()))
    if by_distance and by_distance[0][1] > 0:
        best = StationAward(station=by_distance[0][0], value=by_distance[0][1])

    averages = [
        (station, active_days[station] / count)
        for station, count in active_runners.items()
        if count >= CONSISTENT_STATION_MIN_RUNNERS
    ]
    averages.sort(key=lambda item: (-item[1], item[0].casefold()))
    consistent = StationAward(station=averages[0][0], value=averages[0][1]) if averages else None
    return best, consistent
