"""
Challenge Analytics Service

Orchestrates all challenge components over one snapshot:
- Record and roster normalization
- Active-day index (built once, shared by every board)
- Runner leaderboard and active-days board
- Station performance board
- 100K finishers list
- Consistency board
- Awards

This is the main entry point for consuming views; every view reads the
same report instead of re-deriving its own numbers.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from datetime import date, tzinfo
from enum import Enum
from typing import Any, Optional

from runchallenge.shared.constants import (
    CONSISTENT_STREAK_DAYS,
    DEFAULT_ACTIVE_DAY_THRESHOLD,
    DEFAULT_DISTANCE_THRESHOLD_KM,
    FULL_ATTENDANCE_BONUS,
    STATION_SCORE_SLOTS,
    ChallengePhase,
)

from .active_days import build_active_days
from .aggregator import aggregate_runners, orphan_count, split_elite, summarize
from .awards import compute_awards
from .completion import journey, list_finishers
from .consistency import classify_participants
from .models import (
    Awards,
    ChallengeSummary,
    ChallengeWindow,
    DataQualityWarning,
    Finisher,
    Journey,
    Participant,
    ParticipantConsistency,
    RankedEntry,
    RunnerTotals,
    RunRecord,
    StationScore,
    Thresholds,
)
from .normalizer import normalize_participants, normalize_runs
from .ranking import rank_by_active_days, rank_by_distance, rank_stations
from .repository import ChallengeDataSource
from .stations import StationDirectory, score_stations

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLDS = Thresholds(
    distance_km=DEFAULT_DISTANCE_THRESHOLD_KM,
    active_days=DEFAULT_ACTIVE_DAY_THRESHOLD,
    station_slots=STATION_SCORE_SLOTS,
    attendance_bonus=FULL_ATTENDANCE_BONUS,
    streak_days=CONSISTENT_STREAK_DAYS,
)


@dataclass
class ChallengeReport:
    """Every derived view of one snapshot."""
    today: date
    phase: ChallengePhase
    days_remaining: int
    summary: ChallengeSummary
    leaderboard: list[RankedEntry[RunnerTotals]]
    elite: list[RankedEntry[RunnerTotals]]
    chasing: list[RankedEntry[RunnerTotals]]
    active_days_board: list[RankedEntry[RunnerTotals]]
    station_board: list[RankedEntry[StationScore]]
    finishers: list[RankedEntry[Finisher]]
    consistency: list[ParticipantConsistency]
    awards: Awards
    warnings: list[DataQualityWarning] = field(default_factory=list)
    orphan_count: int = 0

    def to_dict(self) -> dict:
        """Convert to a JSON-serialisable dict (dates as ISO strings)."""
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {str(k): _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [_jsonable(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


class ChallengeAnalyticsService:
    """
    Runs the analytics engine over snapshots.

    Holds configuration only; every call works on the snapshot it is
    given and shares no state with other calls.
    """

    def __init__(
        self,
        window: ChallengeWindow,
        timezone: Optional[tzinfo] = None,
        thresholds: Optional[Thresholds] = None,
        directory: Optional[StationDirectory] = None,
    ):
        """
        Args:
            window: Challenge window
            timezone: Fixed zone for active-day bucketing
            thresholds: Finisher/scoring constants (module defaults if None)
            directory: Station aliases and exclusions

        Raises:
            ChallengeConfigError: If thresholds are invalid
        """
        self.window = window
        self.timezone = timezone
        self.thresholds = thresholds or DEFAULT_THRESHOLDS
        self.thresholds.validate()
        self.directory = directory or StationDirectory()

    @classmethod
    def from_settings(cls, settings) -> "ChallengeAnalyticsService":
        """Create service from application Settings."""
        return cls(
            window=settings.window(),
            timezone=settings.zone(),
            thresholds=settings.thresholds(),
            directory=settings.station_directory(),
        )

    def prepare(
        self,
        raw_runs: Iterable[Mapping[str, Any]],
        raw_participants: Iterable[Mapping[str, Any]],
    ) -> tuple[list[RunRecord], list[Participant], list[DataQualityWarning]]:
        """
        Normalize a snapshot and drop non-competing (excluded) affiliations.

        Runs are dropped when either the run's station or its owner's
        roster station is excluded.
        """
        runs = normalize_runs(raw_runs, self.timezone)
        roster = normalize_participants(raw_participants)

        excluded_owners = {
            p.service_number for p in roster.participants if self.directory.is_excluded(p.station)
        }
        participants = [p for p in roster.participants if p.service_number not in excluded_owners]
        records = [
            r for r in runs.records
            if r.service_number not in excluded_owners and not self.directory.is_excluded(r.station)
        ]
        return records, participants, runs.warnings + roster.warnings

    def build_report(
        self,
        raw_runs: Iterable[Mapping[str, Any]],
        raw_participants: Iterable[Mapping[str, Any]],
        today: date,
    ) -> ChallengeReport:
        """
        Build every board from one snapshot.

        Args:
            raw_runs: Run rows, all statuses
            raw_participants: Roster rows
            today: Injected current day in the challenge timezone

        Returns:
            ChallengeReport
        """
        records, participants, warnings = self.prepare(raw_runs, raw_participants)
        t = self.thresholds

        active_days = build_active_days(records, self.timezone)
        totals = aggregate_runners(records, participants, active_days)
        leaderboard = rank_by_distance(totals)
        elite, chasing = split_elite(leaderboard, t.distance_km)

        stations = score_stations(
            participants,
            totals,
            active_days,
            self.window,
            t.distance_km,
            t.active_days,
            today,
            directory=self.directory,
            slots=t.station_slots,
            bonus=t.attendance_bonus,
        )

        report = ChallengeReport(
            today=today,
            phase=self.window.phase(today),
            days_remaining=self.window.days_remaining(today),
            summary=summarize(records, participants, self.directory),
            leaderboard=leaderboard,
            elite=elite,
            chasing=chasing,
            active_days_board=rank_by_active_days(totals),
            station_board=rank_stations(stations),
            finishers=list_finishers(records, participants, t.distance_km, self.timezone),
            consistency=classify_participants(
                participants, active_days, self.window, today, t.streak_days
            ),
            awards=compute_awards(
                records, participants, totals, self.window, self.directory, self.timezone
            ),
            warnings=warnings,
            orphan_count=orphan_count(totals),
        )
        logger.info(
            f"Report for {today}: {len(participants)} participants, {len(records)} runs, "
            f"{len(report.finishers)} finishers, {len(warnings)} warnings"
        )
        return report

    def build_report_from(self, source: ChallengeDataSource, today: date) -> ChallengeReport:
        """Build the report from a data source snapshot."""
        return self.build_report(source.get_runs(), source.get_participants(), today)

    def journey(
        self,
        raw_runs: Iterable[Mapping[str, Any]],
        raw_participants: Iterable[Mapping[str, Any]],
        service_number: str,
    ) -> Optional[Journey]:
        """
        Journey audit for one participant, None if not on the roster.
        """
        records, participants, _ = self.prepare(raw_runs, raw_participants)
        participant = next(
            (p for p in participants if p.service_number == service_number.strip()), None
        )
        if participant is None:
            return None
        return journey(records, participant, self.thresholds.distance_km, self.timezone)
