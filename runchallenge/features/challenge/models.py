"""Data models for the run challenge (dataclasses, no I/O dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Generic, Optional, TypeVar

from runchallenge.shared.constants import ChallengePhase, ConsistencyLabel, RunStatus

from .exceptions import ChallengeConfigError, require_positive

T = TypeVar("T")


# =============================================================================
# Inputs
# =============================================================================

@dataclass(frozen=True)
class RunRecord:
    """One submitted run, after normalization."""

    id: str
    date: date  # local calendar day in the challenge timezone
    service_number: str  # participant key
    name: str
    station: str  # free-text affiliation as submitted
    distance_km: float
    status: RunStatus = RunStatus.PENDING
    rejection_reason: Optional[str] = None

    @property
    def is_approved(self) -> bool:
        return self.status == RunStatus.APPROVED


@dataclass(frozen=True)
class Participant:
    """Registered roster entry, independent of whether they ever ran."""

    service_number: str
    name: str
    station: str


@dataclass(frozen=True)
class ChallengeWindow:
    """Inclusive challenge date range."""

    start_date: date
    end_date: date

    def __post_init__(self):
        if self.end_date < self.start_date:
            raise ChallengeConfigError(
                f"Challenge window ends ({self.end_date}) before it starts ({self.start_date})"
            )

    def days(self) -> list[date]:
        """Every day of the window."""
        return _day_range(self.start_date, self.end_date)

    def elapsed_end(self, today: date) -> date:
        """Last day that counts so far: min(end, today)."""
        return min(self.end_date, today)

    def elapsed_days(self, today: date) -> list[date]:
        """Window days from start up to today (empty before the start)."""
        return [day for day in self.days() if day <= today]

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def days_remaining(self, today: date) -> int:
        """Days left including today, 0 once the window has ended."""
        if today > self.end_date:
            return 0
        first = max(today, self.start_date)
        return (self.end_date - first).days + 1

    def phase(self, today: date) -> ChallengePhase:
        if today < self.start_date:
            return ChallengePhase.BEFORE
        if today <= self.end_date:
            return ChallengePhase.ACTIVE
        return ChallengePhase.ENDED

    @property
    def midpoint(self) -> date:
        return self.start_date + timedelta(days=(self.end_date - self.start_date).days // 2)


def _day_range(first: date, last: date) -> list[date]:
    if last < first:
        return []
    return [first + timedelta(days=i) for i in range((last - first).days + 1)]


@dataclass(frozen=True)
class Thresholds:
    """Finisher criteria and the station/consistency scoring constants."""

    distance_km: float
    active_days: int
    station_slots: int
    attendance_bonus: float
    streak_days: int

    def validate(self) -> None:
        require_positive("distance threshold", self.distance_km)
        require_positive("active day threshold", self.active_days)
        require_positive("station slots", self.station_slots)
        require_positive("consistent streak days", self.streak_days)
        if not self.attendance_bonus >= 1:
            raise ChallengeConfigError(
                f"attendance bonus must be >= 1, got {self.attendance_bonus!r}"
            )


# =============================================================================
# Diagnostics
# =============================================================================

@dataclass(frozen=True)
class DataQualityWarning:
    """Non-fatal problem found while normalizing input."""

    kind: str  # "date", "distance", "status", "id", "service_number", "duplicate"
    record_id: str
    message: str


@dataclass
class NormalizedRuns:
    records: list[RunRecord] = field(default_factory=list)
    warnings: list[DataQualityWarning] = field(default_factory=list)


@dataclass
class NormalizedRoster:
    participants: list[Participant] = field(default_factory=list)
    warnings: list[DataQualityWarning] = field(default_factory=list)


# =============================================================================
# Aggregates
# =============================================================================

@dataclass
class RunnerTotals:
    """Per-participant approved totals."""

    service_number: str
    name: str
    station: str
    total_distance_km: float = 0.0
    run_count: int = 0
    active_day_count: int = 0
    registered: bool = True  # False for runs with no roster entry


@dataclass
class StationScore:
    """Per-station performance."""

    station: str
    total_distance_km: float = 0.0
    runner_count: int = 0  # participants with distance > 0
    participant_count: int = 0
    run_count: int = 0
    performance_percent: float = 0.0
    finisher_count: int = 0
    active_runners_today: int = 0
    progresses: list[float] = field(default_factory=list)  # descending


@dataclass(frozen=True)
class RankedEntry(Generic[T]):
    """An aggregate entry with its leaderboard rank."""

    rank: int
    entry: T


@dataclass(frozen=True)
class CumulativeLogEntry:
    date: date
    distance_km: float
    cumulative_km: float


@dataclass
class CompletionResult:
    """When cumulative approved distance first crossed the threshold."""

    completion_date: date
    active_days_to_complete: int
    cumulative_log: list[CumulativeLogEntry] = field(default_factory=list)

    @property
    def total_distance_km(self) -> float:
        return self.cumulative_log[-1].cumulative_km if self.cumulative_log else 0.0


@dataclass
class Finisher:
    participant: Participant
    completion: CompletionResult
    registration_index: int


@dataclass
class Journey:
    """Audit log of a participant's runs up to the threshold crossing."""

    service_number: str
    name: str
    log: list[CumulativeLogEntry] = field(default_factory=list)
    total_distance_km: float = 0.0
    active_days: int = 0
    completed: bool = False


@dataclass(frozen=True)
class ConsistencyResult:
    label: ConsistencyLabel
    streak: int
    inactive_day_count: int


@dataclass
class ParticipantConsistency:
    participant: Participant
    result: ConsistencyResult


@dataclass
class ChallengeSummary:
    """Headline numbers for the dashboard."""

    total_distance_km: float = 0.0
    unique_runners: int = 0
    total_runs: int = 0
    pending_runs: int = 0
    rejected_runs: int = 0
    participant_count: int = 0
    participants_by_station: dict[str, int] = field(default_factory=dict)


@dataclass
class FairPlayEntry:
    """Participant with many submissions and none rejected."""

    service_number: str
    name: str
    station: str
    submissions: int


@dataclass
class StationAward:
    station: str
    value: float


@dataclass
class Awards:
    highest_distance: Optional[RunnerTotals] = None
    silent_grinder: Optional[RunnerTotals] = None
    comeback: Optional[RunnerTotals] = None
    fair_play: list[FairPlayEntry] = field(default_factory=list)
    best_station: Optional[StationAward] = None
    most_consistent_station: Optional[StationAward] = None
