"""
Challenge analytics module.

Usage:
    from runchallenge.features.challenge import ChallengeAnalyticsService, ChallengeWindow
    from runchallenge.features.challenge.ranking import rank

Components:
- ChallengeAnalyticsService: Builds every board from one snapshot
- normalize_runs / normalize_participants: Raw row cleanup
- build_active_days: Per-runner active-day index
- aggregate_runners: Runner totals
- find_completion: 100K completion-day detection
- score_stations: Station performance
- classify: Consistency labels
- compute_awards: End-of-challenge awards
"""

from .exceptions import ChallengeError, ChallengeConfigError, SnapshotError
from .models import (
    RunRecord,
    Participant,
    ChallengeWindow,
    Thresholds,
    DataQualityWarning,
    RunnerTotals,
    StationScore,
    RankedEntry,
    CompletionResult,
    Finisher,
    Journey,
    ConsistencyResult,
    ChallengeSummary,
    Awards,
)
from .normalizer import normalize_runs, normalize_participants
from .active_days import build_active_days, days_in_window
from .aggregator import aggregate_runners, split_elite, summarize
from .ranking import rank, rank_by_distance, rank_by_active_days, rank_stations
from .completion import find_completion, list_finishers, journey
from .stations import StationDirectory, score_stations
from .consistency import classify, classify_participants
from .awards import compute_awards
from .repository import ChallengeDataSource, JsonSnapshotSource
from .service import ChallengeAnalyticsService, ChallengeReport
from .report import ReportGenerator

__all__ = [
    # Exceptions
    "ChallengeError",
    "ChallengeConfigError",
    "SnapshotError",
    # Models
    "RunRecord",
    "Participant",
    "ChallengeWindow",
    "Thresholds",
    "DataQualityWarning",
    "RunnerTotals",
    "StationScore",
    "RankedEntry",
    "CompletionResult",
    "Finisher",
    "Journey",
    "ConsistencyResult",
    "ChallengeSummary",
    "Awards",
    # Engine
    "normalize_runs",
    "normalize_participants",
    "build_active_days",
    "days_in_window",
    "aggregate_runners",
    "split_elite",
    "summarize",
    "rank",
    "rank_by_distance",
    "rank_by_active_days",
    "rank_stations",
    "find_completion",
    "list_finishers",
    "journey",
    "StationDirectory",
    "score_stations",
    "classify",
    "classify_participants",
    "compute_awards",
    # Data access
    "ChallengeDataSource",
    "JsonSnapshotSource",
    # Service
    "ChallengeAnalyticsService",
    "ChallengeReport",
    "ReportGenerator",
]
