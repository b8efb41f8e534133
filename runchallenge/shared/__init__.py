"""
Shared utilities (NOT business logic).

Usage:
    from runchallenge.shared import round_km, RunStatus
    from runchallenge.shared.formatters import format_distance_km
"""
from .constants import (
    RunStatus,
    ConsistencyLabel,
    ChallengePhase,
    DEFAULT_DISTANCE_THRESHOLD_KM,
    DEFAULT_ACTIVE_DAY_THRESHOLD,
    STATION_SCORE_SLOTS,
    FULL_ATTENDANCE_BONUS,
    MAX_PROGRESS_PERCENT,
    CONSISTENT_STREAK_DAYS,
    DISTANCE_DECIMALS,
)
from .formulas import (
    round_km,
    add_km,
    progress_percent,
    apply_attendance_bonus,
    top_slots_average,
)
from .formatters import (
    format_distance_km,
    format_percent,
    format_day,
    format_inactive_days,
)

__all__ = [
    # constants
    "RunStatus",
    "ConsistencyLabel",
    "ChallengePhase",
    "DEFAULT_DISTANCE_THRESHOLD_KM",
    "DEFAULT_ACTIVE_DAY_THRESHOLD",
    "STATION_SCORE_SLOTS",
    "FULL_ATTENDANCE_BONUS",
    "MAX_PROGRESS_PERCENT",
    "CONSISTENT_STREAK_DAYS",
    "DISTANCE_DECIMALS",
    # formulas
    "round_km",
    "add_km",
    "progress_percent",
    "apply_attendance_bonus",
    "top_slots_average",
    # formatters
    "format_distance_km",
    "format_percent",
    "format_day",
    "format_inactive_days",
]
