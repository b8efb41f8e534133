"""
Unified constants for the run challenge.

This module provides a single source of truth for run statuses,
finisher thresholds and the station scoring constants shared by
every leaderboard, board and report.
"""

from enum import Enum


class RunStatus(str, Enum):
    """
    Approval status of a submitted run.

    Only APPROVED runs contribute to any aggregate.
    """
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class ConsistencyLabel(str, Enum):
    """Engagement label for the consistency board."""
    DAILY = "daily"
    CONSISTENT = "consistent"
    INACTIVE = "inactive"


class ChallengePhase(str, Enum):
    """Where "today" sits relative to the challenge window."""
    BEFORE = "before"
    ACTIVE = "active"
    ENDED = "ended"


# =============================================================================
# Finisher criteria
# =============================================================================

DEFAULT_DISTANCE_THRESHOLD_KM = 100.0   # "100K finisher"
DEFAULT_ACTIVE_DAY_THRESHOLD = 40       # active days required to finish


# =============================================================================
# Station scoring
# =============================================================================

# Stations are scored on the mean of their top N progress values,
# missing slots count as zero.
STATION_SCORE_SLOTS = 5

# Participants active on every elapsed window day get their progress
# multiplied by this bonus (capped at 100%).
FULL_ATTENDANCE_BONUS = 1.15

MAX_PROGRESS_PERCENT = 100.0


# =============================================================================
# Consistency
# =============================================================================

CONSISTENT_STREAK_DAYS = 5   # trailing streak required for "consistent"


# =============================================================================
# Awards
# =============================================================================

FAIR_PLAY_MIN_RUNS = 5
FAIR_PLAY_LIMIT = 10
CONSISTENT_STATION_MIN_RUNNERS = 5


# =============================================================================
# Numeric policy
# =============================================================================

# Distances are rounded to this many decimals after every addition
DISTANCE_DECIMALS = 2
