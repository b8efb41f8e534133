"""
Numeric formulas shared by the challenge aggregators.

Centralizing them here keeps every leaderboard and board on the
same rounding and progress rules.
"""

import math

from .constants import DISTANCE_DECIMALS, MAX_PROGRESS_PERCENT


def round_km(value: float, decimals: int = DISTANCE_DECIMALS) -> float:
    """
    Round a distance half-up to a fixed number of decimals.

    Half-up (not Python's banker's rounding) so that 0.125 -> 0.13,
    matching how the submitted sheet values are displayed.

    Args:
        value: Distance in km (non-negative)
        decimals: Decimal places to keep

    Returns:
        Rounded distance
    """
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def add_km(total: float, distance: float) -> float:
    """
    Add a distance to a running total and round the result.

    Rounding after each step (not only at the end) keeps totals free of
    artifacts like 99.99999999994 that would miss a 100 km threshold.
    """
    return round_km(total + distance)


def progress_percent(
    total_distance_km: float,
    active_days: int,
    distance_threshold_km: float,
    active_day_threshold: int,
) -> float:
    """
    Individual progress towards finishing.

    Formula: min(min(d / D, 1), min(a / A, 1)) * 100

    Progress is capped by whichever criterion (distance or active days)
    is further behind, so both must reach 100% to finish.

    Args:
        total_distance_km: Approved distance
        active_days: Active days inside the elapsed window
        distance_threshold_km: Finisher distance (> 0)
        active_day_threshold: Finisher active days (> 0)

    Returns:
        Progress in percent, 0 - 100
    """
    distance_fraction = min(total_distance_km / distance_threshold_km, 1.0)
    days_fraction = min(active_days / active_day_threshold, 1.0)
    return min(distance_fraction, days_fraction) * 100


def apply_attendance_bonus(progress: float, bonus: float) -> float:
    """Multiply progress by the full-attendance bonus, capped at 100%."""
    return min(progress * bonus, MAX_PROGRESS_PERCENT)


def top_slots_average(values: list[float], slots: int) -> float:
    """
    Mean of the `slots` largest values, missing slots counting as zero.

    A station with progresses [80, 60] and 5 slots scores
    (80 + 60 + 0 + 0 + 0) / 5 = 28, not 70.
    """
    ordered = sorted(values, reverse=True)[:slots]
    return sum(ordered) / slots
