"""
Consistency classifier.

Labels engagement over the elapsed challenge window:
- daily: active on every window day
- consistent: trailing streak of at least N days
- inactive: everyone else
"""

from collections.abc import Iterable, Sequence
from datetime import date

from runchallenge.shared.constants import CONSISTENT_STREAK_DAYS, ConsistencyLabel

from .active_days import ActiveDayIndex
from .exceptions import require_positive
from .models import ChallengeWindow, ConsistencyResult, Participant, ParticipantConsistency

_LABEL_ORDER = {
    ConsistencyLabel.DAILY: 0,
    ConsistencyLabel.CONSISTENT: 1,
    ConsistencyLabel.INACTIVE: 2,
}


def classify(
    active: set[date],
    window_days: Sequence[date],
    streak_days: int = CONSISTENT_STREAK_DAYS,
) -> ConsistencyResult:
    """
    Classify one participant.

    Args:
        active: The participant's active days
        window_days: Elapsed window days in ascending order
        streak_days: Trailing streak required for "consistent"

    Returns:
        ConsistencyResult. `streak` counts consecutive active days
        backwards from the last window day; `inactive_day_count` counts
        window days without activity.
    """
    require_positive("consistent streak days", streak_days)

    inactive = sum(1 for day in window_days if day not in active)

    streak = 0
    for day in reversed(window_days):
        if day not in active:
            break
        streak += 1

    if inactive == 0 and window_days:
        label = ConsistencyLabel.DAILY
    elif streak >= streak_days:
        label = ConsistencyLabel.CONSISTENT
    else:
        label = ConsistencyLabel.INACTIVE
    return ConsistencyResult(label=label, streak=streak, inactive_day_count=inactive)


def display_order(item: ParticipantConsistency) -> tuple:
    """Daily, consistent, streak desc, inactive days asc, name asc."""
    return (
        _LABEL_ORDER[item.result.label],
        -item.result.streak,
        item.result.inactive_day_count,
        item.participant.name.casefold(),
        item.participant.service_number,
    )


def classify_participants(
    participants: Iterable[Participant],
    active_days: ActiveDayIndex,
    window: ChallengeWindow,
    today: date,
    streak_days: int = CONSISTENT_STREAK_DAYS,
) -> list[ParticipantConsistency]:
    """Classify the whole roster and sort it for display."""
    require_positive("consistent streak days", streak_days)
    window_days = window.elapsed_days(today)
    board = [
        ParticipantConsistency(
            participant=participant,
            result=classify(active_days.get(participant.service_number, set()), window_days, streak_days),
        )
        for participant in participants
    ]
    return sorted(board, key=display_order)
