"""
Ranking engine.

Tie-aware rank assignment shared by every leaderboard. Equal keys share
a rank; the next different key is ranked by its 1-based position, so
keys [100, 100, 90, 80] rank [1, 1, 3, 4].
"""

from collections.abc import Callable, Iterable
from typing import Any, Optional, TypeVar

from .models import Finisher, RankedEntry, RunnerTotals, StationScore

T = TypeVar("T")

_NO_KEY = object()


def rank(
    entries: Iterable[T],
    key: Callable[[T], Any],
    tie_break: Optional[Callable[[T], Any]] = None,
    descending: bool = True,
) -> list[RankedEntry[T]]:
    """
    Sort entries by `key` and assign ranks.

    Args:
        entries: Aggregates to rank
        key: Ranking value (compared with ==, so ties must be exact)
        tie_break: Ascending order among equal keys. Only affects
            iteration order, never the rank value. Input order is kept
            when omitted.
        descending: Highest key first (default) or lowest first

    Returns:
        RankedEntry list in ranked order
    """
    ordered = list(entries)
    if tie_break is not None:
        ordered.sort(key=tie_break)
    # stable: equal keys keep the tie-break order
    ordered.sort(key=key, reverse=descending)

    ranked: list[RankedEntry[T]] = []
    last_key: Any = _NO_KEY
    last_rank = 0
    for index, entry in enumerate(ordered):
        value = key(entry)
        if last_key is _NO_KEY or value != last_key:
            last_key = value
            last_rank = index + 1
        ranked.append(RankedEntry(rank=last_rank, entry=entry))
    return ranked


# =============================================================================
# Canonical orderings
# =============================================================================

def runner_name_order(entry: RunnerTotals) -> tuple[str, str]:
    """Case-insensitive name, then service number."""
    return entry.name.casefold(), entry.service_number


def rank_by_distance(totals: Iterable[RunnerTotals]) -> list[RankedEntry[RunnerTotals]]:
    """Main leaderboard: total approved distance."""
    return rank(totals, key=lambda e: e.total_distance_km, tie_break=runner_name_order)


def rank_by_active_days(totals: Iterable[RunnerTotals]) -> list[RankedEntry[RunnerTotals]]:
    """Active-days board."""
    return rank(totals, key=lambda e: e.active_day_count, tie_break=runner_name_order)


def rank_stations(scores: Iterable[StationScore]) -> list[RankedEntry[StationScore]]:
    """Station board: performance, then total distance."""
    return rank(
        scores,
        key=lambda s: s.performance_percent,
        tie_break=lambda s: (-s.total_distance_km, s.station.casefold()),
    )


def rank_finishers(finishers: Iterable[Finisher]) -> list[RankedEntry[Finisher]]:
    """Earliest completion first; same-day finishers share a rank."""
    return rank(
        finishers,
        key=lambda f: f.completion.completion_date,
        tie_break=lambda f: f.registration_index,
        descending=False,
    )
