"""
Tests for the ranking engine.

Equal keys share a rank and the next distinct key takes its 1-based
position.
"""

from datetime import date

from runchallenge.features.challenge.models import (
    CompletionResult,
    Finisher,
    Participant,
    RunnerTotals,
    StationScore,
)
from runchallenge.features.challenge.ranking import (
    rank,
    rank_by_active_days,
    rank_by_distance,
    rank_finishers,
    rank_stations,
)


def _ranks(ranked):
    return [item.rank for item in ranked]


# =============================================================================
# Test rank
# =============================================================================

class TestRank:
    """Tests for the generic rank function."""

    def test_ties_skip_positions(self):
        """[100, 100, 90, 80] ranks [1, 1, 3, 4], not [1, 1, 2, 3]."""
        ranked = rank([90, 100, 80, 100], key=lambda v: v)
        assert [item.entry for item in ranked] == [100, 100, 90, 80]
        assert _ranks(ranked) == [1, 1, 3, 4]

    def test_monotonic(self):
        values = [5, 3, 5, 1, 3, 3, 0]
        ranked = rank(values, key=lambda v: v)
        for a, b in zip(ranked, ranked[1:]):
            if a.entry == b.entry:
                assert a.rank == b.rank
            else:
                assert a.rank < b.rank

    def test_ascending(self):
        ranked = rank([3, 1, 2, 1], key=lambda v: v, descending=False)
        assert [item.entry for item in ranked] == [1, 1, 2, 3]
        assert _ranks(ranked) == [1, 1, 3, 4]

    def test_tie_break_orders_but_keeps_rank(self):
        entries = [("b", 10), ("a", 10), ("c", 5)]
        ranked = rank(entries, key=lambda e: e[1], tie_break=lambda e: e[0])
        assert [item.entry[0] for item in ranked] == ["a", "b", "c"]
        assert _ranks(ranked) == [1, 1, 3]

    def test_input_order_kept_without_tie_break(self):
        entries = [("b", 10), ("a", 10)]
        ranked = rank(entries, key=lambda e: e[1])
        assert [item.entry[0] for item in ranked] == ["b", "a"]

    def test_empty(self):
        assert rank([], key=lambda v: v) == []

    def test_all_equal(self):
        assert _ranks(rank([0, 0, 0], key=lambda v: v)) == [1, 1, 1]


# =============================================================================
# Test Canonical Orderings
# =============================================================================

class TestCanonicalOrderings:
    """Leaderboard, active-days, station and finisher orderings."""

    def test_distance_ties_by_name_case_insensitive(self):
        totals = [
            RunnerTotals("3", "charlie", "S", total_distance_km=50.0),
            RunnerTotals("2", "Bravo", "S", total_distance_km=50.0),
            RunnerTotals("1", "alpha", "S", total_distance_km=20.0),
        ]
        ranked = rank_by_distance(totals)
        assert [item.entry.name for item in ranked] == ["Bravo", "charlie", "alpha"]
        assert _ranks(ranked) == [1, 1, 3]

    def test_active_days_board(self):
        totals = [
            RunnerTotals("1", "A", "S", total_distance_km=90.0, active_day_count=3),
            RunnerTotals("2", "B", "S", total_distance_km=10.0, active_day_count=8),
        ]
        assert [item.entry.service_number for item in rank_by_active_days(totals)] == ["2", "1"]

    def test_station_ties_by_total_distance(self):
        scores = [
            StationScore("Vaadhoo", total_distance_km=120.0, performance_percent=40.0),
            StationScore("Madaveli", total_distance_km=300.0, performance_percent=40.0),
            StationScore("Fiyoari", total_distance_km=500.0, performance_percent=30.0),
        ]
        ranked = rank_stations(scores)
        assert [item.entry.station for item in ranked] == ["Madaveli", "Vaadhoo", "Fiyoari"]
        assert _ranks(ranked) == [1, 1, 3]

    def test_finishers_earliest_first_then_registration(self):
        def finisher(sn, day, index):
            return Finisher(
                Participant(sn, sn, "S"),
                CompletionResult(date(2025, 12, day), active_days_to_complete=day),
                registration_index=index,
            )

        ranked = rank_finishers([finisher("late", 9, 0), finisher("b", 4, 2), finisher("a", 4, 1)])
        assert [item.entry.participant.service_number for item in ranked] == ["a", "b", "late"]
        assert _ranks(ranked) == [1, 1, 3]
