"""Tests for the active-day index."""

from datetime import date

from runchallenge.features.challenge.active_days import active_on, build_active_days, days_in_window
from runchallenge.shared.constants import RunStatus


class TestBuildActiveDays:
    """Tests for build_active_days."""

    def test_two_runs_same_day_count_once(self, make_run):
        index = build_active_days([make_run("1", 3, 5.0), make_run("1", 3, 7.0)])
        assert index == {"1": {date(2025, 12, 3)}}

    def test_only_approved_runs_count(self, make_run):
        index = build_active_days([
            make_run("1", 3, 5.0, status=RunStatus.PENDING),
            make_run("1", 4, 5.0, status=RunStatus.REJECTED),
            make_run("2", 4, 5.0),
        ])
        assert "1" not in index
        assert index["2"] == {date(2025, 12, 4)}

    def test_zero_distance_approved_run_is_active(self, make_run):
        index = build_active_days([make_run("1", 3, 0.0)])
        assert index["1"] == {date(2025, 12, 3)}

    def test_empty(self):
        assert build_active_days([]) == {}


class TestWindowHelpers:

    def test_days_in_window_limited_by_today(self, window):
        active = {date(2025, 11, 30), date(2025, 12, 1), date(2025, 12, 4), date(2025, 12, 8)}
        assert days_in_window(active, window, today=date(2025, 12, 5)) == 2

    def test_days_in_window_after_end(self, window):
        active = {date(2025, 12, 10), date(2025, 12, 11)}
        assert days_in_window(active, window, today=date(2026, 1, 5)) == 1

    def test_active_on(self, make_run):
        index = build_active_days([make_run("1", 3, 5.0), make_run("2", 4, 5.0)])
        assert active_on(index, date(2025, 12, 3)) == {"1"}
        assert active_on(index, date(2025, 12, 9)) == set()
