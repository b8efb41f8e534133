"""
Tests for the consistency classifier.

Window 2025-12-01 .. 2025-12-10, evaluated on 2025-12-10.
"""

from datetime import date

import pytest

from runchallenge.features.challenge.consistency import classify, classify_participants
from runchallenge.features.challenge.exceptions import ChallengeConfigError
from runchallenge.features.challenge.models import Participant
from runchallenge.shared.constants import ConsistencyLabel

TODAY = date(2025, 12, 10)


def _days(*numbers):
    return {date(2025, 12, n) for n in numbers}


class TestClassify:
    """Tests for classify."""

    def test_daily(self, window):
        result = classify(_days(*range(1, 11)), window.elapsed_days(TODAY))
        assert result.label == ConsistencyLabel.DAILY
        assert result.streak == 10
        assert result.inactive_day_count == 0

    def test_daily_takes_precedence(self, window):
        """Every window day active is daily even though the streak also qualifies."""
        result = classify(_days(*range(1, 11)), window.elapsed_days(TODAY), streak_days=3)
        assert result.label == ConsistencyLabel.DAILY

    def test_consistent_trailing_streak(self, window):
        result = classify(_days(*range(5, 11)), window.elapsed_days(TODAY))
        assert result.label == ConsistencyLabel.CONSISTENT
        assert result.streak == 6
        assert result.inactive_day_count == 4

    def test_streak_broken_today(self, window):
        result = classify(_days(*range(1, 10)), window.elapsed_days(TODAY))
        assert result.label == ConsistencyLabel.INACTIVE
        assert result.streak == 0
        assert result.inactive_day_count == 1

    def test_short_streak_is_inactive(self, window):
        result = classify(_days(7, 8, 9, 10), window.elapsed_days(TODAY))
        assert result.label == ConsistencyLabel.INACTIVE
        assert result.streak == 4

    def test_days_outside_window_ignored(self, window):
        active = _days(*range(1, 11)) | {date(2025, 11, 30), date(2025, 12, 11)}
        result = classify(active, window.elapsed_days(TODAY))
        assert result.label == ConsistencyLabel.DAILY

    def test_before_start(self, window):
        result = classify(set(), window.elapsed_days(date(2025, 11, 1)))
        assert result.label == ConsistencyLabel.INACTIVE
        assert result.inactive_day_count == 0

    def test_invalid_streak_days(self):
        with pytest.raises(ChallengeConfigError):
            classify(set(), [], streak_days=0)

    def test_invalid_streak_days_with_empty_roster(self, window):
        with pytest.raises(ChallengeConfigError):
            classify_participants([], {}, window, TODAY, streak_days=0)


class TestClassifyParticipants:
    """Board ordering."""

    def test_display_order(self, window):
        participants = [
            Participant("1", "idle", "S"),
            Participant("2", "streaker", "S"),
            Participant("3", "Every day", "S"),
            Participant("4", "long streak", "S"),
            Participant("5", "Almost", "S"),
            Participant("6", "almost", "S"),
        ]
        active = {
            "2": _days(*range(5, 11)),
            "3": _days(*range(1, 11)),
            "4": _days(*range(3, 11)),
            "5": _days(1, 2, 3),
            "6": _days(1, 2, 3),
        }
        board = classify_participants(participants, active, window, TODAY)

        assert [item.participant.service_number for item in board] == ["3", "4", "2", "5", "6", "1"]
        assert board[-1].result.inactive_day_count == 10

    def test_whole_roster_classified(self, window, roster):
        board = classify_participants(roster, {}, window, TODAY)
        assert len(board) == len(roster)
        assert {item.result.label for item in board} == {ConsistencyLabel.INACTIVE}
