"""
Station performance scorer.

Stations are scored on the mean of their top N participant progress
values, missing slots counting as zero. This rewards depth of top
performers independent of roster size.

Station names are free text in both the roster and the run sheet, so
grouping goes through a StationDirectory (canonical name -> accepted
aliases) owned by configuration.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Optional

from runchallenge.shared.constants import FULL_ATTENDANCE_BONUS, STATION_SCORE_SLOTS
from runchallenge.shared.formulas import (
    add_km,
    apply_attendance_bonus,
    progress_percent,
    top_slots_average,
)

from .active_days import ActiveDayIndex, active_on, days_in_window
from .exceptions import ChallengeConfigError, require_positive
from .models import ChallengeWindow, Participant, RunnerTotals, StationScore

logger = logging.getLogger(__name__)


def _key(name: str) -> str:
    return " ".join((name or "").split()).casefold()


class StationDirectory:
    """
    Lookup from raw station strings to canonical station names.

    An empty directory resolves every station to its own trimmed name.
    """

    def __init__(
        self,
        aliases: Optional[Mapping[str, Iterable[str]]] = None,
        excluded: Iterable[str] = (),
    ):
        """
        Args:
            aliases: canonical name -> raw aliases, in display order
            excluded: Raw or canonical names that are not competing
                stations (e.g. admin staff)
        """
        self._order: list[str] = []
        self._lookup: dict[str, str] = {}
        for canonical, names in (aliases or {}).items():
            canonical = canonical.strip()
            self._order.append(canonical)
            self._lookup[_key(canonical)] = canonical
            for alias in names:
                self._lookup.setdefault(_key(alias), canonical)
        self._excluded = {_key(name) for name in excluded}

    @property
    def order(self) -> list[str]:
        """Configured canonical stations in display order."""
        return list(self._order)

    def resolve(self, raw: str) -> Optional[str]:
        """Canonical name for a raw station, None if unknown."""
        return self._lookup.get(_key(raw))

    def canonical(self, raw: str) -> str:
        """Canonical name, falling back to the trimmed raw name."""
        return self.resolve(raw) or " ".join((raw or "").split())

    def is_excluded(self, raw: str) -> bool:
        return _key(raw) in self._excluded or _key(self.canonical(raw)) in self._excluded


def score_stations(
    participants: Iterable[Participant],
    runner_totals: Iterable[RunnerTotals],
    active_days: ActiveDayIndex,
    window: ChallengeWindow,
    distance_threshold: float,
    active_day_threshold: int,
    today: date,
    directory: Optional[StationDirectory] = None,
    slots: int = STATION_SCORE_SLOTS,
    bonus: float = FULL_ATTENDANCE_BONUS,
) -> list[StationScore]:
    """
    Score every station from its participants' progress.

    Per participant:
        progress = min(min(d / D, 1), min(a / A, 1)) * 100
    where a counts active days inside the elapsed window. Participants
    active on every elapsed window day get progress * bonus, capped at
    100. A finisher meets both thresholds outright (the bonus alone
    never makes a finisher).

    Per station:
        performance = sum(top `slots` progresses, zero-filled) / slots

    Args:
        participants: Registered roster
        runner_totals: Output of aggregate_runners
        active_days: Output of build_active_days
        window: Challenge window
        distance_threshold: Finisher distance in km (> 0)
        active_day_threshold: Finisher active days (> 0)
        today: Injected current day (limits the elapsed window)
        directory: Station aliases/exclusions (identity if None)
        slots: Top-N slots per station (> 0)
        bonus: Full-attendance multiplier (>= 1)

    Returns:
        Configured stations first (even without participants), then
        unconfigured stations alphabetically. Orphan runners are not
        counted anywhere.

    Raises:
        ChallengeConfigError: On non-positive thresholds/slots or bonus < 1
    """
    require_positive("distance threshold", distance_threshold)
    require_positive("active day threshold", active_day_threshold)
    require_positive("station slots", slots)
    if not bonus >= 1:
        raise ChallengeConfigError(f"attendance bonus must be >= 1, got {bonus!r}")

    directory = directory or StationDirectory()
    totals_by_runner = {t.service_number: t for t in runner_totals}
    elapsed_day_count = len(window.elapsed_days(today))
    active_today = active_on(active_days, today)

    scores: dict[str, StationScore] = {
        station: StationScore(station=station)
        for station in directory.order
        if not directory.is_excluded(station)
    }

    for participant in participants:
        if not participant.station.strip() or directory.is_excluded(participant.station):
            continue
        station = directory.canonical(participant.station)
        score = scores.get(station)
        if score is None:
            score = scores[station] = StationScore(station=station)

        totals = totals_by_runner.get(participant.service_number)
        distance = totals.total_distance_km if totals else 0.0
        run_count = totals.run_count if totals else 0
        days = active_days.get(participant.service_number, set())
        covered = days_in_window(days, window, today)

        progress = progress_percent(distance, covered, distance_threshold, active_day_threshold)
        if elapsed_day_count > 0 and covered == elapsed_day_count:
            progress = apply_attendance_bonus(progress, bonus)

        score.participant_count += 1
        score.total_distance_km = add_km(score.total_distance_km, distance)
        score.run_count += run_count
        score.progresses.append(progress)
        if distance > 0:
            score.runner_count += 1
        if distance >= distance_threshold and covered >= active_day_threshold:
            score.finisher_count += 1
        if participant.service_number in active_today:
            score.active_runners_today += 1

    configured = set(directory.order)
    extra = sorted((s for s in scores if s not in configured), key=str.casefold)
    if extra:
        logger.debug(f"Stations outside the directory: {extra}")

    result = []
    for station in [s for s in directory.order if s in scores] + extra:
        score = scores[station]
        score.progresses.sort(reverse=True)
        score.performance_percent = min(top_slots_average(score.progresses, slots), 100.0)
        result.append(score)
    return result
