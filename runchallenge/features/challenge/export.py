"""
Row-oriented flattening of the boards for CSV export.

Every function returns a header row followed by data rows, with a
stable column order.
"""

import csv
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from .models import (
    Finisher,
    Journey,
    ParticipantConsistency,
    RankedEntry,
    RunnerTotals,
    StationScore,
)

Rows = list[list[Any]]

LEADERBOARD_HEADER = ["Rank", "Service Number", "Name", "Station", "Total Distance (km)", "Runs", "Active Days"]
ACTIVE_DAYS_HEADER = ["Rank", "Service Number", "Name", "Station", "Active Days", "Qualified"]
STATION_HEADER = [
    "Rank", "Station", "Participants", "Runners", "Runs", "Total Distance (km)",
    "Performance (%)", "Finishers", "Active Today",
]
FINISHERS_HEADER = ["Rank", "Service Number", "Name", "Station", "Completion Date", "Active Days To Complete"]
CONSISTENCY_HEADER = ["Service Number", "Name", "Station", "Status", "Streak", "Inactive Days"]
JOURNEY_HEADER = ["Date", "Distance (km)", "Cumulative (km)"]


def leaderboard_rows(board: Sequence[RankedEntry[RunnerTotals]]) -> Rows:
    rows: Rows = [list(LEADERBOARD_HEADER)]
    for item in board:
        e = item.entry
        rows.append([
            item.rank, e.service_number, e.name, e.station,
            f"{e.total_distance_km:.2f}", e.run_count, e.active_day_count,
        ])
    return rows


def active_days_rows(board: Sequence[RankedEntry[RunnerTotals]], active_day_threshold: int) -> Rows:
    rows: Rows = [list(ACTIVE_DAYS_HEADER)]
    for item in board:
        e = item.entry
        qualified = "Qualified" if e.active_day_count >= active_day_threshold else "In Progress"
        rows.append([item.rank, e.service_number, e.name, e.station, e.active_day_count, qualified])
    return rows


def station_rows(board: Sequence[RankedEntry[StationScore]]) -> Rows:
    rows: Rows = [list(STATION_HEADER)]
    for item in board:
        s = item.entry
        rows.append([
            item.rank, s.station, s.participant_count, s.runner_count, s.run_count,
            f"{s.total_distance_km:.2f}", f"{s.performance_percent:.1f}",
            s.finisher_count, s.active_runners_today,
        ])
    return rows


def finisher_rows(finishers: Sequence[RankedEntry[Finisher]]) -> Rows:
    rows: Rows = [list(FINISHERS_HEADER)]
    for item in finishers:
        p = item.entry.participant
        c = item.entry.completion
        rows.append([
            item.rank, p.service_number, p.name, p.station,
            c.completion_date.isoformat(), c.active_days_to_complete,
        ])
    return rows


def consistency_rows(board: Sequence[ParticipantConsistency]) -> Rows:
    rows: Rows = [list(CONSISTENCY_HEADER)]
    for item in board:
        p = item.participant
        r = item.result
        rows.append([p.service_number, p.name, p.station, r.label.value, r.streak, r.inactive_day_count])
    return rows


def journey_rows(trip: Journey) -> Rows:
    rows: Rows = [list(JOURNEY_HEADER)]
    for entry in trip.log:
        rows.append([entry.date.isoformat(), f"{entry.distance_km:.2f}", f"{entry.cumulative_km:.2f}"])
    return rows


def write_csv(rows: Rows, path: str | Path) -> Path:
    """Write rows to a UTF-8 CSV file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as fp:
        csv.writer(fp).writerows(rows)
    return path
