"""
Shared fixtures for challenge tests.

A ten-day window (2025-12-01 .. 2025-12-10) keeps day arithmetic readable.
"""

from datetime import date

import pytest

from runchallenge.features.challenge.models import ChallengeWindow, Participant, RunRecord
from runchallenge.shared.constants import RunStatus


@pytest.fixture
def window():
    return ChallengeWindow(date(2025, 12, 1), date(2025, 12, 10))


@pytest.fixture
def make_run():
    """Factory for approved RunRecords: make_run("sn", day_of_december, km)."""
    counter = {"n": 0}

    def _make(service_number, day, km, status=RunStatus.APPROVED, name=None, station="Madaveli"):
        counter["n"] += 1
        return RunRecord(
            id=f"r{counter['n']}",
            date=day if isinstance(day, date) else date(2025, 12, day),
            service_number=service_number,
            name=name or f"Runner {service_number}",
            station=station,
            distance_km=km,
            status=status,
        )

    return _make


@pytest.fixture
def roster():
    return [
        Participant("100", "Aisha", "Madaveli"),
        Participant("200", "Badru", "Madaveli"),
        Participant("300", "Chaya", "Fiyoari"),
    ]


@pytest.fixture
def snapshot_rows():
    """Raw sheet rows as the API returns them (camelCase, loose types)."""
    runs = [
        {"id": "a1", "date": "2025-12-01", "serviceNumber": 100, "name": "Aisha",
         "station": "Gdh.Madaveli Police Station", "distanceKm": 60, "status": "approved"},
        {"id": "a2", "date": "2025-12-02", "serviceNumber": 100, "name": "Aisha",
         "station": "Gdh.Madaveli Police Station", "distanceKm": "45.5", "status": "Approved"},
        {"id": "b1", "date": "2025-12-02", "serviceNumber": 200, "name": "Badru",
         "station": "Gdh.Madaveli Police Station", "distanceKm": 12, "status": "pending"},
        {"id": "c1", "date": "2025-12-03", "serviceNumber": 300, "name": "Chaya",
         "station": "Gdh.Fiyoari Police Station", "distanceKm": 8.25, "status": "approved"},
        {"id": "c2", "date": "2025-12-03", "serviceNumber": 300, "name": "Chaya",
         "station": "Gdh.Fiyoari Police Station", "distanceKm": 4, "status": "rejected",
         "rejectionReason": "Duplicate screenshot"},
        {"id": "g1", "date": "2025-12-03", "serviceNumber": 900, "name": "Admin",
         "station": "General Admin", "distanceKm": 30, "status": "approved"},
    ]
    participants = [
        {"serviceNumber": 100, "name": "Aisha", "station": "Gdh.Madaveli Police Station"},
        {"serviceNumber": 200, "name": "Badru", "station": "Gdh.Madaveli Police Station"},
        {"serviceNumber": 300, "name": "Chaya", "station": "Gdh.Fiyoari Police Station"},
        {"serviceNumber": 900, "name": "Admin", "station": "General Admin"},
    ]
    return runs, participants
