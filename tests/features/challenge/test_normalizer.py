"""
Tests for the RunRecord normalizer.

Covers coercion of loose sheet values and the data-quality warnings
emitted for rows that are recovered or excluded.
"""

from datetime import date, timedelta, timezone

from runchallenge.features.challenge.models import Participant, RunRecord
from runchallenge.features.challenge.normalizer import normalize_participants, normalize_runs
from runchallenge.shared.constants import RunStatus

MALDIVES = timezone(timedelta(hours=5))


def _row(**overrides):
    row = {
        "id": "r1",
        "date": "2025-12-03",
        "serviceNumber": "4521",
        "name": "Ali",
        "station": "Madaveli",
        "distanceKm": 5.5,
        "status": "approved",
    }
    row.update(overrides)
    return row


def _kinds(result):
    return [w.kind for w in result.warnings]


# =============================================================================
# Test Run Normalization
# =============================================================================

class TestNormalizeRuns:
    """Tests for normalize_runs."""

    def test_clean_row(self):
        result = normalize_runs([_row(name="  Ali ", distanceKm="5.5")])

        assert result.warnings == []
        record = result.records[0]
        assert record.id == "r1"
        assert record.date == date(2025, 12, 3)
        assert record.service_number == "4521"
        assert record.name == "Ali"
        assert record.distance_km == 5.5
        assert record.status == RunStatus.APPROVED

    def test_snake_case_keys(self):
        row = {"id": "r9", "date": "2025-12-04", "service_number": "77", "distance_km": 3}
        record = normalize_runs([row]).records[0]
        assert record.service_number == "77"
        assert record.distance_km == 3.0

    def test_numeric_service_number_is_stringified(self):
        """Sheet numbers arrive as floats."""
        record = normalize_runs([_row(serviceNumber=4521.0)]).records[0]
        assert record.service_number == "4521"

    def test_status_case_insensitive(self):
        record = normalize_runs([_row(status=" Rejected ")]).records[0]
        assert record.status == RunStatus.REJECTED

    def test_rejection_reason_kept(self):
        record = normalize_runs([_row(status="rejected", rejectionReason="Blurry")]).records[0]
        assert record.rejection_reason == "Blurry"

    def test_input_order_kept(self):
        rows = [_row(id="b", date="2025-12-05"), _row(id="a", date="2025-12-01")]
        assert [r.id for r in normalize_runs(rows).records] == ["b", "a"]

    def test_run_records_pass_through(self):
        record = RunRecord("x", date(2025, 12, 1), "1", "A", "S", 2.0, RunStatus.APPROVED)
        assert normalize_runs([record]).records == [record]

    def test_empty_input(self):
        result = normalize_runs([])
        assert result.records == []
        assert result.warnings == []


class TestRecoveredRows:
    """Rows that are kept with a warning."""

    def test_missing_distance_is_zero(self):
        result = normalize_runs([_row(distanceKm=None)])
        assert result.records[0].distance_km == 0.0
        assert _kinds(result) == ["distance"]

    def test_negative_distance_is_zero(self):
        result = normalize_runs([_row(distanceKm=-3)])
        assert result.records[0].distance_km == 0.0
        assert _kinds(result) == ["distance"]

    def test_non_numeric_distance_is_zero(self):
        result = normalize_runs([_row(distanceKm="five")])
        assert result.records[0].distance_km == 0.0
        assert _kinds(result) == ["distance"]

    def test_nan_distance_is_zero(self):
        result = normalize_runs([_row(distanceKm=float("nan"))])
        assert result.records[0].distance_km == 0.0

    def test_blank_status_is_pending_without_warning(self):
        result = normalize_runs([_row(status="")])
        assert result.records[0].status == RunStatus.PENDING
        assert result.warnings == []

    def test_unknown_status_is_pending_with_warning(self):
        result = normalize_runs([_row(status="maybe")])
        assert result.records[0].status == RunStatus.PENDING
        assert _kinds(result) == ["status"]

    def test_missing_id_uses_row_position(self):
        result = normalize_runs([_row(), _row(id="")])
        assert result.records[1].id == "row-2"
        assert _kinds(result) == ["id"]


class TestExcludedRows:
    """Rows that cannot be used."""

    def test_unparseable_date(self):
        result = normalize_runs([_row(date="31/12/2025")])
        assert result.records == []
        assert _kinds(result) == ["date"]
        assert result.warnings[0].record_id == "r1"

    def test_missing_date(self):
        row = _row()
        del row["date"]
        result = normalize_runs([row])
        assert result.records == []
        assert _kinds(result) == ["date"]

    def test_non_mapping_row(self):
        result = normalize_runs([None, _row()])
        assert [r.id for r in result.records] == ["r1"]
        assert [(w.kind, w.record_id) for w in result.warnings] == [("record", "row-1")]

    def test_missing_service_number(self):
        result = normalize_runs([_row(serviceNumber="  ")])
        assert result.records == []
        assert _kinds(result) == ["service_number"]


# =============================================================================
# Test Timezone Bucketing
# =============================================================================

class TestLocalDay:
    """Datetimes are reduced to the local calendar day."""

    def test_utc_evening_is_next_local_day(self):
        result = normalize_runs([_row(date="2025-12-01T20:30:00Z")], timezone=MALDIVES)
        assert result.records[0].date == date(2025, 12, 2)

    def test_offset_datetime(self):
        result = normalize_runs([_row(date="2025-12-01T10:00:00+05:00")], timezone=MALDIVES)
        assert result.records[0].date == date(2025, 12, 1)

    def test_naive_datetime_taken_as_local(self):
        result = normalize_runs([_row(date="2025-12-01T23:30:00")], timezone=MALDIVES)
        assert result.records[0].date == date(2025, 12, 1)

    def test_date_object(self):
        result = normalize_runs([_row(date=date(2025, 12, 9))])
        assert result.records[0].date == date(2025, 12, 9)


# =============================================================================
# Test Roster Normalization
# =============================================================================

class TestNormalizeParticipants:
    """Tests for normalize_participants."""

    def test_rows_are_trimmed(self):
        roster = normalize_participants([{"serviceNumber": 12, "name": " Ali ", "station": " Madaveli "}])
        assert roster.participants == [Participant("12", "Ali", "Madaveli")]

    def test_duplicate_keeps_first(self):
        roster = normalize_participants([
            {"serviceNumber": "12", "name": "First", "station": "A"},
            {"serviceNumber": "12", "name": "Second", "station": "B"},
        ])
        assert [p.name for p in roster.participants] == ["First"]
        assert [w.kind for w in roster.warnings] == ["duplicate"]

    def test_non_mapping_row_excluded(self):
        """A null roster row is skipped with a warning, not raised."""
        roster = normalize_participants([{"serviceNumber": "1", "name": "One"}, None])

        assert [p.service_number for p in roster.participants] == ["1"]
        assert [(w.kind, w.record_id) for w in roster.warnings] == [("record", "row-2")]

    def test_missing_service_number_skipped(self):
        roster = normalize_participants([{"name": "Nobody"}, {"serviceNumber": "1", "name": "One"}])
        assert [p.service_number for p in roster.participants] == ["1"]
        assert roster.warnings[0].kind == "service_number"
