"""
RunRecord normalizer.

Coerces raw sheet rows into RunRecord / Participant before any
aggregation runs. Malformed rows are recovered (defaulted) or excluded,
never fatal; every finding is reported as a DataQualityWarning.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import tzinfo
from typing import Any, Optional

from pydantic import ValidationError

from .models import (
    DataQualityWarning,
    NormalizedRoster,
    NormalizedRuns,
    Participant,
    RunRecord,
)
from .schemas import RawParticipant, RawRunRecord

logger = logging.getLogger(__name__)

# pydantic field name -> warning kind
_ERROR_KINDS = {"day": "date", "date": "date"}


def normalize_runs(
    raw_records: Iterable[Mapping[str, Any] | RunRecord],
    timezone: Optional[tzinfo] = None,
) -> NormalizedRuns:
    """
    Normalize raw run rows.

    Args:
        raw_records: Rows from the data source (all statuses, unsorted).
            Already-normalized RunRecords pass through unchanged.
        timezone: Fixed zone used to resolve datetimes to calendar days

    Returns:
        NormalizedRuns with the usable records (input order kept) and
        the data-quality warnings.
    """
    result = NormalizedRuns()

    for position, raw in enumerate(raw_records, start=1):
        if isinstance(raw, RunRecord):
            result.records.append(raw)
            continue

        fallback_id = f"row-{position}"
        context: dict[str, Any] = {"timezone": timezone, "notes": []}
        try:
            row = RawRunRecord.model_validate(raw, context=context)
        except ValidationError as e:
            record_id = _raw_id(raw) or fallback_id
            error = e.errors()[0]
            field = error["loc"][0] if error["loc"] else ""
            kind = _ERROR_KINDS.get(str(field), str(field) or "record")
            result.warnings.append(
                DataQualityWarning(kind, record_id, f"excluded: {error['msg']}")
            )
            continue

        record_id = row.id or fallback_id
        for kind, message in context["notes"]:
            result.warnings.append(DataQualityWarning(kind, record_id, message))

        if not row.id:
            result.warnings.append(
                DataQualityWarning("id", record_id, "missing id, using row position")
            )
        if not row.service_number:
            result.warnings.append(
                DataQualityWarning("service_number", record_id, "excluded: missing service number")
            )
            continue

        result.records.append(
            RunRecord(
                id=record_id,
                date=row.day,
                service_number=row.service_number,
                name=row.name,
                station=row.station,
                distance_km=row.distance_km,
                status=row.status,
                rejection_reason=row.rejection_reason,
            )
        )

    if result.warnings:
        logger.warning(
            f"Normalized {len(result.records)} runs with {len(result.warnings)} data-quality warnings"
        )
    else:
        logger.debug(f"Normalized {len(result.records)} runs")
    return result


def normalize_participants(
    raw_participants: Iterable[Mapping[str, Any] | Participant],
) -> NormalizedRoster:
    """
    Normalize the registered roster.

    Rows that are not records or lack a service number are excluded; a
    duplicated service number keeps its first (earliest registered) row.
    """
    result = NormalizedRoster()
    seen: set[str] = set()

    for position, raw in enumerate(raw_participants, start=1):
        if isinstance(raw, Participant):
            participant = raw
        else:
            try:
                row = RawParticipant.model_validate(raw)
            except ValidationError as e:
                result.warnings.append(
                    DataQualityWarning(
                        "record", f"row-{position}", f"excluded: {e.errors()[0]['msg']}"
                    )
                )
                continue
            participant = Participant(
                service_number=row.service_number,
                name=row.name,
                station=row.station,
            )

        if not participant.service_number:
            result.warnings.append(
                DataQualityWarning(
                    "service_number", f"row-{position}", "excluded: participant without service number"
                )
            )
            continue
        if participant.service_number in seen:
            result.warnings.append(
                DataQualityWarning(
                    "duplicate", participant.service_number, "duplicate registration ignored"
                )
            )
            continue

        seen.add(participant.service_number)
        result.participants.append(participant)

    if result.warnings:
        logger.warning(
            f"Roster has {len(result.participants)} participants, {len(result.warnings)} rows skipped"
        )
    return result


def _raw_id(raw: Any) -> str:
    if isinstance(raw, Mapping):
        value = raw.get("id")
        if value is not None:
            return str(value).strip()
    return ""
