"""
Raw input schemas.

Pydantic schemas for run and roster rows as returned by the sheet API.
They coerce loose spreadsheet values into the canonical shape; problems
that can be recovered are recorded as notes in the validation context
instead of failing the row.
"""

import math
from datetime import date, datetime, tzinfo
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from runchallenge.shared.constants import RunStatus


def _note(info: ValidationInfo, kind: str, message: str) -> None:
    """Record a recoverable problem in the validation context."""
    if info.context is not None:
        info.context.setdefault("notes", []).append((kind, message))


def coerce_text(value: Any) -> str:
    """Stringify and trim identifiers/free text (sheet numbers come as floats)."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def to_local_day(value: Any, timezone: Optional[tzinfo] = None) -> date:
    """
    Resolve a raw date value to a calendar day in the challenge timezone.

    Accepts date objects, datetimes, 'YYYY-MM-DD' and ISO-8601 datetime
    strings. Aware datetimes are converted into `timezone`; naive ones
    are taken as already local.

    Raises:
        ValueError: If the value cannot be parsed
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None and timezone is not None:
            value = value.astimezone(timezone)
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"missing or non-text date: {value!r}")

    text = value.strip()
    if len(text) == 10:
        return date.fromisoformat(text)
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_local_day(datetime.fromisoformat(text), timezone)


class RawRunRecord(BaseModel):
    """One run row from the sheet API (camelCase or snake_case keys)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    day: date = Field(default=None, alias="date", validate_default=True)
    service_number: str = Field(default="", alias="serviceNumber")
    name: str = ""
    station: str = ""
    distance_km: float = Field(default=None, alias="distanceKm", validate_default=True)
    status: RunStatus = Field(default=None, validate_default=True)
    rejection_reason: Optional[str] = Field(default=None, alias="rejectionReason")

    @field_validator("id", "service_number", "name", "station", mode="before")
    @classmethod
    def strip_text(cls, v):
        return coerce_text(v)

    @field_validator("rejection_reason", mode="before")
    @classmethod
    def blank_reason_to_none(cls, v):
        text = coerce_text(v)
        return text or None

    @field_validator("day", mode="before")
    @classmethod
    def parse_day(cls, v, info: ValidationInfo):
        timezone = (info.context or {}).get("timezone")
        return to_local_day(v, timezone)

    @field_validator("distance_km", mode="before")
    @classmethod
    def coerce_distance(cls, v, info: ValidationInfo):
        """Invalid, missing, negative or non-finite distances become 0."""
        if v is None or (isinstance(v, str) and not v.strip()):
            _note(info, "distance", "missing distance, counted as 0 km")
            return 0.0
        if isinstance(v, bool):
            _note(info, "distance", f"non-numeric distance {v!r}, counted as 0 km")
            return 0.0
        try:
            number = float(v.strip() if isinstance(v, str) else v)
        except (TypeError, ValueError):
            _note(info, "distance", f"non-numeric distance {v!r}, counted as 0 km")
            return 0.0
        if not math.isfinite(number) or number < 0:
            _note(info, "distance", f"invalid distance {v!r}, counted as 0 km")
            return 0.0
        return number

    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v, info: ValidationInfo):
        text = coerce_text(v).lower()
        if not text:
            return RunStatus.PENDING
        try:
            return RunStatus(text)
        except ValueError:
            _note(info, "status", f"unknown status {v!r}, treated as pending")
            return RunStatus.PENDING


class RawParticipant(BaseModel):
    """One registered user row from the sheet API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    service_number: str = Field(default="", alias="serviceNumber")
    name: str = ""
    station: str = ""

    @field_validator("service_number", "name", "station", mode="before")
    @classmethod
    def strip_text(cls, v):
        return coerce_text(v)
