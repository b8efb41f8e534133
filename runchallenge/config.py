"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
Environment variables use the CHALLENGE_ prefix, e.g.
CHALLENGE_DISTANCE_THRESHOLD_KM=50.
"""

import json
from datetime import date
from typing import Annotated, Dict, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from runchallenge.features.challenge.models import ChallengeWindow, Thresholds
from runchallenge.features.challenge.stations import StationDirectory
from runchallenge.shared.constants import (
    CONSISTENT_STREAK_DAYS,
    DEFAULT_ACTIVE_DAY_THRESHOLD,
    DEFAULT_DISTANCE_THRESHOLD_KM,
    FULL_ATTENDANCE_BONUS,
    STATION_SCORE_SLOTS,
)

# Canonical station -> raw names accepted from the roster and run sheet
DEFAULT_STATIONS: Dict[str, List[str]] = {
    "Thinadhoo City": ["Thinadhoo City Police"],
    "Madaveli": ["Gdh.Madaveli Police Station"],
    "Rathafandhoo": ["Gdh.Rathafandhoo Police Station"],
    "Nadella": ["Gdh.Nadella Police Station"],
    "Fiyoari": ["Gdh.Fiyoari Police Station"],
    "Gadhdhoo": ["Gdh.Gadhdhoo Police Station"],
    "Vaadhoo": ["Gdh.Vaadhoo Police Station"],
    "Faresmaathoda": ["Gdh.Faresmaathoda Police Station"],
}


class Settings(BaseSettings):
    """Challenge settings with validation."""

    # === Core ===
    log_level: str = Field(default="INFO", description="Logging level")

    # === Challenge window ===
    start_date: date = Field(default=date(2025, 12, 1), description="First challenge day")
    end_date: date = Field(default=date(2026, 1, 31), description="Last challenge day (inclusive)")
    timezone: str = Field(
        default="Indian/Maldives",
        description="Fixed zone used to bucket runs into calendar days"
    )

    # === Finisher criteria ===
    distance_threshold_km: float = Field(default=DEFAULT_DISTANCE_THRESHOLD_KM, gt=0)
    active_day_threshold: int = Field(default=DEFAULT_ACTIVE_DAY_THRESHOLD, gt=0)

    # === Scoring ===
    station_slots: int = Field(default=STATION_SCORE_SLOTS, gt=0)
    full_attendance_bonus: float = Field(default=FULL_ATTENDANCE_BONUS, ge=1)
    consistent_streak_days: int = Field(default=CONSISTENT_STREAK_DAYS, gt=0)

    # === Stations ===
    stations: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_STATIONS.items()},
        description="Canonical station name -> accepted raw aliases (JSON)"
    )
    excluded_stations: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["General Admin"],
        description="Affiliations that are staff, not competing participants"
    )

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, v: str) -> str:
        """Timezone must resolve through zoneinfo."""
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @field_validator("excluded_stations", mode="before")
    @classmethod
    def parse_excluded_stations(cls, v):
        """Parse excluded stations from a JSON list or comma-separated string."""
        if isinstance(v, str):
            if v.strip().startswith("["):
                return json.loads(v)
            return [name.strip() for name in v.split(",") if name.strip()]
        return v

    @model_validator(mode="after")
    def check_window(self) -> "Settings":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self

    model_config = SettingsConfigDict(
        env_prefix="CHALLENGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def window(self) -> ChallengeWindow:
        return ChallengeWindow(self.start_date, self.end_date)

    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    def thresholds(self) -> Thresholds:
        return Thresholds(
            distance_km=self.distance_threshold_km,
            active_days=self.active_day_threshold,
            station_slots=self.station_slots,
            attendance_bonus=self.full_attendance_bonus,
            streak_days=self.consistent_streak_days,
        )

    def station_directory(self) -> StationDirectory:
        return StationDirectory(self.stations, excluded=self.excluded_stations)


# Global settings instance
settings = Settings()
