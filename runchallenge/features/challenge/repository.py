"""
Snapshot data sources.

The engine never fetches data. Callers hand it whatever snapshot the
sheet API returned; this module defines that seam and a JSON-file
source used by the command-line tool.

Usage:
    source = JsonSnapshotSource("snapshot.json")
    report = service.build_report_from(source, today=date(2026, 1, 10))
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from .exceptions import SnapshotError

logger = logging.getLogger(__name__)


class ChallengeDataSource(Protocol):
    """Anything that can hand over a snapshot of runs and roster."""

    def get_runs(self) -> list[dict[str, Any]]:
        """All submitted runs, every status, unsorted."""
        ...

    def get_participants(self) -> list[dict[str, Any]]:
        """Full roster, including participants who never ran."""
        ...


class JsonSnapshotSource:
    """
    Snapshot stored as JSON: {"runs": [...], "participants": [...]}.

    The file is read once, on first access.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)
        self._data: dict[str, list] | None = None

    def _load(self) -> dict[str, list]:
        if self._data is not None:
            return self._data
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except OSError as e:
            raise SnapshotError(f"Cannot read snapshot {self.path}: {e}") from e
        except json.JSONDecodeError as e:
            raise SnapshotError(f"Snapshot {self.path} is not valid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise SnapshotError(f"Snapshot {self.path} must be a JSON object")
        for key in ("runs", "participants"):
            if not isinstance(raw.get(key, []), list):
                raise SnapshotError(f"Snapshot {self.path}: '{key}' must be a list")

        self._data = {
            "runs": raw.get("runs", []),
            "participants": raw.get("participants", []),
        }
        logger.info(
            f"Loaded snapshot {self.path.name}: {len(self._data['runs'])} runs, "
            f"{len(self._data['participants'])} participants"
        )
        return self._data

    def get_runs(self) -> list[dict[str, Any]]:
        return list(self._load()["runs"])

    def get_participants(self) -> list[dict[str, Any]]:
        return list(self._load()["participants"])
