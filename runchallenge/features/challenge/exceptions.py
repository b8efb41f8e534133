"""Exceptions raised by the challenge analytics engine."""


class ChallengeError(Exception):
    """Base exception for the challenge engine."""
    pass


class ChallengeConfigError(ChallengeError):
    """Invalid engine configuration (thresholds, window, slots)."""
    pass


class SnapshotError(ChallengeError):
    """Snapshot file missing or malformed."""
    pass


def require_positive(name: str, value: float) -> None:
    """Fail fast on a non-positive threshold."""
    if value is None or not value > 0:
        raise ChallengeConfigError(f"{name} must be positive, got {value!r}")
