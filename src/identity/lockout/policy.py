"""Lockout policy and the status values reported to callers."""

import os
from dataclasses import dataclass
from datetime import timedelta
from enum import Enum

DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_LOCKOUT_SECONDS = 5 * 60


class LockoutState(Enum):
    CLEAR = "Clear"
    ACCUMULATING = "Accumulating"
    LOCKED = "Locked"


@dataclass(frozen=True)
class LockoutStatus:
    """Result of a lockout check or of recording an attempt."""

    state: LockoutState
    attempts: int = 0
    remaining_ms: int | None = None

    @property
    def is_locked(self) -> bool:
        return self.state is LockoutState.LOCKED

    def as_dict(self) -> dict:
        return {
            "state": self.state.value,
            "is_locked": self.is_locked,
            "attempts": self.attempts,
            "remaining_ms": self.remaining_ms,
        }


@dataclass(frozen=True)
class LockoutPolicy:
    """Failed attempts allowed before a lock, and how long the lock lasts.

    The window is fixed; repeated lockouts do not back off.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    duration: timedelta = timedelta(seconds=DEFAULT_LOCKOUT_SECONDS)

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.duration <= timedelta(0):
            raise ValueError("duration must be positive")

    @property
    def duration_ms(self) -> int:
        return int(self.duration.total_seconds() * 1000)

    @classmethod
    def from_env(cls) -> "LockoutPolicy":
        return cls(
            max_attempts=int(os.getenv("LOCKOUT_MAX_ATTEMPTS", DEFAULT_MAX_ATTEMPTS)),
            duration=timedelta(seconds=int(os.getenv("LOCKOUT_DURATION_SECONDS", DEFAULT_LOCKOUT_SECONDS))),
        )


def format_lockout_time(milliseconds: int) -> str:
    """Render a remaining lockout as ``"<minutes>m <seconds>s"``."""
    milliseconds = max(int(milliseconds or 0), 0)
    minutes, remainder = divmod(milliseconds, 60_000)
    return f"{minutes}m {remainder // 1000}s"
