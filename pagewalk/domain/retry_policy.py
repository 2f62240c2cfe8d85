from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ExhaustionMode(str, Enum):
    """What a stream does once every attempt for a page has failed."""

    RAISE = "raise"
    STOP = "stop"

    @classmethod
    def parse(cls, value) -> "ExhaustionMode":
        if isinstance(value, ExhaustionMode):
            return value
        if value is None or (isinstance(value, str) and value.strip() == ""):
            raise ValueError("on_exhausted is required")
        mode = str(value).strip().lower()
        for member in cls:
            if member.value == mode:
                return member
        raise ValueError(f"Unknown on_exhausted mode: {value!r}")


@dataclass(frozen=True)
class RetryPolicy:
    """Retry and backoff settings applied to each page of a paged fetch.

    - `max_attempts` counts the first attempt, so 1 means "never retry".
    - Delays grow by `multiplier` per failed attempt and are capped at
      `max_delay`; a multiplier of 1 gives a fixed delay.
    """

    max_attempts: int = 3
    initial_delay: float = 0.5
    multiplier: float = 2.0
    max_delay: float = 30.0
    on_exhausted: ExhaustionMode = ExhaustionMode.RAISE

    def __post_init__(self):
        if int(self.max_attempts) < 1:
            raise ValueError(f"max_attempts must be >= 1, got {self.max_attempts!r}")
        if self.initial_delay < 0:
            raise ValueError(f"initial_delay must be >= 0, got {self.initial_delay!r}")
        if self.multiplier < 1:
            raise ValueError(f"multiplier must be >= 1, got {self.multiplier!r}")
        if self.max_delay < 0:
            raise ValueError(f"max_delay must be >= 0, got {self.max_delay!r}")
        object.__setattr__(self, "max_attempts", int(self.max_attempts))
        object.__setattr__(self, "on_exhausted", ExhaustionMode.parse(self.on_exhausted))

    @property
    def raises_on_exhaustion(self) -> bool:
        return self.on_exhausted is ExhaustionMode.RAISE

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after failed attempt number `attempt` (1-based)."""
        if attempt < 1:
            return 0.0
        return min(self.max_delay, self.initial_delay * (self.multiplier ** (attempt - 1)))
