from enum import Enum


class StreamState(str, Enum):
    """Lifecycle of one paged fetch stream."""

    CREATED = "created"
    ACTIVE = "active"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_exhausted(self) -> bool:
        return self in (StreamState.COMPLETED, StreamState.FAILED)
