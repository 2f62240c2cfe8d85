from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Page:
    """One fetched page of results plus its pagination metadata."""
    results: Tuple[Any, ...] = field(default_factory=tuple)
    has_more: bool = False
    next_cursor: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "results", tuple(self.results))
        # A cursor on the final page is meaningless
        if not self.has_more:
            object.__setattr__(self, "next_cursor", None)

    def __len__(self) -> int:
        return len(self.results)

    def __repr__(self):
        return f"<Page results={len(self.results)} has_more={self.has_more} next={self.next_cursor!r}>"
