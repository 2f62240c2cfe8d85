from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pagewalk.domain.retry_policy import RetryPolicy


@dataclass(frozen=True)
class FetchConfig:
    """A named search endpoint plus the retry settings used to page through it."""

    name: str
    base_url: str
    query_param: str = "q"
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    max_pages: Optional[int] = None

    def __post_init__(self):
        if not self.base_url or self.base_url.strip() == "":
            raise ValueError("base_url is required")
        if not self.query_param or self.query_param.strip() == "":
            raise ValueError("query_param is required")
        if self.max_pages is not None and int(self.max_pages) < 1:
            raise ValueError(f"max_pages must be >= 1, got {self.max_pages!r}")

    def __repr__(self):
        return f"<FetchConfig name={self.name} base_url={self.base_url} max_pages={self.max_pages}>"
