from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from pagewalk.domain.fetch_config import FetchConfig
from pagewalk.services.fetch_config_store import FetchConfigStore
from pagewalk.services.fetcher import SearchPageFetcher
from pagewalk.services.http_service import HttpService
from pagewalk.services.paged_fetcher import PagedFetcher
from pagewalk.services.retry_runner import RetryRunner


@dataclass(frozen=True)
class PagedFetcherFactory:
    """Build `PagedFetcher`s for named search endpoints described by fetch configs."""

    http_service: HttpService
    config_store: Optional[FetchConfigStore] = None
    sleep: Optional[Callable[[float], None]] = None

    def for_config(self, fetch_config: FetchConfig, query: str) -> PagedFetcher:
        if fetch_config is None:
            raise ValueError("fetch_config is required")
        source = SearchPageFetcher(
            self.http_service,
            fetch_config.base_url,
            query_param=fetch_config.query_param,
        )
        runner = RetryRunner(fetch_config.retry_policy, sleep=self.sleep or time.sleep)
        return PagedFetcher(query, source, retry_runner=runner, max_pages=fetch_config.max_pages)

    def for_name(self, name: str, query: str) -> PagedFetcher:
        if self.config_store is None:
            raise RuntimeError("for_name requires a config_store")
        return self.for_config(self.config_store.load(name), query)
