"""pagewalk - lazy iteration over paginated search results with bounded retry."""
from pagewalk.domain import ExhaustionMode as ExhaustionMode
from pagewalk.domain import FetchConfig as FetchConfig
from pagewalk.domain import Page as Page
from pagewalk.domain import RetryPolicy as RetryPolicy
from pagewalk.domain import StreamState as StreamState
from pagewalk.exceptions import (
    HttpFetchError as HttpFetchError,
    HttpStatusError as HttpStatusError,
    MalformedPageError as MalformedPageError,
    PageFetchError as PageFetchError,
    PagewalkError as PagewalkError,
    RetriesExhaustedError as RetriesExhaustedError,
    TransientFetchError as TransientFetchError,
)
from pagewalk.services.fetcher import PageSource as PageSource
from pagewalk.services.fetcher import SearchPageFetcher as SearchPageFetcher
from pagewalk.services.paged_fetcher import PagedFetcher as PagedFetcher
from pagewalk.services.paged_fetcher import PageStream as PageStream

__all__ = [
    "ExhaustionMode",
    "FetchConfig",
    "Page",
    "RetryPolicy",
    "StreamState",
    "HttpFetchError",
    "HttpStatusError",
    "MalformedPageError",
    "PageFetchError",
    "PagewalkError",
    "RetriesExhaustedError",
    "TransientFetchError",
    "PageSource",
    "SearchPageFetcher",
    "PagedFetcher",
    "PageStream",
]
