import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator, Optional, Union

from pagewalk import config
from pagewalk.domain.fetch_request import FetchRequest
from pagewalk.domain.page import Page
from pagewalk.domain.retry_policy import RetryPolicy
from pagewalk.domain.stream_state import StreamState
from pagewalk.exceptions import MalformedPageError, RetriesExhaustedError
from pagewalk.services.fetcher import PageSource
from pagewalk.services.page_parser import PageParser
from pagewalk.services.retry_runner import RetryRunner

logger = logging.getLogger(__name__)

# Omitted max_pages falls back to PAGEWALK_MAX_PAGES; an explicit None means no limit
_MAX_PAGES_FROM_ENV = object()


class _CallablePageSource:
    """Adapt a plain ``fetch(address) -> Page`` function to `PageSource`."""

    def __init__(self, fn: Callable[[str], Page]):
        self._fn = fn

    def fetch(self, address: str) -> Page:
        return self._fn(address)


class PageStream:
    """Lazy, single-use sequence of records for one run of a `PagedFetcher`.

    Pages are fetched only when the consumer asks for a record beyond the
    current page, so abandoning the stream (break, `close()`, leaving a
    `with` block) means no further fetches. Once finished the stream stays
    finished; call `PagedFetcher.produce()` again to start over at page one.
    """

    def __init__(
        self,
        request: FetchRequest,
        page_source: PageSource,
        retry_runner: RetryRunner,
        max_pages: Optional[int] = None,
        parser: Optional[PageParser] = None,
    ):
        self._request = request
        self._page_source = page_source
        self._retry_runner = retry_runner
        self._max_pages = max_pages
        self._parser = parser or PageParser()
        self.state = StreamState.CREATED
        self.pages_fetched = 0
        self.fetch_calls = 0
        self.exhausted = False
        self.closed = False
        self._records = self._iter_records()

    @property
    def query(self) -> str:
        return self._request.query

    def __iter__(self) -> "PageStream":
        return self

    def __next__(self) -> Any:
        if self.state is StreamState.CREATED:
            self.state = StreamState.ACTIVE
        return next(self._records)

    def __enter__(self) -> "PageStream":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Stop the stream; no page is fetched after this returns."""
        if self.closed:
            return
        self.closed = True
        self._records.close()
        if not self.state.is_exhausted:
            self.state = StreamState.COMPLETED
            logger.debug("Stream for %r closed by consumer after %d page(s)", self.query, self.pages_fetched)

    def _count_attempt(self, request: FetchRequest) -> None:
        self.fetch_calls += 1

    def _fetch_as_page(self, address: str) -> Page:
        result = self._page_source.fetch(address)
        if isinstance(result, Page):
            return result
        # Sources may hand back the raw {"results", "more", "_next"} payload
        if isinstance(result, Mapping):
            return self._parser.parse(result, address)
        raise MalformedPageError(address, f"page source returned {type(result).__name__}, expected a Page or mapping")

    def _fetch_page(self) -> Page:
        return self._retry_runner.run(self._fetch_as_page, self._request, on_attempt=self._count_attempt)

    def _iter_records(self) -> Iterator[Any]:
        try:
            yield from self._walk_pages()
        except GeneratorExit:
            raise
        except BaseException:
            self.state = StreamState.FAILED
            raise

    def _walk_pages(self) -> Iterator[Any]:
        request = self._request
        while True:
            try:
                page = self._fetch_page()
            except RetriesExhaustedError as e:
                if self._retry_runner.policy.raises_on_exhaustion:
                    raise
                logger.error(
                    "Ending stream for %r early: page %d unavailable after %d attempt(s): %s",
                    request.query, request.page_number, e.attempts, e.last_error,
                )
                self.exhausted = True
                self.state = StreamState.COMPLETED
                return

            self.pages_fetched += 1
            logger.debug("Page %d for %r: %d result(s), more=%s", request.page_number, request.query, len(page), page.has_more)

            yield from page.results

            if not page.has_more:
                self.state = StreamState.COMPLETED
                return
            if self._max_pages is not None and self.pages_fetched >= self._max_pages:
                logger.info("Stopping %r at max_pages=%d", request.query, self._max_pages)
                self.state = StreamState.COMPLETED
                return
            request.advance(page.next_cursor)


class PagedFetcher:
    """Expose every record of a paginated search as one lazy sequence.

    Pagination and transient-failure retry are hidden from the consumer:

        fetcher = PagedFetcher("python", source, RetryPolicy(max_attempts=3))
        for record in fetcher:
            ...

    The fetcher itself holds no iteration state; each `produce()` (or `for`
    loop) starts again at page one.
    """

    def __init__(
        self,
        query: str,
        page_source: Union[PageSource, Callable[[str], Page]],
        retry_policy: Optional[RetryPolicy] = None,
        *,
        retry_runner: Optional[RetryRunner] = None,
        max_pages: Optional[int] = _MAX_PAGES_FROM_ENV,
    ):
        if not isinstance(query, str) or query.strip() == "":
            raise ValueError("query is required")
        if page_source is None:
            raise ValueError("page_source is required")
        if not hasattr(page_source, "fetch"):
            if not callable(page_source):
                raise TypeError(f"page_source must define fetch(address) or be callable, got {type(page_source).__name__}")
            page_source = _CallablePageSource(page_source)

        if retry_runner is not None and retry_policy is not None and retry_runner.policy != retry_policy:
            raise ValueError("retry_policy conflicts with retry_runner.policy")
        if retry_runner is None:
            retry_runner = RetryRunner(retry_policy or config.default_retry_policy())

        if max_pages is _MAX_PAGES_FROM_ENV:
            max_pages = config.max_pages()
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"max_pages must be >= 1, got {max_pages!r}")

        self.query = query
        self.page_source = page_source
        self.retry_runner = retry_runner
        self.max_pages = max_pages

    @property
    def retry_policy(self) -> RetryPolicy:
        return self.retry_runner.policy

    def _initial_address(self) -> str:
        initial_address = getattr(self.page_source, "initial_address", None)
        if callable(initial_address):
            return initial_address(self.query)
        return self.query

    def produce(self) -> PageStream:
        """Start a new stream at page one."""
        request = FetchRequest(self.query, self._initial_address())
        return PageStream(request, self.page_source, self.retry_runner, self.max_pages)

    def __iter__(self) -> PageStream:
        return self.produce()

    def __repr__(self):
        return f"<PagedFetcher query={self.query!r} max_attempts={self.retry_policy.max_attempts}>"
