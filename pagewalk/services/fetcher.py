from __future__ import annotations

import logging
from typing import Optional, Protocol

from pagewalk.domain.page import Page
from pagewalk.exceptions import HttpStatusError
from pagewalk.services.http_service import HttpService, decode_json_body
from pagewalk.services.page_parser import PageParser
from pagewalk.utils.url_utils import build_search_url, resolve_cursor

logger = logging.getLogger(__name__)

# Statuses worth another attempt: timeouts, throttling and server-side faults
TRANSIENT_STATUS_CODES = frozenset({408, 425, 429})


def is_transient_status(status_code: int) -> bool:
    return status_code in TRANSIENT_STATUS_CODES or 500 <= status_code < 600


class PageSource(Protocol):
    """Fetch one page given an address and return it as a `Page`.

    The address is the query term (or whatever `initial_address` turns it
    into) for the first page and the previous page's cursor afterwards.
    Failures are raised as `PageFetchError` subclasses.

    Sources may also define ``initial_address(query) -> str``; `PagedFetcher`
    uses it when present.
    """

    def fetch(self, address: str) -> Page: ...


class SearchPageFetcher:
    """`PageSource` backed by a JSON search endpoint reached through `HttpService`."""

    def __init__(
        self,
        http_service: HttpService,
        base_url: str,
        *,
        query_param: str = "q",
        parser: Optional[PageParser] = None,
    ):
        if not base_url or base_url.strip() == "":
            raise ValueError("base_url is required")
        self._http_service = http_service
        self.base_url = base_url
        self.query_param = query_param
        self.parser = parser or PageParser()

    def initial_address(self, query: str) -> str:
        """Search URL for the first page: ``base_url?<query_param>=<query>``."""
        return build_search_url(self.base_url, query, self.query_param)

    def fetch(self, address: str) -> Page:
        url = resolve_cursor(self.base_url, address)
        logger.debug("Fetching page %s", url)
        response = self._http_service.fetch(url)

        if not response.ok:
            transient = is_transient_status(response.status_code)
            logger.info("HTTP %s for %s (transient=%s)", response.status_code, url, transient)
            raise HttpStatusError(url, response.status_code, transient)

        payload = decode_json_body(response, url)
        return self.parser.parse(payload, url)
