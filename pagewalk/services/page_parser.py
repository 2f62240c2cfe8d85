import logging
from collections.abc import Mapping

from pagewalk.domain.page import Page
from pagewalk.exceptions import MalformedPageError

logger = logging.getLogger(__name__)


class PageParser:
    """Map a decoded search response onto a `Page`.

    Wire shape: ``{"results": [...], "more": bool, "_next": str}`` where
    ``_next`` is only required while ``more`` is true.

    Responsibility: structural validation only. It does NOT do IO or decode
    JSON; a payload that fails here is broken and will not be retried.
    """

    RESULTS_KEY = "results"
    MORE_KEY = "more"
    NEXT_KEY = "_next"

    def parse(self, payload, address: str = "") -> Page:
        if not isinstance(payload, Mapping):
            raise MalformedPageError(address, f"expected a JSON object, got {type(payload).__name__}")

        if self.RESULTS_KEY not in payload:
            raise MalformedPageError(address, f"missing '{self.RESULTS_KEY}'")
        results = payload[self.RESULTS_KEY]
        if not isinstance(results, list):
            raise MalformedPageError(address, f"'{self.RESULTS_KEY}' must be a list")

        if self.MORE_KEY not in payload:
            raise MalformedPageError(address, f"missing '{self.MORE_KEY}'")
        more = payload[self.MORE_KEY]
        if not isinstance(more, bool):
            raise MalformedPageError(address, f"'{self.MORE_KEY}' must be a boolean")

        next_cursor = None
        if more:
            next_cursor = payload.get(self.NEXT_KEY)
            if not isinstance(next_cursor, str) or next_cursor.strip() == "":
                raise MalformedPageError(address, f"'{self.MORE_KEY}' is true but '{self.NEXT_KEY}' is missing")
        elif payload.get(self.NEXT_KEY) is not None:
            logger.debug("Ignoring %s on final page from %s", self.NEXT_KEY, address)

        return Page(results=tuple(results), has_more=more, next_cursor=next_cursor)
