import json
import logging
from typing import Any, Callable

import requests

from pagewalk.domain.http_response import HttpResponse
from pagewalk.exceptions import HttpFetchError, UndecodablePageError

logger = logging.getLogger(__name__)

JSON_ACCEPT = "application/json"


def decode_json_body(response: HttpResponse, url: str) -> Any:
    """Decode a search response body as JSON.

    A declared non-JSON Content-Type (an HTML error page from a proxy, say) is
    rejected before decoding. A missing Content-Type is given the benefit of
    the doubt. Both failures raise `UndecodablePageError`, which is retried.
    """
    if response.content_type is not None and not response.is_json:
        raise UndecodablePageError(url, ValueError(f"unexpected Content-Type {response.content_type!r}"))
    try:
        return json.loads(response.text)
    except (TypeError, ValueError) as e:
        raise UndecodablePageError(url, e) from e


class HttpService:
    """
    Issues JSON search requests for one page at a time.

    `http_client` is a ``requests.get``-compatible callable so tests can hand
    in a Mock. Transport failures surface as `HttpFetchError`; status handling
    and decoding are left to the caller.
    """

    def __init__(self, user_agent: str, http_client: Callable, timeout: int = 10):
        self.user_agent = user_agent
        self.timeout = timeout
        self.http_client = http_client

    def fetch(self, url: str) -> HttpResponse:
        headers = {"User-Agent": self.user_agent, "Accept": JSON_ACCEPT}
        try:
            resp = self.http_client(url, headers=headers, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise HttpFetchError(url, e) from e

        content_type = None
        if hasattr(resp, "headers"):
            content_type = resp.headers.get("Content-Type")
        logger.debug("GET %s -> %s (%s)", url, resp.status_code, content_type)

        return HttpResponse(resp.status_code, resp.text, content_type)
