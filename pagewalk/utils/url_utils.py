from urllib.parse import parse_qsl, urlencode, urljoin, urlsplit, urlunsplit


def build_search_url(base_url: str, query: str, query_param: str = "q") -> str:
    """Return `base_url` with `query` URL-encoded as `query_param`.

    Existing query string parameters on `base_url` are preserved; an existing
    `query_param` is replaced.
    """
    if query is None or query.strip() == "":
        raise ValueError("query is required")
    parts = urlsplit(base_url)
    params = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != query_param]
    params.append((query_param, query))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


def resolve_cursor(base_url: str, cursor: str) -> str:
    """Resolve a next-page cursor against `base_url`.

    Absolute URLs come back unchanged; relative ones (`/search?page=2`,
    `?page=2`) are joined onto the endpoint.
    """
    return urljoin(base_url, cursor)
