"""Custom exceptions for pagewalk."""
from typing import Optional


class PagewalkError(Exception):
    """Base class for all pagewalk errors."""


class ConfigError(PagewalkError):
    """Raised when a fetch config file contains invalid values."""

    def __init__(self, config_path: str, reason: str):
        self.config_path = config_path
        self.reason = reason
        super().__init__(f"Config '{config_path}': {reason}")


class ConfigNotFoundError(ConfigError):
    """Raised when a requested fetch config cannot be found on disk."""

    def __init__(self, config_path: str, reason: str = "not found"):
        super().__init__(config_path, reason)


class PageFetchError(PagewalkError):
    """Base class for failures while fetching or decoding one page."""

    def __init__(self, address: str, message: str):
        self.address = address
        super().__init__(message)


class TransientFetchError(PageFetchError):
    """A fetch failure that may succeed when attempted again."""


class HttpFetchError(TransientFetchError):
    """Raised when an HTTP fetch fails due to network/transport errors."""

    def __init__(self, url: str, original: Exception):
        self.url = url
        self.original = original
        super().__init__(url, f"HTTP fetch failed for {url}: {original}")


class UndecodablePageError(TransientFetchError):
    """Raised when a page body cannot be decoded as JSON."""

    def __init__(self, address: str, original: Exception):
        self.original = original
        super().__init__(address, f"Undecodable page response from {address}: {original}")


class HttpStatusError(PageFetchError):
    """Raised for non-2xx responses. Only `transient` statuses are retried."""

    def __init__(self, address: str, status_code: int, transient: bool):
        self.status_code = status_code
        self.transient = transient
        super().__init__(address, f"HTTP {status_code} for {address}")


class MalformedPageError(PageFetchError):
    """Raised when a decoded page is missing required fields. Never retried."""

    def __init__(self, address: str, reason: str):
        self.reason = reason
        super().__init__(address, f"Malformed page from {address}: {reason}")


class RetriesExhaustedError(PageFetchError):
    """Raised when every attempt to fetch one page failed transiently."""

    def __init__(self, address: str, attempts: int, last_error: Optional[Exception] = None):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(address, f"Giving up on {address} after {attempts} attempt(s): {last_error}")
