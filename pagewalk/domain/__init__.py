"""Domain objects for pagewalk - explicit re-exports to satisfy linters."""
from .page import Page as Page
from .fetch_request import FetchRequest as FetchRequest
from .retry_policy import ExhaustionMode as ExhaustionMode
from .retry_policy import RetryPolicy as RetryPolicy
from .stream_state import StreamState as StreamState
from .fetch_config import FetchConfig as FetchConfig

__all__ = ["Page", "FetchRequest", "ExhaustionMode", "RetryPolicy", "StreamState", "FetchConfig"]
