import logging
import time
from typing import Callable, Optional

from pagewalk.domain.fetch_request import FetchRequest
from pagewalk.domain.page import Page
from pagewalk.domain.retry_policy import RetryPolicy
from pagewalk.exceptions import HttpStatusError, RetriesExhaustedError, TransientFetchError

logger = logging.getLogger(__name__)


def is_retryable(error: BaseException) -> bool:
    """Transient fetch failures are retryable; structural and client errors are not."""
    if isinstance(error, TransientFetchError):
        return True
    if isinstance(error, HttpStatusError):
        return error.transient
    # Raw network errors from sources that skip HttpService; covers ConnectionError,
    # TimeoutError, socket.timeout and requests.RequestException
    return isinstance(error, OSError)


class RetryRunner:
    """Run one page fetch under a `RetryPolicy`.

    Only retryable errors (see `is_retryable`) are attempted again, with the
    policy's backoff between attempts. Anything else propagates on the first
    failure. `sleep` is injectable so tests never block.
    """

    def __init__(self, policy: RetryPolicy, *, sleep: Callable[[float], None] = time.sleep):
        self.policy = policy
        self._sleep = sleep

    def run(
        self,
        operation: Callable[[str], Page],
        request: FetchRequest,
        on_attempt: Optional[Callable[[FetchRequest], None]] = None,
    ) -> Page:
        max_attempts = self.policy.max_attempts
        last_error: Optional[BaseException] = None

        while request.attempt < max_attempts:
            attempt = request.next_attempt()
            if on_attempt is not None:
                on_attempt(request)
            try:
                return operation(request.address)
            except Exception as e:
                if not is_retryable(e):
                    raise
                last_error = e
                if attempt >= max_attempts:
                    break
                wait_time = self.policy.delay_for(attempt)
                logger.warning(
                    "Page fetch failed (attempt %d/%d), retrying in %.2fs: address=%s, error=%s",
                    attempt, max_attempts, wait_time, request.address, e,
                )
                if wait_time > 0:
                    self._sleep(wait_time)

        logger.error(
            "Page fetch failed after %d attempts: address=%s, error=%s",
            request.attempt, request.address, last_error,
        )
        raise RetriesExhaustedError(request.address, request.attempt, last_error) from last_error
