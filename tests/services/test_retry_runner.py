import logging
from unittest.mock import Mock

import pytest
import requests

from pagewalk.domain.fetch_request import FetchRequest
from pagewalk.domain.page import Page
from pagewalk.domain.retry_policy import RetryPolicy
from pagewalk.exceptions import (
    HttpFetchError,
    HttpStatusError,
    MalformedPageError,
    RetriesExhaustedError,
    UndecodablePageError,
)
from pagewalk.services.retry_runner import RetryRunner, is_retryable


def _runner(max_attempts=3, sleeps=None, **policy):
    sleep = sleeps.append if sleeps is not None else Mock()
    return RetryRunner(RetryPolicy(max_attempts=max_attempts, **policy), sleep=sleep)


def test_first_success_makes_one_call():
    op = Mock(return_value=Page(results=[1]))
    request = FetchRequest("q")
    page = _runner().run(op, request)
    assert page.results == (1,)
    op.assert_called_once_with("q")
    assert request.attempt == 1


def test_backoff_delays_grow_and_are_capped():
    sleeps = []
    op = Mock(side_effect=HttpFetchError("q", requests.exceptions.Timeout("slow")))
    runner = _runner(max_attempts=5, sleeps=sleeps, initial_delay=1.0, multiplier=3.0, max_delay=5.0)

    with pytest.raises(RetriesExhaustedError):
        runner.run(op, FetchRequest("q"))

    assert op.call_count == 5
    assert sleeps == [1.0, 3.0, 5.0, 5.0]


def test_fixed_delay_with_multiplier_one():
    sleeps = []
    op = Mock(side_effect=[UndecodablePageError("q", ValueError("x")), Page()])
    _runner(sleeps=sleeps, initial_delay=0.25, multiplier=1.0).run(op, FetchRequest("q"))
    assert sleeps == [0.25]


def test_zero_delay_does_not_sleep():
    sleep = Mock()
    runner = RetryRunner(RetryPolicy(max_attempts=2, initial_delay=0), sleep=sleep)
    op = Mock(side_effect=[HttpStatusError("q", 503, transient=True), Page()])
    runner.run(op, FetchRequest("q"))
    sleep.assert_not_called()


def test_single_attempt_policy_never_retries():
    op = Mock(side_effect=HttpStatusError("q", 502, transient=True))
    with pytest.raises(RetriesExhaustedError) as excinfo:
        _runner(max_attempts=1).run(op, FetchRequest("q"))
    assert op.call_count == 1
    assert excinfo.value.attempts == 1


def test_exhaustion_chains_last_error(caplog):
    caplog.set_level(logging.WARNING)
    last = HttpStatusError("q", 500, transient=True)
    op = Mock(side_effect=[HttpStatusError("q", 503, transient=True), last])

    with pytest.raises(RetriesExhaustedError) as excinfo:
        _runner(max_attempts=2).run(op, FetchRequest("q"))

    assert excinfo.value.last_error is last
    assert excinfo.value.__cause__ is last
    assert excinfo.value.address == "q"
    assert "attempt 1/2" in caplog.text
    assert "failed after 2 attempts" in caplog.text


def test_non_transient_status_is_not_retried():
    op = Mock(side_effect=HttpStatusError("q", 404, transient=False))
    with pytest.raises(HttpStatusError):
        _runner().run(op, FetchRequest("q"))
    assert op.call_count == 1


def test_malformed_page_is_not_retried():
    op = Mock(side_effect=MalformedPageError("q", "missing 'more'"))
    with pytest.raises(MalformedPageError):
        _runner().run(op, FetchRequest("q"))
    assert op.call_count == 1


def test_on_attempt_is_called_before_every_attempt():
    seen = []
    op = Mock(side_effect=[HttpFetchError("q", requests.exceptions.ConnectionError()), Page()])
    _runner().run(op, FetchRequest("q"), on_attempt=lambda r: seen.append(r.attempt))
    assert seen == [1, 2]


def test_runner_uses_current_cursor_address():
    request = FetchRequest("q")
    request.advance("cursor-2")
    op = Mock(return_value=Page())
    _runner().run(op, request)
    op.assert_called_once_with("cursor-2")


@pytest.mark.parametrize(
    "error, expected",
    [
        (HttpFetchError("u", requests.exceptions.Timeout()), True),
        (UndecodablePageError("u", ValueError()), True),
        (HttpStatusError("u", 429, transient=True), True),
        (HttpStatusError("u", 400, transient=False), False),
        (MalformedPageError("u", "bad"), False),
        (requests.exceptions.ConnectionError(), True),
        (requests.exceptions.Timeout(), True),
        (ConnectionError("reset"), True),
        (TimeoutError("slow"), True),
        (OSError("network unreachable"), True),
        (ValueError("bug"), False),
        (KeyError("bug"), False),
    ],
)
def test_is_retryable(error, expected):
    assert is_retryable(error) is expected


@pytest.mark.parametrize("error", [TimeoutError("read timed out"), ConnectionError("reset")])
def test_builtin_network_errors_from_function_source_are_retried(error):
    calls = []

    def fetch(address):
        calls.append(address)
        if len(calls) == 1:
            raise error
        return Page(results=[1])

    page = _runner(max_attempts=3).run(fetch, FetchRequest("q"))

    assert page.results == (1,)
    assert calls == ["q", "q"]
