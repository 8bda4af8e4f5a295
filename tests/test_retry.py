from __future__ import annotations

import functools

import pytest

from applymate import retry as retry_mod
from applymate.retry import retry


class Flaky:
    def __init__(self, failures, exc=ConnectionError):
        self.failures = failures
        self.exc = exc
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.calls <= self.failures:
            raise self.exc(f"attempt {self.calls}")
        return "done"


def test_recovers_after_transient_errors():
    flaky = Flaky(2)
    assert retry(max_attempts=3, retryable=(ConnectionError,))(flaky)() == "done"
    assert flaky.calls == 3


def test_reraises_last_error_when_exhausted():
    flaky = Flaky(5)
    with pytest.raises(ConnectionError, match="attempt 3"):
        retry(max_attempts=3, retryable=(ConnectionError,))(flaky)()
    assert flaky.calls == 3


def test_other_errors_are_not_retried():
    flaky = Flaky(1, exc=KeyError)
    with pytest.raises(KeyError):
        retry(max_attempts=3, retryable=(ConnectionError,))(flaky)()
    assert flaky.calls == 1


def test_giveup_stops_immediately():
    flaky = Flaky(3, exc=PermissionError)
    wrapped = retry(max_attempts=3, giveup=lambda e: isinstance(e, PermissionError))(flaky)
    with pytest.raises(PermissionError):
        wrapped()
    assert flaky.calls == 1


def test_backoff_is_exponential_and_capped(monkeypatch):
    delays = []
    monkeypatch.setattr(retry_mod, "_sleep", delays.append)
    with pytest.raises(ConnectionError):
        retry(max_attempts=4, base_delay=1.0, max_delay=3.0, jitter=False)(Flaky(9))()
    assert delays == [1.0, 2.0, 3.0]


def test_wraps_keeps_name():
    @retry(max_attempts=2)
    def fetch_board():
        return 1

    assert fetch_board.__name__ == "fetch_board"


def test_jittered_delay_stays_within_half_to_one_and_a_half():
    for attempt in (1, 2, 3):
        d = retry_mod.backoff_delay(attempt, 2.0, 30.0, 2.0, jitter=True)
        nominal = 2.0 * 2 ** (attempt - 1)
        assert 0.5 * nominal <= d <= 1.5 * nominal


def test_wraps_callables_without_a_qualname():
    def fetch(board, flaky):
        return f"{board}:{flaky()}"

    wrapped = retry(max_attempts=2, retryable=(ConnectionError,))(functools.partial(fetch, "naukri", Flaky(1)))
    assert wrapped() == "naukri:done"
