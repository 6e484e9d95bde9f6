"""Tests for CancelToken and settle."""
import threading
import time

import pytest

from feed_scraper.engine.cancel import CancelToken, settle
from feed_scraper.engine.errors import RunCancelledError, ScraperSignal


def test_fresh_token_not_cancelled():
    token = CancelToken()
    assert not token.cancelled
    assert token.remaining() is None
    token.check()


def test_cancel_sets_reason():
    token = CancelToken()
    token.cancel("user abort")
    with pytest.raises(RunCancelledError) as exc:
        token.check()
    assert exc.value.signal == ScraperSignal.CANCELLED
    assert str(exc.value) == "user abort"


def test_deadline_expires():
    token = CancelToken(deadline_seconds=0)
    assert token.cancelled
    assert token.reason == "run deadline exceeded"


def test_sleep_is_cut_short_by_cancel():
    token = CancelToken()
    threading.Timer(0.05, token.cancel).start()
    t0 = time.monotonic()
    with pytest.raises(RunCancelledError):
        token.sleep(5)
    assert time.monotonic() - t0 < 2


def test_sleep_capped_by_deadline():
    token = CancelToken(deadline_seconds=0.05)
    t0 = time.monotonic()
    with pytest.raises(RunCancelledError):
        token.sleep(5)
    assert time.monotonic() - t0 < 2


def test_settle_uses_injected_sleep():
    seen = []
    settle(3.0, sleep=seen.append)
    assert seen == [3.0]


def test_settle_checks_token_before_waiting():
    token = CancelToken()
    token.cancel()
    seen = []
    with pytest.raises(RunCancelledError):
        settle(3.0, cancel=token, sleep=seen.append)
    assert seen == []
