"""Tests for ScrapePool admission control."""
import threading
import time

import pytest

from feed_scraper.engine.errors import InputShapeError, RunCancelledError
from feed_scraper.engine.pool import ScrapePool
from feed_scraper.models import ScrapeRequest, ScrapeResult


def test_concurrency_never_exceeds_max_workers():
    live = 0
    peak = 0
    lock = threading.Lock()

    def runner(request, config, cancel=None):
        nonlocal live, peak
        with lock:
            live += 1
            peak = max(peak, live)
        time.sleep(0.05)
        with lock:
            live -= 1
        return ScrapeResult(request, "posts", [])

    with ScrapePool(max_workers=2, runner=runner) as pool:
        outcomes = pool.map([f"https://example/{i}" for i in range(6)])
    assert peak <= 2
    assert all(o.ok for o in outcomes)


def test_map_preserves_order_and_isolates_failures():
    def runner(request, config, cancel=None):
        if request == "bad":
            raise InputShapeError("cookies must be an array")
        return ScrapeResult(request, "posts", [])

    with ScrapePool(max_workers=3, runner=runner) as pool:
        outcomes = pool.map(["a", "bad", "c"])
    assert [o.request for o in outcomes] == ["a", "bad", "c"]
    assert outcomes[0].ok and outcomes[2].ok
    assert not outcomes[1].ok
    assert isinstance(outcomes[1].error, InputShapeError)
    assert outcomes[1].result is None


def test_each_run_gets_its_own_cancel_token():
    tokens = []

    def runner(request, config, cancel=None):
        tokens.append(cancel)
        return ScrapeResult(request, "posts", [])

    with ScrapePool(max_workers=2, runner=runner) as pool:
        pool.map(["a", "b"])
    assert len(tokens) == 2
    assert tokens[0] is not tokens[1]


def test_cancel_all_aborts_live_runs():
    started = threading.Event()

    def runner(request, config, cancel=None):
        started.set()
        cancel.sleep(5)
        return ScrapeResult(request, "posts", [])

    pool = ScrapePool(max_workers=1, runner=runner)
    fut = pool.submit("https://example/slow")
    assert started.wait(2)
    assert pool.cancel_all() == 1
    with pytest.raises(RunCancelledError):
        fut.result(timeout=2)
    pool.shutdown()


def test_invalid_max_workers():
    with pytest.raises(ValueError):
        ScrapePool(max_workers=0)


def test_map_bad_payloads_do_not_abort_batch():
    def runner(request, config, cancel=None):
        req = ScrapeRequest.from_payload(request)
        return ScrapeResult(req.target_url, "posts", [])

    good = {"targetUrl": "https://example/feed", "cookies": "[]"}
    with ScrapePool(max_workers=2, runner=runner) as pool:
        outcomes = pool.map([
            {"targetUrl": "https://example/feed", "cookies": b"\xff"},
            good,
            {"targetUrl": "", "cookies": "[]"},
        ])
    assert [o.ok for o in outcomes] == [False, True, False]
    assert isinstance(outcomes[0].error, InputShapeError)
    assert isinstance(outcomes[2].error, InputShapeError)
    assert outcomes[1].result.target_url == "https://example/feed"
