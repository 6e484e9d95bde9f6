"""Tests for scroll-based content reveal."""
from unittest.mock import MagicMock

import pytest

from feed_scraper.config import RevealPolicy
from feed_scraper.engine.cancel import CancelToken
from feed_scraper.engine.errors import RunCancelledError
from feed_scraper.human.reveal import reveal_content


def test_fixed_mode_waits_then_scrolls_exactly_five_times():
    page = MagicMock()
    sleeps = []
    steps = reveal_content(page, sleep=sleeps.append)
    assert steps == 5
    assert page.mouse.wheel.call_count == 5
    for call in page.mouse.wheel.call_args_list:
        assert call.args == (0, 1500)
    assert sleeps == [8.0, 3.0, 3.0, 3.0, 3.0, 3.0]


def test_fixed_mode_never_inspects_dom_or_exits_early():
    """Even a page that already shows everything gets all five scrolls."""
    page = MagicMock()
    page.query_selector_all.return_value = [object()] * 3
    reveal_content(page, sleep=lambda s: None)
    assert page.mouse.wheel.call_count == 5
    page.query_selector_all.assert_not_called()


def test_wheel_and_settle_alternate():
    page = MagicMock()
    order = []
    page.mouse.wheel.side_effect = lambda x, y: order.append("wheel")
    reveal_content(page, sleep=lambda s: order.append(s))
    assert order == [8.0] + ["wheel", 3.0] * 5


def test_until_stable_settles_early_and_stops_when_list_stops_growing():
    page = MagicMock()
    # initial count, then growth after scroll 1 and 2, then nothing new
    counts = iter([10, 20, 30, 30, 30, 30, 30, 30, 30])
    page.query_selector_all.side_effect = lambda sel: [object()] * next(counts)
    sleeps = []
    policy = RevealPolicy(mode="until_stable", item_selector="ul > li",
                          poll_interval_seconds=1.0)
    steps = reveal_content(page, policy, sleep=sleeps.append)
    assert steps == 3
    assert page.mouse.wheel.call_count == 3
    # step 1 and 2 settle on the first poll, step 3 polls the full delay
    assert sleeps == [8.0, 1.0, 1.0, 1.0, 1.0, 1.0]


def test_until_stable_never_exceeds_fixed_upper_bound():
    page = MagicMock()
    grow = iter(range(0, 1000, 5))
    page.query_selector_all.side_effect = lambda sel: [object()] * next(grow)
    policy = RevealPolicy(mode="until_stable", item_selector="li")
    assert reveal_content(page, policy, sleep=lambda s: None) == 5


def test_until_stable_requires_selector():
    with pytest.raises(ValueError):
        RevealPolicy(mode="until_stable")


def test_cancel_interrupts_reveal():
    page = MagicMock()
    token = CancelToken()
    calls = []

    def _sleep(seconds):
        calls.append(seconds)
        if len(calls) == 2:
            token.cancel()

    with pytest.raises(RunCancelledError):
        reveal_content(page, cancel=token, sleep=_sleep)
    assert page.mouse.wheel.call_count == 1


def test_event_logger_gets_each_step():
    page = MagicMock()
    events = MagicMock()
    reveal_content(page, sleep=lambda s: None, event_logger=events)
    assert events.log_reveal_step.call_count == 5
