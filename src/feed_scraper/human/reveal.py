"""Reveal lazily-loaded list content by simulated scrolling.

The default strategy is blind and time-based: one idle wait for the first
render, then a fixed number of wheel events each followed by a settle
delay. It never inspects the DOM and never exits early.

The ``until_stable`` strategy keeps the same numbers as upper bounds but
polls the list's item count, so a step settles as soon as new items appear
and scrolling stops once a step brings nothing new.
"""
import logging
import time

from ..config import RevealPolicy
from ..engine.cancel import CancelToken, settle

log = logging.getLogger(__name__)


def _count_items(page, selector: str) -> int:
    return len(page.query_selector_all(selector))


def _wait_for_growth(page, policy: RevealPolicy, baseline: int,
                     cancel: CancelToken | None, sleep) -> int:
    """Poll the item count for at most one step delay; return the last count."""
    waited = 0.0
    count = baseline
    while waited < policy.step_delay_seconds:
        interval = min(policy.poll_interval_seconds, policy.step_delay_seconds - waited)
        settle(interval, cancel=cancel, sleep=sleep)
        waited += interval
        count = _count_items(page, policy.item_selector)
        if count > baseline:
            break
    return count


def reveal_content(page, policy: RevealPolicy | None = None, *,
                   cancel: CancelToken | None = None,
                   sleep=None,
                   event_logger=None) -> int:
    """Scroll *page* to materialize lazily-loaded items.

    Mutates the rendered DOM only; the caller re-queries afterwards.
    Returns the number of scroll steps performed.
    """
    policy = policy or RevealPolicy()
    t0 = time.monotonic()

    settle(policy.initial_wait_seconds, cancel=cancel, sleep=sleep)

    stable = policy.mode == "until_stable"
    count = _count_items(page, policy.item_selector) if stable else 0
    steps = 0
    for i in range(policy.scroll_steps):
        page.mouse.wheel(0, policy.scroll_delta)
        steps += 1
        if stable:
            new_count = _wait_for_growth(page, policy, count, cancel, sleep)
            grew = new_count > count
            log.debug(f"    scroll {i + 1}/{policy.scroll_steps}: {count} -> {new_count} items")
            count = new_count
        else:
            settle(policy.step_delay_seconds, cancel=cancel, sleep=sleep)
            log.debug(f"    scroll {i + 1}/{policy.scroll_steps}")
        if event_logger is not None:
            event_logger.log_reveal_step(i + 1, policy.scroll_delta, item_count=count if stable else None)
        if stable and not grew:
            log.info(f"  List stopped growing after {steps} scroll(s)")
            break

    elapsed = time.monotonic() - t0
    log.info(f"  Revealed content with {steps} scroll(s) ({elapsed:.1f}s)")
    return steps
