"""Open the target page, retrying with a fixed backoff on failure.

Only navigation gets in-process retry. Each attempt is bounded by the
policy's timeout; the backoff between attempts is constant and is skipped
after the final attempt.
"""
import logging

from ..config import WAIT_UNTIL_VALUES, NavigationPolicy
from .cancel import CancelToken, settle
from .errors import NavigationExhaustedError, RunCancelledError

log = logging.getLogger(__name__)


def open_with_retry(page, url: str, policy: NavigationPolicy | None = None, *,
                    wait_until: str | None = None,
                    cancel: CancelToken | None = None,
                    sleep=None,
                    event_logger=None) -> int:
    """Navigate *page* to *url*, retrying up to ``policy.max_attempts`` times.

    Args:
        page: Playwright page object.
        url: Target URL.
        policy: Retry policy (attempts, per-attempt timeout, backoff).
        wait_until: Readiness condition for this call site; overrides
            ``policy.wait_until`` when given.
        cancel: Optional CancelToken checked before each attempt and during
            the backoff wait.
        sleep: Optional wait function (tests inject a recorder).
        event_logger: Optional RunEventLogger for telemetry.

    Returns:
        The 1-based number of the attempt that succeeded.

    Raises:
        NavigationExhaustedError: every attempt failed.
        RunCancelledError: the run was cancelled between attempts.
    """
    policy = policy or NavigationPolicy()
    condition = wait_until or policy.wait_until
    if condition not in WAIT_UNTIL_VALUES:
        raise ValueError(f"wait_until must be one of {WAIT_UNTIL_VALUES}")

    last_error: Exception | None = None
    for attempt in range(1, policy.max_attempts + 1):
        if cancel is not None:
            cancel.check()
        log.info(f"Opening page (attempt {attempt}/{policy.max_attempts}): {url}")
        try:
            page.goto(url, wait_until=condition, timeout=policy.timeout_ms)
        except RunCancelledError:
            raise
        except Exception as e:
            last_error = e
            log.warning(f"Navigation failed on attempt {attempt}: {e}")
            if event_logger is not None:
                event_logger.log_navigation_attempt(attempt, ok=False, error=str(e))
            if attempt < policy.max_attempts:
                settle(policy.backoff_seconds, cancel=cancel, sleep=sleep)
            continue
        if event_logger is not None:
            event_logger.log_navigation_attempt(attempt, ok=True)
        return attempt

    raise NavigationExhaustedError(url, policy.max_attempts, last_error) from last_error
