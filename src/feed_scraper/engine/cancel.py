"""Cancellation token threaded through every suspension point of a run."""
import threading
import time

from .errors import RunCancelledError


class CancelToken:
    """Cooperative cancel flag with an optional whole-run deadline.

    ``sleep`` waits on an Event, so :meth:`cancel` from another thread cuts
    a pending wait short instead of letting it run to completion.
    """

    def __init__(self, deadline_seconds: float | None = None):
        self._event = threading.Event()
        self._deadline = (
            time.monotonic() + deadline_seconds if deadline_seconds is not None else None
        )
        self.reason = ""

    def cancel(self, reason: str = "run cancelled") -> None:
        self.reason = reason
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel("run deadline exceeded")
            return True
        return False

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        """Raise RunCancelledError if the run should stop."""
        if self.cancelled:
            raise RunCancelledError(self.reason or "run cancelled")

    def sleep(self, seconds: float) -> None:
        """Wait *seconds*, raising RunCancelledError if cancelled meanwhile."""
        self.check()
        seconds = max(0.0, float(seconds))
        remaining = self.remaining()
        if remaining is not None:
            seconds = min(seconds, remaining)
        self._event.wait(seconds)
        self.check()


def settle(seconds: float, cancel: CancelToken | None = None, sleep=None) -> None:
    """Timed suspension shared by backoff, idle and scroll waits.

    *sleep* overrides the wait function (tests inject a recorder); the cancel
    token is still checked before and after.
    """
    if cancel is not None:
        cancel.check()
    if sleep is not None:
        sleep(seconds)
    elif cancel is not None:
        cancel.sleep(seconds)
    else:
        time.sleep(seconds)
    if cancel is not None:
        cancel.check()
