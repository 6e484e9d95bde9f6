"""Normalized error signals for scrape runs.

Every failure a run can surface maps onto one ScraperError subclass so the
adapters (CLI, worker pool) only ever handle a single error type.
"""
from enum import Enum


class ScraperSignal(Enum):
    """Normalized error signals carried by every ScraperError."""
    INPUT = "input"               # malformed request, never retried
    TRANSIENT = "transient"       # navigation kept failing, retried already
    FATAL = "fatal"               # unrecoverable, bail out
    CANCELLED = "cancelled"       # caller aborted the run or deadline passed


class ScraperError(Exception):
    """Exception carrying a normalized ScraperSignal for run error handling."""

    def __init__(self, signal: ScraperSignal, message: str = ""):
        self.signal = signal
        super().__init__(message or signal.value)


class InputShapeError(ScraperError):
    """Required field missing, or cookies not a sequence of cookie objects."""

    def __init__(self, message: str):
        super().__init__(ScraperSignal.INPUT, message)


class NavigationExhaustedError(ScraperError):
    """Every navigation attempt failed. Carries the last underlying failure."""

    def __init__(self, url: str, attempts: int, last_error: BaseException | None = None):
        self.url = url
        self.attempts = attempts
        self.last_error = last_error
        detail = f": {last_error}" if last_error is not None else ""
        super().__init__(
            ScraperSignal.TRANSIENT,
            f"Failed to open {url} after {attempts} attempts{detail}",
        )


class ExtractionError(ScraperError):
    """Unexpected failure while querying or transforming the rendered DOM."""

    def __init__(self, message: str):
        super().__init__(ScraperSignal.FATAL, message)


class RunCancelledError(ScraperError):
    def __init__(self, message: str = "run cancelled"):
        super().__init__(ScraperSignal.CANCELLED, message)
