"""Bounded concurrency for scrape runs.

Each run launches its own browser, so the number of live browsers is the
only shared resource. The pool caps it: at most ``max_workers`` runs hold a
browser at once, each with its own Playwright driver in its worker thread.
"""
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from ..config import ScrapeConfig
from ..models import ScrapeResult
from .cancel import CancelToken
from .errors import ScraperError
from .orchestrator import scrape

log = logging.getLogger(__name__)


@dataclass
class RunOutcome:
    """Result of one pooled run: exactly one of result/error is set."""
    request: Any
    result: ScrapeResult | None = None
    error: ScraperError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ScrapePool:
    """Run scrapes with at most *max_workers* browsers alive at once.

    Supports context-manager protocol; exiting cancels nothing but waits for
    submitted runs. Use :meth:`cancel_all` to abort live runs.
    *run_deadline_seconds* bounds each run, counted from submission.
    """

    def __init__(self, max_workers: int = 2, config: ScrapeConfig | None = None,
                 run_deadline_seconds: float | None = None,
                 runner: Callable[..., ScrapeResult] = scrape):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self._config = config
        self._deadline = run_deadline_seconds
        self._runner = runner
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix="scrape")
        self._tokens: set[CancelToken] = set()
        self._lock = threading.Lock()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.shutdown()

    def _run_one(self, request, token: CancelToken) -> ScrapeResult:
        try:
            return self._runner(request, self._config, cancel=token)
        finally:
            with self._lock:
                self._tokens.discard(token)

    def submit(self, request) -> Future:
        """Queue one run. The future resolves to a ScrapeResult or raises."""
        token = CancelToken(deadline_seconds=self._deadline)
        with self._lock:
            self._tokens.add(token)
        return self._executor.submit(self._run_one, request, token)

    def map(self, requests: Iterable) -> list[RunOutcome]:
        """Run every request; return outcomes in input order.

        A failed run never aborts the others.
        """
        pending = [(req, self.submit(req)) for req in requests]
        outcomes = []
        for req, fut in pending:
            try:
                outcomes.append(RunOutcome(req, result=fut.result()))
            except ScraperError as e:
                log.warning(f"Pooled run failed: {e}")
                outcomes.append(RunOutcome(req, error=e))
        return outcomes

    def cancel_all(self, reason: str = "pool cancelled") -> int:
        """Cancel every queued or live run. Returns the number of runs signalled."""
        with self._lock:
            tokens = list(self._tokens)
        for token in tokens:
            token.cancel(reason)
        return len(tokens)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)
