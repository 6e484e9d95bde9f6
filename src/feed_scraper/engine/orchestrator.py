"""ScrapeSession — single-run entry point for feed-scraper.

Sequences session restore, navigation, reveal and extraction in a strict
linear order. The session exclusively owns its browser, context and page
and releases them on every exit path. A run either returns the full record
list or raises exactly one ScraperError; there are no partial results.
"""
import logging
import time
import uuid
from enum import Enum
from typing import Any, Mapping

from playwright.sync_api import sync_playwright

from ..browser.cookies import normalize_cookies, restore_session
from ..browser.session import open_browser
from ..config import ScrapeConfig
from ..extraction import extract
from ..human.reveal import reveal_content
from ..models import ScrapeRequest, ScrapeResult
from ..telemetry import RunEventLogger
from .cancel import CancelToken
from .errors import InputShapeError, ScraperError, ScraperSignal
from .failure_bundle import BundleVerbosity, capture_failure_bundle, save_failure_bundle
from .navigation import open_with_retry

log = logging.getLogger(__name__)


class RunState(Enum):
    IDLE = "idle"
    SESSION_RESTORED = "session_restored"
    NAVIGATED = "navigated"
    REVEALED = "revealed"
    EXTRACTED = "extracted"
    CLOSED = "closed"
    FAILED = "failed"


class ScrapeSession:
    """One scrape run: Idle → SessionRestored → Navigated → Revealed →
    Extracted → Closed, or Failed from any stage.

    Args:
        request: ScrapeRequest with the target URL and cookie set.
        config: ScrapeConfig; defaults apply when omitted.
        playwright: Already-started Playwright driver. When omitted the
            session starts and stops its own.
        cancel: Optional CancelToken checked at every suspension point.
        sleep: Optional wait function (tests inject a recorder).
        event_logger: Optional RunEventLogger. When omitted and
            ``config.event_log_dir`` is set, the session opens its own.
        layouts: Optional kind -> layout overrides for extraction.
    """

    def __init__(self, request: ScrapeRequest, config: ScrapeConfig | None = None, *,
                 playwright: Any = None,
                 cancel: CancelToken | None = None,
                 sleep=None,
                 event_logger=None,
                 layouts: dict | None = None):
        self.request = request
        self.config = config or ScrapeConfig()
        self.state = RunState.IDLE
        self.run_id = uuid.uuid4().hex[:12]
        self.stage_timings: dict[str, float] = {}
        self.failure_bundle_path = ""
        self._playwright = playwright
        self._cancel = cancel
        self._sleep = sleep
        self._event_logger = event_logger
        self._layouts = layouts

    # ── Stages ──────────────────────────────────────────────────────────────

    def _validate(self) -> list[dict]:
        if not self.request.target_url or self.request.cookies is None:
            raise InputShapeError('Missing "targetUrl" or "cookies" in request')
        return normalize_cookies(self.request.cookies)

    def _advance(self, state: RunState, t0: float) -> None:
        self.stage_timings[state.value] = round(time.monotonic() - t0, 3)
        self.state = state
        log.debug(f"  [{self.run_id}] -> {state.value}")

    def _pipeline(self, page, context, cookies: list[dict]) -> list:
        cfg = self.config

        t0 = time.monotonic()
        restore_session(context, cookies)
        self._advance(RunState.SESSION_RESTORED, t0)

        t0 = time.monotonic()
        open_with_retry(
            page, self.request.target_url, cfg.navigation,
            cancel=self._cancel, sleep=self._sleep,
            event_logger=self._event_logger,
        )
        self._advance(RunState.NAVIGATED, t0)

        t0 = time.monotonic()
        reveal_content(
            page, cfg.reveal,
            cancel=self._cancel, sleep=self._sleep,
            event_logger=self._event_logger,
        )
        self._advance(RunState.REVEALED, t0)

        t0 = time.monotonic()
        if self._cancel is not None:
            self._cancel.check()
        records = extract(page, cfg.kind, self._layouts)
        if self._event_logger is not None:
            self._event_logger.log_extraction(len(records))
        self._advance(RunState.EXTRACTED, t0)
        return records

    def _run_with(self, playwright, cookies: list[dict], t_start: float) -> list:
        with open_browser(playwright, self.config.browser) as (page, context):
            try:
                return self._pipeline(page, context, cookies)
            except Exception as e:
                self._capture_failure(page, e, t_start)
                raise

    def _capture_failure(self, page, error: BaseException, t_start: float) -> None:
        verbosity = self.config.failure_bundle_verbosity
        if verbosity == BundleVerbosity.OFF:
            return
        bundle = capture_failure_bundle(
            page, self.request.target_url, self._failing_stage(), error,
            stage_timings=self.stage_timings,
            total_elapsed=time.monotonic() - t_start,
            verbosity=verbosity,
            screenshot_dir=self.config.failure_dir,
        )
        self.failure_bundle_path = save_failure_bundle(bundle, base_dir=self.config.failure_dir)
        if self.failure_bundle_path:
            log.info(f"  Failure bundle saved: {self.failure_bundle_path}")

    def _failing_stage(self) -> str:
        order = [RunState.IDLE, RunState.SESSION_RESTORED, RunState.NAVIGATED,
                 RunState.REVEALED, RunState.EXTRACTED]
        idx = order.index(self.state) if self.state in order else 0
        return order[min(idx + 1, len(order) - 1)].value

    # ── Entry point ─────────────────────────────────────────────────────────

    def run(self) -> ScrapeResult:
        """Execute the run. Returns ScrapeResult or raises ScraperError."""
        if self.state is not RunState.IDLE:
            raise RuntimeError(f"ScrapeSession already ran (state={self.state.value})")
        t_start = time.monotonic()
        own_logger = None
        if self._event_logger is None and self.config.event_log_dir:
            own_logger = RunEventLogger(
                self.run_id, self.request.target_url,
                log_dir=self.config.event_log_dir, kind=self.config.kind,
            )
            self._event_logger = own_logger

        records: list = []
        error: ScraperError | None = None
        ok = False
        try:
            cookies = self._validate()
            log.info(f"Scrape run {self.run_id}: {self.config.kind} from {self.request.target_url}")
            if self._event_logger is not None:
                self._event_logger.log_run_start(len(cookies), {
                    "kind": self.config.kind,
                    "wait_until": self.config.navigation.wait_until,
                    "reveal_mode": self.config.reveal.mode,
                })
            if self._cancel is not None:
                self._cancel.check()
            if self._playwright is not None:
                records = self._run_with(self._playwright, cookies, t_start)
            else:
                with sync_playwright() as playwright:
                    records = self._run_with(playwright, cookies, t_start)
            ok = True
        except ScraperError as e:
            error = e
            raise
        except Exception as e:
            error = ScraperError(ScraperSignal.FATAL, f"Scraper error: {e}")
            raise error from e
        finally:
            duration = time.monotonic() - t_start
            if ok:
                self.state = RunState.CLOSED
                log.info(f"Scrape run {self.run_id} finished: {len(records)} record(s) "
                         f"in {duration:.1f}s")
            else:
                self.state = RunState.FAILED
                log.error(f"Scrape run {self.run_id} failed: {error or 'interrupted'}")
            if self._event_logger is not None:
                self._event_logger.log_run_end(
                    self.state.value, len(records) if ok else 0, round(duration, 3),
                    error=None if ok else str(error or "interrupted"),
                )
            if own_logger is not None:
                own_logger.close()

        return ScrapeResult(self.request.target_url, self.config.kind, records)


def scrape(request: ScrapeRequest | Mapping[str, Any],
           config: ScrapeConfig | None = None, **kwargs) -> ScrapeResult:
    """Run one scrape. Accepts a ScrapeRequest or an intake payload mapping.

    Keyword arguments are forwarded to :class:`ScrapeSession`.
    """
    if not isinstance(request, ScrapeRequest):
        request = ScrapeRequest.from_payload(request)
    return ScrapeSession(request, config, **kwargs).run()
