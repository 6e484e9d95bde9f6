"""Diagnostic snapshot capture when a run fails.

Captures the failing stage, page state and timing data so a layout change
or a dead session can be diagnosed after the browser is gone. Designed for
zero overhead when disabled (verbosity="off").
"""
import json
import logging
import os
import time
from dataclasses import dataclass, field, asdict
from urllib.parse import urlparse

log = logging.getLogger(__name__)


class BundleVerbosity:
    OFF = "off"             # No capture at all
    MINIMAL = "minimal"     # stage, reason + timing only
    STANDARD = "standard"   # + page URL/title/text snippet
    FULL = "full"           # + screenshot


@dataclass
class FailureBundle:
    target_url: str
    stage: str
    reason: str
    error_type: str = ""
    page_url: str = ""
    page_title: str = ""
    page_text_snippet: str = ""
    stage_timings: dict[str, float] = field(default_factory=dict)
    total_elapsed: float = 0.0
    screenshot_path: str = ""
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> dict:
        return asdict(self)


def _stamp() -> str:
    return time.strftime("%Y%m%d_%H%M%S") + f"_{int(time.time() * 1000) % 1000:03d}"


def capture_failure_bundle(
    page,
    target_url: str,
    stage: str,
    error: BaseException,
    stage_timings: dict | None = None,
    total_elapsed: float = 0.0,
    verbosity: str = BundleVerbosity.STANDARD,
    screenshot_dir: str = "",
) -> FailureBundle:
    """Best-effort capture of failure diagnostics. Never raises."""
    bundle = FailureBundle(
        target_url=target_url,
        stage=stage,
        reason=str(error),
        error_type=type(error).__name__,
        stage_timings=dict(stage_timings or {}),
        total_elapsed=total_elapsed,
    )
    if page is None:
        return bundle

    if verbosity in (BundleVerbosity.STANDARD, BundleVerbosity.FULL):
        try:
            bundle.page_url = page.url or ""
        except Exception:
            pass
        try:
            bundle.page_title = page.title() or ""
        except Exception:
            pass
        try:
            snippet = page.evaluate("() => document.body?.innerText?.slice(0, 2000) || ''")
            bundle.page_text_snippet = snippet or ""
        except Exception:
            pass

    if verbosity == BundleVerbosity.FULL and screenshot_dir:
        try:
            os.makedirs(screenshot_dir, exist_ok=True)
            path = os.path.join(screenshot_dir, f"fail_{_stamp()}_{stage}.png")
            page.screenshot(path=path, full_page=False)
            bundle.screenshot_path = path
        except Exception:
            pass

    return bundle


def save_failure_bundle(bundle: FailureBundle, base_dir: str = "data/logs/failures") -> str:
    """Save bundle to JSON. Returns file path, or '' on failure."""
    try:
        host = urlparse(bundle.target_url).netloc or "unknown"
        out_dir = os.path.join(base_dir, host.replace(":", "_"))
        os.makedirs(out_dir, exist_ok=True)
        path = os.path.join(out_dir, f"{_stamp()}_{bundle.stage}.json")

        with open(path, "w", encoding="utf-8") as f:
            json.dump(bundle.to_dict(), f, ensure_ascii=False, indent=2, default=str)
        return path
    except Exception as e:
        log.debug(f"Failed to save failure bundle: {e}")
        return ""
