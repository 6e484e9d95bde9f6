"""Run configuration: navigation, reveal, browser and diagnostics knobs.

All paths and values are runtime-injected, either as constructor arguments
or through ``FEED_SCRAPER_*`` environment variables via
:meth:`ScrapeConfig.from_env`.
"""
import os
from dataclasses import dataclass, field

WAIT_UNTIL_VALUES = ("load", "domcontentloaded", "networkidle", "commit")
REVEAL_MODES = ("fixed", "until_stable")
CONTENT_KINDS = ("posts", "profiles")
BUNDLE_VERBOSITIES = ("off", "minimal", "standard", "full")


@dataclass(frozen=True)
class NavigationPolicy:
    """Fixed-backoff retry policy for opening the target page.

    - max_attempts counts the initial attempt (3 => 1 try + 2 retries).
    - backoff_seconds is constant between failed attempts, never exponential.
    - wait_until is the readiness condition handed to ``page.goto``.
    """

    max_attempts: int = 3
    timeout_ms: int = 60000
    backoff_seconds: float = 5.0
    wait_until: str = "domcontentloaded"

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be > 0")
        if self.backoff_seconds < 0:
            raise ValueError("backoff_seconds must be >= 0")
        if self.wait_until not in WAIT_UNTIL_VALUES:
            raise ValueError(f"wait_until must be one of {WAIT_UNTIL_VALUES}")


@dataclass(frozen=True)
class RevealPolicy:
    """Scroll-and-settle policy for lazily-loaded list content.

    In ``fixed`` mode every value is used as-is: one initial wait, then
    exactly ``scroll_steps`` wheel events each followed by the full delay.
    In ``until_stable`` mode the same values are upper bounds and the
    matches of ``item_selector`` are polled to settle early.
    """

    initial_wait_seconds: float = 8.0
    scroll_steps: int = 5
    scroll_delta: int = 1500
    step_delay_seconds: float = 3.0
    mode: str = "fixed"
    item_selector: str | None = None
    poll_interval_seconds: float = 0.5

    def __post_init__(self) -> None:
        if self.initial_wait_seconds < 0:
            raise ValueError("initial_wait_seconds must be >= 0")
        if self.scroll_steps < 0:
            raise ValueError("scroll_steps must be >= 0")
        if self.step_delay_seconds < 0:
            raise ValueError("step_delay_seconds must be >= 0")
        if self.mode not in REVEAL_MODES:
            raise ValueError(f"mode must be one of {REVEAL_MODES}")
        if self.mode == "until_stable" and not self.item_selector:
            raise ValueError("until_stable mode requires item_selector")
        if self.poll_interval_seconds <= 0:
            raise ValueError("poll_interval_seconds must be > 0")


@dataclass(frozen=True)
class BrowserOptions:
    headless: bool = True
    viewport_width: int = 1280
    viewport_height: int = 800
    user_agent: str = ""
    locale: str = ""


@dataclass(frozen=True)
class ScrapeConfig:
    kind: str = "posts"
    navigation: NavigationPolicy = field(default_factory=NavigationPolicy)
    reveal: RevealPolicy = field(default_factory=RevealPolicy)
    browser: BrowserOptions = field(default_factory=BrowserOptions)
    failure_bundle_verbosity: str = "off"
    failure_dir: str = "data/logs/failures"
    event_log_dir: str = ""

    def __post_init__(self) -> None:
        if self.kind not in CONTENT_KINDS:
            raise ValueError(f"kind must be one of {CONTENT_KINDS}")
        if self.failure_bundle_verbosity not in BUNDLE_VERBOSITIES:
            raise ValueError(f"failure_bundle_verbosity must be one of {BUNDLE_VERBOSITIES}")

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "ScrapeConfig":
        """Build a config from ``FEED_SCRAPER_*`` variables.

        Unset variables keep the dataclass defaults. Keyword overrides win
        over the environment.
        """
        env = os.environ if environ is None else environ

        def _get(name: str, default):
            raw = env.get(f"FEED_SCRAPER_{name}")
            if raw is None or raw == "":
                return default
            if isinstance(default, bool):
                return raw.strip().lower() in ("1", "true", "yes", "on")
            if isinstance(default, int):
                return int(raw)
            if isinstance(default, float):
                return float(raw)
            return raw

        nav_default = NavigationPolicy()
        reveal_default = RevealPolicy()
        browser_default = BrowserOptions()
        navigation = NavigationPolicy(
            max_attempts=_get("NAV_ATTEMPTS", nav_default.max_attempts),
            timeout_ms=_get("NAV_TIMEOUT_MS", nav_default.timeout_ms),
            backoff_seconds=_get("NAV_BACKOFF_SECONDS", nav_default.backoff_seconds),
            wait_until=_get("WAIT_UNTIL", nav_default.wait_until),
        )
        reveal = RevealPolicy(
            initial_wait_seconds=_get("REVEAL_INITIAL_WAIT", reveal_default.initial_wait_seconds),
            scroll_steps=_get("REVEAL_STEPS", reveal_default.scroll_steps),
            scroll_delta=_get("REVEAL_DELTA", reveal_default.scroll_delta),
            step_delay_seconds=_get("REVEAL_STEP_DELAY", reveal_default.step_delay_seconds),
            mode=_get("REVEAL_MODE", reveal_default.mode),
            item_selector=_get("REVEAL_ITEM_SELECTOR", reveal_default.item_selector),
        )
        browser = BrowserOptions(
            headless=_get("HEADLESS", browser_default.headless),
            viewport_width=_get("VIEWPORT_WIDTH", browser_default.viewport_width),
            viewport_height=_get("VIEWPORT_HEIGHT", browser_default.viewport_height),
            user_agent=_get("USER_AGENT", browser_default.user_agent),
            locale=_get("LOCALE", browser_default.locale),
        )
        values = {
            "kind": _get("KIND", "posts"),
            "navigation": navigation,
            "reveal": reveal,
            "browser": browser,
            "failure_bundle_verbosity": _get("FAILURE_BUNDLE", "off"),
            "failure_dir": _get("FAILURE_DIR", "data/logs/failures"),
            "event_log_dir": _get("EVENT_LOG_DIR", ""),
        }
        values.update(overrides)
        return cls(**values)
