"""Browser lifecycle for a single scrape run.

Each run launches its own Chromium and context; nothing is shared between
runs. Teardown runs on every exit path and never masks the run's own error.
"""
import logging
from contextlib import contextmanager
from typing import Any

from ..config import BrowserOptions
from .ua import resolve_user_agent

log = logging.getLogger(__name__)


@contextmanager
def open_browser(playwright: Any, options: BrowserOptions | None = None):
    """Launch Chromium and open one context and page.

    Yields (page, context). The context and browser are closed on exit.
    """
    options = options or BrowserOptions()
    browser = playwright.chromium.launch(headless=options.headless)
    context = None
    try:
        context_kwargs: dict[str, Any] = {
            "viewport": {"width": options.viewport_width, "height": options.viewport_height},
        }
        user_agent = resolve_user_agent(browser, options.user_agent)
        if user_agent:
            context_kwargs["user_agent"] = user_agent
        if options.locale:
            context_kwargs["locale"] = options.locale
        context = browser.new_context(**context_kwargs)
        page = context.new_page()
        log.info("Launched Chromium (headless=%s)", options.headless)
        yield page, context
    finally:
        if context is not None:
            try:
                context.close()
            except Exception as e:
                log.warning(f"Failed to close browser context cleanly: {e}")
        try:
            browser.close()
        except Exception as e:
            log.warning(f"Failed to close browser cleanly: {e}")
