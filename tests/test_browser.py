"""Tests for browser module — no actual browser needed."""
from unittest.mock import MagicMock

import pytest

from feed_scraper.browser.session import open_browser
from feed_scraper.browser.ua import build_user_agent, resolve_user_agent
from feed_scraper.config import BrowserOptions


def test_build_user_agent():
    ua = build_user_agent("131.0.6778.86")
    assert "Chrome/131.0.6778.86" in ua
    assert "HeadlessChrome" not in ua


def test_build_user_agent_custom_template():
    ua = build_user_agent("131.0.0.0", template="MyBrowser/{version}")
    assert ua == "MyBrowser/131.0.0.0"


def test_resolve_user_agent():
    browser = MagicMock()
    browser.version = "120.0.6099.28"
    assert resolve_user_agent(browser, "") is None
    assert "Chrome/120.0.6099.28" in resolve_user_agent(browser, "auto")
    assert resolve_user_agent(browser, "Custom/1.0") == "Custom/1.0"


def test_open_browser_yields_page_and_closes():
    pw = MagicMock()
    browser = pw.chromium.launch.return_value
    context = browser.new_context.return_value
    with open_browser(pw, BrowserOptions(headless=False, locale="en-US")) as (page, ctx):
        assert page is context.new_page.return_value
        assert ctx is context
    pw.chromium.launch.assert_called_once_with(headless=False)
    kwargs = browser.new_context.call_args.kwargs
    assert kwargs["locale"] == "en-US"
    assert "user_agent" not in kwargs
    context.close.assert_called_once()
    browser.close.assert_called_once()


def test_open_browser_closes_on_error():
    pw = MagicMock()
    browser = pw.chromium.launch.return_value
    context = browser.new_context.return_value
    with pytest.raises(RuntimeError):
        with open_browser(pw):
            raise RuntimeError("stage failed")
    context.close.assert_called_once()
    browser.close.assert_called_once()


def test_open_browser_closes_browser_when_context_fails():
    pw = MagicMock()
    browser = pw.chromium.launch.return_value
    browser.new_context.side_effect = RuntimeError("bad viewport")
    with pytest.raises(RuntimeError):
        with open_browser(pw):
            pass
    browser.close.assert_called_once()
