"""User-Agent construction for the browser context."""

_DEFAULT_TEMPLATE = (
    "Mozilla/5.0 (X11; Linux x86_64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/{version} Safari/537.36"
)


def build_user_agent(chrome_version: str, template: str = "") -> str:
    """Build a User-Agent string for the given Chrome version.

    If *template* is empty, uses a desktop Linux Chrome UA template, which
    drops the ``HeadlessChrome`` token headless Chromium reports by default.
    """
    return (template or _DEFAULT_TEMPLATE).format(version=chrome_version)


def resolve_user_agent(browser, configured: str) -> str | None:
    """Return the UA for a new context, or None for the browser default.

    ``"auto"`` derives a UA from the launched browser's version.
    """
    if not configured:
        return None
    if configured == "auto":
        return build_user_agent(browser.version)
    return configured
