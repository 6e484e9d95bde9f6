"""Session restoration from a stored cookie set.

Browser cookie APIs reject any ``sameSite`` outside Strict/Lax/None, so an
invalid value is rewritten to ``Lax`` in place rather than failing the run.
No other cookie field is validated here; a bad domain or path surfaces as a
browser-level failure when the cookies are added.
"""
import json
import logging
import os

from ..engine.errors import InputShapeError

log = logging.getLogger(__name__)

SAME_SITE_VALUES = ("Strict", "Lax", "None")
DEFAULT_SAME_SITE = "Lax"


def parse_cookies(raw):
    """Decode JSON-encoded cookie text; already-parsed data passes through."""
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InputShapeError(f'"cookies" is not valid UTF-8: {e}') from e
    if isinstance(raw, str):
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise InputShapeError(f'"cookies" is not valid JSON: {e}') from e
    return raw


def normalize_cookies(cookies):
    """Force every cookie's ``sameSite`` into Strict/Lax/None.

    Mutates the cookie dicts in place and returns the same sequence.
    Raises InputShapeError if *cookies* is not a list/tuple of objects.
    """
    if not isinstance(cookies, (list, tuple)):
        raise InputShapeError('"cookies" must be an array')
    rewritten = 0
    for i, cookie in enumerate(cookies):
        if not isinstance(cookie, dict):
            raise InputShapeError(f'"cookies"[{i}] must be an object')
        if cookie.get("sameSite") not in SAME_SITE_VALUES:
            cookie["sameSite"] = DEFAULT_SAME_SITE
            rewritten += 1
    if rewritten:
        log.debug("Normalized sameSite to %s on %d cookie(s)", DEFAULT_SAME_SITE, rewritten)
    return cookies


def load_cookie_file(path: str):
    """Read cookies from a JSON file.

    Accepts a bare cookie array or a Playwright storage-state object with a
    ``cookies`` key. The result is not normalized.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InputShapeError(f"cookie file {path} is not valid JSON: {e}") from e
    if isinstance(data, dict) and "cookies" in data:
        return data["cookies"]
    return data


def restore_session(context, cookies) -> int:
    """Normalize *cookies* and add them to a browser context.

    Returns the number of cookies added.
    """
    cookies = normalize_cookies(cookies)
    if cookies:
        context.add_cookies(list(cookies))
    log.info("Restored session with %d cookie(s)", len(cookies))
    return len(cookies)


def migrate_cookies(context, state_path: str) -> int:
    """Import cookies from a storage-state JSON file into a browser context.

    Returns the number of cookies migrated.  Never raises — returns 0 on
    missing file, corrupt JSON, or any other error.
    """
    if not os.path.isfile(state_path):
        return 0
    try:
        cookies = load_cookie_file(state_path)
        return restore_session(context, cookies)
    except Exception as e:
        log.debug(f"Cookie migration from {state_path} failed: {e}")
        return 0
