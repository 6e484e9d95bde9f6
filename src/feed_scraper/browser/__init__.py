"""browser — Playwright session restoration and browser lifecycle."""
from .cookies import (  # noqa: F401
    load_cookie_file,
    migrate_cookies,
    normalize_cookies,
    parse_cookies,
    restore_session,
)
from .session import open_browser  # noqa: F401
from .ua import build_user_agent, resolve_user_agent  # noqa: F401
