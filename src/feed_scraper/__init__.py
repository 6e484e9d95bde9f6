"""feed-scraper — authenticated social-feed scraping with a restored browser session.

Restores a session from stored cookies, opens the target page with a
fixed-backoff retry, reveals lazily-loaded content by scrolling, and
extracts posts or people-search results from the rendered DOM.
"""
from .config import BrowserOptions, NavigationPolicy, RevealPolicy, ScrapeConfig  # noqa: F401
from .engine.errors import (  # noqa: F401
    ExtractionError,
    InputShapeError,
    NavigationExhaustedError,
    RunCancelledError,
    ScraperError,
    ScraperSignal,
)
from .engine.orchestrator import RunState, ScrapeSession, scrape  # noqa: F401
from .engine.pool import ScrapePool  # noqa: F401
from .models import ScrapedPost, ScrapedProfile, ScrapeRequest, ScrapeResult  # noqa: F401
