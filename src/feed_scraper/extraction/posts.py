"""Feed post extraction.

Posts are only useful with content, so items whose body is missing or
blank are dropped from the output rather than returned with a null field.
"""
import logging

from ..engine.errors import ExtractionError, ScraperError
from ..models import ScrapedPost
from .dom import first_match, read_text
from .rules import DEFAULT_POST_LAYOUT, PostLayout

log = logging.getLogger(__name__)


def extract_posts(page, layout: PostLayout = DEFAULT_POST_LAYOUT) -> list[ScrapedPost]:
    """Extract non-empty posts from the feed list, in page order."""
    try:
        items = page.query_selector_all(layout.item_selector)
        posts = []
        for item in items:
            content = read_text(first_match(item, layout.body_selectors))
            if content:
                posts.append(ScrapedPost(content=content))
    except ScraperError:
        raise
    except Exception as e:
        raise ExtractionError(f"Post extraction failed: {e}") from e
    log.info(f"  Extracted {len(posts)} post(s) from {len(items)} list item(s)")
    return posts
