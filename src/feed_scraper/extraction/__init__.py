"""extraction — DOM to records for the known page layouts."""
from ..engine.errors import InputShapeError
from .posts import extract_posts
from .profiles import extract_profiles
from .rules import (  # noqa: F401
    DEFAULT_POST_LAYOUT,
    DEFAULT_PROFILE_LAYOUT,
    FieldRule,
    PostLayout,
    ProfileLayout,
)

EXTRACTORS = {
    "posts": extract_posts,
    "profiles": extract_profiles,
}


def extract(page, kind: str, layouts: dict | None = None) -> list:
    """Run the extractor for *kind* ("posts" or "profiles").

    *layouts* optionally maps a kind to a replacement layout.
    """
    extractor = EXTRACTORS.get(kind)
    if extractor is None:
        raise InputShapeError(f"unknown content kind {kind!r}")
    layout = (layouts or {}).get(kind)
    if layout is None:
        return extractor(page)
    return extractor(page, layout)
