"""Tolerant element lookups: a missing element is None, never an error."""


def first_match(root, selectors):
    """Return the first element matched by any selector in the chain."""
    if root is None:
        return None
    for sel in selectors:
        el = root.query_selector(sel)
        if el is not None:
            return el
    return None


def read_text(el) -> str | None:
    """Trimmed rendered text of *el*; None if absent or blank."""
    if el is None:
        return None
    text = (el.inner_text() or "").strip()
    return text or None


def read_attr(el, name: str) -> str | None:
    if el is None:
        return None
    value = el.get_attribute(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


NEXT_SIBLING = "xpath=following-sibling::*[1]"


def next_sibling(el, markers=()):
    """The element right after *el*, only if it carries every class in *markers*."""
    if el is None:
        return None
    sibling = el.query_selector(NEXT_SIBLING)
    if sibling is None:
        return None
    classes = (sibling.get_attribute("class") or "").split()
    if all(m in classes for m in markers):
        return sibling
    return None
