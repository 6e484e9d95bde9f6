"""Selector-keyed stand-ins for Playwright element handles.

Each fake answers query_selector/query_selector_all from a dict keyed by the
exact selector string, so tests state which selectors match without a
browser or a CSS engine. The following-sibling query returns the element
passed as ``sibling``, whose markers come from its ``class`` attribute.
"""
from unittest.mock import MagicMock

from feed_scraper.extraction.dom import NEXT_SIBLING


class FakeElement:
    def __init__(self, text="", attrs=None, one=None, many=None, sibling=None):
        self._text = text
        self._attrs = attrs or {}
        self._one = one or {}
        self._many = many or {}
        self._sibling = sibling

    def query_selector(self, selector):
        if selector == NEXT_SIBLING:
            return self._sibling
        return self._one.get(selector)

    def query_selector_all(self, selector):
        return list(self._many.get(selector, []))

    def inner_text(self):
        return self._text

    def get_attribute(self, name):
        return self._attrs.get(name)


def make_page(items_selector, items):
    """A MagicMock page whose list query returns *items*."""
    page = MagicMock()
    page.query_selector_all.side_effect = (
        lambda sel: list(items) if sel == items_selector else []
    )
    return page


POST_ITEMS = ".scaffold-finite-scroll__content ul > li"
POST_BODY = ".break-words.tvm-parent-container"
PROFILE_ITEMS = "ul.reusable-search__entity-result-list > li"


def post_item(body_text=None):
    """A feed list item; body_text=None means no body element at all."""
    if body_text is None:
        return FakeElement()
    return FakeElement(one={POST_BODY: FakeElement(text=body_text)})


def profile_item(urn="urn:li:fsd_profile:ACoAA1", url="https://www.linkedin.com/in/jdoe",
                 pic="https://media.example/jdoe.jpg", name="Jane Doe",
                 headline="Data Engineer", location="Berlin, Germany",
                 summary="Current: pipelines", with_description=True,
                 with_result=True, location_class="t-14 t-normal"):
    identity_one = {}
    if url is not None:
        identity_one["a.app-aware-link[href]"] = FakeElement(attrs={"href": url})
    if pic is not None:
        identity_one["img.presence-entity__image"] = FakeElement(attrs={"src": pic})
    blocks = [FakeElement(one=identity_one)]

    if with_description:
        desc_one = {}
        if name is not None:
            desc_one['.entity-result__title-text a span[aria-hidden="true"]'] = FakeElement(text=name)
        if headline is not None:
            sibling = None
            if location is not None:
                sibling = FakeElement(text=location, attrs={"class": location_class})
            desc_one[".entity-result__primary-subtitle"] = FakeElement(text=headline, sibling=sibling)
        if summary is not None:
            desc_one[".entity-result__summary"] = FakeElement(text=summary)
        blocks.append(FakeElement(one=desc_one))

    container = FakeElement(many={":scope > div": blocks})
    if not with_result:
        return FakeElement(one={".entity-result__item": container})
    result = FakeElement(
        attrs={"data-chameleon-result-urn": urn} if urn is not None else {},
        one={".entity-result__item": container},
    )
    return FakeElement(one={"[data-chameleon-result-urn]": result})
