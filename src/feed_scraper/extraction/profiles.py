"""People-search result extraction.

Every field is read independently: a missing anchor, image or text node
leaves that field None and the rest of the record intact. Profiles are never
dropped, since a URN or profile URL alone still identifies a person.
"""
import logging

from ..engine.errors import ExtractionError, ScraperError
from ..models import ScrapedProfile
from .dom import first_match, next_sibling, read_attr, read_text
from .rules import DEFAULT_PROFILE_LAYOUT, FieldRule, ProfileLayout, check_sibling_rules

log = logging.getLogger(__name__)


def _locate(rule: FieldRule, rules, container, blocks):
    if rule.sibling_of is not None:
        anchor = _locate(rules[rule.sibling_of], rules, container, blocks)
        return next_sibling(anchor, rule.sibling_markers)
    if rule.block is None:
        root = container
    elif rule.block < len(blocks):
        root = blocks[rule.block]
    else:
        return None
    return first_match(root, rule.selectors)


def _read_field(rule: FieldRule, rules, container, blocks):
    el = _locate(rule, rules, container, blocks)
    if rule.attribute:
        return read_attr(el, rule.attribute)
    return read_text(el)


def _extract_profile(item, layout: ProfileLayout, rules) -> ScrapedProfile:
    result = first_match(item, layout.result_selectors) or item
    container = first_match(result, layout.container_selectors) or result
    blocks = container.query_selector_all(layout.block_selector)

    values = {"urn": read_attr(result, layout.urn_attribute)}
    for rule in layout.fields:
        values[rule.name] = _read_field(rule, rules, container, blocks)
    return ScrapedProfile(**values)


def extract_profiles(page, layout: ProfileLayout = DEFAULT_PROFILE_LAYOUT) -> list[ScrapedProfile]:
    """Extract one profile per result list item, in page order."""
    rules = layout.rules_by_name()
    check_sibling_rules(rules)
    try:
        items = page.query_selector_all(layout.item_selector)
        profiles = [_extract_profile(item, layout, rules) for item in items]
    except ScraperError:
        raise
    except Exception as e:
        raise ExtractionError(f"Profile extraction failed: {e}") from e
    n_identified = sum(1 for p in profiles if p.urn or p.profile_url)
    log.info(f"  Extracted {len(profiles)} profile(s), {n_identified} with URN or URL")
    return profiles
