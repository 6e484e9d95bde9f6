"""Named extraction rules for the known page layouts.

A layout change should be a change to the tables below, not to the
extraction code. Each field maps to a selector chain tried in order; the
first selector that matches wins, and no match yields None.
"""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldRule:
    """How to read one record field.

    name: record attribute the value is stored under.
    selectors: fallback chain, first match wins.
    attribute: element attribute to read; None reads trimmed inner text.
    block: positional child block to search in; None searches the container.
    sibling_of: read the element immediately following the element that
        field actually matched, instead of using ``selectors``.
    sibling_markers: classes the following sibling must all carry.
    """
    name: str
    selectors: tuple[str, ...] = ()
    attribute: str | None = None
    block: int | None = None
    sibling_of: str | None = None
    sibling_markers: tuple[str, ...] = ()


def check_sibling_rules(rules: dict[str, FieldRule]) -> None:
    """Raise ValueError if a sibling rule names an unknown field or loops."""
    for rule in rules.values():
        seen = {rule.name}
        current = rule
        while current.sibling_of is not None:
            anchor = rules.get(current.sibling_of)
            if anchor is None:
                raise ValueError(
                    f"field {current.name!r} refers to unknown field {current.sibling_of!r}")
            if anchor.name in seen:
                raise ValueError(f"sibling rules loop back to field {anchor.name!r}")
            seen.add(anchor.name)
            current = anchor


@dataclass(frozen=True)
class PostLayout:
    item_selector: str = ".scaffold-finite-scroll__content ul > li"
    body_selectors: tuple[str, ...] = (".break-words.tvm-parent-container",)


@dataclass(frozen=True)
class ProfileLayout:
    """People-search result layout.

    Each list item holds an optional result element carrying the URN. The
    container's immediate child blocks are positional: block 0 holds the
    link and picture, block 1 the descriptive text.
    """
    item_selector: str = "ul.reusable-search__entity-result-list > li"
    result_selectors: tuple[str, ...] = ("[data-chameleon-result-urn]",)
    urn_attribute: str = "data-chameleon-result-urn"
    container_selectors: tuple[str, ...] = (".entity-result__item",)
    block_selector: str = ":scope > div"
    fields: tuple[FieldRule, ...] = field(default_factory=lambda: DEFAULT_PROFILE_FIELDS)

    def rules_by_name(self) -> dict[str, FieldRule]:
        return {r.name: r for r in self.fields}


IDENTITY_BLOCK = 0
DESCRIPTION_BLOCK = 1

DEFAULT_PROFILE_FIELDS: tuple[FieldRule, ...] = (
    FieldRule(
        "profile_url",
        selectors=("a.app-aware-link[href]", "a[href]"),
        attribute="href",
        block=IDENTITY_BLOCK,
    ),
    FieldRule(
        "profile_pic",
        selectors=("img.presence-entity__image", "img"),
        attribute="src",
        block=IDENTITY_BLOCK,
    ),
    FieldRule(
        "name",
        selectors=(
            '.entity-result__title-text a span[aria-hidden="true"]',
            ".entity-result__title-text a",
        ),
        block=DESCRIPTION_BLOCK,
    ),
    FieldRule(
        "headline",
        selectors=(".entity-result__primary-subtitle",),
        block=DESCRIPTION_BLOCK,
    ),
    FieldRule(
        "location",
        block=DESCRIPTION_BLOCK,
        sibling_of="headline",
        sibling_markers=("t-14", "t-normal"),
    ),
    FieldRule(
        "summary",
        selectors=(".entity-result__summary",),
        block=DESCRIPTION_BLOCK,
    ),
)

DEFAULT_POST_LAYOUT = PostLayout()
DEFAULT_PROFILE_LAYOUT = ProfileLayout()
