"""Records produced and consumed by a scrape run.

All records are transient: built fresh per run, returned to the caller,
never persisted.
"""
from dataclasses import dataclass, field
from typing import Any, Mapping

from .browser.cookies import parse_cookies
from .engine.errors import InputShapeError


@dataclass
class ScrapeRequest:
    target_url: str
    cookies: Any

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ScrapeRequest":
        """Build a request from an intake payload (HTTP body or input file).

        Accepts ``targetUrl``, ``target_url`` or the legacy ``searchUrl`` key.
        Cookies may be a JSON-encoded string or already-parsed data.
        """
        if not isinstance(payload, Mapping):
            raise InputShapeError("request payload must be an object")
        target_url = (
            payload.get("targetUrl")
            or payload.get("target_url")
            or payload.get("searchUrl")
        )
        cookies = payload.get("cookies")
        if not target_url or cookies is None or cookies == "":
            raise InputShapeError('Missing "targetUrl" or "cookies" in request')
        return cls(target_url=target_url, cookies=parse_cookies(cookies))


@dataclass
class ScrapedPost:
    content: str | None = None

    def to_dict(self) -> dict:
        return {"content": self.content}


@dataclass
class ScrapedProfile:
    """One people-search result. Every field degrades to None independently.

    ``followers`` is reserved and never populated.
    """
    urn: str | None = None
    name: str | None = None
    profile_url: str | None = None
    profile_pic: str | None = None
    headline: str | None = None
    location: str | None = None
    summary: str | None = None
    followers: None = None

    def to_dict(self) -> dict:
        return {
            "urn": self.urn,
            "name": self.name,
            "profileUrl": self.profile_url,
            "profilePic": self.profile_pic,
            "headline": self.headline,
            "location": self.location,
            "summary": self.summary,
            "followers": None,
        }


@dataclass
class ScrapeResult:
    target_url: str
    kind: str
    records: list = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "targetUrl": self.target_url,
            "searchUrl": self.target_url,
            "kind": self.kind,
            "results": [r.to_dict() for r in self.records],
        }
