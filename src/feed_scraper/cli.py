"""Command-line adapter: one scrape run, JSON out, exit code 1 on failure."""
import argparse
import json
import logging
import os
import sys
from dataclasses import replace
from typing import Sequence

from .browser.cookies import load_cookie_file, parse_cookies
from .config import CONTENT_KINDS, WAIT_UNTIL_VALUES, ScrapeConfig
from .engine.errors import ScraperError
from .engine.orchestrator import scrape
from .models import ScrapeRequest


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="feed-scraper",
        description="Scrape feed posts or people-search results with a stored session.",
    )
    parser.add_argument("--url", required=True, help="Target page URL.")
    parser.add_argument(
        "--cookies",
        required=True,
        help="Path to a JSON cookie file, or the cookie JSON itself.",
    )
    parser.add_argument("--kind", choices=CONTENT_KINDS, default=None,
                        help="Content type to extract (default: posts).")
    parser.add_argument("--wait-until", choices=WAIT_UNTIL_VALUES, default=None,
                        help="Readiness condition for page navigation.")
    parser.add_argument("--headed", action="store_true", help="Show the browser window.")
    parser.add_argument("--out", default="", help="Write the JSON result to this file.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _read_cookies(value: str):
    if os.path.isfile(value):
        return load_cookie_file(value)
    return parse_cookies(value)


def _build_config(args: argparse.Namespace) -> ScrapeConfig:
    config = ScrapeConfig.from_env()
    if args.kind:
        config = replace(config, kind=args.kind)
    if args.wait_until:
        config = replace(config, navigation=replace(config.navigation, wait_until=args.wait_until))
    if args.headed:
        config = replace(config, browser=replace(config.browser, headless=False))
    return config


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = _build_config(args)
        request = ScrapeRequest(target_url=args.url, cookies=_read_cookies(args.cookies))
        result = scrape(request, config)
    except (ScraperError, OSError, ValueError) as e:
        _eprint(f"Scraper error: {e}")
        return 1

    payload = json.dumps(result.to_dict(), ensure_ascii=False, indent=2)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(payload + "\n")
        _eprint(f"Wrote {len(result.records)} record(s) to {args.out}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
