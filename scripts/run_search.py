"""Entry point for manual runs: search once and print the organic results."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
from dataclasses import asdict

from search_e2e.config.settings import Settings
from search_e2e.core.browser import BrowserSession, ensure_close_context
from search_e2e.core.logging import configure_logging
from search_e2e.pages.google_page import GooglePage


async def run(settings: Settings, query: str, limit: int, screenshot: bool) -> list[dict[str, str]]:
    async with BrowserSession(settings) as session:
        page = await session.new_page()
        try:
            google = GooglePage(page, base_url=settings.base_url)
            await google.navigate()
            await google.accept_cookies_if_present()
            await google.search(query)
            await google.wait_for_search_results()
            results = await google.get_search_results(limit)
            if screenshot:
                path = settings.artifacts_dir / "run_search.png"
                await google.take_screenshot(str(path))
                logging.getLogger(__name__).info("Saved screenshot to %s", path)
        finally:
            await ensure_close_context(page.context)
    return [asdict(result) for result in results]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run a single search through the page objects")
    parser.add_argument("query", nargs="?", help="Search terms (default: E2E_DEFAULT_SEARCH_QUERY)")
    parser.add_argument("--limit", type=int, default=5, help="Number of results to print")
    parser.add_argument("--headed", action="store_true", help="Show the browser window")
    parser.add_argument("--screenshot", action="store_true", help="Save a screenshot of the results page")
    return parser


def main() -> None:
    args = build_parser().parse_args()
    settings = Settings()
    if args.headed:
        settings.headless = False

    configure_logging(settings.log_level, settings.log_dir)
    results = asyncio.run(run(settings, args.query or settings.default_search_query, args.limit, args.screenshot))
    print(json.dumps(results, indent=2))


if __name__ == "__main__":
    main()
