"""Static query tables consumed by the search scenarios."""
from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional


@dataclass(frozen=True)
class SearchQuery:
    """One query and what a relevant result page should contain."""

    query: str
    description: str
    expected_results_contain: Optional[str] = None

    @property
    def first_word(self) -> str:
        return first_word(self.query)


def first_word(query: str) -> str:
    """Lowercased first word of ``query``; what the results URL is matched against."""
    words = query.split()
    return words[0].lower() if words else ""


VALID_SEARCH_QUERIES: tuple[SearchQuery, ...] = (
    SearchQuery(
        query="Playwright automation",
        description="Valid search with automation framework keyword",
        expected_results_contain="Playwright",
    ),
    SearchQuery(
        query="TypeScript testing framework",
        description="Valid search with multiple keywords",
        expected_results_contain="TypeScript",
    ),
    SearchQuery(
        query="End-to-End testing",
        description="Valid search with hyphenated term",
        expected_results_contain="testing",
    ),
)

NAVIGATION_TEST_QUERIES: tuple[SearchQuery, ...] = (
    SearchQuery(
        query="Playwright documentation",
        description="Search query likely to return official documentation",
        expected_results_contain="Playwright",
    ),
    SearchQuery(
        query="GitHub Playwright",
        description="Search query for repository navigation test",
        expected_results_contain="GitHub",
    ),
)

EXPECTED_DOMAINS: Mapping[str, str] = MappingProxyType(
    {
        "playwright": "playwright.dev",
        "github": "github.com",
        "microsoft": "microsoft.com",
    }
)
