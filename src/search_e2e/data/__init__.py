"""Query tables shared by the scenarios."""

from .search_queries import (
    EXPECTED_DOMAINS,
    NAVIGATION_TEST_QUERIES,
    VALID_SEARCH_QUERIES,
    SearchQuery,
    first_word,
)

__all__ = [
    "EXPECTED_DOMAINS",
    "NAVIGATION_TEST_QUERIES",
    "VALID_SEARCH_QUERIES",
    "SearchQuery",
    "first_word",
]
