"""Page objects for the search engine under test."""

from .base_page import BasePage
from .google_page import GooglePage, SearchResult

__all__ = [
    "BasePage",
    "GooglePage",
    "SearchResult",
]
