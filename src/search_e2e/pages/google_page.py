"""Page object for Google Search: home page, results page and result navigation."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import parse_qs, urlparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

from search_e2e.pages.base_page import DEFAULT_WAIT_TIMEOUT_MS, BasePage
from search_e2e.selectors.search_page import GoogleSelectors

logger = logging.getLogger(__name__)

_CONSENT_PROBE_TIMEOUT_MS = 3_000
_CONSENT_SETTLE_MS = 500
_RESULTS_PROBE_TIMEOUT_MS = 3_000
_SEARCH_BUTTON_SETTLE_MS = 1_000


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A result as displayed on the results page. Read once, never stored."""

    url: str
    title: str


class GooglePage(BasePage):
    """Locators, actions and verifications for Google Search."""

    def __init__(self, page: Page, base_url: Optional[str] = None) -> None:
        super().__init__(page)
        self.url = (base_url or GoogleSelectors.home_url).rstrip("/")
        host = urlparse(self.url).hostname or ""
        self.domain = host.removeprefix("www.")

    # Locators are rebuilt on every access so they always query the live DOM.

    @property
    def search_input(self) -> Locator:
        return self.page.locator(GoogleSelectors.search_input)

    @property
    def search_button(self) -> Locator:
        return self.page.locator(GoogleSelectors.search_button).first

    @property
    def lucky_button(self) -> Locator:
        return self.page.locator(GoogleSelectors.lucky_button).first

    @property
    def search_results(self) -> Locator:
        return self.page.locator(GoogleSelectors.results_container)

    @property
    def result_stats(self) -> Locator:
        return self.page.locator(GoogleSelectors.result_stats)

    @property
    def search_result_links(self) -> Locator:
        """Result titles (``h3`` elements)."""
        return self.page.locator(GoogleSelectors.result_titles)

    @property
    def search_result_clickable_links(self) -> Locator:
        """Anchors that wrap a result title."""
        return self.page.locator(GoogleSelectors.result_links).filter(
            has=self.page.locator(GoogleSelectors.result_heading)
        )

    @property
    def search_result_items(self) -> Locator:
        return self.page.locator(GoogleSelectors.result_items)

    @property
    def google_logo(self) -> Locator:
        return self.page.locator(GoogleSelectors.logo)

    @property
    def search_suggestions(self) -> Locator:
        return self.page.locator(GoogleSelectors.suggestions)

    @property
    def cookie_accept_button(self) -> Locator:
        return self.page.locator(GoogleSelectors.cookie_accept_button()).first

    async def navigate(self) -> None:
        await self.navigate_to(self.url, wait_until="domcontentloaded")

    async def accept_cookies_if_present(self) -> None:
        """Dismiss the cookie consent dialog when one is shown.

        The dialog only appears for some regions and sessions; its absence is
        the common case and never fails the caller.
        """
        try:
            button = self.cookie_accept_button
            if await self.is_element_visible(button, timeout=_CONSENT_PROBE_TIMEOUT_MS):
                await button.click()
                await self.wait(_CONSENT_SETTLE_MS)
                logger.info("Accepted cookie consent")
            else:
                logger.info("Cookie consent not found or already handled")
        except PlaywrightError as exc:
            logger.info("Cookie consent not handled: %s", exc.message)

    async def search(self, query: str) -> None:
        """Submit ``query`` with the Enter key."""
        logger.info("Searching for %r", query)
        await self.wait_for_element(self.search_input)
        await self.fill_input(self.search_input, query)
        await self.press_key(self.search_input, "Enter")
        await self.wait_for_page_load("domcontentloaded")

    async def search_with_button(self, query: str) -> None:
        """Submit ``query`` by clicking the search button."""
        logger.info("Searching for %r with the search button", query)
        await self.wait_for_element(self.search_input)
        await self.fill_input(self.search_input, query)
        # The button only becomes clickable once the suggestion box has rendered.
        await self.wait(_SEARCH_BUTTON_SETTLE_MS)
        await self.click_element(self.search_button)
        await self.wait_for_page_load("domcontentloaded")

    async def wait_for_search_results(self, timeout: float = DEFAULT_WAIT_TIMEOUT_MS) -> None:
        await self.wait_for_element(self.search_results, timeout)

    async def get_search_results_count(self) -> int:
        await self.wait_for_search_results()
        return await self.get_element_count(self.search_result_links)

    async def get_first_search_result_text(self) -> str:
        await self.wait_for_search_results()
        return await self.get_element_text(self.search_result_links.first)

    async def get_all_search_result_titles(self) -> list[str]:
        await self.wait_for_search_results()
        return await self.get_all_texts(self.search_result_links)

    async def get_search_results(self, limit: Optional[int] = None) -> list[SearchResult]:
        """Read ``(url, title)`` pairs for the clickable results on the page."""
        await self.wait_for_search_results()
        links = self.search_result_clickable_links
        count = await self.get_element_count(links)
        if limit is not None:
            count = min(count, limit)
        results: list[SearchResult] = []
        for index in range(count):
            link = links.nth(index)
            href = await self.get_element_attribute(link, "href") or ""
            title = await self.get_element_text(link.locator(GoogleSelectors.result_heading).first)
            results.append(SearchResult(url=href, title=title.strip()))
        return results

    async def click_search_result(self, index: int = 0) -> str:
        """Click the result at ``index`` and return the href it pointed to."""
        await self.wait_for_search_results()

        result_link = self.search_result_clickable_links.nth(index)
        await self.wait_for_element(result_link)
        href = await self.get_element_attribute(result_link, "href")
        await self.scroll_to_element(result_link)

        logger.info("Opening search result %s: %s", index, href)
        await result_link.click()
        await self.wait_for_page_load("domcontentloaded")
        return href or ""

    async def click_first_search_result(self) -> str:
        return await self.click_search_result(0)

    async def get_search_result_url(self, index: int = 0) -> str:
        await self.wait_for_search_results()
        result_link = self.search_result_clickable_links.nth(index)
        return await self.get_element_attribute(result_link, "href") or ""

    def get_first_result_link(self) -> Locator:
        return (
            self.page.locator(GoogleSelectors.any_link)
            .filter(has=self.page.locator(GoogleSelectors.result_heading))
            .first
        )

    def get_search_query_from_url(self) -> str:
        query = parse_qs(urlparse(self.get_current_url()).query)
        values = query.get(GoogleSelectors.query_param)
        return values[0] if values else ""

    async def search_results_contain_text(self, expected_text: str) -> bool:
        titles = await self.get_all_search_result_titles()
        needle = expected_text.lower()
        return any(needle in title.lower() for title in titles)

    async def verify_on_search_results_page(self) -> None:
        await self.page.wait_for_url(GoogleSelectors.results_url_pattern)

    async def has_search_results(self) -> bool:
        count = await self.get_element_count(self.page.locator(GoogleSelectors.result_heading))
        return count > 0

    async def is_on_home_page(self) -> bool:
        logo_visible = await self.is_element_visible(self.google_logo)
        url = self.get_current_url()
        on_domain = bool(self.domain) and self.domain in url
        return logo_visible and on_domain and GoogleSelectors.search_path not in url

    async def is_on_search_results_page(self) -> bool:
        on_search_path = GoogleSelectors.search_path in self.get_current_url()
        results_visible = await self.is_element_visible(
            self.search_results, timeout=_RESULTS_PROBE_TIMEOUT_MS
        )
        return on_search_path and results_visible
