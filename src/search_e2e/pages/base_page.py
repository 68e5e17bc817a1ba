"""Interaction primitives shared by every page object."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Awaitable, Callable, Literal, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page

logger = logging.getLogger(__name__)

LoadState = Literal["load", "domcontentloaded", "networkidle"]

DEFAULT_WAIT_TIMEOUT_MS = 10_000
DEFAULT_PROBE_TIMEOUT_MS = 5_000


class BasePage:
    """Wraps one live Playwright page.

    Every method performs a single browser action and lets the engine's
    errors propagate, except :meth:`is_element_visible`, which reports a
    failed wait as ``False``.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    async def navigate_to(self, url: str, wait_until: LoadState = "domcontentloaded") -> None:
        logger.debug("Navigating to %s (wait_until=%s)", url, wait_until)
        await self.page.goto(url, wait_until=wait_until)

    async def wait_for_page_load(self, state: LoadState = "domcontentloaded") -> None:
        await self.page.wait_for_load_state(state)

    async def click_element(
        self, locator: Locator, *, force: bool = False, timeout: Optional[float] = None
    ) -> None:
        await locator.click(force=force, timeout=timeout)

    async def fill_input(self, locator: Locator, text: str) -> None:
        await locator.clear()
        await locator.fill(text)

    async def press_key(self, locator: Locator, key: str) -> None:
        await locator.press(key)

    async def get_element_text(self, locator: Locator) -> str:
        return await locator.text_content() or ""

    async def get_all_texts(self, locator: Locator) -> list[str]:
        return await locator.all_text_contents()

    async def wait_for_element(self, locator: Locator, timeout: float = DEFAULT_WAIT_TIMEOUT_MS) -> None:
        await locator.wait_for(state="visible", timeout=timeout)

    async def wait_for_element_hidden(
        self, locator: Locator, timeout: float = DEFAULT_WAIT_TIMEOUT_MS
    ) -> None:
        await locator.wait_for(state="hidden", timeout=timeout)

    async def is_element_visible(self, locator: Locator, timeout: float = DEFAULT_PROBE_TIMEOUT_MS) -> bool:
        """Wait up to ``timeout`` ms for ``locator`` to be visible.

        Presence checks must not abort a test, so any engine error (the wait
        timing out, the page closing underneath) is reported as ``False``.
        """
        try:
            await locator.wait_for(state="visible", timeout=timeout)
        except PlaywrightError as exc:
            logger.debug("Element not visible within %sms: %s", timeout, exc.message)
            return False
        return True

    async def is_element_enabled(self, locator: Locator) -> bool:
        return await locator.is_enabled()

    async def get_element_attribute(self, locator: Locator, name: str) -> Optional[str]:
        return await locator.get_attribute(name)

    async def get_page_title(self) -> str:
        return await self.page.title()

    def get_current_url(self) -> str:
        return self.page.url

    async def get_page_content(self) -> str:
        return await self.page.content()

    async def wait_for_url_contains(self, fragment: str, timeout: float = DEFAULT_WAIT_TIMEOUT_MS) -> None:
        await self.page.wait_for_url(lambda url: fragment in url, timeout=timeout)

    async def wait_for_navigation(self, action: Callable[[], Awaitable[None]]) -> None:
        """Run ``action`` and wait for the navigation it triggers."""
        async with self.page.expect_navigation(wait_until="domcontentloaded"):
            await action()

    async def take_screenshot(self, path: str | Path, full_page: bool = False) -> None:
        await self.page.screenshot(path=path, full_page=full_page)

    async def scroll_to_element(self, locator: Locator) -> None:
        await locator.scroll_into_view_if_needed()

    async def get_element_count(self, locator: Locator) -> int:
        return await locator.count()

    async def reload_page(self) -> None:
        await self.page.reload()

    async def go_back(self) -> None:
        await self.page.go_back()

    async def wait(self, milliseconds: float) -> None:
        # Fixed sleeps hide races; prefer waiting on a locator or URL.
        await self.page.wait_for_timeout(milliseconds)
