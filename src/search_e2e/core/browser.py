"""Browser orchestration helpers.

The pytest fixtures get their browser from pytest-playwright and only reuse
:func:`prepare_context` and :func:`open_page`; :class:`BrowserSession` drives
a browser outside pytest (see ``scripts/run_search.py``).
"""
from __future__ import annotations

import logging
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from types import TracebackType
from typing import Optional, Type

from playwright.async_api import Browser, BrowserContext, Page, Playwright

from search_e2e.config.settings import Settings
from search_e2e.core.stealth import StealthManager

logger = logging.getLogger(__name__)


async def prepare_context(
    context: BrowserContext, settings: Settings, stealth: StealthManager
) -> BrowserContext:
    """Apply evasions and the context-wide default and navigation timeouts."""
    await stealth.apply(context)
    context.set_default_timeout(settings.default_timeout_ms)
    context.set_default_navigation_timeout(settings.navigation_timeout_ms)
    return context


async def open_page(context: BrowserContext, settings: Settings) -> Page:
    """Open a page whose actions use the action timeout.

    A page-level default timeout also governs navigation, so the navigation
    timeout is set again on the page.
    """
    page = await context.new_page()
    page.set_default_timeout(settings.action_timeout_ms)
    page.set_default_navigation_timeout(settings.navigation_timeout_ms)
    return page


@dataclass
class BrowserSession:
    """Async context manager that owns Playwright + browser lifecycle.

    Contexts created from one session are never shared between runs.
    """

    settings: Settings
    _playwright_cm: Optional[AbstractAsyncContextManager] = None
    _playwright: Optional[Playwright] = None
    _browser: Optional[Browser] = None
    _stealth: Optional[StealthManager] = None

    async def __aenter__(self) -> "BrowserSession":  # noqa: D401
        self.settings.ensure_directories()
        self._stealth = StealthManager.from_settings(self.settings)
        logger.info("Stealth configuration: %s", self._stealth.describe())
        self._playwright_cm = self._stealth.wrap_playwright()
        self._playwright = await self._playwright_cm.__aenter__()

        launch_args = self.settings.launch_args()
        browser_type = getattr(self._playwright, self.settings.browser_name)
        logger.info("Launching %s with args: %s", self.settings.browser_name, launch_args)
        try:
            self._browser = await browser_type.launch(**launch_args)
        except BaseException as exc:
            await self._playwright_cm.__aexit__(type(exc), exc, exc.__traceback__)
            self._playwright_cm = None
            self._playwright = None
            raise
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc: Optional[BaseException],
        tb: Optional[TracebackType],
    ) -> None:
        if self._browser:
            await self._browser.close()
            self._browser = None
        if self._playwright_cm:
            await self._playwright_cm.__aexit__(exc_type, exc, tb)
            self._playwright_cm = None
            self._playwright = None

    @property
    def browser(self) -> Browser:
        if not self._browser:
            raise RuntimeError("Browser not initialised")
        return self._browser

    async def new_context(self, **overrides: object) -> BrowserContext:
        """Create a new isolated context with stealth and timeouts applied."""
        options = {**self.settings.context_options(), **overrides}
        logger.debug("Creating context with options: %s", options)
        context = await self.browser.new_context(**options)
        if self._stealth:
            await prepare_context(context, self.settings, self._stealth)
        return context

    async def new_page(self, **overrides: object) -> Page:
        context = await self.new_context(**overrides)
        return await open_page(context, self.settings)


async def ensure_close_context(context: BrowserContext) -> None:
    """Helper to close contexts in finally blocks."""
    try:
        await context.close()
    except Exception:  # pragma: no cover - best effort cleanup
        logger.exception("Failed to close context")
