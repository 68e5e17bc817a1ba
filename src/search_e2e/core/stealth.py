"""Bot-detection evasions for search sessions, built on playwright-stealth.

Search engines serve interstitials (captchas, "unusual traffic" pages) to
browsers that advertise automation, so evasions are on by default. The
spoofed ``navigator`` values follow the configured locale and user agent so
the page sees one consistent client.

See: https://github.com/mattwmaster58/playwright_stealth
"""
from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Union

from playwright.async_api import BrowserContext, Page, async_playwright
from playwright_stealth import ALL_EVASIONS_DISABLED_KWARGS, Stealth

from search_e2e.config.settings import Settings


def navigator_languages(locale: str) -> tuple[str, str]:
    """``en-US`` -> ``("en-US", "en")``."""
    return locale, locale.split("-", 1)[0]


class StealthManager:
    """Owns the Stealth instance used by a browser session."""

    def __init__(self, enabled: bool, **overrides: object) -> None:
        self.enabled = enabled
        self.overrides = overrides if enabled else {}
        self._stealth = Stealth(**(self.overrides if enabled else ALL_EVASIONS_DISABLED_KWARGS))

    @classmethod
    def from_settings(cls, settings: Settings) -> "StealthManager":
        overrides: dict[str, object] = {}
        if settings.locale:
            overrides["navigator_languages_override"] = navigator_languages(settings.locale)
        if settings.user_agent:
            overrides["navigator_user_agent_override"] = settings.user_agent
        return cls(settings.stealth_enabled, **overrides)

    def wrap_playwright(self) -> AbstractAsyncContextManager:
        """Playwright entry point, patched when evasions are enabled."""
        if not self.enabled:
            return async_playwright()
        return self._stealth.use_async(async_playwright())

    async def apply(self, target: Union[BrowserContext, Page]) -> None:
        if self.enabled:
            await self._stealth.apply_stealth_async(target)

    def describe(self) -> dict[str, object]:
        if not self.enabled:
            return {"enabled": False}
        return {
            "enabled": True,
            "languages": self.overrides.get("navigator_languages_override"),
            "user_agent": self.overrides.get("navigator_user_agent_override", "browser default"),
            "evasions": len(self._stealth.script_payload),
        }
