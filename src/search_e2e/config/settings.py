"""Runtime configuration for the end-to-end suite.

Relies on pydantic-settings so that environment variables (prefixed with ``E2E_``)
can override defaults. See `.env.example` for common values.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Iterable, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

logger = logging.getLogger(__name__)

SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


def _default_reruns() -> int:
    return 2 if os.environ.get("CI") else 1


class Settings(BaseSettings):
    """Captures runtime configuration for a test session."""

    base_url: str = Field(
        default="https://www.google.com",
        description="Home page of the search engine under test",
    )
    test_env: str = Field(default="production", description="Label of the environment under test")

    browser_name: str = Field(default="chromium", description="chromium, firefox or webkit")
    headless: bool = True
    slow_mo_ms: int = Field(default=0, description="Slow-mo delay in milliseconds")
    viewport_width: int = 1280
    viewport_height: int = 720
    locale: Optional[str] = Field(default="en-US")
    user_agent: Optional[str] = None
    chromium_args: Annotated[Tuple[str, ...], NoDecode] = Field(
        default=("--disable-blink-features=AutomationControlled",),
        description="Extra Chromium args passed during launch",
    )
    stealth_enabled: bool = Field(default=True, description="Apply playwright-stealth evasions")

    default_timeout_ms: int = Field(default=30000)
    navigation_timeout_ms: int = Field(default=30000)
    action_timeout_ms: int = Field(default=15000)
    expect_timeout_ms: int = Field(default=10000)

    reruns: int = Field(
        default_factory=_default_reruns,
        description="Reruns of a failed e2e test; 2 on CI, 1 locally",
    )

    screenshot_on_failure: bool = True
    video_on_failure: bool = True
    trace_on_failure: bool = True
    artifacts_dir: Path = Field(
        default=Path("test-results"),
        description="Failure artefacts; cleared at the start of every pytest session",
    )

    default_search_query: str = Field(default="Playwright automation")

    log_dir: Path = Field(default=Path("logs"))
    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="E2E_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("browser_name", mode="before")
    def _validate_browser_name(cls, value: str) -> str:
        name = str(value).strip().lower()
        if name not in SUPPORTED_BROWSERS:
            raise ValueError(f"browser_name must be one of {', '.join(SUPPORTED_BROWSERS)}")
        return name

    @field_validator(
        "default_timeout_ms",
        "navigation_timeout_ms",
        "action_timeout_ms",
        "expect_timeout_ms",
    )
    def _validate_timeout(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("timeouts must be positive")
        return value

    @field_validator("reruns")
    def _validate_reruns(cls, value: int) -> int:
        if value < 0:
            raise ValueError("reruns cannot be negative")
        return value

    @field_validator("artifacts_dir", "log_dir", mode="before")
    def _expand_dir(cls, value: str | Path) -> Path:
        return Path(value).expanduser()

    @field_validator("chromium_args", mode="before")
    def _parse_chromium_args(cls, value: object) -> Tuple[str, ...]:
        if value is None or value == "":
            return ()
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value if str(item))
        if isinstance(value, str):
            parts: Iterable[str] = (part.strip() for part in value.split(","))
            return tuple(part for part in parts if part)
        raise TypeError("chromium_args must be provided as a comma-separated string or list")

    def ensure_directories(self) -> None:
        """Create directories that must exist at runtime."""
        self.artifacts_dir.mkdir(parents=True, exist_ok=True)
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def viewport(self) -> dict[str, int]:
        return {"width": self.viewport_width, "height": self.viewport_height}

    def launch_args(self, browser_name: Optional[str] = None) -> dict[str, object]:
        """Launch kwargs; Chromium args are only passed to Chromium."""
        launch_args: dict[str, object] = {
            "headless": self.headless,
        }
        if self.slow_mo_ms:
            launch_args["slow_mo"] = self.slow_mo_ms
        if self.chromium_args and (browser_name or self.browser_name) == "chromium":
            launch_args["args"] = list(self.chromium_args)
        return launch_args

    def context_options(self) -> dict[str, object]:
        options: dict[str, object] = {
            "base_url": self.base_url,
            "viewport": self.viewport(),
        }
        if self.locale:
            options["locale"] = self.locale
        if self.user_agent:
            options["user_agent"] = self.user_agent
        return options
