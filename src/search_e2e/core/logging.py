"""Logging helpers."""
from __future__ import annotations

import logging
from pathlib import Path


def configure_logging(level: str, log_dir: Path, *, console: bool = True) -> None:
    """Configure basic logging for a test session.

    pytest already renders captured records per test, so the plugin passes
    ``console=False`` and only the file handler is installed.
    """
    log_dir.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [logging.FileHandler(log_dir / "e2e.log")]
    if console:
        handlers.insert(0, logging.StreamHandler())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=handlers,
    )
