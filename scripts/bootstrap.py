"""Development bootstrap helpers.

- Installs the suite and its Python dependencies (pip install -e ., optional).
- Ensures the Playwright browser under test and its OS dependencies are available.
"""
from __future__ import annotations

import argparse
import subprocess
import sys

# Mirrors search_e2e.config.settings; the package may not be installed yet.
SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


def run(cmd: list[str]) -> None:
    """Run a command and stream output."""
    print(f"$ {' '.join(cmd)}")
    subprocess.run(cmd, check=True)


def install_browsers(browsers: list[str], with_deps: bool = False) -> None:
    cmd = [sys.executable, "-m", "playwright", "install", *browsers]
    if with_deps:
        cmd.append("--with-deps")
    run(cmd)


def main() -> None:
    parser = argparse.ArgumentParser(description="Bootstrap local development")
    parser.add_argument(
        "--browser",
        action="append",
        choices=SUPPORTED_BROWSERS,
        help="Browser engine to install; repeatable (default: chromium)",
    )
    parser.add_argument(
        "--with-deps",
        action="store_true",
        help="Install system dependencies (Linux CI) via playwright install --with-deps",
    )
    parser.add_argument(
        "--skip-deps",
        action="store_true",
        help="Skip pip install -e . if dependencies already installed",
    )
    args = parser.parse_args()

    if not args.skip_deps:
        run([sys.executable, "-m", "pip", "install", "-e", "."])

    install_browsers(args.browser or ["chromium"], with_deps=args.with_deps)
    print("Bootstrap complete")


if __name__ == "__main__":
    main()
