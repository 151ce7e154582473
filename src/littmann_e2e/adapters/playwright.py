"""Browser and context lifecycle for test sessions.

One browser per session; every test case gets its own context and page so
cases can run in parallel workers without sharing state.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from playwright.async_api import Browser, BrowserContext, Page

    from ..config.settings import Settings

logger = logging.getLogger(__name__)

_BROWSERS = ("chromium", "firefox", "webkit")


@asynccontextmanager
async def launch_browser(settings: Settings) -> AsyncGenerator[Browser, None]:
    if settings.browser not in _BROWSERS:
        raise ValueError(f"BROWSER must be one of {_BROWSERS}, got {settings.browser!r}")
    async with async_playwright() as p:
        browser = await getattr(p, settings.browser).launch(headless=settings.headless)
        logger.info(f"[Session] {settings.browser} launched (headless={settings.headless})")
        try:
            yield browser
        finally:
            await browser.close()


@asynccontextmanager
async def open_page(
    browser: Browser, settings: Settings
) -> AsyncGenerator[tuple[BrowserContext, Page], None]:
    """Open an isolated context and page configured from ``settings``."""
    context = await browser.new_context(
        base_url=settings.base_url,
        ignore_https_errors=settings.ignore_https_errors,
    )
    try:
        page = await context.new_page()
        page.set_default_timeout(settings.action_timeout_ms)
        page.set_default_navigation_timeout(settings.navigation_timeout_ms)
        yield context, page
    finally:
        await context.close()


async def capture_failure(page: Page, out_dir: Path, name: str = "failure") -> Path | None:
    """Take a full-page screenshot; returns None if the page is already gone."""
    out_path = out_dir / f"{name}.png"
    out_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        await page.screenshot(path=str(out_path), full_page=True)
    except PlaywrightError as e:
        logger.warning(f"[Session] screenshot failed: {e}")
        return None
    return out_path
