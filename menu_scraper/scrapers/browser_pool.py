"""Shared headless Chromium for all restaurant pages of a run."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from playwright.async_api import async_playwright, Browser, BrowserContext, Playwright

logger = logging.getLogger(__name__)

# Hides navigator.webdriver from menu pages that block automation.
LAUNCH_ARGS = ["--disable-blink-features=AutomationControlled"]


class BrowserPool:
    """
    Process-wide Chromium launched on first use.

    Each restaurant page gets its own context (separate cookies and storage),
    so parallel pages never share state.
    """

    _instance: BrowserPool | None = None
    _lock = asyncio.Lock()

    def __init__(self):
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._launch_lock = asyncio.Lock()

    @classmethod
    async def get_instance(cls) -> BrowserPool:
        if cls._instance is None:
            async with cls._lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    async def _ensure_browser(self) -> Browser:
        async with self._launch_lock:
            if self._browser is not None and self._browser.is_connected():
                return self._browser
            if self._playwright is None:
                self._playwright = await async_playwright().start()
            logger.debug("Launching chromium with %s", LAUNCH_ARGS)
            self._browser = await self._playwright.chromium.launch(headless=True, args=LAUNCH_ARGS)
            return self._browser

    @asynccontextmanager
    async def new_context(self, **context_options: object) -> AsyncIterator[BrowserContext]:
        """Open an isolated context, closed again when the block exits."""
        browser = await self._ensure_browser()
        context = await browser.new_context(**context_options)
        try:
            yield context
        finally:
            await context.close()

    async def close(self) -> None:
        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as exc:
                logger.warning("Failed to close browser: %r", exc)
            self._browser = None
        if self._playwright is not None:
            await self._playwright.stop()
            self._playwright = None

    @classmethod
    async def shutdown(cls) -> None:
        """Close the shared browser, if one was ever launched."""
        if cls._instance is not None:
            await cls._instance.close()
            cls._instance = None


@asynccontextmanager
async def get_browser_context(
    *,
    user_agent: str | None = None,
    locale: str | None = None,
    viewport: dict[str, int] | None = None,
    extra_headers: dict[str, str] | None = None,
) -> AsyncIterator[BrowserContext]:
    """Get a fresh context from the shared browser."""
    options: dict[str, object] = {}
    if user_agent:
        options["user_agent"] = user_agent
    if locale:
        options["locale"] = locale
    if viewport:
        options["viewport"] = viewport
    if extra_headers:
        options["extra_http_headers"] = extra_headers

    pool = await BrowserPool.get_instance()
    async with pool.new_context(**options) as context:
        yield context
