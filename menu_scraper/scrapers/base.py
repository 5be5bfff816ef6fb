"""Base scraper class: loads a restaurant page and hands it to the extractors."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC
from pathlib import Path
from urllib.parse import urlparse

import httpx
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright_stealth import Stealth

from ..config import Config
from ..extraction import DEFAULT_PATTERNS, SelectorPatterns, SoupDocument, extract_menu, resolve_first
from ..models import ScrapeResult
from .browser_pool import get_browser_context

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)


class ScraperError(Exception):
    """A page could not be turned into a result."""


class NavigationError(ScraperError):
    """The page could not be loaded."""


class MenuNotFoundError(ScraperError):
    """The page loaded but the menu region never appeared."""


class BaseScraper(ABC):
    """Abstract base class for all menu scrapers.

    Subclasses set ``name`` and the ``domains`` they handle and may override
    ``prepare_page`` to dismiss site-specific overlays.
    """

    name: str
    display_name: str
    domains: tuple[str, ...] = ()
    user_agent: str | None = None
    locale: str | None = "en-US"
    viewport: dict[str, int] | None = {"width": 1920, "height": 1080}
    extra_headers: dict[str, str] = {"Accept-Language": "en-US,en;q=0.9"}
    use_stealth: bool = True

    def __init__(self, config: Config | None = None, patterns: SelectorPatterns | None = None):
        self.config = config or Config()
        self.patterns = patterns or DEFAULT_PATTERNS
        self.output_dir = self.config.output_dir

    @classmethod
    def handles(cls, url: str) -> bool:
        """Whether url belongs to one of this scraper's domains."""
        host = (urlparse(url).hostname or "").lower()
        return any(host == d or host.endswith("." + d) for d in cls.domains)

    async def prepare_page(self, page: Page) -> None:
        """Hook run after navigation, before waiting for the menu."""
        _ = page

    async def scrape(self, url: str) -> ScrapeResult:
        """Load url (retrying failed loads) and extract its menu."""
        attempts = self.config.max_retries + 1
        attempt = 1
        while True:
            try:
                document = await self.load_document(url)
            except ScraperError as exc:
                logger.warning("[%s] Attempt %d/%d failed for %s: %s", self.name, attempt, attempts, url, exc)
                if attempt >= attempts:
                    raise
                attempt += 1
                continue
            return self.extract(document, url)

    def extract(self, document: SoupDocument, url: str) -> ScrapeResult:
        """Run the extraction pipeline on an already loaded page."""
        return extract_menu(document, url, self.patterns)

    def scrape_html(self, html: str, url: str) -> ScrapeResult:
        """Extract a saved page snapshot without any navigation."""
        return self.extract(SoupDocument(html, url=url), url)

    async def load_document(self, url: str) -> SoupDocument:
        if self.config.fetch_mode == "http":
            return await self._load_with_http(url)
        return await self._load_with_browser(url)

    async def _load_with_browser(self, url: str) -> SoupDocument:
        try:
            async with get_browser_context(
                user_agent=self.user_agent,
                locale=self.locale,
                viewport=self.viewport,
                extra_headers=self.extra_headers,
            ) as context:
                page = await context.new_page()
                if self.use_stealth:
                    await Stealth().apply_stealth_async(page)

                logger.info("[%s] Loading %s...", self.name, url)
                await page.goto(url, wait_until="domcontentloaded", timeout=self.config.navigation_timeout_ms)
                await self.prepare_page(page)

                try:
                    await page.wait_for_selector(
                        ", ".join(self.patterns.menu_ready),
                        timeout=self.config.menu_timeout_ms,
                    )
                except PlaywrightTimeoutError as exc:
                    if self.config.debug:
                        await self._save_screenshot(page, url)
                    raise MenuNotFoundError(
                        f"Menu did not appear within {self.config.menu_timeout_ms / 1000:.0f}s on {url}"
                    ) from exc

                # Menus keep rendering sections after the container shows up.
                await page.wait_for_timeout(self.config.settle_ms)
                html = await page.content()

                if self.config.debug:
                    await self._save_screenshot(page, url)
        except PlaywrightError as exc:
            # Launch, navigation, closed targets: all retryable.
            raise NavigationError(f"Failed to load {url}: {exc}") from exc

        return SoupDocument(html, url=url)

    async def _load_with_http(self, url: str) -> SoupDocument:
        headers = {"User-Agent": self.user_agent or DEFAULT_USER_AGENT, **self.extra_headers}
        async with httpx.AsyncClient(
            follow_redirects=True,
            headers=headers,
            timeout=httpx.Timeout(self.config.navigation_timeout_ms / 1000),
        ) as client:
            logger.info("[%s] Fetching %s...", self.name, url)
            try:
                resp = await client.get(url)
                resp.raise_for_status()
            except httpx.HTTPError as exc:
                raise NavigationError(f"Failed to fetch {url}: {exc}") from exc

        document = SoupDocument(resp.text, url=url)
        if not resolve_first(document, self.patterns.menu_ready):
            if self.config.debug:
                self._save_snapshot(resp.text, url)
            raise MenuNotFoundError(f"No menu region in the HTML served for {url}")
        return document

    def _debug_path(self, url: str, suffix: str) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir / f"{self.name}_{_slug_for_url(url)}_debug.{suffix}"

    async def _save_screenshot(self, page: Page, url: str) -> None:
        path = self._debug_path(url, "png")
        try:
            await page.screenshot(path=str(path), full_page=True)
        except PlaywrightError as exc:
            logger.warning("[%s] Screenshot failed: %s", self.name, exc)
            return
        logger.info("[%s] Saved debug screenshot to %s", self.name, path)

    def _save_snapshot(self, html: str, url: str) -> None:
        path = self._debug_path(url, "html")
        path.write_text(html, encoding="utf-8")
        logger.info("[%s] Saved debug HTML to %s", self.name, path)

    def save_results(self, result: ScrapeResult) -> tuple[Path, Path]:
        """Save results to JSON and an items CSV."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        stem = f"{self.name}_{_slug_for_url(result.source_url)}"

        json_file = self.output_dir / f"{stem}_menu.json"
        json_file.write_text(
            json.dumps(result.to_dict(), ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info("[%s] Saved JSON to %s", self.name, json_file)

        csv_file = self.output_dir / f"{stem}_items.csv"
        lines = ["category,name,price,description,image_url,has_modifiers"]
        for item in result.items:
            category = item.category.replace('"', '""')
            name = item.name.replace('"', '""')
            description = (item.description or "").replace('"', '""')
            lines.append(
                f'"{category}","{name}",{item.price},"{description}","{item.image_url or ""}",'
                f"{str(item.has_modifiers).lower()}"
            )
        csv_file.write_text("\n".join(lines), encoding="utf-8")
        logger.info("[%s] Saved CSV to %s", self.name, csv_file)

        return json_file, csv_file


def _slug_for_url(url: str) -> str:
    parsed = urlparse(url)
    raw = f"{parsed.hostname or ''}{parsed.path}".strip("/")
    slug = re.sub(r"[^A-Za-z0-9]+", "-", raw).strip("-").lower()
    return slug[:80] or "page"
