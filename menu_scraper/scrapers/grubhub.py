"""Scraper for Grubhub restaurant menu pages."""

from __future__ import annotations

import logging

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from .base import BaseScraper

logger = logging.getLogger(__name__)


class GrubhubScraper(BaseScraper):
    """Scrape a grubhub.com restaurant page (rendered client-side)."""

    name = "grubhub"
    display_name = "Grubhub"
    domains = ("grubhub.com",)

    async def prepare_page(self, page: Page) -> None:
        """Dismiss the cookie banner if it covers the menu."""
        for selector in [
            "#onetrust-accept-btn-handler",
            'button:has-text("Accept all")',
            'button:has-text("Accept")',
            '[data-testid="cookie-banner-accept"]',
        ]:
            try:
                btn = await page.query_selector(selector)
                if btn and await btn.is_visible():
                    logger.debug("[%s] Accepting cookies via %s", self.name, selector)
                    await btn.click()
                    await page.wait_for_timeout(700)
                    return
            except PlaywrightError:
                continue
