"""Fallback scraper for restaurant pages without a dedicated scraper."""

from .base import BaseScraper


class GenericMenuScraper(BaseScraper):
    """Scrape any menu page with the default selector lists."""

    name = "generic"
    display_name = "Generic menu page"
