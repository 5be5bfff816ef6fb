"""Scraper registry.

Scrapers are auto-discovered from modules in this package. Any `BaseScraper`
subclass with a non-empty `name` attribute will be registered.
"""

from __future__ import annotations

import importlib
import inspect
import logging
import pkgutil

from ..config import Config
from ..extraction import SelectorPatterns
from .base import BaseScraper, MenuNotFoundError, NavigationError, ScraperError

__all__ = [
    "BaseScraper",
    "MenuNotFoundError",
    "NavigationError",
    "ScraperError",
    "get_scraper",
    "get_scraper_for_url",
    "list_scrapers",
    "get_scraper_display_name",
]

logger = logging.getLogger(__name__)

FALLBACK_SCRAPER = "generic"


def _discover_scrapers() -> dict[str, type[BaseScraper]]:
    discovered: dict[str, type[BaseScraper]] = {}
    failures: dict[str, Exception] = {}

    # Walk sibling modules under this package (menu_scraper.scrapers.*).
    for module_info in pkgutil.iter_modules(__path__):  # type: ignore[name-defined]
        if module_info.ispkg:
            continue
        module_name = module_info.name
        if module_name.startswith("_") or module_name in {"base", "browser_pool"}:
            continue

        full_name = f"{__name__}.{module_name}"
        try:
            module = importlib.import_module(full_name)
        except Exception as exc:  # pragma: no cover - depends on optional modules
            failures[full_name] = exc
            continue

        for _, obj in inspect.getmembers(module, inspect.isclass):
            if obj is BaseScraper or not issubclass(obj, BaseScraper):
                continue
            scraper_name = getattr(obj, "name", None)
            if not isinstance(scraper_name, str) or not scraper_name.strip():
                continue

            if scraper_name in discovered and discovered[scraper_name] is not obj:
                logger.warning(
                    "Duplicate scraper name '%s': %s.%s and %s.%s (keeping first)",
                    scraper_name,
                    discovered[scraper_name].__module__,
                    discovered[scraper_name].__name__,
                    obj.__module__,
                    obj.__name__,
                )
                continue
            discovered[scraper_name] = obj

    for mod, exc in failures.items():
        logger.warning("Failed to import scraper module %s: %r", mod, exc)

    return dict(sorted(discovered.items(), key=lambda kv: kv[0]))


SCRAPERS: dict[str, type[BaseScraper]] = _discover_scrapers()


def get_scraper(
    name: str,
    config: Config | None = None,
    patterns: SelectorPatterns | None = None,
) -> BaseScraper:
    """Get a scraper instance by name."""
    if name not in SCRAPERS:
        available = ", ".join(SCRAPERS.keys())
        raise ValueError(f"Unknown scraper '{name}'. Available: {available}")
    return SCRAPERS[name](config=config, patterns=patterns)


def get_scraper_for_url(
    url: str,
    config: Config | None = None,
    patterns: SelectorPatterns | None = None,
) -> BaseScraper:
    """Get the scraper whose domains cover url, or the generic one."""
    for cls in SCRAPERS.values():
        if cls.handles(url):
            return cls(config=config, patterns=patterns)
    return get_scraper(FALLBACK_SCRAPER, config=config, patterns=patterns)


def list_scrapers() -> list[str]:
    """List all available scraper names."""
    return list(SCRAPERS.keys())


def get_scraper_display_name(name: str) -> str:
    """Get a human-friendly display name for a scraper."""
    cls = SCRAPERS.get(name)
    if cls is None:
        return name
    return getattr(cls, "display_name", name.replace("_", " ").title())
