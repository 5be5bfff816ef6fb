"""End-to-end extraction of one loaded restaurant page."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

from ..models import ExtractionStats, MenuItem, ScrapeResult
from .categories import discover_categories
from .document import Document, SoupDocument
from .items import extract_items, find_category_scope
from .patterns import DEFAULT_PATTERNS, SelectorPatterns
from .restaurant import extract_restaurant_info

logger = logging.getLogger(__name__)


def extract_menu(
    document: Document,
    source_url: str,
    patterns: SelectorPatterns = DEFAULT_PATTERNS,
    *,
    scraped_at: datetime | None = None,
    stats: ExtractionStats | None = None,
) -> ScrapeResult:
    """Extract restaurant info, categories and items from a settled page.

    The document is only read. Items are extracted once per category and
    tagged with its name; when the category has its own menu section only
    that section is searched, otherwise the whole page is.
    """
    stats = stats if stats is not None else ExtractionStats()

    restaurant = extract_restaurant_info(document, source_url, patterns)
    categories = discover_categories(document, patterns)

    items: list[MenuItem] = []
    for category in categories:
        items.extend(_extract_category_items(document, category.name, patterns, source_url, stats))

    logger.info(
        "Extracted %s: %d categories, %d items (%d containers rejected, selector %r)",
        source_url,
        len(categories),
        len(items),
        stats.items_rejected,
        stats.item_pattern,
    )

    return ScrapeResult(
        source_url=source_url,
        scraped_at=scraped_at or datetime.now(UTC),
        restaurant=restaurant,
        categories=tuple(categories),
        items=tuple(items),
    )


def _extract_category_items(
    document: Document,
    category: str,
    patterns: SelectorPatterns,
    base_url: str,
    stats: ExtractionStats,
) -> list[MenuItem]:
    scope = find_category_scope(document, category, patterns)
    if scope is not None:
        scoped_stats = ExtractionStats()
        items = extract_items(
            document, category, patterns, scope=scope, base_url=base_url, stats=scoped_stats
        )
        if items:
            _merge_stats(stats, scoped_stats)
            return items
        logger.debug("Section for %r has no items, searching the whole page", category)

    return extract_items(document, category, patterns, base_url=base_url, stats=stats)


def _merge_stats(target: ExtractionStats, source: ExtractionStats) -> None:
    target.containers_seen += source.containers_seen
    target.items_rejected += source.items_rejected
    target.item_pattern = source.item_pattern or target.item_pattern


def extract_menu_from_html(
    html: str,
    source_url: str,
    patterns: SelectorPatterns = DEFAULT_PATTERNS,
    *,
    scraped_at: datetime | None = None,
) -> ScrapeResult:
    """Parse an HTML snapshot and extract it."""
    return extract_menu(SoupDocument(html, url=source_url), source_url, patterns, scraped_at=scraped_at)
