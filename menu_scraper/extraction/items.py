"""Menu item extraction."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urljoin

from ..models import ExtractionStats, MenuItem
from ..utils import clean_text, parse_currency
from .cascade import first_in_document, resolve_first
from .document import Document
from .patterns import DEFAULT_PATTERNS, SelectorPatterns

logger = logging.getLogger(__name__)


def extract_items(
    document: Document,
    category: str,
    patterns: SelectorPatterns = DEFAULT_PATTERNS,
    *,
    scope: Any | None = None,
    base_url: str | None = None,
    stats: ExtractionStats | None = None,
) -> list[MenuItem]:
    """Extract the menu items found under scope, tagged with category.

    Only the first item-container selector that matches is used; containers
    are assumed to share one structure per page. Containers without a name
    or a price are dropped.
    """
    match = resolve_first(document, patterns.item_container, scope)
    if stats is not None:
        stats.item_pattern = match.pattern
        stats.containers_seen += len(match)

    items: list[MenuItem] = []
    for container in match.elements:
        item = _parse_container(document, container, category, patterns, base_url)
        if item is None:
            if stats is not None:
                stats.items_rejected += 1
            continue
        items.append(item)

    logger.debug(
        "Category %r: %d/%d containers yielded items (selector %r)",
        category,
        len(items),
        len(match),
        match.pattern,
    )
    return items


def _parse_container(
    document: Document,
    container: Any,
    category: str,
    patterns: SelectorPatterns,
    base_url: str | None,
) -> MenuItem | None:
    name = None
    if name_el := first_in_document(document, patterns.item_name, container):
        name = clean_text(document.text(name_el))

    # span:last-child is read only when no price-classed element exists.
    price = None
    if price_match := resolve_first(document, patterns.item_price, container):
        price = parse_currency(document.text(price_match.elements[0]))

    if not name or price is None:
        return None

    description = None
    if desc_el := first_in_document(document, patterns.item_description, container):
        description = clean_text(document.text(desc_el))

    return MenuItem(
        category=category,
        name=name,
        price=price,
        description=description,
        image_url=_image_url(document, container, patterns, base_url),
        has_modifiers=_has_modifiers(document, container, patterns),
    )


def _image_url(
    document: Document,
    container: Any,
    patterns: SelectorPatterns,
    base_url: str | None,
) -> str | None:
    img = first_in_document(document, patterns.item_image, container)
    if img is None:
        return None
    url = (document.attr(img, "src") or "").strip() or (document.attr(img, "data-src") or "").strip()
    if not url:
        return None
    return urljoin(base_url, url) if base_url else url


def _has_modifiers(document: Document, container: Any, patterns: SelectorPatterns) -> bool:
    if patterns.item_customize_token in (document.text(container) or ""):
        return True
    return first_in_document(document, patterns.item_customize, container) is not None


def find_category_scope(
    document: Document,
    category: str,
    patterns: SelectorPatterns = DEFAULT_PATTERNS,
) -> Any | None:
    """Return the menu section whose heading reads category, if there is one.

    Section selectors also match wrappers around several sections, so the
    innermost (shortest text) candidate is preferred.
    """
    candidates = []
    for section in document.select(", ".join(patterns.category_section)):
        heading = first_in_document(document, patterns.category_section_heading, section)
        if heading is not None and clean_text(document.text(heading)) == category:
            candidates.append(section)
    if not candidates:
        return None
    return min(candidates, key=lambda section: len(document.text(section) or ""))
