"""Restaurant metadata extraction."""

from __future__ import annotations

import logging

from ..models import RestaurantRecord
from ..utils import (
    OrderedSet,
    clean_text,
    parse_currency,
    parse_delivery_window,
    parse_rating,
    parse_restaurant_id,
)
from .cascade import first_in_document
from .document import Document
from .patterns import DEFAULT_PATTERNS, SelectorPatterns

logger = logging.getLogger(__name__)


def extract_restaurant_info(
    document: Document,
    source_url: str | None,
    patterns: SelectorPatterns = DEFAULT_PATTERNS,
) -> RestaurantRecord:
    """Build the restaurant record for a page.

    Every field falls back to None (name to "Unknown") on its own when no
    selector matches, so this never fails on unexpected markup.
    """
    name = None
    if heading := first_in_document(document, patterns.restaurant_name):
        name = clean_text(document.text(heading))

    rating = review_count = None
    if rating_el := first_in_document(document, patterns.rating):
        rating, review_count = parse_rating(document.text(rating_el))
        if rating is None and review_count is None:
            # Star widgets often carry the value only in aria-label.
            rating, review_count = parse_rating(document.attr(rating_el, "aria-label"))

    address = None
    if address_el := first_in_document(document, patterns.address):
        address = clean_text(document.text(address_el))

    phone = None
    if phone_el := first_in_document(document, patterns.phone):
        phone = clean_text(document.text(phone_el))
        if phone is None:
            href = document.attr(phone_el, "href") or ""
            phone = clean_text(href.removeprefix("tel:"))

    delivery_fee, delivery_time = _extract_delivery(document, patterns)

    info = RestaurantRecord(
        url=source_url,
        restaurant_id=parse_restaurant_id(source_url),
        name=name or "Unknown",
        rating=rating,
        review_count=review_count,
        address=address,
        phone=phone,
        delivery_fee=delivery_fee,
        delivery_time=delivery_time,
        cuisine_types=_extract_cuisines(document, patterns),
    )
    logger.debug(
        "Restaurant %r: rating=%s reviews=%s fee=%s time=%s",
        info.name,
        info.rating,
        info.review_count,
        info.delivery_fee,
        info.delivery_time,
    )
    return info


def _extract_delivery(
    document: Document, patterns: SelectorPatterns
) -> tuple[float | None, str | None]:
    """Scan all delivery/fee elements; the first value found for each field wins."""
    fee: float | None = None
    window: str | None = None
    for element in document.select(", ".join(patterns.delivery)):
        text = document.text(element) or ""
        if fee is None and "$" in text:
            fee = parse_currency(text[text.index("$"):])
        if window is None and "min" in text.lower():
            window = parse_delivery_window(text)
        if fee is not None and window is not None:
            break
    return fee, window


def _extract_cuisines(document: Document, patterns: SelectorPatterns) -> tuple[str, ...]:
    cuisines = OrderedSet()
    for element in document.select(", ".join(patterns.cuisine)):
        if cuisine := clean_text(document.text(element)):
            cuisines.add(cuisine)
    return tuple(cuisines)
