"""Shared text normalization helpers for extractors.

Every parser here is total: malformed or empty input returns ``None`` instead
of raising, so callers can treat ``None`` as "field could not be determined".
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator
from urllib.parse import urlparse

_CURRENCY_RE = re.compile(r"\$?\s*(\d[\d,]*(?:\.\d+)?)")
_DECIMAL_RE = re.compile(r"\d+(?:\.\d+)?")
_REVIEW_COUNT_RE = re.compile(r"(\d[\d,]*)\s*rating", re.IGNORECASE)
_DELIVERY_WINDOW_RE = re.compile(
    r"(?<![\d.])(\d+)(?:\s*[-–]\s*(\d+))?\s*min(?:s|utes?)?\b", re.IGNORECASE
)
_TRAILING_ID_RE = re.compile(r"/(\d+)/?$")
_WHITESPACE_RE = re.compile(r"\s+")

MAX_RATING = 5.0


def clean_text(text: str | None) -> str | None:
    """Collapse whitespace and trim. Empty results become None."""
    if not text:
        return None
    cleaned = _WHITESPACE_RE.sub(" ", text).strip()
    return cleaned or None


def _to_number(raw: str) -> float | None:
    try:
        return float(raw.replace(",", ""))
    except ValueError:
        return None


def parse_currency(text: str | None) -> float | None:
    """Parse the first amount in text.

    Handles formats like:
    - "$12.50 / order"
    - "12"
    - "$1,299.00"
    """
    if not text:
        return None
    if not (match := _CURRENCY_RE.search(text)):
        return None
    return _to_number(match.group(1))


def parse_rating(text: str | None) -> tuple[float | None, int | None]:
    """Parse text into (rating, review_count).

    The rating is the first decimal number and is discarded if it falls
    outside [0, 5]. The review count is the integer right before the word
    "rating"; both are extracted independently.
    """
    if not text:
        return None, None

    rating = None
    if match := _DECIMAL_RE.search(text):
        value = _to_number(match.group(0))
        if value is not None and 0 <= value <= MAX_RATING:
            rating = value

    review_count = None
    if match := _REVIEW_COUNT_RE.search(text):
        value = _to_number(match.group(1))
        if value is not None and value.is_integer():
            review_count = int(value)

    return rating, review_count


def parse_delivery_window(text: str | None) -> str | None:
    """Parse "25-35 min" / "30 min" style delivery estimates."""
    if not text:
        return None
    if not (match := _DELIVERY_WINDOW_RE.search(text)):
        return None
    low, high = match.group(1), match.group(2)
    if high:
        return f"{int(low)}-{int(high)} min"
    return f"{int(low)} min"


def parse_restaurant_id(url: str | None) -> str | None:
    """Return the trailing numeric path segment of a restaurant URL."""
    if not url:
        return None
    path = urlparse(url).path
    if match := _TRAILING_ID_RE.search(path):
        return match.group(1)
    return None


class OrderedSet:
    """Unique strings kept in first-insertion order."""

    def __init__(self, values: Iterable[str] = ()):
        self._items: dict[str, None] = {}
        for value in values:
            self.add(value)

    def add(self, value: str) -> bool:
        """Add value; return False if it was already present."""
        if value in self._items:
            return False
        self._items[value] = None
        return True

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def to_list(self) -> list[str]:
        return list(self._items)
