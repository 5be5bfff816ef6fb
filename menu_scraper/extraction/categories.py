"""Menu category discovery."""

from __future__ import annotations

from ..models import Category
from .cascade import resolve_all
from .document import Document
from .patterns import DEFAULT_PATTERNS, SelectorPatterns

MIN_LABEL_LENGTH = 2


def discover_categories(
    document: Document,
    patterns: SelectorPatterns = DEFAULT_PATTERNS,
) -> list[Category]:
    """Collect category labels from every category selector.

    Unlike item extraction, all selectors are merged: nav links and section
    headings usually each cover only part of the menu. Labels are unique
    (trimmed, case-sensitive) and keep first-occurrence order.
    """

    def accept(label: str) -> bool:
        if len(label) < MIN_LABEL_LENGTH:
            return False
        return not any(token in label for token in patterns.category_noise)

    return [
        Category(name=hit.text, index=hit.index, selector=hit.pattern)
        for hit in resolve_all(document, patterns.category, accept=accept)
    ]
