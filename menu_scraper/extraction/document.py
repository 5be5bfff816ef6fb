"""Read-only document interface the extractors query.

Extractors only need three capabilities: find elements matching a pattern
inside a scope, read an element's text, and read an attribute. Anything that
provides those (a parsed HTML snapshot, a fake in tests) can be extracted.
"""

from __future__ import annotations

from typing import Any, Protocol

from bs4 import BeautifulSoup, Tag


class Document(Protocol):
    """Minimal query surface over a loaded page."""

    def select(self, pattern: str, scope: Any | None = None) -> list[Any]:
        """Return elements matching pattern under scope (whole document if None)."""
        ...

    def text(self, element: Any) -> str:
        """Return the element's full text content."""
        ...

    def attr(self, element: Any, name: str) -> str | None:
        """Return an attribute value, or None if it is missing."""
        ...


class SoupDocument:
    """Document backed by a BeautifulSoup snapshot of the rendered HTML.

    Patterns are CSS selectors; soupsieve handles ``:has()``, ``:not()`` and
    substring attribute matches. Queries never modify the tree.
    """

    def __init__(self, html: str, url: str | None = None):
        self.url = url
        self._soup = BeautifulSoup(html or "", "lxml")

    def select(self, pattern: str, scope: Tag | None = None) -> list[Tag]:
        root = scope if scope is not None else self._soup
        return list(root.select(pattern))

    def text(self, element: Tag) -> str:
        # Separate child strings so adjacent inline values ("$2.99" "25 min")
        # do not run together in minified markup.
        return element.get_text(" ")

    def attr(self, element: Tag, name: str) -> str | None:
        value = element.get(name)
        if value is None:
            return None
        if isinstance(value, list):
            # Multi-valued attributes such as class come back as lists.
            return " ".join(value)
        return str(value)
