"""Selector cascade resolution.

Pages of the same site ship different markup depending on rollout and A/B
variant, so every region is located through an ordered list of selectors.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable

from ..utils import clean_text
from .document import Document


@dataclass
class CascadeMatch:
    """Elements produced by the winning selector (empty if none matched)."""

    pattern: str | None = None
    elements: list[Any] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.elements)

    def __len__(self) -> int:
        return len(self.elements)


@dataclass(frozen=True)
class CascadeHit:
    """One element accepted by the aggregating cascade."""

    pattern: str
    index: int
    element: Any
    text: str


def resolve_first(
    document: Document,
    patterns: Iterable[str],
    scope: Any | None = None,
) -> CascadeMatch:
    """Return the matches of the first selector that finds anything.

    Later selectors are not consulted once one succeeds, even if they would
    match more elements.
    """
    for pattern in patterns:
        elements = document.select(pattern, scope)
        if elements:
            return CascadeMatch(pattern=pattern, elements=elements)
    return CascadeMatch()


def resolve_all(
    document: Document,
    patterns: Iterable[str],
    scope: Any | None = None,
    accept: Callable[[str], bool] | None = None,
) -> list[CascadeHit]:
    """Collect matches across every selector, deduplicated by normalized text.

    The first element producing a given text wins. ``accept`` filters texts
    before they are recorded, so a rejected text can still be accepted later
    from another element.
    """
    seen: set[str] = set()
    hits: list[CascadeHit] = []
    for pattern in patterns:
        for index, element in enumerate(document.select(pattern, scope)):
            text = clean_text(document.text(element))
            if not text or text in seen:
                continue
            if accept is not None and not accept(text):
                continue
            seen.add(text)
            hits.append(CascadeHit(pattern=pattern, index=index, element=element, text=text))
    return hits


def first_in_document(
    document: Document,
    patterns: Iterable[str],
    scope: Any | None = None,
) -> Any | None:
    """Return the first element, in document order, matching any selector."""
    selector = ", ".join(patterns)
    if not selector:
        return None
    elements = document.select(selector, scope)
    return elements[0] if elements else None
