"""Extraction of restaurant menus from loaded pages."""

from .cascade import CascadeHit, CascadeMatch, first_in_document, resolve_all, resolve_first
from .categories import discover_categories
from .document import Document, SoupDocument
from .items import extract_items, find_category_scope
from .patterns import DEFAULT_PATTERNS, SelectorPatterns
from .pipeline import extract_menu, extract_menu_from_html
from .restaurant import extract_restaurant_info

__all__ = [
    "CascadeHit",
    "CascadeMatch",
    "DEFAULT_PATTERNS",
    "Document",
    "SelectorPatterns",
    "SoupDocument",
    "discover_categories",
    "extract_items",
    "extract_menu",
    "extract_menu_from_html",
    "extract_restaurant_info",
    "find_category_scope",
    "first_in_document",
    "resolve_all",
    "resolve_first",
]
