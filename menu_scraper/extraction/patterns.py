"""Priority-ordered selector lists used by the extractors.

Earlier selectors in each list are the more specific ones; later entries are
fallbacks for older or regional page variants. The lists can be overridden
from a JSON file when the markup drifts.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

import soupsieve


@dataclass(frozen=True)
class SelectorPatterns:
    """Selector lists for every extracted region."""

    # Page readiness (used by navigation before extraction starts)
    menu_ready: tuple[str, ...] = (
        '[data-testid="menu-container"]',
        ".menu-content",
        '[class*="menu"]',
    )

    # Restaurant info
    restaurant_name: tuple[str, ...] = ("h1",)
    rating: tuple[str, ...] = ('[class*="rating"]', '[aria-label*="rating"]')
    address: tuple[str, ...] = ('[class*="address"]', 'a[href*="maps"]')
    phone: tuple[str, ...] = ('a[href^="tel:"]',)
    delivery: tuple[str, ...] = ('[class*="delivery"]', '[class*="fee"]')
    cuisine: tuple[str, ...] = ('[class*="cuisine"]', '[class*="category-tag"]')

    # Categories
    category: tuple[str, ...] = (
        'nav a:not([href="#"])',
        'button[role="tab"]',
        '[class*="category-nav"] a',
        '[class*="menu-section"] h2',
    )
    category_noise: tuple[str, ...] = ("Skip",)
    category_section: tuple[str, ...] = ('[class*="menu-section"]', "section")
    category_section_heading: tuple[str, ...] = ("h2", "h3")

    # Menu items
    item_container: tuple[str, ...] = (
        '[data-testid*="menu-item"]',
        '[class*="menu-item"]',
        '[class*="MenuItem"]',
        'div[role="button"]:has(h3)',
        "button:has(h3)",
    )
    item_name: tuple[str, ...] = ("h3", "h4", '[class*="item-name"]')
    item_description: tuple[str, ...] = ("p", '[class*="description"]')
    item_price: tuple[str, ...] = ('[class*="price"]', "span:last-child")
    item_image: tuple[str, ...] = ("img",)
    item_customize: tuple[str, ...] = ('[class*="customize"]',)
    item_customize_token: str = "Customize"

    @classmethod
    def from_dict(cls, data: dict, base: SelectorPatterns | None = None) -> SelectorPatterns:
        """Build patterns from a mapping of field name to selector list.

        Fields not present keep the value from ``base`` (defaults if None).
        """
        base = base or cls()
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown selector pattern keys: {', '.join(unknown)}")

        overrides: dict[str, object] = {}
        for key, value in data.items():
            if key == "item_customize_token":
                if not isinstance(value, str) or not value:
                    raise ValueError("item_customize_token must be a non-empty string")
                overrides[key] = value
                continue
            if isinstance(value, str):
                value = [value]
            if not isinstance(value, list) or not all(isinstance(v, str) and v.strip() for v in value):
                raise ValueError(f"Pattern list '{key}' must be a list of non-empty strings")
            if key != "category_noise":
                for selector in value:
                    try:
                        soupsieve.compile(selector)
                    except soupsieve.SelectorSyntaxError as exc:
                        raise ValueError(f"Invalid selector in '{key}': {selector!r} ({exc})") from exc
            overrides[key] = tuple(value)

        return replace(base, **overrides)

    @classmethod
    def from_file(cls, path: Path | str) -> SelectorPatterns:
        """Load overrides from a JSON file."""
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in pattern file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"Pattern file {path} must contain a JSON object")
        return cls.from_dict(data)


DEFAULT_PATTERNS = SelectorPatterns()
