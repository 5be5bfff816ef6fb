"""Data models for the menu scraper."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class RestaurantRecord:
    """Restaurant metadata scraped from a menu page."""

    url: str | None = None
    restaurant_id: str | None = None
    name: str = "Unknown"
    rating: float | None = None
    review_count: int | None = None
    address: str | None = None
    phone: str | None = None
    delivery_fee: float | None = None
    delivery_time: str | None = None
    cuisine_types: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "url": self.url,
            "restaurant_id": self.restaurant_id,
            "name": self.name,
            "rating": self.rating,
            "review_count": self.review_count,
            "address": self.address,
            "phone": self.phone,
            "delivery_fee": self.delivery_fee,
            "delivery_time": self.delivery_time,
            "cuisine_types": list(self.cuisine_types),
        }


@dataclass(frozen=True)
class Category:
    """A menu category label and the selector that produced it."""

    name: str
    index: int
    selector: str

    def to_dict(self) -> dict:
        return {"name": self.name, "index": self.index, "selector": self.selector}


@dataclass
class MenuItem:
    """A single menu item. Only built when both name and price are known."""

    category: str
    name: str
    price: float
    description: str | None = None
    image_url: str | None = None
    # Customization options exist but were not opened.
    has_modifiers: bool = False

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "category": self.category,
            "name": self.name,
            "price": self.price,
            "description": self.description,
            "image_url": self.image_url,
            "has_modifiers": self.has_modifiers,
        }


@dataclass
class ExtractionStats:
    """Diagnostic counters collected while extracting one document."""

    containers_seen: int = 0
    items_rejected: int = 0
    item_pattern: str | None = None


@dataclass(frozen=True)
class ScrapeResult:
    """Result of extracting one restaurant page."""

    source_url: str
    scraped_at: datetime
    restaurant: RestaurantRecord
    categories: tuple[Category, ...] = ()
    items: tuple[MenuItem, ...] = ()

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "source_url": self.source_url,
            "scraped_at": self.scraped_at.isoformat(),
            "restaurant": self.restaurant.to_dict(),
            "total_categories": len(self.categories),
            "total_items": len(self.items),
            "categories": [c.to_dict() for c in self.categories],
            "items": [i.to_dict() for i in self.items],
        }
