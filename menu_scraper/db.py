"""SQLite database operations for storing menu scrape results."""

from __future__ import annotations

import json
import logging
import sqlite3
from pathlib import Path

from .models import ScrapeResult

logger = logging.getLogger(__name__)


class MenuDatabase:
    """SQLite database for storing scraped menus with history.

    Every saved result becomes a new scrape row; nothing is updated in place.
    """

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or Path(__file__).parent.parent / "output" / "menus.db"
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_db(self):
        """Initialize the database schema."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS scrapes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    source_url TEXT NOT NULL,
                    scraped_at TEXT NOT NULL,
                    restaurant_id TEXT,
                    name TEXT NOT NULL,
                    rating REAL,
                    review_count INTEGER,
                    address TEXT,
                    phone TEXT,
                    delivery_fee REAL,
                    delivery_time TEXT,
                    cuisine_types TEXT NOT NULL DEFAULT '[]'
                )
            """)
            # Index for efficient querying by page and time
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_scrapes_url_time
                ON scrapes (source_url, scraped_at)
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_scrapes_restaurant
                ON scrapes (restaurant_id, scraped_at)
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS menu_categories (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    scrape_id INTEGER NOT NULL,
                    position INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    selector_index INTEGER NOT NULL,
                    selector TEXT NOT NULL,
                    FOREIGN KEY (scrape_id) REFERENCES scrapes(id) ON DELETE CASCADE
                )
            """)

            conn.execute("""
                CREATE TABLE IF NOT EXISTS menu_items (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    scrape_id INTEGER NOT NULL,
                    position INTEGER NOT NULL,
                    category TEXT NOT NULL,
                    name TEXT NOT NULL,
                    price REAL NOT NULL,
                    description TEXT,
                    image_url TEXT,
                    has_modifiers INTEGER NOT NULL DEFAULT 0,
                    FOREIGN KEY (scrape_id) REFERENCES scrapes(id) ON DELETE CASCADE
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_menu_items_scrape
                ON menu_items (scrape_id, position)
            """)

            conn.commit()

    def save_results(self, result: ScrapeResult) -> int:
        """Append a scrape result and return its scrape id."""
        info = result.restaurant

        with self._connect() as conn:
            cursor = conn.execute(
                """
                INSERT INTO scrapes (
                    source_url, scraped_at, restaurant_id, name, rating, review_count,
                    address, phone, delivery_fee, delivery_time, cuisine_types
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    result.source_url,
                    result.scraped_at.isoformat(),
                    info.restaurant_id,
                    info.name,
                    info.rating,
                    info.review_count,
                    info.address,
                    info.phone,
                    info.delivery_fee,
                    info.delivery_time,
                    json.dumps(info.cuisine_types, ensure_ascii=False),
                ),
            )
            scrape_id = cursor.lastrowid

            conn.executemany(
                """
                INSERT INTO menu_categories (scrape_id, position, name, selector_index, selector)
                VALUES (?, ?, ?, ?, ?)
                """,
                [
                    (scrape_id, position, c.name, c.index, c.selector)
                    for position, c in enumerate(result.categories)
                ],
            )
            conn.executemany(
                """
                INSERT INTO menu_items (
                    scrape_id, position, category, name, price, description, image_url, has_modifiers
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        scrape_id,
                        position,
                        item.category,
                        item.name,
                        item.price,
                        item.description,
                        item.image_url,
                        int(item.has_modifiers),
                    )
                    for position, item in enumerate(result.items)
                ],
            )
            conn.commit()

        logger.info(
            "Saved %d categories and %d items for %s to %s",
            len(result.categories),
            len(result.items),
            result.source_url,
            self.db_path,
        )
        return scrape_id

    def get_latest_menu(self, source_url: str) -> dict | None:
        """Get the most recent scrape for a page with its categories and items."""
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                """
                SELECT * FROM scrapes
                WHERE source_url = ?
                ORDER BY scraped_at DESC, id DESC
                LIMIT 1
                """,
                (source_url,),
            ).fetchone()
            if row is None:
                return None

            scrape = dict(row)
            scrape["cuisine_types"] = json.loads(scrape["cuisine_types"] or "[]")
            scrape["categories"] = [
                dict(r)
                for r in conn.execute(
                    "SELECT name, selector_index, selector FROM menu_categories WHERE scrape_id = ? ORDER BY position",
                    (scrape["id"],),
                ).fetchall()
            ]
            items = []
            for r in conn.execute(
                """
                SELECT category, name, price, description, image_url, has_modifiers
                FROM menu_items WHERE scrape_id = ? ORDER BY position
                """,
                (scrape["id"],),
            ).fetchall():
                item = dict(r)
                item["has_modifiers"] = bool(item["has_modifiers"])
                items.append(item)
            scrape["items"] = items
            return scrape

    def get_scrape_history(self, source_url: str) -> list[dict]:
        """Get summary of all scrapes for a page (timestamp and counts)."""
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                """
                SELECT s.id, s.scraped_at, s.name,
                    (SELECT COUNT(*) FROM menu_categories c WHERE c.scrape_id = s.id) AS category_count,
                    (SELECT COUNT(*) FROM menu_items i WHERE i.scrape_id = s.id) AS item_count
                FROM scrapes s
                WHERE s.source_url = ?
                ORDER BY s.scraped_at DESC, s.id DESC
                """,
                (source_url,),
            )
            return [dict(row) for row in cursor.fetchall()]

    def get_item_price_history(self, source_url: str, item_name: str) -> list[dict]:
        """Get the price of one item across all scrapes of a page."""
        with self._connect() as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.execute(
                """
                SELECT s.scraped_at, i.category, i.price
                FROM menu_items i
                JOIN scrapes s ON s.id = i.scrape_id
                WHERE s.source_url = ? AND i.name = ?
                ORDER BY s.scraped_at DESC, i.position
                """,
                (source_url, item_name),
            )
            return [dict(row) for row in cursor.fetchall()]

    def get_stats(self) -> dict:
        """Get row counts across all scrapes."""
        with self._connect() as conn:
            scrape_count = conn.execute("SELECT COUNT(*) FROM scrapes").fetchone()[0]
            page_count = conn.execute("SELECT COUNT(DISTINCT source_url) FROM scrapes").fetchone()[0]
            item_count = conn.execute("SELECT COUNT(*) FROM menu_items").fetchone()[0]
            return {
                "scrapes": scrape_count,
                "pages": page_count,
                "items": item_count,
            }
