import tempfile
import unittest
from datetime import UTC, datetime
from pathlib import Path

from menu_scraper.db import MenuDatabase
from menu_scraper.models import Category, MenuItem, RestaurantRecord, ScrapeResult

URL = "https://www.grubhub.com/restaurant/thai-house/77"


def make_result(scraped_at: datetime, price: float) -> ScrapeResult:
    return ScrapeResult(
        source_url=URL,
        scraped_at=scraped_at,
        restaurant=RestaurantRecord(
            url=URL,
            restaurant_id="77",
            name="Thai House",
            rating=4.5,
            review_count=120,
            cuisine_types=("Thai", "Noodles"),
        ),
        categories=(Category(name="Noodles", index=0, selector="nav a"),),
        items=(
            MenuItem(category="Noodles", name="Pad Thai", price=price, has_modifiers=True),
            MenuItem(category="Noodles", name="Pad See Ew", price=13.0, description="Wide noodles"),
        ),
    )


class TestMenuDatabase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.db = MenuDatabase(db_path=Path(self._tmp.name) / "menus.db")

    def tearDown(self):
        self._tmp.cleanup()

    def test_latest_menu_roundtrip(self):
        self.db.save_results(make_result(datetime(2026, 1, 1, tzinfo=UTC), 12.0))
        self.db.save_results(make_result(datetime(2026, 2, 1, tzinfo=UTC), 12.5))

        latest = self.db.get_latest_menu(URL)
        self.assertIsNotNone(latest)
        self.assertEqual(latest["name"], "Thai House")
        self.assertEqual(latest["cuisine_types"], ["Thai", "Noodles"])
        self.assertEqual([c["name"] for c in latest["categories"]], ["Noodles"])
        self.assertEqual([i["name"] for i in latest["items"]], ["Pad Thai", "Pad See Ew"])
        self.assertEqual(latest["items"][0]["price"], 12.5)
        self.assertTrue(latest["items"][0]["has_modifiers"])
        self.assertFalse(latest["items"][1]["has_modifiers"])

    def test_history_is_append_only(self):
        self.db.save_results(make_result(datetime(2026, 1, 1, tzinfo=UTC), 12.0))
        self.db.save_results(make_result(datetime(2026, 2, 1, tzinfo=UTC), 12.5))

        history = self.db.get_scrape_history(URL)
        self.assertEqual(len(history), 2)
        self.assertEqual(history[0]["item_count"], 2)
        self.assertEqual(history[0]["category_count"], 1)

        prices = self.db.get_item_price_history(URL, "Pad Thai")
        self.assertEqual([p["price"] for p in prices], [12.5, 12.0])

        self.assertEqual(self.db.get_stats(), {"scrapes": 2, "pages": 1, "items": 4})

    def test_unknown_page(self):
        self.assertIsNone(self.db.get_latest_menu("https://example.com/none"))
        self.assertEqual(self.db.get_scrape_history("https://example.com/none"), [])
