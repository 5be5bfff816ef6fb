import json
import tempfile
import unittest
from pathlib import Path

from menu_scraper.extraction import DEFAULT_PATTERNS, SelectorPatterns


class TestSelectorPatterns(unittest.TestCase):
    def test_defaults_keep_priority_order(self):
        self.assertEqual(DEFAULT_PATTERNS.item_container[0], '[data-testid*="menu-item"]')
        self.assertEqual(DEFAULT_PATTERNS.item_container[-1], "button:has(h3)")
        self.assertEqual(DEFAULT_PATTERNS.category_noise, ("Skip",))

    def test_from_dict_overrides_only_given_fields(self):
        patterns = SelectorPatterns.from_dict(
            {"item_container": ['[data-test="dish"]'], "category_noise": "Skip"}
        )
        self.assertEqual(patterns.item_container, ('[data-test="dish"]',))
        self.assertEqual(patterns.category_noise, ("Skip",))
        self.assertEqual(patterns.rating, DEFAULT_PATTERNS.rating)

    def test_unknown_key_rejected(self):
        with self.assertRaises(ValueError):
            SelectorPatterns.from_dict({"menu_items": ["div"]})

    def test_invalid_selector_rejected(self):
        with self.assertRaises(ValueError):
            SelectorPatterns.from_dict({"rating": ["div["]})

    def test_empty_list_entries_rejected(self):
        with self.assertRaises(ValueError):
            SelectorPatterns.from_dict({"rating": [""]})

    def test_from_file(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "patterns.json"
            path.write_text(json.dumps({"restaurant_name": ["h1.title", "h1"]}), encoding="utf-8")
            patterns = SelectorPatterns.from_file(path)
        self.assertEqual(patterns.restaurant_name, ("h1.title", "h1"))

    def test_from_file_requires_object(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "patterns.json"
            path.write_text("[1, 2]", encoding="utf-8")
            with self.assertRaises(ValueError):
                SelectorPatterns.from_file(path)
            path.write_text("{not json", encoding="utf-8")
            with self.assertRaises(ValueError):
                SelectorPatterns.from_file(path)
