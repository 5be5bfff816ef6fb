import unittest
from datetime import UTC, datetime

from menu_scraper.extraction import (
    SelectorPatterns,
    SoupDocument,
    extract_menu,
    extract_menu_from_html,
)

URL = "https://www.grubhub.com/restaurant/tonys-pizza/1234"


class TestExtractMenu(unittest.TestCase):
    def test_one_category_with_one_valid_item(self):
        html = """
        <html><body>
          <h1>Tony's Pizza</h1>
          <nav><a href="#appetizers">Appetizers</a></nav>
          <div class="menu-content">
            <div class="menu-item"><h3>Garlic Knots</h3><p>Six knots</p><span class="price">$5.99</span></div>
            <div class="menu-item"><h3>Mystery Dish</h3><p>Ask your server</p></div>
          </div>
        </body></html>
        """
        result = extract_menu_from_html(html, URL)

        self.assertEqual([c.name for c in result.categories], ["Appetizers"])
        self.assertEqual(len(result.items), 1)
        item = result.items[0]
        self.assertEqual(item.category, "Appetizers")
        self.assertEqual(item.name, "Garlic Knots")
        self.assertEqual(item.price, 5.99)
        self.assertEqual(item.description, "Six knots")
        self.assertEqual(result.restaurant.name, "Tony's Pizza")
        self.assertEqual(result.restaurant.restaurant_id, "1234")
        self.assertEqual(result.source_url, URL)

    def test_items_scoped_to_their_section(self):
        html = """
        <div class="category-nav"><a href="#a">Appetizers</a><a href="#d">Drinks</a></div>
        <div class="menu-sections">
          <section class="menu-section">
            <h2>Appetizers</h2>
            <div class="menu-item"><h3>Wings</h3><span class="price">$9</span></div>
          </section>
          <section class="menu-section">
            <h2>Drinks</h2>
            <div class="menu-item"><h3>Lemonade</h3><span class="price">$3</span></div>
          </section>
        </div>
        """
        result = extract_menu_from_html(html, URL)
        self.assertEqual(
            [(i.category, i.name) for i in result.items],
            [("Appetizers", "Wings"), ("Drinks", "Lemonade")],
        )

    def test_category_without_section_searches_whole_page(self):
        html = """
        <nav><a href="#a">Lunch</a><a href="#b">Dinner</a></nav>
        <div class="menu-item"><h3>Soup</h3><span class="price">$4</span></div>
        """
        result = extract_menu_from_html(html, URL)
        self.assertEqual(
            [(i.category, i.name) for i in result.items],
            [("Lunch", "Soup"), ("Dinner", "Soup")],
        )

    def test_repeatable(self):
        html = '<nav><a href="#a">Mains</a></nav><div class="menu-item"><h3>Stew</h3><span class="price">$11</span></div>'
        when = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)
        doc = SoupDocument(html)
        first = extract_menu(doc, URL, scraped_at=when)
        second = extract_menu(doc, URL, scraped_at=when)
        self.assertEqual(first.to_dict(), second.to_dict())
        self.assertEqual(first.to_dict()["scraped_at"], "2026-01-02T03:04:05+00:00")

    def test_empty_page(self):
        result = extract_menu_from_html("", URL)
        self.assertEqual(result.restaurant.name, "Unknown")
        self.assertEqual(result.categories, ())
        self.assertEqual(result.items, ())
        self.assertIsNotNone(result.scraped_at.tzinfo)


class FakeElement:
    def __init__(self, tag, text="", attrs=None, children=()):
        self.tag = tag
        self.own_text = text
        self.attrs = attrs or {}
        self.children = list(children)

    def descendants(self):
        for child in self.children:
            yield child
            yield from child.descendants()

    def full_text(self):
        return self.own_text + "".join(child.full_text() for child in self.children)


class FakeDocument:
    """In-memory document that matches patterns by tag name only."""

    def __init__(self, root):
        self.root = root

    def select(self, pattern, scope=None):
        tags = {p.strip() for p in pattern.split(",")}
        root = scope if scope is not None else self.root
        return [el for el in root.descendants() if el.tag in tags]

    def text(self, element):
        return element.full_text()

    def attr(self, element, name):
        return element.attrs.get(name)


class TestExtractMenuWithFakeDocument(unittest.TestCase):
    def test_any_document_implementation_works(self):
        patterns = SelectorPatterns(
            restaurant_name=("title",),
            rating=("stars",),
            address=("addr",),
            phone=("phone",),
            delivery=("eta",),
            cuisine=("tag",),
            category=("tab",),
            category_section=("section",),
            category_section_heading=("heading",),
            item_container=("dish",),
            item_name=("dish-name",),
            item_description=("blurb",),
            item_price=("cost",),
            item_image=("photo",),
            item_customize=("options",),
        )
        root = FakeElement(
            "root",
            children=[
                FakeElement("title", "Noodle Bar"),
                FakeElement("stars", "4.8 (90 ratings)"),
                FakeElement("eta", "$0 delivery · 15-25 min"),
                FakeElement("tag", "Japanese"),
                FakeElement("tab", "Noodles"),
                FakeElement("tab", "Noodles"),
                FakeElement("tab", "S"),
                FakeElement(
                    "dish",
                    children=[
                        FakeElement("dish-name", "Ramen"),
                        FakeElement("cost", "$14"),
                        FakeElement("photo", attrs={"src": "/ramen.png"}),
                        FakeElement("options"),
                    ],
                ),
                FakeElement("dish", children=[FakeElement("dish-name", "Udon")]),
            ],
        )

        result = extract_menu(FakeDocument(root), "https://example.com/noodle-bar", patterns)

        info = result.restaurant
        self.assertEqual(info.name, "Noodle Bar")
        self.assertIsNone(info.restaurant_id)
        self.assertEqual((info.rating, info.review_count), (4.8, 90))
        self.assertEqual((info.delivery_fee, info.delivery_time), (0.0, "15-25 min"))
        self.assertEqual(info.cuisine_types, ("Japanese",))
        self.assertEqual([c.name for c in result.categories], ["Noodles"])
        self.assertEqual(len(result.items), 1)
        ramen = result.items[0]
        self.assertEqual((ramen.category, ramen.name, ramen.price), ("Noodles", "Ramen", 14.0))
        self.assertEqual(ramen.image_url, "https://example.com/ramen.png")
        self.assertTrue(ramen.has_modifiers)
