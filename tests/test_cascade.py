import unittest

from menu_scraper.extraction import SoupDocument, first_in_document, resolve_all, resolve_first

HTML = """
<div class="a">one</div>
<div class="b">two</div>
<div class="b">three</div>
<div class="b">four</div>
<div class="c">two</div>
<div class="c">five</div>
"""


class TestResolveFirst(unittest.TestCase):
    def setUp(self):
        self.doc = SoupDocument(HTML)

    def test_first_non_empty_pattern_wins(self):
        match = resolve_first(self.doc, [".a", ".b", ".c"])
        self.assertEqual(match.pattern, ".a")
        self.assertEqual([self.doc.text(e) for e in match.elements], ["one"])

    def test_skips_empty_patterns(self):
        match = resolve_first(self.doc, [".missing", ".b"])
        self.assertEqual(match.pattern, ".b")
        self.assertEqual(len(match), 3)

    def test_all_empty_is_empty_not_error(self):
        match = resolve_first(self.doc, [".x", ".y"])
        self.assertIsNone(match.pattern)
        self.assertEqual(match.elements, [])
        self.assertFalse(match)

    def test_scope_limits_search(self):
        doc = SoupDocument('<ul id="one"><li>a</li></ul><ul id="two"><li>b</li><li>c</li></ul>')
        scope = doc.select("#two")[0]
        match = resolve_first(doc, ["li"], scope)
        self.assertEqual([doc.text(e) for e in match.elements], ["b", "c"])


class TestResolveAll(unittest.TestCase):
    def test_aggregates_and_dedups_by_text(self):
        doc = SoupDocument(HTML)
        hits = resolve_all(doc, [".b", ".c", ".a"])
        self.assertEqual([h.text for h in hits], ["two", "three", "four", "five", "one"])
        five = hits[3]
        self.assertEqual((five.pattern, five.index), (".c", 1))

    def test_rejected_text_can_be_accepted_later(self):
        doc = SoupDocument(HTML)
        hits = resolve_all(doc, [".b", ".c"], accept=lambda text: text != "four")
        self.assertEqual([h.text for h in hits], ["two", "three", "five"])

    def test_nested_text_is_space_joined_and_collapsed(self):
        doc = SoupDocument('<a class="t"><b>Dim</b><i>Sum</i></a><a class="t">Dim \n  Sum</a>')
        hits = resolve_all(doc, [".t"])
        self.assertEqual([h.text for h in hits], ["Dim Sum"])


class TestFirstInDocument(unittest.TestCase):
    def test_document_order_over_union(self):
        doc = SoupDocument('<div><span class="x">late</span></div><h3>early?</h3>')
        element = first_in_document(doc, ["h3", ".x"])
        self.assertEqual(doc.text(element), "late")

    def test_no_patterns(self):
        self.assertIsNone(first_in_document(SoupDocument(HTML), []))
