"""
Verification Scenarios for page -> search document mapping
"""

import unittest
from unittest.mock import MagicMock

from access.rootline import AccessRootline
from indexer.builder import DocumentBuilder
from indexer.models import Page, SearchDocument
from sites.models import Site, SiteResolutionError
from variants.id_builder import VariantIdBuilder

HTML = """
<html><head><title>Contact us</title></head>
<body>
<nav>Menu</nav>
<!--TYPO3SEARCH_begin-->
<h1>Contact</h1>
<p>Write to <strong>support</strong>.</p>
<!--TYPO3SEARCH_end-->
</body></html>
"""

class TestDocumentBuilder(unittest.TestCase):
    def setUp(self):
        self.site = Site(root_page_id=1, domain="www.example.com", site_hash="sitehash")
        self.site_repository = MagicMock()
        self.site_repository.get_site_by_page_id.return_value = self.site
        self.variant_id_builder = VariantIdBuilder("systemhash")
        self.builder = DocumentBuilder(self.variant_id_builder, self.site_repository)

    def make_page(self, uid=42, **record):
        base = {"pid": 1, "crdate": 1700000000, "SYS_LASTCHANGED": 1700000500, "endtime": 0}
        base.update(record)
        return Page(id=uid, type=0, sys_language_uid=0, record=base, content=HTML)

    def test_public_page_without_optional_fields(self):
        """Scenario: id=42, no keywords, no endtime, no mount point, empty access rootline."""
        document = self.builder.from_page(self.make_page(), "https://www.example.com/contact", AccessRootline(""), "")

        self.assertNotIn("access", document)
        self.assertNotIn("endtime", document)
        self.assertNotIn("keywords", document)
        self.assertEqual(document["rootline"], "42")
        self.assertEqual(document["id"], "sitehash/pages/42/0/0/0")
        self.site_repository.get_site_by_page_id.assert_called_once_with(42)

    def test_identity_and_system_fields(self):
        document = self.builder.from_page(self.make_page(), "https://www.example.com/contact", AccessRootline(""), "")

        self.assertEqual(document["site"], "www.example.com")
        self.assertEqual(document["siteHash"], "sitehash")
        self.assertEqual(document["appKey"], "EXT:solr")
        self.assertEqual(document["type"], "pages")
        self.assertEqual(document["uid"], 42)
        self.assertEqual(document["pid"], 1)
        self.assertEqual(document["variantId"], "systemhash/pages/42")
        self.assertEqual(document["typeNum"], 0)
        self.assertEqual(document["created"], 1700000000)
        self.assertEqual(document["changed"], 1700000500)
        self.assertEqual(document["url"], "https://www.example.com/contact")

    def test_content_fields(self):
        page = self.make_page(subtitle="Sub", nav_title="Nav", author="Jo", description="Desc", abstract="Abs")
        document = self.builder.from_page(page, "https://www.example.com/contact", AccessRootline(""), "")

        self.assertEqual(document["title"], "Contact us")
        self.assertEqual(document["subTitle"], "Sub")
        self.assertEqual(document["navTitle"], "Nav")
        self.assertEqual(document["author"], "Jo")
        self.assertEqual(document["description"], "Desc")
        self.assertEqual(document["abstract"], "Abs")
        self.assertEqual(document["content"], "Contact Write to support .")
        self.assertEqual(document["tagsH1"], "Contact")
        self.assertEqual(document["tagsInline"], "support")

    def test_keywords_are_trimmed_and_deduplicated(self):
        """Scenario: keywords 'a, b, a, ,c' -> ['a', 'b', 'c'] in first-seen order."""
        page = self.make_page(uid=7, keywords="a, b, a, ,c")
        document = self.builder.from_page(page, "https://www.example.com/7", AccessRootline(""), "")

        self.assertEqual(document["keywords"], ["a", "b", "c"])

    def test_empty_keyword_string_writes_no_values(self):
        page = self.make_page(keywords=" , ")
        document = self.builder.from_page(page, "https://www.example.com/x", AccessRootline(""), "")

        self.assertNotIn("keywords", document)

    def test_none_keywords_skipped(self):
        page = self.make_page(keywords=None)
        document = self.builder.from_page(page, "https://www.example.com/x", AccessRootline(""), "")

        self.assertNotIn("keywords", document)

    def test_missing_endtime_column_omits_field(self):
        """Scenario: record without an endtime column is treated as never expiring."""
        record = {"pid": 1, "crdate": 1700000000, "SYS_LASTCHANGED": 1700000500}
        page = Page(id=42, record=record, content=HTML)
        document = self.builder.from_page(page, "https://www.example.com/x", AccessRootline(""), "")

        self.assertNotIn("endtime", document)
        self.assertEqual(document["rootline"], "42")

    def test_mount_point_extends_rootline_and_id(self):
        """Scenario: mount point '5-3' -> rootline '<pageId>,5-3'."""
        document = self.builder.from_page(self.make_page(), "https://www.example.com/m", AccessRootline(""), "5-3")

        self.assertEqual(document["rootline"], "42,5-3")
        self.assertEqual(document["id"], "sitehash/pages/42/5-3/0/0/0")

    def test_access_and_endtime_written_when_set(self):
        rootline = AccessRootline("1:3/c:3,5")
        document = self.builder.from_page(self.make_page(endtime=1800000000), "https://www.example.com/p", rootline, "")

        self.assertEqual(document["access"], "1:3/c:3,5")
        self.assertEqual(document["endtime"], 1800000000)
        self.assertEqual(document["id"], "sitehash/pages/42/0/0/3,5")

    def test_deterministic_for_identical_input(self):
        rootline = AccessRootline("1:2,4")
        first = self.builder.from_page(self.make_page(keywords="x,y"), "https://www.example.com/d", rootline, "9-1")
        second = self.builder.from_page(self.make_page(keywords="x,y"), "https://www.example.com/d", rootline, "9-1")

        self.assertIsInstance(first, SearchDocument)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_group_order_changes_id(self):
        """Group cleaning keeps input order, so a reordered group set gives another id."""
        first = self.builder.from_page(self.make_page(), "u", AccessRootline("1:2,4"), "")
        second = self.builder.from_page(self.make_page(), "u", AccessRootline("1:4,2"), "")

        self.assertNotEqual(first["id"], second["id"])

    def test_site_resolution_failure_propagates(self):
        self.site_repository.get_site_by_page_id.side_effect = SiteResolutionError(99)
        extractor_factory = MagicMock()
        builder = DocumentBuilder(self.variant_id_builder, self.site_repository, extractor_factory)

        with self.assertRaises(SiteResolutionError) as cm:
            builder.from_page(self.make_page(uid=99), "u", AccessRootline(""), "")

        self.assertEqual(cm.exception.page_id, 99)
        extractor_factory.assert_not_called()

    def test_tag_content_overwrites_fixed_field(self):
        extractor = MagicMock()
        extractor.get_page_title.return_value = "Title"
        extractor.get_indexable_content.return_value = "Body"
        extractor.get_tag_content.return_value = {"title": "From tag", "tagsA": "Link"}
        builder = DocumentBuilder(self.variant_id_builder, self.site_repository, lambda html: extractor)

        with self.assertLogs("indexer.builder", level="WARNING"):
            document = builder.from_page(self.make_page(), "u", AccessRootline(""), "")

        self.assertEqual(document["title"], "From tag")
        self.assertEqual(document["tagsA"], "Link")

if __name__ == "__main__":
    unittest.main()
