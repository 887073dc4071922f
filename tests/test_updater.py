import json
import tempfile
import unittest
from unittest import mock
from dataclasses import replace
from datetime import date
from pathlib import Path

from business_sync.anchors import STRUCTURED_DATA, parse_document
from business_sync.config import load_profile
from business_sync.markup import hours_table_html
from business_sync.models import TemporaryClosure
from business_sync.updater import PAGES, Page, patch_html, update_page

ROOT = Path(__file__).resolve().parents[1]
PROFILE = load_profile(ROOT / "business_data.json")
TODAY = date(2025, 11, 3)
HOME, CONTACT, SPECIALS, SERVICES = PAGES

PAGE_HTML = """<!DOCTYPE html>
<html>
<head>
  <!-- AUTO-UPDATE: Structured Data -->
  <script type="application/ld+json">
    {}
    </script>
  <!-- END AUTO-UPDATE -->
</head>
<body>
  <!-- AUTO-UPDATE: Brand header -->
  <div class="brand">Old Market</div>
  <!-- END AUTO-UPDATE -->
  <!-- AUTO-UPDATE: Address bar -->
  <div class="address-bar">1 Old Road | Nowhere, Ontario A1A 1A1 | (555) 555-0100</div>
  <!-- END AUTO-UPDATE -->
  <!-- AUTO-UPDATE: Navigation brand -->
  <a class="navbar-brand" href="index.html">Old</a>
  <!-- END AUTO-UPDATE -->
  <!-- AUTO-UPDATE: Contact phone -->
  <p>Phone:<br><strong>(555) 555-0100</strong></p>
  <!-- END AUTO-UPDATE -->
  <!-- AUTO-UPDATE: Contact address -->
  <p>Address:<br><strong>1 Old Road<br>Nowhere, Ontario A1A 1A1</strong></p>
  <!-- END AUTO-UPDATE -->
  <!-- AUTO-UPDATE: Business hours table -->
  <table class="business-hours-table"></table>
  <!-- END AUTO-UPDATE -->
  <p>Unrelated content</p>
</body>
</html>
"""


def structured_data(text: str) -> dict:
    [region] = parse_document(text).regions(STRUCTURED_DATA)
    return json.loads(region.interior)


class PatchHtmlTests(unittest.TestCase):
    def test_common_regions_on_every_page(self):
        for page in PAGES:
            text, changed = patch_html(PAGE_HTML, page, PROFILE, TODAY)
            self.assertTrue(changed)
            self.assertIn('<div class="brand">Christopher\'s Meat Market</div>', text)
            self.assertIn('<a class="navbar-brand" href="index.html">Christopher\'s</a>', text)
            self.assertIn(
                '<div class="address-bar">6146 Perth Street | Richmond, Ontario K0A 2Z0 | (613) 838-8800</div>',
                text,
            )
            self.assertIn("<p>Unrelated content</p>", text)

    def test_structured_data_block_layout(self):
        text, _ = patch_html(PAGE_HTML, HOME, PROFILE, TODAY)
        self.assertIn(
            '<!-- AUTO-UPDATE: Structured Data -->\n  <script type="application/ld+json">\n    {\n'
            '      "@context": "https://schema.org",\n      "@type": "ButcherShop",\n',
            text,
        )
        self.assertIn('\n    }\n    </script>\n  <!-- END AUTO-UPDATE -->', text)

    def test_cuisine_only_on_home_page(self):
        home, _ = patch_html(PAGE_HTML, HOME, PROFILE, TODAY)
        self.assertEqual(structured_data(home)["servesCuisine"], "Butcher Shop")
        for page in (CONTACT, SPECIALS, SERVICES):
            text, _ = patch_html(PAGE_HTML, page, PROFILE, TODAY)
            self.assertNotIn("servesCuisine", structured_data(text))

    def test_page_override_description(self):
        text, _ = patch_html(PAGE_HTML, SPECIALS, PROFILE, TODAY)
        self.assertEqual(
            structured_data(text)["description"],
            PROFILE.override_for("specials.html").description,
        )

    def test_contact_regions_only_on_contact_page(self):
        contact, _ = patch_html(PAGE_HTML, CONTACT, PROFILE, TODAY)
        self.assertIn("<p>Phone:<br><strong>(613) 838-8800</strong></p>", contact)
        self.assertIn("<p>Address:<br><strong>6146 Perth Street<br>Richmond, Ontario K0A 2Z0</strong></p>", contact)
        self.assertIn(
            "<!-- AUTO-UPDATE: Business hours table -->"
            + hours_table_html(PROFILE, TODAY)
            + "<!-- END AUTO-UPDATE -->",
            contact,
        )

        services, _ = patch_html(PAGE_HTML, SERVICES, PROFILE, TODAY)
        self.assertIn("<p>Phone:<br><strong>(555) 555-0100</strong></p>", services)
        self.assertIn('<table class="business-hours-table"></table>', services)

    def test_second_pass_changes_nothing(self):
        for page in PAGES:
            once, _ = patch_html(PAGE_HTML, page, PROFILE, TODAY)
            twice, changed = patch_html(once, page, PROFILE, TODAY)
            self.assertFalse(changed)
            self.assertEqual(once, twice)

    def test_page_without_regions(self):
        text, changed = patch_html("<html><body>static</body></html>", HOME, PROFILE, TODAY)
        self.assertFalse(changed)
        self.assertEqual(text, "<html><body>static</body></html>")

    def test_active_closure(self):
        closure = TemporaryClosure(start_date=date(2025, 12, 24), end_date=date(2025, 12, 31))
        profile = replace(PROFILE, temporary_closure=closure)
        text, _ = patch_html(PAGE_HTML, CONTACT, profile, date(2025, 12, 25))
        self.assertNotIn("openingHoursSpecification", structured_data(text))
        self.assertIn('<div class="alert alert-warning', text)
        self.assertIn("Regular hours (currently closed)", text)


class UpdatePageTests(unittest.TestCase):
    def test_rewrites_only_when_changed(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "contact.html"
            path.write_text(PAGE_HTML, encoding="utf-8")

            self.assertTrue(update_page(path, CONTACT, PROFILE, TODAY))
            first = path.read_text(encoding="utf-8")
            self.assertIn("(613) 838-8800", first)

            self.assertFalse(update_page(path, CONTACT, PROFILE, TODAY))
            self.assertEqual(path.read_text(encoding="utf-8"), first)

    def test_keeps_crlf_line_endings(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "index.html"
            path.write_bytes(PAGE_HTML.replace("\n", "\r\n").encode("utf-8"))

            update_page(path, HOME, PROFILE, TODAY)

            data = path.read_bytes()
            self.assertIn(b"<p>Unrelated content</p>\r\n</body>\r\n</html>\r\n", data)
            self.assertTrue(data.startswith(b"<!DOCTYPE html>\r\n<html>\r\n"))

    def test_failed_encode_leaves_page_intact(self):
        # a lone surrogate can come from a "\ud800" escape in the JSON config
        profile = replace(PROFILE, name="Broken \ud800 Market")
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "contact.html"
            path.write_text(PAGE_HTML, encoding="utf-8")
            original = path.read_bytes()

            with self.assertRaises(UnicodeEncodeError):
                update_page(path, CONTACT, profile, TODAY)

            self.assertEqual(path.read_bytes(), original)
            self.assertEqual([p.name for p in Path(tmp).iterdir()], ["contact.html"])

    def test_failed_replace_leaves_page_intact(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "index.html"
            path.write_text(PAGE_HTML, encoding="utf-8")
            original = path.read_bytes()

            with mock.patch("business_sync.updater.os.replace", side_effect=PermissionError("read-only")):
                with self.assertRaises(PermissionError):
                    update_page(path, HOME, PROFILE, TODAY)

            self.assertEqual(path.read_bytes(), original)
            self.assertEqual([p.name for p in Path(tmp).iterdir()], ["index.html"])

    def test_custom_page_definition(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "about.html"
            path.write_text(PAGE_HTML, encoding="utf-8")
            self.assertTrue(update_page(path, Page("about.html"), PROFILE, TODAY))


if __name__ == "__main__":
    unittest.main()
