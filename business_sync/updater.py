"""Rewrite the AUTO-UPDATE regions of one HTML page from the business profile."""

import os
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .anchors import (
    ADDRESS_BAR,
    BRAND_HEADER,
    CONTACT_ADDRESS,
    CONTACT_PHONE,
    HOURS_TABLE,
    NAVIGATION_BRAND,
    STRUCTURED_DATA,
    parse_document,
)
from .markup import address_bar_text, contact_address_html, contact_phone_text, hours_table_html
from .models import BusinessProfile
from .structured_data import structured_data_json

SCRIPT_INDENT = "    "


@dataclass(frozen=True)
class Page:
    filename: str
    is_home: bool = False  # structured data keeps servesCuisine
    is_contact: bool = False  # hours table and contact details


PAGES = (
    Page("index.html", is_home=True),
    Page("contact.html", is_contact=True),
    Page("specials.html"),
    Page("services.html"),
)


def _script_interior(json_text: str) -> str:
    lines = json_text.split("\n")
    indented = "\n".join([lines[0]] + [SCRIPT_INDENT + line for line in lines[1:]])
    return f"\n{SCRIPT_INDENT}{indented}\n{SCRIPT_INDENT}"


def region_contents(page: Page, profile: BusinessProfile, today: date) -> dict[str, str]:
    """New interior for every region *page* manages, keyed by region name."""
    json_text = structured_data_json(
        profile,
        today,
        overrides=profile.override_for(page.filename),
        include_cuisine=page.is_home,
    )
    contents = {
        STRUCTURED_DATA: _script_interior(json_text),
        ADDRESS_BAR: address_bar_text(profile),
        NAVIGATION_BRAND: profile.short_name,
        BRAND_HEADER: profile.name,
    }
    if page.is_contact:
        contents[HOURS_TABLE] = hours_table_html(profile, today)
        contents[CONTACT_PHONE] = contact_phone_text(profile)
        contents[CONTACT_ADDRESS] = contact_address_html(profile)
    return contents


def patch_html(text: str, page: Page, profile: BusinessProfile, today: date) -> tuple[str, bool]:
    """Return (new text, changed) for one page's HTML."""
    document = parse_document(text)
    changed = False
    for name, interior in region_contents(page, profile, today).items():
        if document.substitute(name, interior):
            changed = True
    return document.render(), changed


def update_page(path: Path, page: Page, profile: BusinessProfile, today: date) -> bool:
    """
    Patch the HTML file at *path* in place.

    The file is only rewritten when a region's content actually changed. The
    new text goes to a temporary file beside the page which then replaces it,
    so a failed write leaves the original page intact.

    Returns:
        True if the file was rewritten
    """
    # newline="" keeps the page's own line endings untouched
    with path.open("r", encoding="utf-8", newline="") as f:
        text = f.read()

    new_text, changed = patch_html(text, page, profile, today)
    if changed:
        _replace_file(path, new_text)
    return changed


def _replace_file(path: Path, text: str) -> None:
    tmp = tempfile.NamedTemporaryFile(
        "w",
        encoding="utf-8",
        newline="",
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".tmp",
        delete=False,
    )
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(text)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
