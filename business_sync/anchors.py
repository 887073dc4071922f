"""Split an HTML page into literal text and AUTO-UPDATE regions.

A region is written in the page as

    <!-- AUTO-UPDATE: Address bar -->
    <div class="address-bar">...</div>
    <!-- END AUTO-UPDATE -->

The page is parsed once into segments; regions are then replaced by name and
the page is rendered back, so text outside a region's interior is returned
byte for byte.
"""

import re
from dataclasses import dataclass, field

END_MARKER = "<!-- END AUTO-UPDATE -->"

STRUCTURED_DATA = "Structured Data"
ADDRESS_BAR = "Address bar"
NAVIGATION_BRAND = "Navigation brand"
BRAND_HEADER = "Brand header"
HOURS_TABLE = "Business hours table"
CONTACT_PHONE = "Contact phone"
CONTACT_ADDRESS = "Contact address"

# Body may not contain another opening marker, so each region ends at its
# nearest END marker and never spans into the next region.
REGION_PATTERN = re.compile(
    r"<!-- AUTO-UPDATE: (?P<name>[^<>]+?) -->"
    r"(?P<body>(?:(?!<!-- AUTO-UPDATE: ).)*?)"
    + re.escape(END_MARKER),
    re.DOTALL,
)

# Each shape splits a region body into (element open, interior, element close).
REGION_SHAPES = {
    STRUCTURED_DATA: re.compile(r'(\s*<script type="application/ld\+json">)(.*?)(</script>\s*)', re.DOTALL),
    ADDRESS_BAR: re.compile(r'(\s*<div class="address-bar">)([^<]+)(</div>\s*)'),
    NAVIGATION_BRAND: re.compile(r'(\s*<a class="navbar-brand"[^>]*>)([^<]+)(</a>\s*)'),
    BRAND_HEADER: re.compile(r'(\s*<div class="brand">)([^<]+)(</div>\s*)'),
    HOURS_TABLE: re.compile(r"()(.*)()", re.DOTALL),
    CONTACT_PHONE: re.compile(r"(\s*<p>Phone:<br><strong>)([^<]+)(</strong></p>\s*)"),
    CONTACT_ADDRESS: re.compile(r"(\s*<p>Address:<br><strong>)([^<]+<br>[^<]+)(</strong></p>\s*)"),
}


@dataclass
class Region:
    name: str
    head: str  # opening marker + element open
    interior: str
    tail: str  # element close + END marker

    def render(self) -> str:
        return self.head + self.interior + self.tail


@dataclass
class Document:
    segments: list[str | Region] = field(default_factory=list)

    def regions(self, name: str | None = None) -> list[Region]:
        return [
            s for s in self.segments
            if isinstance(s, Region) and (name is None or s.name == name)
        ]

    def substitute(self, name: str, interior: str) -> bool:
        """Replace the interior of every region called *name*; True if any text changed."""
        changed = False
        for region in self.regions(name):
            if region.interior != interior:
                region.interior = interior
                changed = True
        return changed

    def render(self) -> str:
        return "".join(s if isinstance(s, str) else s.render() for s in self.segments)


def parse_document(text: str) -> Document:
    """
    Parse *text* into literal segments and recognised regions.

    Regions with an unknown name, or whose body does not have the expected
    element shape, are kept as literal text and never touched.
    """
    document = Document()
    pos = 0
    for match in REGION_PATTERN.finditer(text):
        shape = REGION_SHAPES.get(match.group("name"))
        if shape is None:
            continue
        body = shape.fullmatch(match.group("body"))
        if body is None:
            continue

        document.segments.append(text[pos:match.start()])
        document.segments.append(
            Region(
                name=match.group("name"),
                head=text[match.start():match.start("body")] + body.group(1),
                interior=body.group(2),
                tail=body.group(3) + END_MARKER,
            )
        )
        pos = match.end()

    document.segments.append(text[pos:])
    return document
