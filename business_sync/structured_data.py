"""schema.org JSON-LD for the shop, and temporary-closure resolution."""

import json
from datetime import date

from .models import BusinessProfile, PageOverride, TemporaryClosure

SCHEMA_TYPE = "ButcherShop"


def active_temporary_closure(profile: BusinessProfile, today: date) -> TemporaryClosure | None:
    """Return the configured closure if *today* falls inside its window, else None."""
    closure = profile.temporary_closure
    if closure is not None and closure.covers(today):
        return closure
    return None


def group_opening_hours(profile: BusinessProfile) -> list[dict]:
    """
    Group open days sharing the same (open, close) pair into
    OpeningHoursSpecification rules, in first-seen order.
    """
    days_by_slot: dict[tuple[str, str], list[str]] = {}
    for schedule in profile.hours:
        if schedule.closed:
            continue
        days_by_slot.setdefault((schedule.open, schedule.close), []).append(schedule.day)

    return [
        {
            "@type": "OpeningHoursSpecification",
            "dayOfWeek": days,
            "opens": opens,
            "closes": closes,
        }
        for (opens, closes), days in days_by_slot.items()
    ]


def build_structured_data(
    profile: BusinessProfile,
    today: date,
    overrides: PageOverride | None = None,
    include_cuisine: bool = True,
) -> dict:
    """
    Build the LocalBusiness structured data record.

    Opening hours are left out while a temporary closure is active, since the
    regular hours are not what customers will find.

    Args:
        profile: Business facts
        today: Local date used to resolve the closure window
        overrides: Optional page-specific image/description
        include_cuisine: False drops servesCuisine (non-home pages)

    Returns:
        Dict with a stable key order, ready for json.dumps
    """
    overrides = overrides or PageOverride()
    address = profile.address

    data = {
        "@context": "https://schema.org",
        "@type": SCHEMA_TYPE,
        "name": profile.name,
        "image": f"{profile.url}/{overrides.image or profile.default_image}",
        "address": {
            "@type": "PostalAddress",
            "streetAddress": address.street,
            "addressLocality": address.city,
            "addressRegion": address.region_code,
            "postalCode": address.postal_code,
            "addressCountry": address.country_code,
        },
        "geo": {
            "@type": "GeoCoordinates",
            "latitude": profile.coordinates.latitude,
            "longitude": profile.coordinates.longitude,
        },
        "url": profile.url,
        "telephone": profile.phone.tel,
        "priceRange": profile.price_range,
    }

    if active_temporary_closure(profile, today) is None:
        data["openingHoursSpecification"] = group_opening_hours(profile)

    data["description"] = overrides.description or profile.description

    if include_cuisine and profile.serves_cuisine:
        data["servesCuisine"] = profile.serves_cuisine

    return data


def structured_data_json(
    profile: BusinessProfile,
    today: date,
    overrides: PageOverride | None = None,
    include_cuisine: bool = True,
) -> str:
    """Structured data as 2-space indented JSON."""
    data = build_structured_data(profile, today, overrides, include_cuisine)
    return json.dumps(data, indent=2, ensure_ascii=False)
