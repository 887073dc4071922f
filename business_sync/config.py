"""Load and validate business_data.json into a BusinessProfile."""

import json
import re
from datetime import date
from pathlib import Path
from typing import Any

from .models import (
    WEEKDAYS,
    Address,
    BusinessProfile,
    Coordinates,
    DaySchedule,
    PageOverride,
    Phone,
    TemporaryClosure,
)

CONFIG_FILE = Path("business_data.json")

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")

REQUIRED_STRINGS = ("name", "shortName", "url", "tagline", "description", "priceRange")
ADDRESS_KEYS = {
    "street": "street",
    "city": "city",
    "region": "region",
    "regionCode": "region_code",
    "postalCode": "postal_code",
    "country": "country",
    "countryCode": "country_code",
}


class ProfileError(ValueError):
    """Raised when business_data.json is missing fields or breaks an invariant."""

    def __init__(self, problems: list[str]):
        self.problems = problems
        super().__init__("Invalid business data:\n  - " + "\n  - ".join(problems))


def load_profile(path: Path | str = CONFIG_FILE) -> BusinessProfile:
    """Read the JSON config at *path* and return a validated BusinessProfile."""
    with Path(path).open("r", encoding="utf-8") as f:
        data = json.load(f)
    return profile_from_dict(data)


def profile_from_dict(data: dict[str, Any]) -> BusinessProfile:
    """
    Build a BusinessProfile from the raw config mapping.

    Every problem is collected before raising, so one run reports the whole
    list instead of failing on the first bad field.

    Raises:
        ProfileError: if any required field is absent or invalid
    """
    problems: list[str] = []

    if not isinstance(data, dict):
        raise ProfileError(["top level must be a JSON object"])

    for key in REQUIRED_STRINGS:
        _require_string(data, key, key, problems)

    cuisine = data.get("servesCuisine")
    if cuisine is not None and not isinstance(cuisine, str):
        problems.append("servesCuisine must be a string")
        cuisine = None

    address = _parse_address(data.get("address"), problems)
    phone = _parse_phone(data.get("phone"), problems)
    coordinates = _parse_coordinates(data.get("coordinates"), problems)
    hours = _parse_hours(data.get("hours"), problems)
    closure = _parse_closure(data.get("temporaryClosure"), problems)
    overrides = _parse_overrides(data.get("pages"), problems)

    images = data.get("images")
    default_image = None
    if not isinstance(images, dict):
        problems.append("images must be an object with a defaultImage")
    else:
        default_image = _require_string(images, "defaultImage", "images.defaultImage", problems)

    if problems:
        raise ProfileError(problems)

    return BusinessProfile(
        name=data["name"],
        short_name=data["shortName"],
        url=data["url"].rstrip("/"),
        tagline=data["tagline"],
        description=data["description"],
        price_range=data["priceRange"],
        address=address,
        phone=phone,
        coordinates=coordinates,
        hours=hours,
        default_image=default_image,
        serves_cuisine=cuisine,
        temporary_closure=closure,
        page_overrides=overrides,
    )


def _require_string(data: dict, key: str, label: str, problems: list[str]) -> str | None:
    value = data.get(key)
    if not isinstance(value, str) or not value.strip():
        problems.append(f"{label} is required and must be a non-empty string")
        return None
    return value


def _parse_address(raw: Any, problems: list[str]) -> Address | None:
    if not isinstance(raw, dict):
        problems.append("address must be an object")
        return None
    values = {}
    for key, attr in ADDRESS_KEYS.items():
        values[attr] = _require_string(raw, key, f"address.{key}", problems)
    if any(v is None for v in values.values()):
        return None
    return Address(**values)


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def _parse_phone(raw: Any, problems: list[str]) -> Phone | None:
    if not isinstance(raw, dict):
        problems.append("phone must be an object with display and tel")
        return None
    display = _require_string(raw, "display", "phone.display", problems)
    tel = _require_string(raw, "tel", "phone.tel", problems)
    if display is None or tel is None:
        return None

    # tel may carry a country code the display form omits
    display_digits, tel_digits = _digits(display), _digits(tel)
    if not display_digits or not tel_digits.endswith(display_digits):
        problems.append(f"phone.display {display!r} and phone.tel {tel!r} are not the same number")
        return None
    return Phone(display=display, tel=tel)


def _parse_coordinates(raw: Any, problems: list[str]) -> Coordinates | None:
    if not isinstance(raw, dict):
        problems.append("coordinates must be an object")
        return None
    lat, lng = raw.get("latitude"), raw.get("longitude")
    ok = True
    for label, value, limit in (("latitude", lat, 90), ("longitude", lng, 180)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            problems.append(f"coordinates.{label} must be a number")
            ok = False
        elif not -limit <= value <= limit:
            problems.append(f"coordinates.{label} {value} is out of range")
            ok = False
    return Coordinates(latitude=lat, longitude=lng) if ok else None


def _parse_hours(raw: Any, problems: list[str]) -> tuple[DaySchedule, ...] | None:
    if not isinstance(raw, list) or len(raw) != len(WEEKDAYS):
        problems.append("hours must list exactly 7 days, Monday through Sunday")
        return None

    schedules = []
    for expected_day, entry in zip(WEEKDAYS, raw):
        if not isinstance(entry, dict):
            problems.append(f"hours entry for {expected_day} must be an object")
            continue
        day = entry.get("day")
        if day != expected_day:
            problems.append(f"hours are out of order: expected {expected_day}, got {day!r}")
            continue

        opens, closes, closed = entry.get("open"), entry.get("close"), entry.get("closed", False)
        if not isinstance(closed, bool):
            problems.append(f"{day}: closed must be true or false")
            continue
        if closed:
            if opens is not None or closes is not None:
                problems.append(f"{day}: closed days must not have open/close times")
                continue
        else:
            bad = [t for t in (opens, closes) if not isinstance(t, str) or not TIME_PATTERN.match(t)]
            if bad:
                problems.append(f"{day}: open and close must be HH:MM 24-hour times")
                continue
            if not opens < closes:
                problems.append(f"{day}: opens at {opens} but closes at {closes}")
                continue
        schedules.append(DaySchedule(day=day, open=opens, close=closes, closed=closed))

    if len(schedules) != len(WEEKDAYS):
        return None
    return tuple(schedules)


def _parse_date(value: Any, label: str, problems: list[str]) -> date | None:
    if not isinstance(value, str):
        problems.append(f"{label} must be a YYYY-MM-DD date")
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        problems.append(f"{label} {value!r} is not a valid YYYY-MM-DD date")
        return None


def _parse_closure(raw: Any, problems: list[str]) -> TemporaryClosure | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        problems.append("temporaryClosure must be an object")
        return None

    start = _parse_date(raw.get("startDate"), "temporaryClosure.startDate", problems)
    end = _parse_date(raw.get("endDate"), "temporaryClosure.endDate", problems)
    message = raw.get("message")
    if message is not None and not isinstance(message, str):
        problems.append("temporaryClosure.message must be a string")
        return None
    if start is None or end is None:
        return None
    if start > end:
        problems.append(f"temporaryClosure ends ({end}) before it starts ({start})")
        return None
    return TemporaryClosure(start_date=start, end_date=end, message=message or None)


def _parse_overrides(raw: Any, problems: list[str]) -> tuple[tuple[str, PageOverride], ...]:
    if raw is None:
        return ()
    if not isinstance(raw, dict):
        problems.append("pages must map page file names to overrides")
        return ()

    overrides = []
    for page_name, entry in raw.items():
        if not isinstance(entry, dict):
            problems.append(f"pages.{page_name} must be an object")
            continue
        image, description = entry.get("image"), entry.get("description")
        if any(v is not None and not isinstance(v, str) for v in (image, description)):
            problems.append(f"pages.{page_name}: image and description must be strings")
            continue
        overrides.append((page_name, PageOverride(image=image, description=description)))
    return tuple(overrides)
