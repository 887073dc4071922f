"""BusinessProfile dataclasses: the business facts every generated fragment is built from."""

from dataclasses import dataclass
from datetime import date


WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    region: str  # e.g. "Ontario"
    region_code: str  # e.g. "ON"
    postal_code: str
    country: str
    country_code: str


@dataclass(frozen=True)
class Phone:
    display: str  # e.g. "(613) 838-8800"
    tel: str  # e.g. "+1-613-838-8800"


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class DaySchedule:
    day: str
    open: str | None = None  # "HH:MM", 24-hour
    close: str | None = None
    closed: bool = False


@dataclass(frozen=True)
class TemporaryClosure:
    start_date: date
    end_date: date
    message: str | None = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class PageOverride:
    image: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class BusinessProfile:
    name: str
    short_name: str
    url: str
    tagline: str
    description: str
    price_range: str
    address: Address
    phone: Phone
    coordinates: Coordinates
    hours: tuple[DaySchedule, ...]
    default_image: str
    serves_cuisine: str | None = None
    temporary_closure: TemporaryClosure | None = None
    page_overrides: tuple[tuple[str, PageOverride], ...] = ()  # (page file name, override)

    def override_for(self, page_name: str) -> PageOverride | None:
        for name, override in self.page_overrides:
            if name == page_name:
                return override
        return None
