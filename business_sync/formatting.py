"""Time and date formatting for hours tables and closure notices."""

from datetime import date, timedelta

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# Sunday-indexed
DAYS = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def format_time_12_hour(time24: str | None) -> str | None:
    """Convert 24-hour time to 12-hour with am/pm: "17:00" -> "5:00 pm"."""
    if not time24:
        return None
    hours, minutes = time24.split(":")
    hour = int(hours)
    suffix = "pm" if hour >= 12 else "am"
    return f"{hour % 12 or 12}:{minutes} {suffix}"


def format_date(value: date | str) -> str:
    """"2025-01-01" -> "January 1, 2025"."""
    d = _as_date(value)
    return f"{MONTHS[d.month - 1]} {d.day}, {d.year}"


def format_date_with_day(value: date | str) -> str:
    """"2025-01-06" -> "Monday, January 6, 2025"."""
    d = _as_date(value)
    # date.weekday() is Monday-indexed
    return f"{DAYS[(d.weekday() + 1) % 7]}, {format_date(d)}"


def next_day(value: date | str) -> str:
    """ISO date one calendar day after *value*."""
    return (_as_date(value) + timedelta(days=1)).isoformat()
