"""HTML fragments generated from the business profile."""

from datetime import date

from .formatting import format_date, format_date_with_day, format_time_12_hour, next_day
from .models import BusinessProfile
from .structured_data import active_temporary_closure

DEFAULT_CLOSURE_MESSAGE = "Temporarily closed"

WARNING_ICON = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="24" height="24" fill="currentColor" '
    'viewBox="0 0 16 16" style="flex-shrink: 0;">'
    '<path d="M8.982 1.566a1.13 1.13 0 0 0-1.96 0L.165 13.233c-.457.778.091 1.767.98 1.767h13.713'
    'c.889 0 1.438-.99.98-1.767L8.982 1.566zM8 5c.535 0 .954.462.9.995l-.35 3.507a.552.552 0 0 1-1.1 0'
    'L7.1 5.995A.905.905 0 0 1 8 5zm.002 6a1 1 0 1 1 0 2 1 1 0 0 1 0-2z"/>'
    "</svg>"
)

HOURS_TABLE_OPEN = '<table class="business-hours-table">'
HOURS_TABLE_DIMMED_OPEN = (
    '<table class="business-hours-table" style="opacity: 0.7;">'
    '<caption style="caption-side: top; text-align: left; font-size: 0.875em; '
    'color: #6c757d; margin-bottom: 0.5rem; font-style: italic;">'
    "Regular hours (currently closed)"
    "</caption>"
)


def closure_banner_html(profile: BusinessProfile, today: date) -> str:
    """Warning card for an active temporary closure; empty string otherwise."""
    closure = active_temporary_closure(profile, today)
    if closure is None:
        return ""

    message = closure.message or DEFAULT_CLOSURE_MESSAGE
    date_range = f"{format_date(closure.start_date)} – {format_date(closure.end_date)}"
    returns_on = format_date_with_day(next_day(closure.end_date))

    return (
        '<div class="alert alert-warning d-flex align-items-start mb-3" role="alert" '
        'style="border-left: 4px solid #ffc107; background-color: #fff3cd; border-color: #ffc107;">'
        f'<div style="color: #856404; margin-right: 10px; flex-shrink: 0;">{WARNING_ICON}</div>'
        '<div style="flex: 1; color: #856404; word-wrap: break-word;">'
        f'<div style="font-weight: bold; margin-bottom: 5px;">{message}</div>'
        f'<div style="margin-bottom: 5px;">{date_range}</div>'
        f"<div>We will return to regular hours on <strong>{returns_on}</strong></div>"
        "</div></div>"
    )


def hours_table_rows(profile: BusinessProfile) -> str:
    rows = ""
    for schedule in profile.hours:
        if schedule.closed:
            time_text = "Closed"
        else:
            time_text = f"{format_time_12_hour(schedule.open)} – {format_time_12_hour(schedule.close)}"
        rows += f"<tr><td><strong>{schedule.day}</strong></td><td>{time_text}</td></tr>"
    return rows


def hours_table_html(profile: BusinessProfile, today: date) -> str:
    """Closure banner (if any) followed by the hours table, dimmed while closed."""
    banner = closure_banner_html(profile, today)
    table_open = HOURS_TABLE_DIMMED_OPEN if banner else HOURS_TABLE_OPEN
    return f"{banner}{table_open}{hours_table_rows(profile)}</table>"


def address_bar_text(profile: BusinessProfile) -> str:
    """Address bar line: "street | city, region postal | phone"."""
    a = profile.address
    return f"{a.street} | {a.city}, {a.region} {a.postal_code} | {profile.phone.display}"


def contact_address_html(profile: BusinessProfile) -> str:
    a = profile.address
    return f"{a.street}<br>{a.city}, {a.region} {a.postal_code}"


def contact_phone_text(profile: BusinessProfile) -> str:
    return profile.phone.display
