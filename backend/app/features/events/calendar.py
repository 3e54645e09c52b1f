"""
Calendar exports for events.

Every builder normalizes the raw date fields itself, so the ICS file, the
Google and Outlook links and the on-page date range can never disagree.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional
from urllib.parse import quote, urlencode

from app.config import settings

from .dates import EventDateInput, NormalizedEventDates, normalize_event_dates

GOOGLE_CALENDAR_URL = "https://www.google.com/calendar/render"
OUTLOOK_COMPOSE_URL = "https://outlook.live.com/calendar/0/deeplink/compose"

CRLF = "\r\n"

# Characters encodeURIComponent leaves alone
SAFE_URI_CHARS = "-_.!~*'()"


@dataclass(frozen=True)
class CalendarEvent:
    """An event as exported to calendars."""
    title: str
    dates: EventDateInput
    description: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None


def format_date_part(value: datetime) -> str:
    """YYYYMMDD."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_date_time_part(value: datetime) -> str:
    """YYYYMMDDTHHMMSS."""
    return f"{format_date_part(value)}T{value.hour:02d}{value.minute:02d}{value.second:02d}"


def escape_text(value: str) -> str:
    """RFC 5545 TEXT escaping: backslash, comma, semicolon, newline."""
    return (
        value.replace("\\", "\\\\")
        .replace(",", "\\,")
        .replace(";", "\\;")
        .replace("\r\n", "\n")
        .replace("\n", "\\n")
    )


def _normalized(event: CalendarEvent) -> NormalizedEventDates:
    return normalize_event_dates(event.dates).require_valid()


def _format_instant(value: datetime, is_all_day: bool) -> str:
    return format_date_part(value) if is_all_day else format_date_time_part(value)


def build_ics_content(
    event: CalendarEvent,
    now: Optional[Callable[[], datetime]] = None,
    prodid: Optional[str] = None,
) -> str:
    """
    Build a single-event iCalendar file body.

    Args:
        event: Event to export
        now: Clock for DTSTAMP (local time), datetime.now by default
        prodid: PRODID line value, from settings by default

    Returns:
        CRLF-separated VCALENDAR text

    Raises:
        InvalidEventDateError: If the event dates are not valid
    """
    dates = _normalized(event)
    stamp = (now or datetime.now)()

    if dates.is_all_day:
        dtstart = f"DTSTART;VALUE=DATE:{format_date_part(dates.start)}"
        dtend = f"DTEND;VALUE=DATE:{format_date_part(dates.end_calendar)}"
    else:
        dtstart = f"DTSTART:{format_date_time_part(dates.start)}"
        dtend = f"DTEND:{format_date_time_part(dates.end_calendar)}"

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        f"PRODID:{prodid or settings.calendar_prodid}",
        "CALSCALE:GREGORIAN",
        "BEGIN:VEVENT",
        f"DTSTAMP:{format_date_time_part(stamp)}",
        dtstart,
        dtend,
    ]

    for name, value in (
        ("SUMMARY", event.title),
        ("DESCRIPTION", event.description),
        ("LOCATION", event.location),
        ("URL", event.url),
    ):
        if value:
            lines.append(f"{name}:{escape_text(value)}")

    lines += ["END:VEVENT", "END:VCALENDAR"]
    return CRLF.join(lines)


def build_ics_data_uri(event: CalendarEvent, **kwargs) -> str:
    """ICS body as a data: URI for a direct download link."""
    content = build_ics_content(event, **kwargs)
    return f"data:text/calendar;charset=utf-8,{quote(content, safe=SAFE_URI_CHARS)}"


def _details(event: CalendarEvent) -> Optional[str]:
    parts = [part for part in (event.description, event.url) if part]
    return "\n\n".join(parts) if parts else None


def build_google_calendar_link(event: CalendarEvent) -> str:
    """
    Google Calendar 'add event' URL.

    Raises:
        InvalidEventDateError: If the event dates are not valid
    """
    dates = _normalized(event)
    span = (
        f"{_format_instant(dates.start, dates.is_all_day)}/"
        f"{_format_instant(dates.end_calendar, dates.is_all_day)}"
    )

    params = {
        "action": "TEMPLATE",
        "text": event.title,
        "dates": span,
    }

    details = _details(event)
    if details:
        params["details"] = details

    if event.location:
        params["location"] = event.location

    return f"{GOOGLE_CALENDAR_URL}?{urlencode(params)}"


def build_microsoft_calendar_link(event: CalendarEvent) -> str:
    """
    Outlook on the web 'new event' URL.

    Raises:
        InvalidEventDateError: If the event dates are not valid
    """
    dates = _normalized(event)

    if dates.is_all_day:
        start = dates.start.date().isoformat()
        end = dates.end_calendar.date().isoformat()
    else:
        start = dates.start.isoformat(timespec="seconds")
        end = dates.end_calendar.isoformat(timespec="seconds")

    params = {
        "path": "/calendar/action/compose",
        "rru": "addevent",
        "subject": event.title,
        "startdt": start,
        "enddt": end,
        "allday": "true" if dates.is_all_day else "false",
    }

    details = _details(event)
    if details:
        params["body"] = details

    if event.location:
        params["location"] = event.location

    return f"{OUTLOOK_COMPOSE_URL}?{urlencode(params)}"
