"""
Event dates and calendar exports.

Usage:
    from app.features.events import EventDateInput, normalize_event_dates
    from app.features.events import CalendarEvent, build_ics_content

Components:
- normalize_event_dates: raw front matter -> NormalizedEventDates
- format_event_date_range / format_event_primary_date: display strings
- build_ics_content / build_ics_data_uri: iCalendar export
- build_google_calendar_link / build_microsoft_calendar_link: web calendars
"""

from .dates import (
    EventDateInput,
    NormalizedEventDates,
    InvalidEventDateError,
    normalize_event_dates,
    normalize_time,
    format_event_date_range,
    format_event_primary_date,
)
from .calendar import (
    CalendarEvent,
    build_ics_content,
    build_ics_data_uri,
    build_google_calendar_link,
    build_microsoft_calendar_link,
    escape_text,
)
from .schemas import (
    EventDateFields,
    CalendarEventRequest,
    NormalizedEventDatesSchema,
    CalendarLinks,
)

__all__ = [
    # Dates
    "EventDateInput",
    "NormalizedEventDates",
    "InvalidEventDateError",
    "normalize_event_dates",
    "normalize_time",
    "format_event_date_range",
    "format_event_primary_date",
    # Calendar
    "CalendarEvent",
    "build_ics_content",
    "build_ics_data_uri",
    "build_google_calendar_link",
    "build_microsoft_calendar_link",
    "escape_text",
    # Schemas
    "EventDateFields",
    "CalendarEventRequest",
    "NormalizedEventDatesSchema",
    "CalendarLinks",
]
