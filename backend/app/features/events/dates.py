"""
Event date normalization.

Front matter describes an event with a date, optional end date and
optional start/end times. normalize_event_dates() turns any combination
into one model that the display formatter and both calendar exports share.

All datetimes are naive local time. An unparseable date does not raise
here: it yields None instants, and whatever later tries to render them
raises InvalidEventDateError.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from app.shared.formatters import format_clock_time, format_short_date

DEFAULT_EVENT_DURATION = timedelta(hours=1)
ALL_DAY_SPAN = timedelta(days=1)

MIDNIGHT = "00:00:00"

_BARE_HOUR = re.compile(r"^\d{1,2}$")
_HOUR_MINUTE = re.compile(r"^(\d{1,2}):(\d{2})$")


class InvalidEventDateError(ValueError):
    """An event date could not be turned into a real instant."""
    pass


@dataclass(frozen=True)
class EventDateInput:
    """Raw date fields as they come from event front matter."""
    date: str
    end_date: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None


@dataclass(frozen=True)
class NormalizedEventDates:
    """
    Canonical event span.

    end_display is what people read; end_calendar is what calendars get
    (exclusive next day for all-day events, start + 1 hour for a timed
    event without an end).
    """
    start: Optional[datetime]
    end_display: Optional[datetime]
    end_calendar: Optional[datetime]
    is_all_day: bool
    has_explicit_end: bool

    @property
    def is_valid(self) -> bool:
        return self.start is not None and self.end_display is not None

    def require_valid(self) -> "NormalizedEventDates":
        if not self.is_valid:
            raise InvalidEventDateError("Invalid event date")
        return self


def normalize_time(time: Optional[str]) -> str:
    """
    '14' -> '14:00:00', '14:30' -> '14:30:00', anything else unchanged.

    A missing time means midnight.
    """
    if not time:
        return MIDNIGHT

    time = time.strip()
    if _BARE_HOUR.match(time):
        return f"{int(time):02d}:00:00"

    match = _HOUR_MINUTE.match(time)
    if match:
        return f"{int(match.group(1)):02d}:{match.group(2)}:00"

    return time


def extract_date_part(value: Optional[str]) -> str:
    """Calendar date of a 'YYYY-MM-DD' or 'YYYY-MM-DDTHH:MM...' string."""
    if not value:
        return ""
    value = value.strip()
    return value.split("T")[0] if "T" in value else value


def make_datetime(date: Optional[str], time: Optional[str] = None) -> Optional[datetime]:
    """
    Combine the date part of `date` with a (normalized) time.

    Returns:
        Naive local datetime, or None if the result is not a real instant
    """
    date_part = extract_date_part(date)
    if not date_part:
        return None

    try:
        value = datetime.fromisoformat(f"{date_part}T{normalize_time(time)}")
    except ValueError:
        return None

    # Times carrying an offset are converted to local wall-clock time
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def _add(value: Optional[datetime], delta: timedelta) -> Optional[datetime]:
    return value + delta if value is not None else None


def _not_before(value: Optional[datetime], start: Optional[datetime]) -> Optional[datetime]:
    if value is None or start is None:
        return value
    return max(value, start)


def normalize_event_dates(event: EventDateInput) -> NormalizedEventDates:
    """
    Normalize raw event fields.

    Timed when a start or end time is given, all-day otherwise.
    """
    is_timed = bool(event.start_time or event.end_time)
    start = make_datetime(event.date, event.start_time)

    if is_timed:
        has_explicit_end = bool(event.end_time or event.end_date)
        if not has_explicit_end:
            return NormalizedEventDates(
                start=start,
                end_display=start,
                end_calendar=_add(start, DEFAULT_EVENT_DURATION),
                is_all_day=False,
                has_explicit_end=False,
            )

        end = make_datetime(
            event.end_date or event.date,
            event.end_time or event.start_time,
        )
        return NormalizedEventDates(
            start=start,
            end_display=end,
            end_calendar=_not_before(end, start),
            is_all_day=False,
            has_explicit_end=True,
        )

    display_end = make_datetime(event.end_date or event.date)
    return NormalizedEventDates(
        start=start,
        end_display=display_end,
        end_calendar=_add(_not_before(display_end, start), ALL_DAY_SPAN),
        is_all_day=True,
        has_explicit_end=bool(event.end_date),
    )


def format_event_date_range(event: EventDateInput) -> str:
    """
    Human-readable event span.

    'Jun 01, 2024'
    'Jun 01, 2024 · 2:00 PM'
    'Jun 01, 2024 · 2:00 PM – 4:30 PM'
    'Jun 01, 2024 – Jun 03, 2024'
    'Jun 01, 2024 2:00 PM – Jun 02, 2024 11:00 AM'

    Raises:
        InvalidEventDateError: If the date fields do not form a real instant
    """
    dates = normalize_event_dates(event).require_valid()
    start = dates.start
    end = dates.end_display

    same_day = start.date() == end.date() or not dates.has_explicit_end

    if same_day:
        date_label = format_short_date(start)
        if dates.is_all_day:
            return date_label
        if not dates.has_explicit_end:
            return f"{date_label} · {format_clock_time(start)}"
        return f"{date_label} · {format_clock_time(start)} – {format_clock_time(end)}"

    if dates.is_all_day:
        return f"{format_short_date(start)} – {format_short_date(end)}"

    return (
        f"{format_short_date(start)} {format_clock_time(start)} – "
        f"{format_short_date(end)} {format_clock_time(end)}"
    )


def format_event_primary_date(event: EventDateInput) -> str:
    """Start date alone, e.g. for event cards."""
    dates = normalize_event_dates(event).require_valid()
    return format_short_date(dates.start)
