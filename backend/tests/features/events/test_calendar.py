"""
Tests for calendar exports.
"""

import re
from datetime import datetime
from urllib.parse import parse_qs, unquote, urlsplit

import pytest

from app.features.events import (
    CalendarEvent,
    EventDateInput,
    InvalidEventDateError,
    build_google_calendar_link,
    build_ics_content,
    build_ics_data_uri,
    build_microsoft_calendar_link,
    escape_text,
    normalize_event_dates,
)
from app.features.events.calendar import format_date_part, format_date_time_part


def fixed_clock():
    return datetime(2024, 5, 20, 10, 15, 0)


def ics_lines(event: CalendarEvent) -> list[str]:
    return build_ics_content(event, now=fixed_clock, prodid="-//Tests//EN").split("\r\n")


def query(url: str) -> dict[str, str]:
    return {key: values[0] for key, values in parse_qs(urlsplit(url).query).items()}


ALL_DAY = CalendarEvent(title="Trail cleanup", dates=EventDateInput(date="2024-06-01"))
TIMED = CalendarEvent(
    title="Sunset run",
    dates=EventDateInput(date="2024-06-01", start_time="14", end_time="16:30"),
    description="Bring a headlamp",
    location="Ridge trailhead",
    url="https://example.com/events/sunset-run",
)


# =============================================================================
# ICS
# =============================================================================

class TestIcsContent:
    """Tests for build_ics_content function."""

    def test_all_day(self):
        lines = ics_lines(ALL_DAY)

        assert lines[0] == "BEGIN:VCALENDAR"
        assert "VERSION:2.0" in lines
        assert "PRODID:-//Tests//EN" in lines
        assert "DTSTAMP:20240520T101500" in lines
        assert "DTSTART;VALUE=DATE:20240601" in lines
        assert "DTEND;VALUE=DATE:20240602" in lines
        assert "SUMMARY:Trail cleanup" in lines
        assert lines[-2:] == ["END:VEVENT", "END:VCALENDAR"]

    def test_single_vevent(self):
        lines = ics_lines(TIMED)

        assert lines.count("BEGIN:VEVENT") == 1
        assert lines.count("END:VEVENT") == 1

    def test_timed(self):
        lines = ics_lines(TIMED)

        assert "DTSTART:20240601T140000" in lines
        assert "DTEND:20240601T163000" in lines
        assert "DESCRIPTION:Bring a headlamp" in lines
        assert "LOCATION:Ridge trailhead" in lines
        assert "URL:https://example.com/events/sunset-run" in lines

    def test_timed_without_end_lasts_one_hour(self):
        event = CalendarEvent(title="Meetup", dates=EventDateInput(date="2024-06-01", start_time="14"))
        lines = ics_lines(event)

        assert "DTSTART:20240601T140000" in lines
        assert "DTEND:20240601T150000" in lines

    def test_empty_fields_are_omitted(self):
        event = CalendarEvent(
            title="Meetup",
            dates=EventDateInput(date="2024-06-01"),
            description="",
            location=None,
        )
        names = [line.split(":")[0] for line in ics_lines(event)]

        assert "DESCRIPTION" not in names
        assert "LOCATION" not in names
        assert "URL" not in names

    def test_crlf_line_separator(self):
        content = build_ics_content(TIMED, now=fixed_clock)

        assert "\r\n" in content
        assert "\n" not in content.replace("\r\n", "")

    def test_text_is_escaped(self):
        event = CalendarEvent(
            title="Hike; picnic, swim",
            dates=EventDateInput(date="2024-06-01"),
            description="Line one\nLine two \\ end",
        )
        lines = ics_lines(event)

        assert "SUMMARY:Hike\\; picnic\\, swim" in lines
        assert "DESCRIPTION:Line one\\nLine two \\\\ end" in lines

    def test_invalid_date_raises(self):
        event = CalendarEvent(title="Broken", dates=EventDateInput(date="soon"))

        with pytest.raises(InvalidEventDateError):
            build_ics_content(event)

    def test_data_uri(self):
        uri = build_ics_data_uri(ALL_DAY, now=fixed_clock)

        assert uri.startswith("data:text/calendar;charset=utf-8,")
        body = unquote(uri.split(",", 1)[1])
        assert body == build_ics_content(ALL_DAY, now=fixed_clock)
        assert "%0D%0A" in uri


class TestEscapeText:

    @pytest.mark.parametrize("raw,expected", [
        ("plain", "plain"),
        ("a,b", "a\\,b"),
        ("a;b", "a\\;b"),
        ("a\\b", "a\\\\b"),
        ("a\nb", "a\\nb"),
        ("a\r\nb", "a\\nb"),
    ])
    def test_escape(self, raw, expected):
        assert escape_text(raw) == expected


# =============================================================================
# Web calendar links
# =============================================================================

class TestGoogleCalendarLink:
    """Tests for build_google_calendar_link function."""

    def test_all_day(self):
        params = query(build_google_calendar_link(ALL_DAY))

        assert params["action"] == "TEMPLATE"
        assert params["text"] == "Trail cleanup"
        assert params["dates"] == "20240601/20240602"
        assert "details" not in params
        assert "location" not in params

    def test_timed_with_details(self):
        link = build_google_calendar_link(TIMED)
        params = query(link)

        assert link.startswith("https://www.google.com/calendar/render?")
        assert params["dates"] == "20240601T140000/20240601T163000"
        assert params["details"] == "Bring a headlamp\n\nhttps://example.com/events/sunset-run"
        assert params["location"] == "Ridge trailhead"

    def test_details_from_url_only(self):
        event = CalendarEvent(
            title="Meetup", dates=EventDateInput(date="2024-06-01"), url="https://example.com/e"
        )
        assert query(build_google_calendar_link(event))["details"] == "https://example.com/e"


class TestMicrosoftCalendarLink:
    """Tests for build_microsoft_calendar_link function."""

    def test_all_day(self):
        params = query(build_microsoft_calendar_link(ALL_DAY))

        assert params["subject"] == "Trail cleanup"
        assert params["startdt"] == "2024-06-01"
        assert params["enddt"] == "2024-06-02"
        assert params["allday"] == "true"

    def test_timed(self):
        params = query(build_microsoft_calendar_link(TIMED))

        assert params["startdt"] == "2024-06-01T14:00:00"
        assert params["enddt"] == "2024-06-01T16:30:00"
        assert params["allday"] == "false"
        assert params["location"] == "Ridge trailhead"


# =============================================================================
# Consistency between exports
# =============================================================================

class TestExportsAgree:
    """ICS and Google links encode the same instants as the normalizer."""

    @pytest.mark.parametrize("dates", [
        EventDateInput(date="2024-06-01"),
        EventDateInput(date="2024-06-01", end_date="2024-06-03"),
        EventDateInput(date="2024-06-01", start_time="14"),
        EventDateInput(date="2024-06-01", start_time="14", end_time="16:30"),
        EventDateInput(date="2024-06-01T08:00:00", end_date="2024-06-02", start_time="9:15"),
        EventDateInput(date="2024-12-31", start_time="23:30"),
    ])
    def test_same_instants(self, dates):
        event = CalendarEvent(title="Event", dates=dates)
        normalized = normalize_event_dates(dates)
        fmt = format_date_part if normalized.is_all_day else format_date_time_part
        expected_start = fmt(normalized.start)
        expected_end = fmt(normalized.end_calendar)

        ics = build_ics_content(event, now=fixed_clock)
        ics_start = re.search(r"^DTSTART[^:]*:(\S+)", ics, re.MULTILINE).group(1)
        ics_end = re.search(r"^DTEND[^:]*:(\S+)", ics, re.MULTILINE).group(1)
        google_start, google_end = query(build_google_calendar_link(event))["dates"].split("/")

        assert ics_start == google_start == expected_start
        assert ics_end == google_end == expected_end
