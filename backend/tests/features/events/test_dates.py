"""
Tests for event date normalization and display formatting.

Run with: pytest backend/tests/features/events/test_dates.py -v
"""

from datetime import datetime

import pytest

from app.features.events import (
    EventDateInput,
    InvalidEventDateError,
    format_event_date_range,
    format_event_primary_date,
    normalize_event_dates,
    normalize_time,
)
from app.features.events.dates import extract_date_part, make_datetime


# =============================================================================
# Time / date parts
# =============================================================================

class TestNormalizeTime:
    """Tests for normalize_time function."""

    @pytest.mark.parametrize("raw,expected", [
        ("14", "14:00:00"),
        ("9", "09:00:00"),
        ("14:30", "14:30:00"),
        ("9:05", "09:05:00"),
        ("14:30:15", "14:30:15"),
        (" 14 ", "14:00:00"),
        (None, "00:00:00"),
        ("", "00:00:00"),
    ])
    def test_formats(self, raw, expected):
        assert normalize_time(raw) == expected


class TestDateParts:

    def test_extract_date_part(self):
        assert extract_date_part("2024-06-01") == "2024-06-01"
        assert extract_date_part("2024-06-01T09:00:00") == "2024-06-01"
        assert extract_date_part(None) == ""

    def test_time_override_reuses_date_portion(self):
        assert make_datetime("2024-06-01T09:00:00", "14") == datetime(2024, 6, 1, 14, 0)

    @pytest.mark.parametrize("date", ["not-a-date", "2024-02-30", "", None])
    def test_invalid_dates(self, date):
        assert make_datetime(date, "14") is None


# =============================================================================
# Normalization
# =============================================================================

class TestNormalizeEventDates:
    """Tests for normalize_event_dates function."""

    def test_all_day_single(self):
        dates = normalize_event_dates(EventDateInput(date="2024-06-01"))

        assert dates.is_all_day
        assert not dates.has_explicit_end
        assert dates.start == datetime(2024, 6, 1)
        assert dates.end_display == datetime(2024, 6, 1)
        assert dates.end_calendar == datetime(2024, 6, 2)

    def test_all_day_range(self):
        dates = normalize_event_dates(EventDateInput(date="2024-06-01", end_date="2024-06-03"))

        assert dates.is_all_day
        assert dates.has_explicit_end
        assert dates.end_display == datetime(2024, 6, 3)
        assert dates.end_calendar == datetime(2024, 6, 4)

    def test_all_day_ignores_time_in_end_date(self):
        dates = normalize_event_dates(
            EventDateInput(date="2024-06-01", end_date="2024-06-03T18:00:00")
        )

        assert dates.end_display == datetime(2024, 6, 3)

    def test_timed_without_end(self):
        dates = normalize_event_dates(EventDateInput(date="2024-06-01", start_time="14"))

        assert not dates.is_all_day
        assert not dates.has_explicit_end
        assert dates.start == datetime(2024, 6, 1, 14, 0)
        assert dates.end_display == dates.start
        assert dates.end_calendar == datetime(2024, 6, 1, 15, 0)

    def test_timed_with_end_time(self):
        dates = normalize_event_dates(
            EventDateInput(date="2024-06-01", start_time="14", end_time="16:30")
        )

        assert dates.has_explicit_end
        assert dates.end_display == datetime(2024, 6, 1, 16, 30)
        assert dates.end_calendar == dates.end_display

    def test_timed_with_end_date_reuses_start_time(self):
        dates = normalize_event_dates(
            EventDateInput(date="2024-06-01", end_date="2024-06-02", start_time="09:00")
        )

        assert dates.has_explicit_end
        assert dates.end_display == datetime(2024, 6, 2, 9, 0)

    def test_end_time_only_is_timed(self):
        dates = normalize_event_dates(EventDateInput(date="2024-06-01", end_time="18"))

        assert not dates.is_all_day
        assert dates.start == datetime(2024, 6, 1, 0, 0)
        assert dates.end_display == datetime(2024, 6, 1, 18, 0)

    def test_calendar_end_never_before_start(self):
        dates = normalize_event_dates(
            EventDateInput(date="2024-06-01", start_time="16", end_time="14")
        )

        assert dates.end_display == datetime(2024, 6, 1, 14, 0)
        assert dates.end_calendar == dates.start

    def test_empty_strings_count_as_absent(self):
        dates = normalize_event_dates(
            EventDateInput(date="2024-06-01", end_date="", start_time="", end_time="")
        )

        assert dates.is_all_day
        assert not dates.has_explicit_end

    def test_invalid_date_does_not_raise(self):
        dates = normalize_event_dates(EventDateInput(date="someday", start_time="14"))

        assert dates.start is None
        assert dates.end_calendar is None
        assert not dates.is_valid
        with pytest.raises(InvalidEventDateError):
            dates.require_valid()


# =============================================================================
# Display formatting
# =============================================================================

class TestFormatEventDateRange:
    """Tests for format_event_date_range function."""

    def test_all_day_single(self):
        assert format_event_date_range(EventDateInput(date="2024-06-01")) == "Jun 01, 2024"

    def test_all_day_range(self):
        label = format_event_date_range(EventDateInput(date="2024-06-01", end_date="2024-06-03"))
        assert label == "Jun 01, 2024 – Jun 03, 2024"

    def test_all_day_same_end_date(self):
        label = format_event_date_range(EventDateInput(date="2024-06-01", end_date="2024-06-01"))
        assert label == "Jun 01, 2024"

    def test_timed_single_time(self):
        label = format_event_date_range(EventDateInput(date="2024-06-01", start_time="14"))

        assert label == "Jun 01, 2024 · 2:00 PM"
        assert "–" not in label

    def test_timed_same_day_range(self):
        label = format_event_date_range(
            EventDateInput(date="2024-06-01", start_time="14", end_time="16:30")
        )
        assert label == "Jun 01, 2024 · 2:00 PM – 4:30 PM"

    def test_timed_multi_day(self):
        label = format_event_date_range(
            EventDateInput(
                date="2024-06-01", end_date="2024-06-02", start_time="14", end_time="11"
            )
        )
        assert label == "Jun 01, 2024 2:00 PM – Jun 02, 2024 11:00 AM"

    def test_invalid_date_raises(self):
        with pytest.raises(InvalidEventDateError):
            format_event_date_range(EventDateInput(date="not-a-date"))

    def test_primary_date(self):
        event = EventDateInput(date="2024-06-01", end_date="2024-06-03", start_time="09")
        assert format_event_primary_date(event) == "Jun 01, 2024"

    def test_primary_date_invalid(self):
        with pytest.raises(ValueError):
            format_event_primary_date(EventDateInput(date="June first"))
