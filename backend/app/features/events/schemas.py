"""
Event-related schemas.

Pydantic models for the events API. Field names follow the front matter
(camelCase) on the wire.
"""

from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

from .calendar import CalendarEvent
from .dates import EventDateInput


class EventDateFields(BaseModel):
    """Raw event date fields from front matter."""

    model_config = ConfigDict(populate_by_name=True)

    date: str
    end_date: Optional[str] = Field(default=None, alias="endDate")
    start_time: Optional[str] = Field(default=None, alias="startTime")
    end_time: Optional[str] = Field(default=None, alias="endTime")

    def to_input(self) -> EventDateInput:
        return EventDateInput(
            date=self.date,
            end_date=self.end_date,
            start_time=self.start_time,
            end_time=self.end_time,
        )


class CalendarEventRequest(EventDateFields):
    """An event to export to calendars."""

    title: str
    description: Optional[str] = None
    location: Optional[str] = None
    url: Optional[str] = None

    def to_event(self, base_url: Optional[str] = None) -> CalendarEvent:
        url = self.url
        # Site-relative event URLs become absolute when the site URL is known
        if url and base_url and url.startswith("/"):
            url = f"{base_url.rstrip('/')}{url}"
        return CalendarEvent(
            title=self.title,
            dates=self.to_input(),
            description=self.description,
            location=self.location,
            url=url,
        )


class NormalizedEventDatesSchema(BaseModel):
    """Normalized event span plus display strings."""

    start: datetime
    end_display: datetime
    end_calendar: datetime
    is_all_day: bool
    has_explicit_end: bool

    range_label: str
    primary_label: str


class CalendarLinks(BaseModel):
    """Calendar export links for one event."""

    google: str
    outlook: str
    ics: str
