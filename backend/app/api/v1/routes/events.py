"""
Event Routes

Date normalization and calendar exports for events.
"""

import re
from typing import Optional

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import Response

from app.config import settings
from app.features.events import (
    CalendarEventRequest,
    CalendarLinks,
    EventDateFields,
    InvalidEventDateError,
    NormalizedEventDatesSchema,
    build_google_calendar_link,
    build_ics_content,
    build_ics_data_uri,
    build_microsoft_calendar_link,
    format_event_date_range,
    format_event_primary_date,
    normalize_event_dates,
)

router = APIRouter()


def _slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or "event"


@router.post("/dates", response_model=NormalizedEventDatesSchema)
def normalize_dates(fields: EventDateFields):
    """Normalize event date fields and format them for display."""
    event = fields.to_input()
    dates = normalize_event_dates(event)

    if not dates.is_valid:
        raise HTTPException(status_code=422, detail="Invalid event date")

    return NormalizedEventDatesSchema(
        start=dates.start,
        end_display=dates.end_display,
        end_calendar=dates.end_calendar,
        is_all_day=dates.is_all_day,
        has_explicit_end=dates.has_explicit_end,
        range_label=format_event_date_range(event),
        primary_label=format_event_primary_date(event),
    )


@router.post("/links", response_model=CalendarLinks)
def calendar_links(request: CalendarEventRequest):
    """Google, Outlook and ICS download links for an event."""
    event = request.to_event(base_url=settings.base_url)

    try:
        return CalendarLinks(
            google=build_google_calendar_link(event),
            outlook=build_microsoft_calendar_link(event),
            ics=build_ics_data_uri(event),
        )
    except InvalidEventDateError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/calendar.ics")
def download_ics(
    title: str = Query(..., min_length=1),
    date: str = Query(..., min_length=1),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    start_time: Optional[str] = Query(default=None, alias="startTime"),
    end_time: Optional[str] = Query(default=None, alias="endTime"),
    description: Optional[str] = None,
    location: Optional[str] = None,
    url: Optional[str] = None,
):
    """Download an event as an .ics file."""
    request = CalendarEventRequest(
        title=title,
        date=date,
        end_date=end_date,
        start_time=start_time,
        end_time=end_time,
        description=description,
        location=location,
        url=url,
    )

    try:
        content = build_ics_content(request.to_event(base_url=settings.base_url))
    except InvalidEventDateError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return Response(
        content=content,
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{_slugify(title)}.ics"'},
    )
