"""
Academic calendar router — open to any logged-in user.
"""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from erp.core.security import get_current_session
from erp.core.session import Session
from erp.crud.calendar_events import list_events
from erp.services.academic_calendar import classify_event, events_on, highlighted_days
from erp.utils.dates import local_today
from erp.utils.response import success_response

router = APIRouter(prefix="/api/calendar", tags=["Calendar"])


@router.get("")
async def events_for_day(
    on: Optional[date] = None,
    session: Session = Depends(get_current_session),
):
    """Events covering `on` (default: today), each tagged holiday / exam / event."""
    day = on or local_today()
    events = events_on(list_events(), day)
    return success_response(data={
        "date": day.isoformat(),
        "events": [
            {**e.model_dump(), "category": classify_event(e.title).value}
            for e in events
        ],
    })


@router.get("/month")
async def month_view(
    year: int = Query(..., ge=1900, le=9999),
    month: int = Query(..., ge=1, le=12),
    session: Session = Depends(get_current_session),
):
    days = highlighted_days(list_events(), year, month)
    return success_response(data={
        "year": year,
        "month": month,
        "highlighted": [d.isoformat() for d in days],
    })
