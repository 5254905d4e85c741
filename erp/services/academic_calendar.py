"""
Academic calendar coverage.

An event covers a day when start_date <= day <= end_date, both ends
inclusive, compared as local calendar days.
"""

import calendar
from datetime import date
from typing import Iterable

from erp.schemas.academic import CalendarEventRow, EventCategory
from erp.utils.dates import to_local_day

CATEGORY_KEYWORDS = [
    (EventCategory.HOLIDAY, ("holiday", "vacation")),
    (EventCategory.EXAM, ("exam", "test")),
]


def covers(event: CalendarEventRow, day: date, zone=None) -> bool:
    start = to_local_day(event.start_date, zone)
    end = to_local_day(event.end_date, zone)
    if start is None or end is None:
        return False
    return start <= day <= end


def events_on(events: Iterable[CalendarEventRow], day: date, zone=None) -> list[CalendarEventRow]:
    return [e for e in events if covers(e, day, zone)]


def is_highlighted(events: Iterable[CalendarEventRow], day: date, zone=None) -> bool:
    return any(covers(e, day, zone) for e in events)


def classify_event(title: str | None) -> EventCategory:
    lowered = (title or "").lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in lowered for k in keywords):
            return category
    return EventCategory.EVENT


def highlighted_days(events: Iterable[CalendarEventRow], year: int, month: int, zone=None) -> list[date]:
    """Days of the month covered by at least one event."""
    events = list(events)
    _, last = calendar.monthrange(year, month)
    days = (date(year, month, d) for d in range(1, last + 1))
    return [d for d in days if is_highlighted(events, d, zone)]
