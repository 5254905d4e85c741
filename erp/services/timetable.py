"""
Weekly timetable grid: periods 1-8 by Monday-Friday.

Cells hold lists. A faculty member can have two sections in the same
period on the same day, and both slots must show.
"""

import logging
from datetime import date
from typing import Iterable

from erp.schemas.academic import TimetableRow, TimetableSlot

logger = logging.getLogger(__name__)

PERIODS = range(1, 9)
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]


def build_grid(slots: Iterable[TimetableSlot]) -> list[TimetableRow]:
    cells: dict[tuple[int, str], list[TimetableSlot]] = {}
    time_slots: dict[int, str] = {}

    for slot in slots:
        if slot.period not in PERIODS or slot.day_of_week not in WEEKDAYS:
            logger.debug("Skipping slot outside the weekly grid: %s", slot)
            continue
        cells.setdefault((slot.period, slot.day_of_week), []).append(slot)
        if slot.time_slot and slot.period not in time_slots:
            time_slots[slot.period] = slot.time_slot

    return [
        TimetableRow(
            period=period,
            time_slot=time_slots.get(period),
            days={day: cells.get((period, day), []) for day in WEEKDAYS},
        )
        for period in PERIODS
    ]


def todays_classes(slots: Iterable[TimetableSlot], today: date) -> list[TimetableSlot]:
    if today.weekday() >= len(WEEKDAYS):
        return []
    weekday = WEEKDAYS[today.weekday()]
    todays = [s for s in slots if s.day_of_week == weekday and s.period is not None]
    return sorted(todays, key=lambda s: s.period)
