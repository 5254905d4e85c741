from __future__ import annotations

from datetime import date

from erp.schemas.academic import TimetableSlot
from erp.services.timetable import WEEKDAYS, build_grid, todays_classes


def _slot(period, day, course_id, time_slot=None):
    return TimetableSlot(period=period, day_of_week=day, course_id=course_id, section_id=1, time_slot=time_slot)


def test_grid_is_eight_periods_by_five_days():
    grid = build_grid([])
    assert [row.period for row in grid] == list(range(1, 9))
    assert all(list(row.days) == WEEKDAYS for row in grid)
    assert all(cell == [] for row in grid for cell in row.days.values())


def test_slots_sharing_a_cell_are_all_kept():
    first = _slot(3, "Monday", 100)
    second = _slot(3, "Monday", 101)
    grid = build_grid([first, second])
    cell = grid[2].days["Monday"]
    assert [s.course_id for s in cell] == [100, 101]


def test_time_slot_comes_from_first_slot_of_the_period():
    grid = build_grid([_slot(1, "Tuesday", 1, "09:00-09:50"), _slot(1, "Friday", 2, "09:05-09:55")])
    assert grid[0].time_slot == "09:00-09:50"
    assert grid[1].time_slot is None


def test_slots_outside_the_grid_are_dropped():
    grid = build_grid([_slot(9, "Monday", 1), _slot(2, "Saturday", 2), _slot(None, "Monday", 3)])
    assert all(cell == [] for row in grid for cell in row.days.values())


def test_todays_classes_sorted_by_period():
    slots = [_slot(4, "Monday", 1), _slot(2, "Monday", 2), _slot(2, "Tuesday", 3)]
    # 2024-06-10 is a Monday
    assert [s.course_id for s in todays_classes(slots, date(2024, 6, 10))] == [2, 1]


def test_no_classes_on_weekends():
    slots = [_slot(1, "Monday", 1)]
    assert todays_classes(slots, date(2024, 6, 15)) == []
