from datetime import date
from typing import Iterable

from erp.schemas.academic import AssignmentPartition, AssignmentRow
from erp.utils.dates import to_local_day


def is_upcoming(assignment: AssignmentRow, today: date, zone=None) -> bool:
    """Due today or later. Assignments without a due date never fall into the past."""
    due = to_local_day(assignment.due_date, zone)
    return due is None or due >= today


def partition_assignments(assignments: Iterable[AssignmentRow], today: date, zone=None) -> AssignmentPartition:
    partition = AssignmentPartition()
    for a in assignments:
        if is_upcoming(a, today, zone):
            partition.upcoming.append(a)
        else:
            partition.past.append(a)
    return partition
