"""
Attendance aggregation.

Every record counts toward `total`. Only Present and Absent move their own
counters, so Late and Excused rows sit in `total` without affecting the
percentage, which is present / (present + absent).
"""

import math
from typing import Iterable, Optional

from erp.schemas.academic import (
    AttendanceReport,
    AttendanceRow,
    AttendanceStatus,
    AttendanceSummary,
    CourseAttendance,
)


def percentage(present: int, absent: int) -> int:
    """Whole-number percentage, rounded half up; 0 when nothing was marked."""
    denominator = present + absent
    if denominator <= 0:
        return 0
    return math.floor(present / denominator * 100 + 0.5)


def summarize_attendance(
    records: Iterable[AttendanceRow],
    course_id: Optional[int] = None,
    course_names: Optional[dict[int, str]] = None,
) -> AttendanceReport:
    course_names = course_names or {}
    per_course: dict[Optional[int], dict[str, int]] = {}
    present = absent = total = 0

    for rec in records:
        if course_id is not None and rec.course_id != course_id:
            continue
        stats = per_course.setdefault(rec.course_id, {"present": 0, "absent": 0, "total": 0})
        stats["total"] += 1
        total += 1
        if rec.status == AttendanceStatus.PRESENT.value:
            stats["present"] += 1
            present += 1
        elif rec.status == AttendanceStatus.ABSENT.value:
            stats["absent"] += 1
            absent += 1

    by_course = [
        CourseAttendance(
            course_id=cid,
            course_name=course_names.get(cid),
            present=stats["present"],
            absent=stats["absent"],
            total=stats["total"],
            percentage=percentage(stats["present"], stats["absent"]),
        )
        for cid, stats in per_course.items()
    ]

    return AttendanceReport(
        overall=AttendanceSummary(
            present=present,
            absent=absent,
            total=total,
            percentage=percentage(present, absent),
        ),
        by_course=by_course,
    )
