"""
Mark totals and letter grades.

The total is the plain mean of whichever of internal1, internal2, internal3
and semester_marks are filled in. Missing fields are left out of both sum
and divisor rather than counted as zero.
"""

from typing import Iterable, Optional

from erp.schemas.academic import GradeCard, InternalAverages, MarkRow

GRADE_BANDS = [
    (90, "A+"),
    (80, "A"),
    (70, "B+"),
    (60, "B"),
    (50, "C"),
    (40, "D"),
]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0


def compute_total(
    internal1: Optional[float],
    internal2: Optional[float],
    internal3: Optional[float],
    semester: Optional[float],
) -> Optional[float]:
    present = [v for v in (internal1, internal2, internal3, semester) if v is not None]
    if not present:
        return None
    return _mean(present)


def letter_grade(total: Optional[float]) -> str:
    if total is None:
        return "-"
    for floor, grade in GRADE_BANDS:
        if total >= floor:
            return grade
    return "F"


def average_cgpa(records: Iterable[MarkRow]) -> float:
    return _mean([r.cgpa for r in records if r.cgpa is not None])


def internal_averages(records: Iterable[MarkRow]) -> InternalAverages:
    """Class-wide mean of each internal, over students who have that internal."""
    records = list(records)
    return InternalAverages(
        internal1=_mean([r.internal1 for r in records if r.internal1 is not None]),
        internal2=_mean([r.internal2 for r in records if r.internal2 is not None]),
        internal3=_mean([r.internal3 for r in records if r.internal3 is not None]),
    )


def grade_card(record: MarkRow, course_name: Optional[str] = None) -> GradeCard:
    total = compute_total(record.internal1, record.internal2, record.internal3, record.semester_marks)
    return GradeCard(
        **record.model_dump(),
        course_name=course_name,
        total=total,
        grade=letter_grade(total),
    )
