"""
Leave application lifecycle.

States are Pending, Approved and Rejected. Reviewers may move an application
between any two of them (including back to Pending); every move stamps
`reviewed_by` with the reviewer. Students may edit only their own
applications, and only while Pending.
"""

from datetime import date
from typing import Iterable, Optional

from erp.core.exceptions import PermissionDenied, ValidationFailure
from erp.schemas.academic import CourseRow, LeaveRow, LeaveStatus, StudentRow
from erp.schemas.workflow import LeaveForm

MIN_REASON_LENGTH = 10


def validate_leave_form(reason: Optional[str], from_date: Optional[date], to_date: Optional[date]) -> None:
    errors = []
    if reason is None or len(reason) < MIN_REASON_LENGTH:
        errors.append(f"Reason must be at least {MIN_REASON_LENGTH} characters")
    if from_date is None:
        errors.append("From date is required")
    if to_date is None:
        errors.append("To date is required")
    if errors:
        raise ValidationFailure("; ".join(errors))


def _form_fields(form: LeaveForm) -> dict:
    validate_leave_form(form.reason, form.from_date, form.to_date)
    return {
        "reason": form.reason,
        "from_date": form.from_date.isoformat(),
        "to_date": form.to_date.isoformat(),
        "proof_url": form.proof_url,
    }


def new_leave(student_id: int, form: LeaveForm) -> dict:
    """Row to insert for a fresh application."""
    return {
        "student_id": student_id,
        **_form_fields(form),
        "status": LeaveStatus.PENDING.value,
        "reviewed_by": None,
    }


def edit_leave(existing: LeaveRow, student_id: int, form: LeaveForm) -> dict:
    """Update payload for an owner editing a Pending application."""
    if existing.student_id != student_id:
        raise PermissionDenied("You can only edit your own leave applications")
    if existing.status != LeaveStatus.PENDING:
        raise PermissionDenied(
            f"Leave application {existing.leave_id} is {existing.status.value if existing.status else 'unknown'} and can no longer be edited"
        )
    return {**_form_fields(form), "status": LeaveStatus.PENDING.value}


def transition(new_status: LeaveStatus, reviewer_id: int) -> dict:
    """Update payload for a reviewer decision. Every state is reachable from every other."""
    return {"status": LeaveStatus(new_status).value, "reviewed_by": reviewer_id}


def reviewable_student_ids(
    courses: Iterable[CourseRow],
    students: Iterable[StudentRow],
    section_id: Optional[int] = None,
) -> set[int]:
    """Students in sections where the reviewer teaches at least one course.

    `courses` are the reviewer's own courses. With `section_id`, only that
    section is kept, and only if the reviewer teaches in it.
    """
    sections = {c.section_id for c in courses if c.section_id is not None}
    if section_id is not None:
        sections &= {section_id}
    return {s.student_id for s in students if s.section_id in sections}
