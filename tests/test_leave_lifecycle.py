from __future__ import annotations

from datetime import date

import pytest

from erp.core.exceptions import PermissionDenied, ValidationFailure
from erp.schemas.academic import CourseRow, LeaveRow, LeaveStatus, StudentRow
from erp.schemas.workflow import LeaveForm
from erp.services.leave import edit_leave, new_leave, reviewable_student_ids, transition, validate_leave_form


def _form(reason="Family function", **kw):
    data = {"reason": reason, "from_date": date(2024, 5, 1), "to_date": date(2024, 5, 3)}
    data.update(kw)
    return LeaveForm(**data)


def test_reason_of_nine_characters_is_rejected():
    with pytest.raises(ValidationFailure, match="at least 10"):
        new_leave(5, _form(reason="x" * 9))


def test_reason_of_ten_characters_creates_pending_application():
    row = new_leave(5, _form(reason="x" * 10, proof_url="https://files/proof.pdf"))
    assert row == {
        "student_id": 5,
        "reason": "x" * 10,
        "from_date": "2024-05-01",
        "to_date": "2024-05-03",
        "proof_url": "https://files/proof.pdf",
        "status": "Pending",
        "reviewed_by": None,
    }


def test_dates_are_required():
    with pytest.raises(ValidationFailure) as exc:
        validate_leave_form("A long enough reason", None, None)
    assert "From date" in exc.value.message
    assert "To date" in exc.value.message


def test_owner_can_edit_pending_application():
    existing = LeaveRow(leave_id=1, student_id=5, status=LeaveStatus.PENDING)
    update = edit_leave(existing, 5, _form(reason="Updated reason text"))
    assert update["reason"] == "Updated reason text"
    assert update["status"] == "Pending"


def test_edit_by_someone_else_is_denied():
    existing = LeaveRow(leave_id=1, student_id=5, status=LeaveStatus.PENDING)
    with pytest.raises(PermissionDenied):
        edit_leave(existing, 6, _form())


@pytest.mark.parametrize("status", [LeaveStatus.APPROVED, LeaveStatus.REJECTED])
def test_edit_after_decision_is_denied(status):
    existing = LeaveRow(leave_id=1, student_id=5, status=status)
    with pytest.raises(PermissionDenied, match="can no longer be edited"):
        edit_leave(existing, 5, _form())


def test_transition_stamps_latest_reviewer():
    leave = LeaveRow(leave_id=1, student_id=5, status=LeaveStatus.PENDING)
    for new_status, reviewer in [(LeaveStatus.APPROVED, 10), (LeaveStatus.PENDING, 11)]:
        leave = leave.model_copy(update={**transition(new_status, reviewer), "status": new_status})
    assert leave.status == LeaveStatus.PENDING
    assert leave.reviewed_by == 11


@pytest.mark.parametrize("new_status", list(LeaveStatus))
def test_every_state_is_reachable(new_status):
    assert transition(new_status, 3) == {"status": new_status.value, "reviewed_by": 3}


def test_reviewable_students_follow_taught_sections():
    courses = [CourseRow(course_id=1, section_id=1), CourseRow(course_id=2, section_id=2)]
    students = [
        StudentRow(student_id=20, section_id=1),
        StudentRow(student_id=21, section_id=2),
        StudentRow(student_id=22, section_id=3),
    ]
    assert reviewable_student_ids(courses, students) == {20, 21}
    assert reviewable_student_ids(courses, students, section_id=2) == {21}
    assert reviewable_student_ids(courses, students, section_id=3) == set()
    assert reviewable_student_ids([], students) == set()
