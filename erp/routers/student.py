"""
Student router — attendance, marks, timetable, assignments, dashboard.

Every endpoint first resolves the student row from the session's user id.
If there is none, the endpoint answers with an empty payload instead of an
error.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends

from erp.core.exceptions import NotFoundError
from erp.core.roles import Role
from erp.core.security import require_role
from erp.core.session import Session
from erp.crud import assignments as assignments_crud
from erp.crud import attendance as attendance_crud
from erp.crud import courses as courses_crud
from erp.crud import marks as marks_crud
from erp.crud import timetable as timetable_crud
from erp.crud.identity import get_student_by_user
from erp.schemas.academic import AssignmentPartition, AttendanceReport, AttendanceSummary
from erp.services.assignments import partition_assignments
from erp.services.attendance import summarize_attendance
from erp.services.grades import average_cgpa, grade_card
from erp.services.timetable import build_grid, todays_classes
from erp.utils.dates import local_today
from erp.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/student", tags=["Student"])


@router.get("/attendance")
async def get_my_attendance(
    course_id: Optional[int] = None,
    session: Session = Depends(require_role([Role.STUDENT])),
):
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data={
            "summary": AttendanceReport(overall=AttendanceSummary(), by_course=[]),
            "records": [],
        })

    records, names = attendance_crud.attendance_for_student(student.student_id, course_id)
    report = summarize_attendance(records, course_id=course_id, course_names=names)
    return success_response(data={"summary": report, "records": records})


@router.get("/marks")
async def get_my_marks(
    session: Session = Depends(require_role([Role.STUDENT])),
):
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data={"courses": [], "average_cgpa": 0})

    records, names = marks_crud.marks_for_student(student.student_id)
    return success_response(data={
        "courses": [grade_card(r, names.get(r.course_id)) for r in records],
        "average_cgpa": average_cgpa(records),
    })


@router.get("/timetable")
async def get_my_timetable(
    session: Session = Depends(require_role([Role.STUDENT])),
):
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data={"grid": build_grid([]), "today": []})

    if student.section_id is None:
        slots = []
    else:
        slots = timetable_crud.slots_for_section(student.section_id)
    return success_response(data={
        "grid": build_grid(slots),
        "today": todays_classes(slots, local_today()),
    })


def _assignments_for(student) -> AssignmentPartition:
    if student.section_id is None:
        return AssignmentPartition()
    course_ids = [c.course_id for c in courses_crud.courses_for_section(student.section_id)]
    return partition_assignments(assignments_crud.assignments_for_courses(course_ids), local_today())


@router.get("/assignments")
async def get_my_assignments(
    session: Session = Depends(require_role([Role.STUDENT])),
):
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data=AssignmentPartition())

    return success_response(data=_assignments_for(student))


@router.get("/dashboard")
async def get_dashboard(
    session: Session = Depends(require_role([Role.STUDENT])),
):
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data={"assignments_due": 0, "attendance_percentage": 0, "todays_classes": 0})

    # Independent reads, no transaction across them
    partition = _assignments_for(student)
    records, _ = attendance_crud.attendance_for_student(student.student_id)
    slots = timetable_crud.slots_for_section(student.section_id) if student.section_id is not None else []

    return success_response(data={
        "assignments_due": len(partition.upcoming),
        "attendance_percentage": summarize_attendance(records).overall.percentage,
        "todays_classes": len(todays_classes(slots, local_today())),
    })
