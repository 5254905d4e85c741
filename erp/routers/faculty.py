"""
Faculty router — attendance marking, marks entry, timetable, assignments.
Course-level endpoints only accept courses the caller teaches.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from erp.core.exceptions import NotFoundError
from erp.core.roles import Role
from erp.core.security import require_role
from erp.core.session import Session
from erp.crud import assignments as assignments_crud
from erp.crud import attendance as attendance_crud
from erp.crud import courses as courses_crud
from erp.crud import leave as leave_crud
from erp.crud import marks as marks_crud
from erp.crud import timetable as timetable_crud
from erp.crud.identity import get_faculty_by_user
from erp.schemas.academic import AssignmentPartition, AttendanceRow, CourseRow, FacultyRow, LeaveStatus, MarkRow
from erp.schemas.assignments import AssignmentCreate
from erp.schemas.workflow import AttendanceMark, MarksUpsert
from erp.services.assignments import partition_assignments
from erp.services.attendance import summarize_attendance
from erp.services.grades import compute_total, internal_averages, letter_grade
from erp.services.leave import reviewable_student_ids
from erp.services.timetable import build_grid, todays_classes
from erp.utils.dates import local_today
from erp.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/faculty", tags=["Faculty"])


def _faculty_or_404(session: Session) -> FacultyRow:
    try:
        return get_faculty_by_user(session.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)


def _own_course(faculty: FacultyRow, course_id: int) -> CourseRow:
    course = courses_crud.get_course(course_id)
    if course is None:
        raise HTTPException(status_code=404, detail=f"Course {course_id} not found")
    if course.faculty_id != faculty.faculty_id:
        raise HTTPException(status_code=403, detail=f"You do not teach course {course_id}")
    return course


# ===== ATTENDANCE =====

@router.post("/attendance/mark")
async def mark_attendance(
    body: AttendanceMark,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    """Mark attendance for one class meeting. Bulk insert for all students."""
    faculty = _faculty_or_404(session)
    _own_course(faculty, body.course_id)

    saved = attendance_crud.insert_attendance(
        body.course_id,
        body.date,
        [(rec.student_id, rec.status) for rec in body.records],
    )
    logger.info("Faculty %s marked attendance for %d students in course %s on %s",
                faculty.faculty_id, len(saved), body.course_id, body.date)
    return success_response(
        data={"count": len(saved)},
        message=f"Attendance marked for {len(saved)} students",
    )


@router.get("/attendance/{course_id}")
async def get_course_attendance(
    course_id: int,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    faculty = _faculty_or_404(session)
    course = _own_course(faculty, course_id)

    records = attendance_crud.attendance_for_course(course_id)
    by_student: dict[int, list[AttendanceRow]] = {}
    for r in records:
        by_student.setdefault(r.get("student_id"), []).append(AttendanceRow.model_validate(r))

    students = [
        {"student_id": sid, **summarize_attendance(rows).overall.model_dump()}
        for sid, rows in by_student.items()
    ]
    return success_response(data={
        "course": course,
        "summary": summarize_attendance(AttendanceRow.model_validate(r) for r in records).overall,
        "students": students,
        "records": records,
    })


# ===== MARKS =====

@router.post("/marks")
async def upsert_marks(
    body: MarksUpsert,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    faculty = _faculty_or_404(session)
    _own_course(faculty, body.course_id)

    # Only fields present in the request are written. Entries are upserted in
    # groups sharing the same columns so omitted columns keep their stored value.
    groups: dict[tuple[str, ...], list[dict]] = {}
    for entry in body.entries:
        record = {"course_id": body.course_id, **entry.model_dump(exclude_unset=True)}
        groups.setdefault(tuple(sorted(record)), []).append(record)

    saved = []
    for records in groups.values():
        saved.extend(marks_crud.upsert_marks(records))
    logger.info("Faculty %s saved marks for %d students in course %s",
                faculty.faculty_id, len(saved), body.course_id)
    return success_response(
        data={"count": len(saved)},
        message=f"Marks saved for {len(saved)} students",
    )


@router.get("/marks/{course_id}")
async def get_course_marks(
    course_id: int,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    faculty = _faculty_or_404(session)
    course = _own_course(faculty, course_id)

    raw = marks_crud.marks_for_course(course_id)
    records = [MarkRow.model_validate(r) for r in raw]
    students = []
    for row, rec in zip(raw, records):
        total = compute_total(rec.internal1, rec.internal2, rec.internal3, rec.semester_marks)
        students.append({**row, "total": total, "grade": letter_grade(total)})

    return success_response(data={
        "course": course,
        "averages": internal_averages(records),
        "students": students,
    })


# ===== TIMETABLE =====

@router.get("/timetable")
async def get_my_timetable(
    session: Session = Depends(require_role([Role.FACULTY])),
):
    faculty = _faculty_or_404(session)
    course_ids = [c.course_id for c in courses_crud.courses_for_faculty(faculty.faculty_id)]
    slots = timetable_crud.slots_for_courses(course_ids)
    return success_response(data={
        "grid": build_grid(slots),
        "today": todays_classes(slots, local_today()),
    })


# ===== ASSIGNMENTS =====

@router.post("/assignments")
async def create_assignment(
    body: AssignmentCreate,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    faculty = _faculty_or_404(session)
    _own_course(faculty, body.course_id)

    data = {
        "course_id": body.course_id,
        "title": body.title,
        "description": body.description,
        "due_date": body.due_date.isoformat(),
        "created_by": faculty.faculty_id,
    }
    result = assignments_crud.create_assignment(data)
    logger.info("Faculty %s posted assignment '%s' for course %s", faculty.faculty_id, body.title, body.course_id)
    return success_response(data=result, message="Assignment created")


@router.get("/assignments")
async def get_my_assignments(
    session: Session = Depends(require_role([Role.FACULTY])),
):
    try:
        faculty = get_faculty_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data=AssignmentPartition())

    assignments = assignments_crud.assignments_by_faculty(faculty.faculty_id)
    return success_response(data=partition_assignments(assignments, local_today()))


# ===== DASHBOARD =====

@router.get("/dashboard")
async def get_dashboard(
    session: Session = Depends(require_role([Role.FACULTY])),
):
    try:
        faculty = get_faculty_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data={
            "courses": 0, "pending_leave": 0, "active_assignments": 0, "todays_classes": 0,
        })

    courses = courses_crud.courses_for_faculty(faculty.faculty_id)

    # 1. Pending leave among students this faculty can review
    section_ids = sorted({c.section_id for c in courses if c.section_id is not None})
    student_ids = reviewable_student_ids(courses, courses_crud.students_in_sections(section_ids))
    leaves = leave_crud.leaves_for_students(sorted(student_ids))
    pending = [l for l in leaves if l.get("status") == LeaveStatus.PENDING.value]

    # 2. Assignments still open
    partition = partition_assignments(assignments_crud.assignments_by_faculty(faculty.faculty_id), local_today())

    # 3. Classes today
    slots = timetable_crud.slots_for_courses([c.course_id for c in courses])

    return success_response(data={
        "courses": len(courses),
        "pending_leave": len(pending),
        "active_assignments": len(partition.upcoming),
        "todays_classes": len(todays_classes(slots, local_today())),
    })
