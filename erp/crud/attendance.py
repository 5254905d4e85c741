from datetime import date
from typing import Optional

from erp.core.database import get_supabase
from erp.crud.base import embedded, rows, run
from erp.schemas.academic import AttendanceRow, AttendanceStatus


def attendance_for_student(student_id: int, course_id: Optional[int] = None) -> tuple[list[AttendanceRow], dict[int, str]]:
    """Attendance rows for one student, plus course names seen along the way."""
    db = get_supabase()
    query = (
        db.table("attendance")
        .select("*, courses(course_name)")
        .eq("student_id", student_id)
    )
    if course_id is not None:
        query = query.eq("course_id", course_id)
    result = run(query.order("date", desc=True), "load attendance")

    records, names = [], {}
    for r in rows(result):
        records.append(AttendanceRow.model_validate(r))
        name = embedded(r, "courses", "course_name")
        if r.get("course_id") is not None and name:
            names[r["course_id"]] = name
    return records, names


def attendance_for_course(course_id: int) -> list[dict]:
    db = get_supabase()
    result = run(
        db.table("attendance")
        .select("*, students(name)")
        .eq("course_id", course_id)
        .order("date", desc=True),
        "load course attendance",
    )
    return rows(result)


def insert_attendance(course_id: int, day: date, entries: list[tuple[int, AttendanceStatus]]) -> list[dict]:
    """Plain insert; marking the same day twice creates duplicate rows."""
    records = [
        {
            "course_id": course_id,
            "student_id": student_id,
            "date": day.isoformat(),
            "status": AttendanceStatus(status).value,
        }
        for student_id, status in entries
    ]
    if not records:
        return []
    db = get_supabase()
    result = run(db.table("attendance").insert(records), "save attendance")
    return rows(result)
