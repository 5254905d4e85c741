from erp.core.database import get_supabase
from erp.crud.base import rows, run
from erp.schemas.academic import CourseRow, StudentRow


def courses_for_faculty(faculty_id: int) -> list[CourseRow]:
    db = get_supabase()
    result = run(
        db.table("courses").select("*").eq("faculty_id", faculty_id).order("course_id"),
        "load faculty courses",
    )
    return [CourseRow.model_validate(r) for r in rows(result)]


def courses_for_section(section_id: int) -> list[CourseRow]:
    db = get_supabase()
    result = run(
        db.table("courses").select("*").eq("section_id", section_id).order("course_id"),
        "load section courses",
    )
    return [CourseRow.model_validate(r) for r in rows(result)]


def get_course(course_id: int) -> CourseRow | None:
    db = get_supabase()
    result = run(
        db.table("courses").select("*").eq("course_id", course_id).limit(1),
        "load course",
    )
    found = rows(result)
    return CourseRow.model_validate(found[0]) if found else None


def students_in_sections(section_ids: list[int]) -> list[StudentRow]:
    if not section_ids:
        return []
    db = get_supabase()
    result = run(
        db.table("students").select("*").in_("section_id", section_ids).order("student_id"),
        "load section students",
    )
    return [StudentRow.model_validate(r) for r in rows(result)]
