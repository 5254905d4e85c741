from erp.core.database import get_supabase
from erp.crud.base import embedded, rows, run
from erp.schemas.academic import AssignmentRow

ASSIGNMENT_COLUMNS = "*, courses(course_name), faculty(name)"


def _to_assignment(row: dict) -> AssignmentRow:
    return AssignmentRow.model_validate({
        **row,
        "course_name": embedded(row, "courses", "course_name"),
        "faculty_name": embedded(row, "faculty", "name"),
    })


def assignments_for_courses(course_ids: list[int]) -> list[AssignmentRow]:
    if not course_ids:
        return []
    db = get_supabase()
    result = run(
        db.table("assignments")
        .select(ASSIGNMENT_COLUMNS)
        .in_("course_id", course_ids)
        .order("due_date"),
        "load assignments",
    )
    return [_to_assignment(r) for r in rows(result)]


def assignments_by_faculty(faculty_id: int) -> list[AssignmentRow]:
    db = get_supabase()
    result = run(
        db.table("assignments")
        .select(ASSIGNMENT_COLUMNS)
        .eq("created_by", faculty_id)
        .order("due_date"),
        "load assignments",
    )
    return [_to_assignment(r) for r in rows(result)]


def create_assignment(data: dict) -> list[dict]:
    db = get_supabase()
    result = run(db.table("assignments").insert(data), "create assignment")
    return rows(result)
