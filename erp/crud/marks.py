from erp.core.database import get_supabase
from erp.crud.base import embedded, rows, run
from erp.schemas.academic import MarkRow


def marks_for_student(student_id: int) -> tuple[list[MarkRow], dict[int, str]]:
    db = get_supabase()
    result = run(
        db.table("marks")
        .select("*, courses(course_name)")
        .eq("student_id", student_id)
        .order("course_id"),
        "load marks",
    )
    records, names = [], {}
    for r in rows(result):
        records.append(MarkRow.model_validate(r))
        name = embedded(r, "courses", "course_name")
        if r.get("course_id") is not None and name:
            names[r["course_id"]] = name
    return records, names


def marks_for_course(course_id: int) -> list[dict]:
    db = get_supabase()
    result = run(
        db.table("marks")
        .select("*, students(name)")
        .eq("course_id", course_id)
        .order("student_id"),
        "load course marks",
    )
    return rows(result)


def upsert_marks(records: list[dict]) -> list[dict]:
    if not records:
        return []
    db = get_supabase()
    result = run(
        db.table("marks").upsert(records, on_conflict="student_id,course_id"),
        "save marks",
    )
    return rows(result)
