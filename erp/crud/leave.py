from erp.core.database import get_supabase
from erp.core.exceptions import NotFoundError
from erp.crud.base import embedded, first, rows, run
from erp.schemas.academic import LeaveRow


def get_leave(leave_id: int) -> LeaveRow:
    db = get_supabase()
    result = run(
        db.table("leaveapplications").select("*").eq("leave_id", leave_id).limit(1),
        "load leave application",
    )
    row = first(result)
    if not row:
        raise NotFoundError(f"Leave application {leave_id} not found")
    return LeaveRow.model_validate(row)


def leaves_for_student(student_id: int) -> list[dict]:
    db = get_supabase()
    result = run(
        db.table("leaveapplications")
        .select("*")
        .eq("student_id", student_id)
        .order("from_date", desc=True),
        "load leave applications",
    )
    return rows(result)


def leaves_for_students(student_ids: list[int]) -> list[dict]:
    if not student_ids:
        return []
    db = get_supabase()
    result = run(
        db.table("leaveapplications")
        .select("*, students(name, section_id)")
        .in_("student_id", student_ids)
        .order("from_date", desc=True),
        "load leave applications",
    )
    return [
        {**r, "student_name": embedded(r, "students", "name")}
        for r in rows(result)
    ]


def insert_leave(data: dict) -> list[dict]:
    db = get_supabase()
    result = run(db.table("leaveapplications").insert(data), "submit leave application")
    return rows(result)


def update_leave(leave_id: int, data: dict) -> list[dict]:
    db = get_supabase()
    result = run(
        db.table("leaveapplications").update(data).eq("leave_id", leave_id),
        "update leave application",
    )
    return rows(result)
