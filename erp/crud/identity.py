from erp.core.database import get_supabase
from erp.core.exceptions import NotFoundError
from erp.crud.base import first, run
from erp.schemas.academic import FacultyRow, StudentRow


def get_user_by_email(email: str) -> dict | None:
    db = get_supabase()
    result = run(
        db.table("users").select("*").eq("email", email).limit(1),
        "look up user",
    )
    return first(result)


def get_student_by_user(user_id: int) -> StudentRow:
    db = get_supabase()
    result = run(
        db.table("students").select("*").eq("user_id", user_id).limit(1),
        "look up student",
    )
    row = first(result)
    if not row:
        raise NotFoundError(f"No student record for user {user_id}")
    return StudentRow.model_validate(row)


def get_faculty_by_user(user_id: int) -> FacultyRow:
    db = get_supabase()
    result = run(
        db.table("faculty").select("*").eq("user_id", user_id).limit(1),
        "look up faculty",
    )
    row = first(result)
    if not row:
        raise NotFoundError(f"No faculty record for user {user_id}")
    return FacultyRow.model_validate(row)
