from erp.core.database import get_supabase
from erp.crud.base import embedded, rows, run
from erp.schemas.academic import TimetableSlot

SLOT_COLUMNS = "*, courses(course_name), sections(name)"


def _to_slot(row: dict) -> TimetableSlot:
    return TimetableSlot.model_validate({
        **row,
        "course_name": embedded(row, "courses", "course_name"),
        "section_name": embedded(row, "sections", "name"),
    })


def slots_for_section(section_id: int) -> list[TimetableSlot]:
    db = get_supabase()
    result = run(
        db.table("timetable").select(SLOT_COLUMNS).eq("section_id", section_id).order("period"),
        "load timetable",
    )
    return [_to_slot(r) for r in rows(result)]


def slots_for_courses(course_ids: list[int]) -> list[TimetableSlot]:
    if not course_ids:
        return []
    db = get_supabase()
    result = run(
        db.table("timetable").select(SLOT_COLUMNS).in_("course_id", course_ids).order("period"),
        "load timetable",
    )
    return [_to_slot(r) for r in rows(result)]
