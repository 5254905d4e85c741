from erp.core.database import get_supabase
from erp.crud.base import rows, run
from erp.schemas.academic import CalendarEventRow


def list_events() -> list[CalendarEventRow]:
    db = get_supabase()
    result = run(
        db.table("academiccalendar").select("*").order("start_date"),
        "load academic calendar",
    )
    return [CalendarEventRow.model_validate(r) for r in rows(result)]
