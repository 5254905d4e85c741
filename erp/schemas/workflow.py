"""
Pydantic schemas for attendance, marks, and leave workflows.
"""

from pydantic import BaseModel
from typing import Optional, List
from datetime import date

from erp.schemas.academic import AttendanceStatus, LeaveStatus


# ---- Attendance ----
class AttendanceEntry(BaseModel):
    student_id: int
    status: AttendanceStatus


class AttendanceMark(BaseModel):
    course_id: int
    date: date
    records: List[AttendanceEntry]


# ---- Marks ----
class MarkEntry(BaseModel):
    student_id: int
    internal1: Optional[float] = None
    internal2: Optional[float] = None
    internal3: Optional[float] = None
    semester_marks: Optional[float] = None
    cgpa: Optional[float] = None


class MarksUpsert(BaseModel):
    course_id: int
    entries: List[MarkEntry]


# ---- Leave ----
class LeaveForm(BaseModel):
    # length rules are checked by services.leave.validate_leave_form
    reason: str = ""
    from_date: Optional[date] = None
    to_date: Optional[date] = None
    proof_url: Optional[str] = None


class LeaveTransition(BaseModel):
    status: LeaveStatus
