"""
Pydantic models for rows read from the academic tables.

Columns are nullable in the database, so most fields are Optional. Unknown
columns (embedded relations such as `courses`) are ignored unless a model
names them.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Row(BaseModel):
    model_config = ConfigDict(extra="ignore", use_enum_values=False)


# ---- Attendance ----
class AttendanceStatus(str, Enum):
    PRESENT = "Present"
    ABSENT = "Absent"
    LATE = "Late"
    EXCUSED = "Excused"


class AttendanceRow(Row):
    attendance_id: Optional[int] = None
    date: Optional[str] = None
    # kept as str: rows with statuses outside the enum still count toward totals
    status: Optional[str] = None
    course_id: Optional[int] = None
    student_id: Optional[int] = None


class AttendanceSummary(BaseModel):
    present: int = 0
    absent: int = 0
    total: int = 0
    percentage: int = 0


class CourseAttendance(AttendanceSummary):
    course_id: Optional[int] = None
    course_name: Optional[str] = None


class AttendanceReport(BaseModel):
    overall: AttendanceSummary
    by_course: list[CourseAttendance]


# ---- Marks ----
class MarkRow(Row):
    marks_id: Optional[int] = None
    student_id: Optional[int] = None
    course_id: Optional[int] = None
    internal1: Optional[float] = None
    internal2: Optional[float] = None
    internal3: Optional[float] = None
    semester_marks: Optional[float] = None
    cgpa: Optional[float] = None


class GradeCard(MarkRow):
    course_name: Optional[str] = None
    total: Optional[float] = None
    grade: str = "-"


class InternalAverages(BaseModel):
    internal1: float = 0
    internal2: float = 0
    internal3: float = 0


# ---- Assignments ----
class AssignmentRow(Row):
    assignment_id: Optional[int] = None
    course_id: Optional[int] = None
    title: str = ""
    description: Optional[str] = None
    due_date: Optional[str] = None
    created_by: Optional[int] = None
    created_at: Optional[str] = None
    course_name: Optional[str] = None
    faculty_name: Optional[str] = None


class AssignmentPartition(BaseModel):
    upcoming: list[AssignmentRow] = Field(default_factory=list)
    past: list[AssignmentRow] = Field(default_factory=list)


# ---- Leave ----
class LeaveStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveRow(Row):
    leave_id: Optional[int] = None
    student_id: Optional[int] = None
    from_date: Optional[str] = None
    to_date: Optional[str] = None
    reason: Optional[str] = None
    proof_url: Optional[str] = None
    status: Optional[LeaveStatus] = None
    reviewed_by: Optional[int] = None


# ---- Calendar ----
class EventCategory(str, Enum):
    HOLIDAY = "holiday"
    EXAM = "exam"
    EVENT = "event"


class CalendarEventRow(Row):
    event_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None
    end_date: Optional[str] = None


# ---- Timetable ----
class TimetableSlot(Row):
    timetable_id: Optional[int] = None
    course_id: Optional[int] = None
    section_id: Optional[int] = None
    day_of_week: Optional[str] = None
    period: Optional[int] = None
    time_slot: Optional[str] = None
    course_name: Optional[str] = None
    section_name: Optional[str] = None


class TimetableRow(BaseModel):
    period: int
    time_slot: Optional[str] = None
    days: dict[str, list[TimetableSlot]]


# ---- Supporting rows ----
class CourseRow(Row):
    course_id: int
    course_name: Optional[str] = None
    faculty_id: Optional[int] = None
    section_id: Optional[int] = None
    semester: Optional[int] = None
    is_lab: Optional[int] = None


class StudentRow(Row):
    student_id: int
    user_id: Optional[int] = None
    name: Optional[str] = None
    section_id: Optional[int] = None
    current_semester: Optional[int] = None
    year_of_admission: Optional[int] = None


class FacultyRow(Row):
    faculty_id: int
    user_id: Optional[int] = None
    name: Optional[str] = None
    department: Optional[str] = None
    designation: Optional[str] = None
