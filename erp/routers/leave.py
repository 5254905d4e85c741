"""
Leave router — students apply and edit, faculty review.

Students:
  POST /api/leave              apply (status starts Pending)
  PUT  /api/leave/{leave_id}   edit own application while Pending
  GET  /api/leave/mine         own applications
  POST /api/leave/proof        upload a supporting document, returns its URL

Faculty:
  GET   /api/leave/review               applications from students in sections they teach
  PATCH /api/leave/{leave_id}/status    set Pending / Approved / Rejected
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from erp.core.exceptions import NotFoundError
from erp.core.roles import Role
from erp.core.security import require_role
from erp.core.session import Session
from erp.core.storage import upload_proof
from erp.crud import courses as courses_crud
from erp.crud import leave as leave_crud
from erp.crud.identity import get_faculty_by_user, get_student_by_user
from erp.schemas.workflow import LeaveForm, LeaveTransition
from erp.services import leave as lifecycle
from erp.utils.response import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/leave", tags=["Leave"])


@router.post("")
async def apply_leave(
    body: LeaveForm,
    session: Session = Depends(require_role([Role.STUDENT])),
):
    lifecycle.validate_leave_form(body.reason, body.from_date, body.to_date)
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    result = leave_crud.insert_leave(lifecycle.new_leave(student.student_id, body))
    logger.info("Student %s applied for leave %s to %s", student.student_id, body.from_date, body.to_date)
    return success_response(data=result, message="Your leave application has been submitted successfully")


@router.put("/{leave_id}")
async def edit_leave(
    leave_id: int,
    body: LeaveForm,
    session: Session = Depends(require_role([Role.STUDENT])),
):
    lifecycle.validate_leave_form(body.reason, body.from_date, body.to_date)
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    existing = leave_crud.get_leave(leave_id)
    update = lifecycle.edit_leave(existing, student.student_id, body)
    result = leave_crud.update_leave(leave_id, update)
    return success_response(data=result, message="Your leave application has been updated successfully")


@router.get("/mine")
async def my_leave(
    session: Session = Depends(require_role([Role.STUDENT])),
):
    try:
        student = get_student_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data=[])
    return success_response(data=leave_crud.leaves_for_student(student.student_id))


@router.post("/proof")
async def upload_leave_proof(
    file: UploadFile = File(...),
    session: Session = Depends(require_role([Role.STUDENT])),
):
    content = await file.read()
    url = upload_proof(file.filename, content, file.content_type)
    return success_response(data={"proof_url": url}, message="Your file has been uploaded successfully")


# ===== Review (faculty) =====

@router.get("/review")
async def leave_for_review(
    section_id: Optional[int] = None,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    try:
        faculty = get_faculty_by_user(session.user_id)
    except NotFoundError as e:
        logger.warning("%s", e)
        return success_response(data=[])

    courses = courses_crud.courses_for_faculty(faculty.faculty_id)
    sections = sorted({c.section_id for c in courses if c.section_id is not None})
    if section_id is not None:
        sections = [s for s in sections if s == section_id]
    students = courses_crud.students_in_sections(sections)

    student_ids = lifecycle.reviewable_student_ids(courses, students, section_id)
    return success_response(data=leave_crud.leaves_for_students(sorted(student_ids)))


@router.patch("/{leave_id}/status")
async def review_leave(
    leave_id: int,
    body: LeaveTransition,
    session: Session = Depends(require_role([Role.FACULTY])),
):
    try:
        faculty = get_faculty_by_user(session.user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    existing = leave_crud.get_leave(leave_id)
    update = lifecycle.transition(body.status, faculty.faculty_id)
    result = leave_crud.update_leave(leave_id, update)
    logger.info(
        "Faculty %s moved leave %s from %s to %s",
        faculty.faculty_id, leave_id,
        existing.status.value if existing.status else None, body.status.value,
    )
    return success_response(data=result, message=f"Leave application marked {body.status.value}")
