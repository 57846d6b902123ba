"""Instructor routes: own courses and student progress."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.core.auth import require_instructor
from edumaster.dependencies import get_db
from edumaster.models.user import User
from edumaster.schemas.course import InstructorCourseRead
from edumaster.schemas.student import StudentProgressRow
from edumaster.services import instructor_service

router = APIRouter(prefix="/instructor", tags=["instructor"])


@router.get("/my-courses", response_model=list[InstructorCourseRead])
async def my_courses(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_instructor),
):
    """Courses created by the current instructor, newest first."""
    return await instructor_service.list_my_courses(db, instructor_id=current_user.id)


@router.get("/students", response_model=list[StudentProgressRow])
async def students(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_instructor),
):
    """One row per enrollment in the current instructor's courses."""
    return await instructor_service.list_student_progress(db, instructor_id=current_user.id)
