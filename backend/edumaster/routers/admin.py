"""Admin routes: course moderation and user management.

Routes (all ADMIN only):
  GET    /admin/courses               list every course
  PUT    /admin/courses/{id}/status   publish / unpublish
  DELETE /admin/courses/{id}          delete course and dependents
  GET    /admin/users                 list every user with stats
  PUT    /admin/users/{id}/role       change role
  DELETE /admin/users/{id}            delete user and dependents
"""

import uuid as uuid_mod

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.core.auth import require_admin
from edumaster.dependencies import get_db
from edumaster.models.user import User
from edumaster.schemas.course import AdminCourseRead, CourseStatusUpdate
from edumaster.schemas.user import AdminUserRead, RoleUpdate
from edumaster.services import admin_service

router = APIRouter(prefix="/admin", tags=["admin"])


def _parse_id(raw: str, label: str) -> uuid_mod.UUID:
    try:
        return uuid_mod.UUID(raw)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {label}")


@router.get("/courses", response_model=list[AdminCourseRead])
async def list_courses(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return await admin_service.list_courses(db)


@router.put("/courses/{course_id}/status", response_model=AdminCourseRead)
async def set_course_status(
    course_id: str,
    body: CourseStatusUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    """Approve (published=true) or unpublish (published=false) a course."""
    ip = request.client.host if request.client else None
    return await admin_service.set_course_status(
        db,
        course_id=_parse_id(course_id, "course_id"),
        published=body.published,
        actor_id=admin.id,
        ip_address=ip,
    )


@router.delete("/courses/{course_id}", status_code=204)
async def delete_course(
    course_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    ip = request.client.host if request.client else None
    await admin_service.delete_course(
        db, course_id=_parse_id(course_id, "course_id"), actor_id=admin.id, ip_address=ip
    )


@router.get("/users", response_model=list[AdminUserRead])
async def list_users(
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    return await admin_service.list_users(db)


@router.put("/users/{user_id}/role", response_model=AdminUserRead)
async def set_user_role(
    user_id: str,
    body: RoleUpdate,
    request: Request,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    ip = request.client.host if request.client else None
    return await admin_service.set_user_role(
        db,
        user_id=_parse_id(user_id, "user_id"),
        role=body.role,
        actor_id=admin.id,
        ip_address=ip,
    )


@router.delete("/users/{user_id}", status_code=204)
async def delete_user(
    user_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    admin: User = Depends(require_admin),
):
    ip = request.client.host if request.client else None
    await admin_service.delete_user(
        db, user_id=_parse_id(user_id, "user_id"), actor_id=admin.id, ip_address=ip
    )
