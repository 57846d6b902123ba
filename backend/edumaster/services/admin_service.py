"""Admin service: course moderation and user management.

Listings carry derived figures (course students/rating, user stats) that
are aggregated here and never stored. All writes audit-logged.
"""

import uuid
from collections import Counter

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.models.base import utcnow
from edumaster.models.course import Course
from edumaster.models.enrollment import Enrollment
from edumaster.models.review import Review
from edumaster.models.user import User, UserRole
from edumaster.schemas.course import AdminCourseRead
from edumaster.schemas.user import AdminUserRead, UserStats
from edumaster.services import audit_service, delete_service


def course_status(published: bool) -> str:
    return "published" if published else "draft"


async def _enrollment_counts(db: AsyncSession) -> dict[uuid.UUID, int]:
    result = await db.execute(
        select(Enrollment.course_id, func.count(Enrollment.id)).group_by(Enrollment.course_id)
    )
    return {course_id: count for course_id, count in result.all()}


async def _average_ratings(db: AsyncSession) -> dict[uuid.UUID, float]:
    result = await db.execute(
        select(Review.course_id, func.avg(Review.rating)).group_by(Review.course_id)
    )
    return {course_id: round(float(avg), 1) for course_id, avg in result.all()}


def _course_read(
    course: Course,
    instructor_name: str,
    instructor_email: str,
    students: int,
    rating: float,
) -> AdminCourseRead:
    return AdminCourseRead(
        id=course.id,
        title=course.title,
        description=course.description,
        instructor=instructor_name,
        instructor_email=instructor_email,
        category=course.category,
        status=course_status(course.published),
        published=course.published,
        price=float(course.price or 0),
        level=course.level,
        students=students,
        rating=rating,
        created_at=course.created_at,
    )


async def list_courses(db: AsyncSession) -> list[AdminCourseRead]:
    """All courses, newest first, with instructor, student count and mean rating."""
    result = await db.execute(
        select(Course, User.name, User.email)
        .join(User, Course.instructor_id == User.id)
        .order_by(Course.created_at.desc(), Course.id.asc())
    )
    rows = result.all()
    students = await _enrollment_counts(db)
    ratings = await _average_ratings(db)
    return [
        _course_read(
            course,
            name,
            email,
            students.get(course.id, 0),
            ratings.get(course.id, 0.0),
        )
        for course, name, email in rows
    ]


async def get_course(db: AsyncSession, course_id: uuid.UUID) -> AdminCourseRead:
    result = await db.execute(
        select(Course, User.name, User.email)
        .join(User, Course.instructor_id == User.id)
        .where(Course.id == course_id)
    )
    row = result.one_or_none()
    if row is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    course, name, email = row
    students = await _enrollment_counts(db)
    ratings = await _average_ratings(db)
    return _course_read(course, name, email, students.get(course.id, 0), ratings.get(course.id, 0.0))


async def set_course_status(
    db: AsyncSession,
    *,
    course_id: uuid.UUID,
    published: bool,
    actor_id: uuid.UUID,
    ip_address: str | None = None,
) -> AdminCourseRead:
    """Publish (approve) or unpublish a course."""
    result = await db.execute(select(Course).where(Course.id == course_id))
    course = result.scalar_one_or_none()
    if course is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    previous = course.published
    course.published = published
    course.updated_at = utcnow()
    await db.flush()

    await audit_service.log_event(
        db,
        actor_id=actor_id,
        event_type="course.status_changed",
        entity_type="Course",
        entity_id=course.id,
        action="approve" if published else "unpublish",
        detail={"from": previous, "to": published},
        ip_address=ip_address,
    )
    return await get_course(db, course.id)


async def delete_course(
    db: AsyncSession,
    *,
    course_id: uuid.UUID,
    actor_id: uuid.UUID,
    ip_address: str | None = None,
) -> None:
    result = await db.execute(select(Course.title).where(Course.id == course_id))
    title = result.scalar_one_or_none()
    if title is None or not await delete_service.delete_course_cascade(db, course_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")

    await audit_service.log_event(
        db,
        actor_id=actor_id,
        event_type="course.deleted",
        entity_type="Course",
        entity_id=course_id,
        action="delete",
        detail={"title": title},
        ip_address=ip_address,
    )


async def _user_stats(db: AsyncSession) -> dict[uuid.UUID, UserStats]:
    """Per-user activity figures for every user that has any."""
    enrolled: Counter = Counter()
    completed: Counter = Counter()
    result = await db.execute(select(Enrollment.user_id, Enrollment.completed_at))
    for user_id, completed_at in result.all():
        enrolled[user_id] += 1
        if completed_at is not None:
            completed[user_id] += 1

    result = await db.execute(
        select(Course.instructor_id, func.count(Course.id)).group_by(Course.instructor_id)
    )
    created = dict(result.all())

    result = await db.execute(
        select(Course.instructor_id, func.count(Enrollment.id))
        .join(Enrollment, Enrollment.course_id == Course.id)
        .group_by(Course.instructor_id)
    )
    taught = dict(result.all())

    stats = {}
    for user_id in set(enrolled) | set(created) | set(taught):
        stats[user_id] = UserStats(
            courses_enrolled=enrolled.get(user_id, 0),
            courses_completed=completed.get(user_id, 0),
            courses_created=created.get(user_id, 0),
            total_students=taught.get(user_id, 0),
        )
    return stats


def _user_read(user: User, stats: UserStats | None) -> AdminUserRead:
    return AdminUserRead(
        id=user.id,
        name=user.name,
        email=user.email,
        role=UserRole(user.role).value,
        avatar=user.avatar,
        bio=user.bio,
        created_at=user.created_at,
        updated_at=user.updated_at,
        stats=stats or UserStats(),
    )


async def list_users(db: AsyncSession) -> list[AdminUserRead]:
    """All users, newest first, with activity stats."""
    result = await db.execute(select(User).order_by(User.created_at.desc(), User.id.asc()))
    users = result.scalars().all()
    stats = await _user_stats(db)
    return [_user_read(user, stats.get(user.id)) for user in users]


async def get_user(db: AsyncSession, user_id: uuid.UUID) -> AdminUserRead:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    stats = await _user_stats(db)
    return _user_read(user, stats.get(user.id))


async def set_user_role(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    role: UserRole,
    actor_id: uuid.UUID,
    ip_address: str | None = None,
) -> AdminUserRead:
    """Change a user's role; returns the user as now stored."""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    previous = UserRole(user.role).value
    user.role = role
    user.updated_at = utcnow()
    await db.flush()

    await audit_service.log_event(
        db,
        actor_id=actor_id,
        event_type="user.role_changed",
        entity_type="User",
        entity_id=user.id,
        action="change_role",
        detail={"from": previous, "to": role.value},
        ip_address=ip_address,
    )
    return await get_user(db, user.id)


async def delete_user(
    db: AsyncSession,
    *,
    user_id: uuid.UUID,
    actor_id: uuid.UUID,
    ip_address: str | None = None,
) -> None:
    if not await delete_service.delete_user_cascade(db, user_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    await audit_service.log_event(
        db,
        actor_id=actor_id,
        event_type="user.deleted",
        entity_type="User",
        entity_id=user_id,
        action="delete",
        ip_address=ip_address,
    )
