import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.models.course import Course, Lesson, Section
from edumaster.models.enrollment import Enrollment, Progress
from edumaster.models.quiz import Attempt, Question, Quiz
from edumaster.models.review import Review
from edumaster.models.user import User
from edumaster.services.delete_service import delete_course_cascade, delete_user_cascade


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


async def _user_id(db: AsyncSession, email: str) -> uuid.UUID:
    result = await db.execute(select(User.id).where(User.email == email))
    return result.scalar_one()


async def _course_id(db: AsyncSession, title: str) -> uuid.UUID:
    result = await db.execute(select(Course.id).where(Course.title == title))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_delete_missing_course(db_session: AsyncSession):
    assert await delete_course_cascade(db_session, uuid.uuid4()) is False


@pytest.mark.asyncio
async def test_delete_missing_user(db_session: AsyncSession):
    assert await delete_user_cascade(db_session, uuid.uuid4()) is False


@pytest.mark.asyncio
async def test_delete_course_with_lesson_quiz(seeded: AsyncSession):
    """Data Science owns only a lesson-level quiz; it goes with the lesson."""
    course_id = await _course_id(seeded, "Data Science Fundamentals")

    assert await delete_course_cascade(seeded, course_id) is True
    await seeded.commit()

    result = await seeded.execute(select(Quiz.title).order_by(Quiz.title))
    assert result.scalars().all() == ["Web Basics Quiz", "Weekly Challenge #1"]
    assert await _count(seeded, Course) == 2
    assert await _count(seeded, Section) == 3
    assert await _count(seeded, Lesson) == 5
    assert await _count(seeded, Enrollment) == 3
    assert await _count(seeded, Review) == 1


@pytest.mark.asyncio
async def test_weekly_quiz_survives_every_course_delete(seeded: AsyncSession):
    result = await seeded.execute(select(Course.id))
    for course_id in result.scalars().all():
        await delete_course_cascade(seeded, course_id)
    await seeded.commit()

    result = await seeded.execute(select(Quiz.title))
    assert result.scalars().all() == ["Weekly Challenge #1"]
    assert await _count(seeded, Question) == 1
    assert await _count(seeded, Progress) == 0
    assert await _count(seeded, Attempt) == 0
    assert await _count(seeded, User) == 6


@pytest.mark.asyncio
async def test_delete_instructor_cascades_courses(seeded: AsyncSession):
    sarah = await _user_id(seeded, "sarah@edumaster.com")

    assert await delete_user_cascade(seeded, sarah) is True
    await seeded.commit()

    result = await seeded.execute(select(Course.title).order_by(Course.title))
    assert result.scalars().all() == [
        "Advanced React Patterns",
        "Complete Web Development Bootcamp",
    ]
    # Alice lost her Data Science enrollment, progress and attempt
    alice = await _user_id(seeded, "alice@edumaster.com")
    result = await seeded.execute(select(Enrollment).where(Enrollment.user_id == alice))
    assert len(result.scalars().all()) == 1
    result = await seeded.execute(select(Attempt).where(Attempt.user_id == alice))
    assert len(result.scalars().all()) == 1


@pytest.mark.asyncio
async def test_delete_student_keeps_courses(seeded: AsyncSession):
    bob = await _user_id(seeded, "bob@edumaster.com")

    assert await delete_user_cascade(seeded, bob) is True
    await seeded.commit()

    assert await _count(seeded, Course) == 3
    assert await _count(seeded, Enrollment) == 3
    assert await _count(seeded, Review) == 1
    assert await _count(seeded, Progress) == 3
    assert await _count(seeded, Attempt) == 2
