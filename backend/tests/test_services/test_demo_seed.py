"""Demo seed tests: shape, idempotence, usable credentials."""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.core.auth import login_user
from edumaster.models.course import Course, Lesson
from edumaster.models.enrollment import Enrollment
from edumaster.models.quiz import Quiz, QuizType
from edumaster.models.user import User, UserRole
from edumaster.services.demo_seed import DEMO_PASSWORD, seed_demo_data


async def _count(db: AsyncSession, model) -> int:
    result = await db.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
async def test_seed_creates_users(db_session: AsyncSession):
    assert await seed_demo_data(db_session) == 6

    result = await db_session.execute(select(User.role, func.count()).group_by(User.role))
    roles = dict(result.all())
    assert roles == {UserRole.ADMIN: 1, UserRole.INSTRUCTOR: 2, UserRole.STUDENT: 3}


@pytest.mark.asyncio
async def test_seed_idempotent(db_session: AsyncSession):
    """Second seed creates nothing."""
    await seed_demo_data(db_session)
    await db_session.commit()
    assert await seed_demo_data(db_session) == 0
    assert await _count(db_session, Course) == 3


@pytest.mark.asyncio
async def test_seed_catalogue(db_session: AsyncSession):
    await seed_demo_data(db_session)
    result = await db_session.execute(select(Course.published))
    assert sorted(result.scalars().all()) == [False, True, True]
    assert await _count(db_session, Lesson) == 7
    assert await _count(db_session, Enrollment) == 4


@pytest.mark.asyncio
async def test_seed_one_quiz_of_each_type(db_session: AsyncSession):
    await seed_demo_data(db_session)
    result = await db_session.execute(select(Quiz))
    quizzes = {q.type: q for q in result.scalars().all()}
    assert set(quizzes) == {QuizType.COURSE, QuizType.LESSON, QuizType.WEEKLY}
    weekly = quizzes[QuizType.WEEKLY]
    assert weekly.course_id is None and weekly.lesson_id is None


@pytest.mark.asyncio
async def test_seed_timestamps_follow_now(db_session: AsyncSession):
    now = datetime(2025, 3, 1, tzinfo=timezone.utc)
    await seed_demo_data(db_session, now=now)
    result = await db_session.execute(
        select(User).where(User.email == "carol@edumaster.com")
    )
    carol = result.scalar_one()
    created = carol.created_at
    if created.tzinfo is None:
        created = created.replace(tzinfo=timezone.utc)
    assert (now - created).days == 10


@pytest.mark.asyncio
async def test_demo_accounts_can_log_in(db_session: AsyncSession):
    await seed_demo_data(db_session)
    user, token = await login_user(
        db_session, email="john@edumaster.com", password=DEMO_PASSWORD
    )
    assert user.role == UserRole.INSTRUCTOR
    assert token
