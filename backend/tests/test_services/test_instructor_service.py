"""Instructor service tests: own courses and student progress rows."""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.models.course import Course
from edumaster.models.enrollment import Enrollment
from edumaster.models.user import User
from edumaster.services import instructor_service
from edumaster.services.instructor_service import student_status

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


async def _user(db: AsyncSession, email: str) -> User:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalar_one()


# --- student_status ---

def test_status_completed_when_completed_at_set():
    assert student_status(40, NOW, None, now=NOW) == "completed"


def test_status_completed_at_full_progress():
    assert student_status(100, None, None, now=NOW) == "completed"


def test_status_active_within_window():
    assert student_status(30, None, NOW - timedelta(days=7), now=NOW) == "active"


def test_status_inactive_outside_window():
    assert student_status(30, None, NOW - timedelta(days=7, seconds=1), now=NOW) == "inactive"


def test_status_inactive_without_activity():
    assert student_status(0, None, None, now=NOW) == "inactive"


# --- my courses ---

@pytest.mark.asyncio
async def test_my_courses_only_own(seeded: AsyncSession):
    john = await _user(seeded, "john@edumaster.com")
    courses = await instructor_service.list_my_courses(seeded, instructor_id=john.id)

    assert [c.title for c in courses] == [
        "Advanced React Patterns",
        "Complete Web Development Bootcamp",
    ]
    assert [c.published for c in courses] == [False, True]
    assert [c.students for c in courses] == [1, 2]


@pytest.mark.asyncio
async def test_my_courses_empty_for_student(seeded: AsyncSession):
    alice = await _user(seeded, "alice@edumaster.com")
    assert await instructor_service.list_my_courses(seeded, instructor_id=alice.id) == []


# --- student progress ---

@pytest.mark.asyncio
async def test_student_rows_for_john(seeded: AsyncSession):
    """One row per enrollment, ordered by course then student."""
    john = await _user(seeded, "john@edumaster.com")
    rows = await instructor_service.list_student_progress(seeded, instructor_id=john.id)

    assert [(r.name, r.course) for r in rows] == [
        ("Carol Diaz", "Advanced React Patterns"),
        ("Alice Johnson", "Complete Web Development Bootcamp"),
        ("Bob Kumar", "Complete Web Development Bootcamp"),
    ]

    carol, alice, bob = rows
    assert (carol.progress, carol.lessons_completed, carol.total_lessons) == (0, 0, 1)
    assert carol.quiz_score == 0
    assert carol.status == "inactive"
    assert carol.last_active is None

    assert (alice.progress, alice.lessons_completed, alice.total_lessons) == (50, 2, 4)
    assert alice.quiz_score == 80
    assert alice.status == "active"

    assert (bob.progress, bob.lessons_completed, bob.total_lessons) == (100, 4, 4)
    assert bob.quiz_score == 90
    assert bob.status == "completed"


@pytest.mark.asyncio
async def test_lesson_quiz_counts_toward_course(seeded: AsyncSession):
    """Sarah's course has only a lesson-level quiz; it still feeds quizScore."""
    sarah = await _user(seeded, "sarah@edumaster.com")
    rows = await instructor_service.list_student_progress(seeded, instructor_id=sarah.id)

    assert len(rows) == 1
    alice = rows[0]
    assert alice.course == "Data Science Fundamentals"
    assert alice.quiz_score == 50
    assert (alice.lessons_completed, alice.total_lessons) == (1, 2)
    assert alice.status == "active"


@pytest.mark.asyncio
async def test_last_active_is_latest_activity(seeded: AsyncSession):
    """Alice's latest web activity is the quiz attempt 30 minutes ago."""
    john = await _user(seeded, "john@edumaster.com")
    now = datetime.now(timezone.utc)
    rows = await instructor_service.list_student_progress(seeded, instructor_id=john.id, now=now)
    alice = next(r for r in rows if r.name == "Alice Johnson")

    assert alice.last_active is not None
    age = now - alice.last_active
    assert timedelta(minutes=25) < age < timedelta(minutes=40)


@pytest.mark.asyncio
async def test_status_moves_with_clock(seeded: AsyncSession):
    """Eight days later Alice is no longer active on the web course."""
    john = await _user(seeded, "john@edumaster.com")
    later = datetime.now(timezone.utc) + timedelta(days=8)
    rows = await instructor_service.list_student_progress(seeded, instructor_id=john.id, now=later)
    alice = next(r for r in rows if r.name == "Alice Johnson")
    assert alice.status == "inactive"


@pytest.mark.asyncio
async def test_student_in_two_courses_appears_twice(seeded: AsyncSession):
    """Enrolling Alice in React gives her a second row for John."""
    john = await _user(seeded, "john@edumaster.com")
    alice = await _user(seeded, "alice@edumaster.com")
    result = await seeded.execute(select(Course.id).where(Course.title == "Advanced React Patterns"))
    seeded.add(Enrollment(user_id=alice.id, course_id=result.scalar_one(), progress=10))
    await seeded.flush()

    rows = await instructor_service.list_student_progress(seeded, instructor_id=john.id)
    assert [r.course for r in rows if r.id == alice.id] == [
        "Advanced React Patterns",
        "Complete Web Development Bootcamp",
    ]


@pytest.mark.asyncio
async def test_no_courses_no_rows(seeded: AsyncSession):
    bob = await _user(seeded, "bob@edumaster.com")
    assert await instructor_service.list_student_progress(seeded, instructor_id=bob.id) == []
