"""Database-level invariants on the course catalogue and learning records."""

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.models.course import Course, Lesson, Section
from edumaster.models.enrollment import Enrollment, Progress
from edumaster.models.quiz import Quiz, QuizType
from edumaster.models.review import Review
from edumaster.models.user import User, UserRole


async def _course_with_lesson(db: AsyncSession) -> tuple[User, Course, Lesson]:
    instructor = User(
        name="Ivy Instructor", email="ivy@test.com", password_hash="x", role=UserRole.INSTRUCTOR
    )
    db.add(instructor)
    await db.flush()
    course = Course(instructor_id=instructor.id, title="Course", category="Development")
    db.add(course)
    await db.flush()
    section = Section(course_id=course.id, title="Intro", order=1)
    db.add(section)
    await db.flush()
    lesson = Lesson(section_id=section.id, title="Lesson 1", order=1)
    db.add(lesson)
    await db.flush()
    return instructor, course, lesson


@pytest.mark.asyncio
async def test_course_defaults(db_session: AsyncSession):
    """A new course is an unpublished draft."""
    _, course, _ = await _course_with_lesson(db_session)
    await db_session.commit()
    assert course.published is False
    assert course.level == "Beginner"


@pytest.mark.asyncio
async def test_enrollment_progress_upper_bound(db_session: AsyncSession):
    """Enrollment progress above 100 is rejected."""
    instructor, course, _ = await _course_with_lesson(db_session)
    db_session.add(Enrollment(user_id=instructor.id, course_id=course.id, progress=101))
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_enrollment_progress_lower_bound(db_session: AsyncSession):
    """Negative enrollment progress is rejected."""
    instructor, course, _ = await _course_with_lesson(db_session)
    db_session.add(Enrollment(user_id=instructor.id, course_id=course.id, progress=-1))
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_enrollment_unique_per_course(db_session: AsyncSession):
    """A user enrolls in a course at most once."""
    instructor, course, _ = await _course_with_lesson(db_session)
    db_session.add(Enrollment(user_id=instructor.id, course_id=course.id))
    await db_session.flush()
    db_session.add(Enrollment(user_id=instructor.id, course_id=course.id))
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
@pytest.mark.parametrize("rating", [0, 6])
async def test_review_rating_out_of_range(db_session: AsyncSession, rating: int):
    """Review ratings outside 1..5 are rejected."""
    instructor, course, _ = await _course_with_lesson(db_session)
    db_session.add(Review(user_id=instructor.id, course_id=course.id, rating=rating))
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_quiz_cannot_sit_on_course_and_lesson(db_session: AsyncSession):
    """A quiz lives on a course or a lesson, never both."""
    _, course, lesson = await _course_with_lesson(db_session)
    db_session.add(Quiz(title="Both", type=QuizType.COURSE, course_id=course.id, lesson_id=lesson.id))
    with pytest.raises(IntegrityError):
        await db_session.flush()


@pytest.mark.asyncio
async def test_weekly_quiz_has_no_location(db_session: AsyncSession):
    """A weekly quiz is attached to nothing."""
    quiz = Quiz(title="Weekly", type=QuizType.WEEKLY)
    db_session.add(quiz)
    await db_session.commit()
    assert quiz.course_id is None
    assert quiz.lesson_id is None


@pytest.mark.asyncio
async def test_progress_unique_per_lesson(db_session: AsyncSession):
    """One progress row per (user, lesson)."""
    instructor, _, lesson = await _course_with_lesson(db_session)
    db_session.add(Progress(user_id=instructor.id, lesson_id=lesson.id))
    await db_session.flush()
    db_session.add(Progress(user_id=instructor.id, lesson_id=lesson.id, completed=True))
    with pytest.raises(IntegrityError):
        await db_session.flush()
