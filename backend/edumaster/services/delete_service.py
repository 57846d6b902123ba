"""Delete service: remove a course or a user together with everything hanging off it.

Course delete removes, in dependency order:
- attempts and questions of quizzes on the course or on its lessons, then those quizzes
- lesson progress, lessons, sections
- enrollments and reviews
- the course itself

User delete removes sessions, lesson progress, attempts, reviews and
enrollments of the user, every course the user created (as above), then
the user. Audit events are retained.
"""

import uuid

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.models.course import Course, Lesson, Section
from edumaster.models.enrollment import Enrollment, Progress
from edumaster.models.quiz import Attempt, Question, Quiz
from edumaster.models.review import Review
from edumaster.models.session import Session
from edumaster.models.user import User


async def _ids(db: AsyncSession, stmt) -> list[uuid.UUID]:
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def delete_course_cascade(db: AsyncSession, course_id: uuid.UUID) -> bool:
    """Delete a course and its dependents. Returns False if the course does not exist."""
    result = await db.execute(select(Course.id).where(Course.id == course_id))
    if result.scalar_one_or_none() is None:
        return False

    section_ids = await _ids(db, select(Section.id).where(Section.course_id == course_id))
    lesson_ids = await _ids(db, select(Lesson.id).where(Lesson.section_id.in_(section_ids)))
    quiz_ids = await _ids(
        db,
        select(Quiz.id).where(
            or_(Quiz.course_id == course_id, Quiz.lesson_id.in_(lesson_ids))
        ),
    )

    await db.execute(delete(Attempt).where(Attempt.quiz_id.in_(quiz_ids)))
    await db.execute(delete(Question).where(Question.quiz_id.in_(quiz_ids)))
    await db.execute(delete(Quiz).where(Quiz.id.in_(quiz_ids)))

    await db.execute(delete(Progress).where(Progress.lesson_id.in_(lesson_ids)))
    await db.execute(delete(Lesson).where(Lesson.id.in_(lesson_ids)))
    await db.execute(delete(Section).where(Section.id.in_(section_ids)))

    await db.execute(delete(Enrollment).where(Enrollment.course_id == course_id))
    await db.execute(delete(Review).where(Review.course_id == course_id))
    await db.execute(delete(Course).where(Course.id == course_id))

    await db.flush()
    return True


async def delete_user_cascade(db: AsyncSession, user_id: uuid.UUID) -> bool:
    """Delete a user, their learning records and their authored courses.

    Returns False if the user does not exist.
    """
    result = await db.execute(select(User.id).where(User.id == user_id))
    if result.scalar_one_or_none() is None:
        return False

    await db.execute(delete(Session).where(Session.user_id == user_id))
    await db.execute(delete(Progress).where(Progress.user_id == user_id))
    await db.execute(delete(Attempt).where(Attempt.user_id == user_id))
    await db.execute(delete(Review).where(Review.user_id == user_id))
    await db.execute(delete(Enrollment).where(Enrollment.user_id == user_id))

    for course_id in await _ids(db, select(Course.id).where(Course.instructor_id == user_id)):
        await delete_course_cascade(db, course_id)

    await db.execute(delete(User).where(User.id == user_id))
    await db.flush()
    return True
