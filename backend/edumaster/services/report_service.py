"""Report service: read-only plain-text dumps of the database.

instructor_roster   instructors and the courses each one created
database_snapshot   every entity table, section by section

Both only read. Ordering is fixed so the same data always renders the
same text; ties fall back to name/title and then primary key.
"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from edumaster.models.course import Course, Lesson, Section
from edumaster.models.enrollment import Enrollment, Progress
from edumaster.models.quiz import Attempt, Question, Quiz
from edumaster.models.review import Review
from edumaster.models.user import User, UserRole

RULE_WIDTH = 80


def _enum_value(val) -> str:
    return val.value if hasattr(val, "value") else str(val)


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def _heading(lines: list[str], icon: str, label: str, total: int) -> None:
    lines.append("")
    lines.append(f"{icon} {label} ({total} total)")
    lines.append("-" * RULE_WIDTH)


async def _counts(db: AsyncSession, column) -> dict[uuid.UUID, int]:
    result = await db.execute(select(column, func.count()).group_by(column))
    return dict(result.all())


async def instructor_roster(db: AsyncSession) -> str:
    """Instructors with the titles of the courses they created."""
    lines = ["Checking instructor data..."]

    result = await db.execute(
        select(User)
        .where(User.role == UserRole.INSTRUCTOR)
        .order_by(User.name.asc(), User.id.asc())
    )
    instructors = result.scalars().all()

    result = await db.execute(
        select(Course.instructor_id, Course.id, Course.title)
        .where(Course.instructor_id.in_([i.id for i in instructors]))
        .order_by(Course.title.asc(), Course.id.asc())
    )
    courses: dict[uuid.UUID, list[str]] = {}
    for instructor_id, _, title in result.all():
        courses.setdefault(instructor_id, []).append(title)

    lines.append(f"Found {len(instructors)} instructors:")
    for instructor in instructors:
        titles = courses.get(instructor.id, [])
        lines.append(f"- {instructor.name} ({instructor.email})")
        lines.append(f"  Courses: {len(titles)}")
        lines.extend(f"    * {title}" for title in titles)
    return "\n".join(lines)


async def _users_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(
        select(User).order_by(User.role.asc(), User.name.asc(), User.id.asc())
    )
    users = result.scalars().all()
    _heading(lines, "📊", "USERS", len(users))
    for user in users:
        lines.append(f"{_enum_value(user.role):<12} | {user.name:<25} | {user.email}")


async def _courses_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(
        select(Course, User.name, User.email)
        .join(User, Course.instructor_id == User.id)
        .order_by(Course.created_at.desc(), Course.id.asc())
    )
    rows = result.all()
    sections = await _counts(db, Section.course_id)
    enrollments = await _counts(db, Enrollment.course_id)
    reviews = await _counts(db, Review.course_id)

    _heading(lines, "📚", "COURSES", len(rows))
    for course, name, email in rows:
        lines.append("")
        lines.append(f"Title: {course.title}")
        lines.append(f"  Instructor: {name} ({email})")
        lines.append(
            f"  Price: ₹{course.price} | Level: {course.level} | Published: {course.published}"
        )
        lines.append(
            f"  Sections: {sections.get(course.id, 0)}"
            f" | Enrollments: {enrollments.get(course.id, 0)}"
            f" | Reviews: {reviews.get(course.id, 0)}"
        )


async def _sections_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(
        select(Section, Course.title)
        .join(Course, Section.course_id == Course.id)
        .order_by(Section.order.asc(), Course.title.asc(), Section.id.asc())
    )
    rows = result.all()

    result = await db.execute(
        select(Lesson).order_by(Lesson.order.asc(), Lesson.id.asc())
    )
    lessons: dict[uuid.UUID, list[Lesson]] = {}
    for lesson in result.scalars().all():
        lessons.setdefault(lesson.section_id, []).append(lesson)

    _heading(lines, "📖", "SECTIONS", len(rows))
    for section, course_title in rows:
        section_lessons = lessons.get(section.id, [])
        lines.append("")
        lines.append(f"{course_title} → {section.title}")
        lines.append(f"  Lessons: {len(section_lessons)}")
        for lesson in section_lessons:
            lines.append(f"    {lesson.order}. {lesson.title} ({lesson.duration or 'N/A'})")


async def _enrollments_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(
        select(Enrollment, User.name, Course.title)
        .join(User, Enrollment.user_id == User.id)
        .join(Course, Enrollment.course_id == Course.id)
        .order_by(Enrollment.enrolled_at.desc(), Enrollment.id.asc())
    )
    rows = result.all()
    _heading(lines, "🎓", "ENROLLMENTS", len(rows))
    for enrollment, user_name, course_title in rows:
        lines.append(f"{user_name:<25} → {course_title[:40]}")
        lines.append(
            f"  Progress: {enrollment.progress}% | Paid: {enrollment.paid}"
            f" | Completed: {_yes_no(enrollment.completed_at is not None)}"
        )


async def _quizzes_section(db: AsyncSession, lines: list[str]) -> None:
    lesson = aliased(Lesson)
    result = await db.execute(
        select(Quiz, Course.title, lesson.title)
        .outerjoin(Course, Quiz.course_id == Course.id)
        .outerjoin(lesson, Quiz.lesson_id == lesson.id)
        .order_by(Quiz.title.asc(), Quiz.id.asc())
    )
    rows = result.all()
    questions = await _counts(db, Question.quiz_id)
    attempts = await _counts(db, Attempt.quiz_id)

    _heading(lines, "📝", "QUIZZES", len(rows))
    for quiz, course_title, lesson_title in rows:
        location = course_title or lesson_title or "Weekly"
        lines.append(f"{quiz.title} ({_enum_value(quiz.type)})")
        lines.append(f"  Location: {location}")
        lines.append(
            f"  Questions: {questions.get(quiz.id, 0)} | Attempts: {attempts.get(quiz.id, 0)}"
        )


async def _progress_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(select(Progress.completed))
    flags = list(result.scalars().all())
    completed = sum(1 for flag in flags if flag)
    _heading(lines, "✅", "LESSON PROGRESS", len(flags))
    lines.append(f"Completed: {completed} | In Progress: {len(flags) - completed}")


async def _reviews_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(
        select(Review, User.name, Course.title)
        .join(User, Review.user_id == User.id)
        .join(Course, Review.course_id == Course.id)
        .order_by(Review.created_at.asc(), Review.id.asc())
    )
    rows = result.all()
    _heading(lines, "⭐", "REVIEWS", len(rows))
    for review, user_name, course_title in rows:
        lines.append(f"{user_name} → {course_title}")
        lines.append(f"  Rating: {'⭐' * review.rating} ({review.rating}/5)")
        lines.append(f"  Comment: {review.comment or 'No comment'}")


async def _attempts_section(db: AsyncSession, lines: list[str]) -> None:
    result = await db.execute(
        select(Attempt, User.name, Quiz.title)
        .join(User, Attempt.user_id == User.id)
        .join(Quiz, Attempt.quiz_id == Quiz.id)
        .order_by(Attempt.submitted_at.desc(), Attempt.id.asc())
    )
    rows = result.all()
    _heading(lines, "🎯", "QUIZ ATTEMPTS", len(rows))
    for attempt, user_name, quiz_title in rows:
        lines.append(f"{user_name} → {quiz_title}")
        lines.append(f"  Score: {attempt.score} | Passed: {_yes_no(attempt.passed)}")


async def database_snapshot(db: AsyncSession) -> str:
    """Dump every table in a fixed order, framed by banner rules."""
    lines = ["=" * RULE_WIDTH, "DATABASE CONTENTS", "=" * RULE_WIDTH]

    await _users_section(db, lines)
    await _courses_section(db, lines)
    await _sections_section(db, lines)
    await _enrollments_section(db, lines)
    await _quizzes_section(db, lines)
    await _progress_section(db, lines)
    await _reviews_section(db, lines)
    await _attempts_section(db, lines)

    lines.append("")
    lines.extend(["=" * RULE_WIDTH, "END OF DATABASE CONTENTS", "=" * RULE_WIDTH])
    return "\n".join(lines)
