"""Instructor service: own-course listing and per-enrollment student progress."""

import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.config import settings
from edumaster.models.course import Course, Lesson, Section
from edumaster.models.enrollment import Enrollment, Progress
from edumaster.models.quiz import Attempt, Quiz
from edumaster.models.user import User
from edumaster.schemas.course import InstructorCourseRead
from edumaster.schemas.student import StudentProgressRow


def _as_utc(dt: datetime | None) -> datetime | None:
    # SQLite hands back naive datetimes for timezone-aware columns
    if dt is not None and dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def student_status(
    progress: int,
    completed_at: datetime | None,
    last_active: datetime | None,
    *,
    now: datetime,
) -> str:
    """completed, active (seen within the activity window) or inactive."""
    if completed_at is not None or progress >= 100:
        return "completed"
    window = timedelta(days=settings.student_activity_window_days)
    if last_active is not None and now - last_active <= window:
        return "active"
    return "inactive"


async def list_my_courses(
    db: AsyncSession,
    *,
    instructor_id: uuid.UUID,
) -> list[InstructorCourseRead]:
    """Courses created by the instructor, newest first."""
    result = await db.execute(
        select(Course, func.count(Enrollment.id))
        .outerjoin(Enrollment, Enrollment.course_id == Course.id)
        .where(Course.instructor_id == instructor_id)
        .group_by(Course.id)
        .order_by(Course.created_at.desc(), Course.id.asc())
    )
    return [
        InstructorCourseRead(
            id=course.id,
            title=course.title,
            category=course.category,
            level=course.level,
            price=float(course.price or 0),
            published=course.published,
            students=students,
            created_at=course.created_at,
        )
        for course, students in result.all()
    ]


async def _lesson_course_map(
    db: AsyncSession, course_ids: list[uuid.UUID]
) -> dict[uuid.UUID, uuid.UUID]:
    result = await db.execute(
        select(Lesson.id, Section.course_id)
        .join(Section, Lesson.section_id == Section.id)
        .where(Section.course_id.in_(course_ids))
    )
    return dict(result.all())


async def _quiz_course_map(
    db: AsyncSession,
    course_ids: list[uuid.UUID],
    lesson_courses: dict[uuid.UUID, uuid.UUID],
) -> dict[uuid.UUID, uuid.UUID]:
    result = await db.execute(
        select(Quiz.id, Quiz.course_id, Quiz.lesson_id).where(
            or_(Quiz.course_id.in_(course_ids), Quiz.lesson_id.in_(list(lesson_courses)))
        )
    )
    quizzes = {}
    for quiz_id, course_id, lesson_id in result.all():
        quizzes[quiz_id] = course_id if course_id is not None else lesson_courses[lesson_id]
    return quizzes


async def list_student_progress(
    db: AsyncSession,
    *,
    instructor_id: uuid.UUID,
    now: datetime | None = None,
) -> list[StudentProgressRow]:
    """One row per enrollment in any of the instructor's courses.

    A student enrolled in two of the instructor's courses appears twice.
    Rows are ordered by course title, then student name.
    """
    now = now or datetime.now(timezone.utc)

    result = await db.execute(
        select(Course.id, Course.title).where(Course.instructor_id == instructor_id)
    )
    course_titles = dict(result.all())
    if not course_titles:
        return []
    course_ids = list(course_titles)

    lesson_courses = await _lesson_course_map(db, course_ids)
    quiz_courses = await _quiz_course_map(db, course_ids, lesson_courses)

    total_lessons: dict[uuid.UUID, int] = defaultdict(int)
    for course_id in lesson_courses.values():
        total_lessons[course_id] += 1

    result = await db.execute(
        select(Enrollment, User)
        .join(User, Enrollment.user_id == User.id)
        .where(Enrollment.course_id.in_(course_ids))
    )
    enrollments = result.all()
    student_ids = list({user.id for _, user in enrollments})

    lessons_done: dict[tuple, int] = defaultdict(int)
    last_seen: dict[tuple, datetime] = {}

    def _touch(key: tuple, when: datetime | None) -> None:
        when = _as_utc(when)
        if when is not None and (key not in last_seen or when > last_seen[key]):
            last_seen[key] = when

    result = await db.execute(
        select(Progress.user_id, Progress.lesson_id, Progress.completed, Progress.updated_at)
        .where(
            Progress.user_id.in_(student_ids),
            Progress.lesson_id.in_(list(lesson_courses)),
        )
    )
    for user_id, lesson_id, completed, updated_at in result.all():
        key = (user_id, lesson_courses[lesson_id])
        if completed:
            lessons_done[key] += 1
        _touch(key, updated_at)

    scores: dict[tuple, list[int]] = defaultdict(list)
    result = await db.execute(
        select(Attempt.user_id, Attempt.quiz_id, Attempt.score, Attempt.submitted_at)
        .where(
            Attempt.user_id.in_(student_ids),
            Attempt.quiz_id.in_(list(quiz_courses)),
        )
    )
    for user_id, quiz_id, score, submitted_at in result.all():
        key = (user_id, quiz_courses[quiz_id])
        scores[key].append(score)
        _touch(key, submitted_at)

    rows = []
    for enrollment, user in enrollments:
        key = (user.id, enrollment.course_id)
        attempt_scores = scores.get(key)
        last_active = last_seen.get(key)
        rows.append(
            StudentProgressRow(
                id=user.id,
                name=user.name,
                email=user.email,
                avatar=user.avatar,
                course=course_titles[enrollment.course_id],
                course_id=enrollment.course_id,
                progress=enrollment.progress,
                lessons_completed=lessons_done.get(key, 0),
                total_lessons=total_lessons.get(enrollment.course_id, 0),
                quiz_score=round(sum(attempt_scores) / len(attempt_scores)) if attempt_scores else 0,
                status=student_status(
                    enrollment.progress,
                    enrollment.completed_at,
                    last_active,
                    now=now,
                ),
                last_active=last_active,
                enrolled_at=_as_utc(enrollment.enrolled_at),
            )
        )
    rows.sort(key=lambda r: (r.course, r.name, str(r.id)))
    return rows
