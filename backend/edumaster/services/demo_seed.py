"""Seed data: a small demo catalogue.

1 admin, 2 instructors, 3 students, 3 courses (one draft) with sections
and lessons, enrollments, lesson progress, course/lesson/weekly quizzes
with attempts, and reviews. Every demo account uses DEMO_PASSWORD.

Timestamps are relative to `now` so activity-based statuses stay stable.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.core.auth import hash_password
from edumaster.models.course import Course, Lesson, Section
from edumaster.models.enrollment import Enrollment, Progress
from edumaster.models.quiz import Attempt, Question, Quiz, QuizType
from edumaster.models.review import Review
from edumaster.models.user import User, UserRole

DEMO_PASSWORD = "password123"

USERS = [
    # (name, email, role, created days ago, updated days ago, bio)
    ("Priya Raman", "admin@edumaster.com", UserRole.ADMIN, 90, 1, None),
    ("John Smith", "john@edumaster.com", UserRole.INSTRUCTOR, 60, 2,
     "Full-stack developer and educator."),
    ("Sarah Lee", "sarah@edumaster.com", UserRole.INSTRUCTOR, 50, 45,
     "Data scientist."),
    ("Alice Johnson", "alice@edumaster.com", UserRole.STUDENT, 40, 0, None),
    ("Bob Kumar", "bob@edumaster.com", UserRole.STUDENT, 35, 9, None),
    ("Carol Diaz", "carol@edumaster.com", UserRole.STUDENT, 10, 10, None),
]

COURSES = [
    {
        "title": "Complete Web Development Bootcamp",
        "instructor": "john@edumaster.com",
        "category": "Development",
        "price": Decimal("499.00"),
        "level": "Beginner",
        "published": True,
        "created_days_ago": 30,
        "sections": [
            ("Getting Started", [
                ("Welcome to the Course", "05:00"),
                ("Setting Up Your Environment", "12:30"),
            ]),
            ("HTML & CSS Basics", [
                ("HTML Structure", "18:00"),
                ("Styling with CSS", None),
            ]),
        ],
    },
    {
        "title": "Advanced React Patterns",
        "instructor": "john@edumaster.com",
        "category": "Development",
        "price": Decimal("799.00"),
        "level": "Advanced",
        "published": False,
        "created_days_ago": 5,
        "sections": [
            ("Hooks in Depth", [("Custom Hooks", "22:00")]),
        ],
    },
    {
        "title": "Data Science Fundamentals",
        "instructor": "sarah@edumaster.com",
        "category": "Data Science",
        "price": Decimal("999.00"),
        "level": "Intermediate",
        "published": True,
        "created_days_ago": 20,
        "sections": [
            ("Python for Data", [
                ("NumPy Essentials", "25:00"),
                ("Pandas DataFrames", "30:00"),
            ]),
        ],
    },
]

# (student email, course title, progress, paid, completed)
ENROLLMENTS = [
    ("alice@edumaster.com", "Complete Web Development Bootcamp", 50, True, False),
    ("bob@edumaster.com", "Complete Web Development Bootcamp", 100, True, True),
    ("carol@edumaster.com", "Advanced React Patterns", 0, False, False),
    ("alice@edumaster.com", "Data Science Fundamentals", 50, True, False),
]

# (student email, lesson title, completed, hours ago)
PROGRESS = [
    ("alice@edumaster.com", "Welcome to the Course", True, 2),
    ("alice@edumaster.com", "Setting Up Your Environment", True, 1),
    ("bob@edumaster.com", "Welcome to the Course", True, 240),
    ("bob@edumaster.com", "Setting Up Your Environment", True, 240),
    ("bob@edumaster.com", "HTML Structure", True, 240),
    ("bob@edumaster.com", "Styling with CSS", True, 240),
    ("alice@edumaster.com", "NumPy Essentials", True, 72),
]

QUIZZES = [
    # (title, type, course title, lesson title, questions)
    ("Web Basics Quiz", QuizType.COURSE, "Complete Web Development Bootcamp", None,
     ["What does HTML stand for?", "Which tag creates a link?"]),
    ("NumPy Check", QuizType.LESSON, None, "NumPy Essentials",
     ["How do you create a 3x3 zero array?"]),
    ("Weekly Challenge #1", QuizType.WEEKLY, None, None,
     ["Explain the box model."]),
]

# (student email, quiz title, score, minutes ago)
ATTEMPTS = [
    ("alice@edumaster.com", "Web Basics Quiz", 80, 30),
    ("bob@edumaster.com", "Web Basics Quiz", 90, 60 * 24 * 9),
    ("alice@edumaster.com", "NumPy Check", 50, 60 * 24 * 3),
]

# (student email, course title, rating, comment)
REVIEWS = [
    ("bob@edumaster.com", "Complete Web Development Bootcamp", 5, "Excellent course!"),
    ("alice@edumaster.com", "Data Science Fundamentals", 4, None),
]


async def seed_demo_data(db: AsyncSession, *, now: datetime | None = None) -> int:
    """Seed the demo catalogue. Idempotent: does nothing if the demo admin exists.

    Returns count of newly created users.
    """
    now = now or datetime.now(timezone.utc)
    result = await db.execute(select(User).where(User.email == USERS[0][1]))
    if result.scalar_one_or_none() is not None:
        return 0

    password_hash = hash_password(DEMO_PASSWORD)
    users: dict[str, User] = {}
    for name, email, role, created_days, updated_days, bio in USERS:
        user = User(
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            bio=bio,
            created_at=now - timedelta(days=created_days),
            updated_at=now - timedelta(days=updated_days),
        )
        db.add(user)
        users[email] = user
    await db.flush()

    courses: dict[str, Course] = {}
    lessons: dict[str, Lesson] = {}
    for data in COURSES:
        created_at = now - timedelta(days=data["created_days_ago"])
        course = Course(
            instructor_id=users[data["instructor"]].id,
            title=data["title"],
            description=f"{data['title']} by {users[data['instructor']].name}.",
            category=data["category"],
            price=data["price"],
            level=data["level"],
            published=data["published"],
            created_at=created_at,
            updated_at=created_at,
        )
        db.add(course)
        await db.flush()
        courses[course.title] = course

        for section_order, (section_title, section_lessons) in enumerate(data["sections"], start=1):
            section = Section(course_id=course.id, title=section_title, order=section_order)
            db.add(section)
            await db.flush()
            for lesson_order, (lesson_title, duration) in enumerate(section_lessons, start=1):
                lesson = Lesson(
                    section_id=section.id,
                    title=lesson_title,
                    order=lesson_order,
                    duration=duration,
                )
                db.add(lesson)
                lessons[lesson_title] = lesson
    await db.flush()

    for days_ago, (email, title, progress, paid, completed) in enumerate(ENROLLMENTS, start=1):
        db.add(Enrollment(
            user_id=users[email].id,
            course_id=courses[title].id,
            progress=progress,
            paid=paid,
            enrolled_at=now - timedelta(days=days_ago + 14),
            completed_at=now - timedelta(days=10) if completed else None,
        ))

    for email, lesson_title, completed, hours_ago in PROGRESS:
        when = now - timedelta(hours=hours_ago)
        db.add(Progress(
            user_id=users[email].id,
            lesson_id=lessons[lesson_title].id,
            completed=completed,
            completed_at=when if completed else None,
            created_at=when,
            updated_at=when,
        ))

    quizzes: dict[str, Quiz] = {}
    for title, quiz_type, course_title, lesson_title, questions in QUIZZES:
        quiz = Quiz(
            title=title,
            type=quiz_type,
            course_id=courses[course_title].id if course_title else None,
            lesson_id=lessons[lesson_title].id if lesson_title else None,
            pass_score=60,
        )
        db.add(quiz)
        await db.flush()
        quizzes[title] = quiz
        for order, text in enumerate(questions, start=1):
            db.add(Question(quiz_id=quiz.id, text=text, order=order))

    for email, quiz_title, score, minutes_ago in ATTEMPTS:
        quiz = quizzes[quiz_title]
        db.add(Attempt(
            user_id=users[email].id,
            quiz_id=quiz.id,
            score=score,
            passed=score >= quiz.pass_score,
            submitted_at=now - timedelta(minutes=minutes_ago),
        ))

    for email, course_title, rating, comment in REVIEWS:
        db.add(Review(
            user_id=users[email].id,
            course_id=courses[course_title].id,
            rating=rating,
            comment=comment,
        ))

    await db.flush()
    return len(users)
