"""Filter snapshots and the pure functions that apply them.

Each view keeps its filter state as one frozen snapshot and replaces it
wholesale on change; the functions below never touch view state.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from edumaster.schemas.course import AdminCourseRead
from edumaster.schemas.student import StudentProgressRow
from edumaster.schemas.user import AdminUserRead

ALL = "all"


@dataclass(frozen=True)
class CourseFilters:
    search: str = ""
    status: str = ALL  # all | published | draft
    category: str = ALL


@dataclass(frozen=True)
class UserFilters:
    search: str = ""
    role: str = ALL  # all | student | instructor | admin


@dataclass(frozen=True)
class StudentFilters:
    search: str = ""
    course: str = ALL


def _contains(haystack: str | None, needle: str) -> bool:
    return needle.lower() in (haystack or "").lower()


def _distinct(values: Iterable[str | None]) -> list[str]:
    """Distinct non-empty values, first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        if value:
            seen.setdefault(value, None)
    return list(seen)


def course_matches(course: AdminCourseRead, filters: CourseFilters) -> bool:
    matches_search = _contains(course.title, filters.search) or _contains(
        course.instructor, filters.search
    )
    matches_status = filters.status == ALL or course.status == filters.status
    matches_category = filters.category == ALL or course.category == filters.category
    return matches_search and matches_status and matches_category


def filter_courses(
    courses: Sequence[AdminCourseRead], filters: CourseFilters
) -> list[AdminCourseRead]:
    return [c for c in courses if course_matches(c, filters)]


def course_categories(courses: Sequence[AdminCourseRead]) -> list[str]:
    return _distinct(c.category for c in courses)


def user_matches(user: AdminUserRead, filters: UserFilters) -> bool:
    matches_search = _contains(user.name, filters.search) or _contains(user.email, filters.search)
    # Role values are compared verbatim against the upper-cased filter.
    matches_role = filters.role == ALL or user.role == filters.role.upper()
    return matches_search and matches_role


def filter_users(users: Sequence[AdminUserRead], filters: UserFilters) -> list[AdminUserRead]:
    return [u for u in users if user_matches(u, filters)]


def student_matches(row: StudentProgressRow, filters: StudentFilters) -> bool:
    matches_search = _contains(row.name, filters.search) or _contains(row.email, filters.search)
    matches_course = filters.course == ALL or row.course == filters.course
    return matches_search and matches_course


def filter_students(
    rows: Sequence[StudentProgressRow], filters: StudentFilters
) -> list[StudentProgressRow]:
    return [r for r in rows if student_matches(r, filters)]


def student_courses(rows: Sequence[StudentProgressRow]) -> list[str]:
    return _distinct(r.course for r in rows)
