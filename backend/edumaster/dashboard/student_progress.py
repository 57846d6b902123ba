"""Instructor view of student progress across their courses."""

import uuid
from dataclasses import dataclass

from edumaster.dashboard.base import ListView
from edumaster.dashboard.filters import StudentFilters, filter_students, student_courses
from edumaster.dashboard.formatting import average
from edumaster.schemas.student import StudentProgressRow


@dataclass(frozen=True)
class StudentStats:
    total: int
    active: int
    completed: int
    average_progress: int


def student_stats(rows) -> StudentStats:
    return StudentStats(
        total=len(rows),
        active=sum(1 for r in rows if r.status == "active"),
        completed=sum(1 for r in rows if r.status == "completed"),
        average_progress=average([r.progress for r in rows]),
    )


def row_key(row: StudentProgressRow) -> tuple[uuid.UUID, str]:
    """A student appears once per enrolled course."""
    return row.id, row.course


class StudentProgressView(ListView[StudentProgressRow, StudentFilters]):
    load_failure_message = "Failed to fetch student progress"

    def __init__(self, client, **kwargs):
        kwargs.setdefault("filters", StudentFilters())
        super().__init__(client, **kwargs)

    async def _fetch(self) -> list[StudentProgressRow]:
        return await self.client.list_students()

    @property
    def rows(self) -> tuple[StudentProgressRow, ...]:
        return self.items

    @property
    def visible(self) -> list[StudentProgressRow]:
        return filter_students(self.items, self.filters)

    @property
    def courses(self) -> list[str]:
        return student_courses(self.items)

    @property
    def stats(self) -> StudentStats:
        return student_stats(self.items)

    def export(self) -> None:
        self.notifier.info("Exporting student data...")

    def send_message(self, student_id: uuid.UUID) -> None:
        self.notifier.info("Sending message to student...")
