import uuid
from datetime import datetime

from edumaster.schemas.base import CamelModel


class StudentProgressRow(CamelModel):
    """One enrollment of one student in one of the instructor's courses."""

    id: uuid.UUID
    name: str
    email: str
    avatar: str | None = None
    course: str
    course_id: uuid.UUID
    progress: int = 0
    lessons_completed: int = 0
    total_lessons: int = 0
    quiz_score: int = 0
    status: str
    last_active: datetime | None = None
    enrolled_at: datetime | None = None
