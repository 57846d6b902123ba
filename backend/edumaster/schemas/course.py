import uuid
from datetime import datetime

from edumaster.schemas.base import CamelModel


class AdminCourseRead(CamelModel):
    id: uuid.UUID
    title: str
    description: str | None = None
    instructor: str
    instructor_email: str | None = None
    category: str | None = None
    status: str
    published: bool
    price: float = 0.0
    level: str | None = None
    students: int = 0
    rating: float = 0.0
    created_at: datetime


class InstructorCourseRead(CamelModel):
    id: uuid.UUID
    title: str
    category: str | None = None
    level: str | None = None
    price: float = 0.0
    published: bool
    students: int = 0
    created_at: datetime


class CourseStatusUpdate(CamelModel):
    published: bool
