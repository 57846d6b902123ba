import uuid
from datetime import datetime

from pydantic import Field

from edumaster.models.user import UserRole
from edumaster.schemas.base import CamelModel


class UserStats(CamelModel):
    courses_enrolled: int = 0
    courses_created: int = 0
    courses_completed: int = 0
    total_students: int = 0


class AdminUserRead(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    # Kept as the raw string the server sends; filters compare it verbatim.
    role: str
    avatar: str | None = None
    bio: str | None = None
    created_at: datetime
    updated_at: datetime
    stats: UserStats = Field(default_factory=UserStats)


class RoleUpdate(CamelModel):
    role: UserRole
