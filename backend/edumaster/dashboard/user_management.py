"""Admin user management: list, filter, detail panel, role change, delete."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime

from edumaster.dashboard.base import ListView
from edumaster.dashboard.confirm import ConfirmationRequest
from edumaster.dashboard.filters import UserFilters, filter_users
from edumaster.dashboard.formatting import Badge, format_date, is_user_active, role_badge
from edumaster.schemas.user import AdminUserRead

DELETE_USER_PROMPT = "Are you sure you want to delete this user? This action cannot be undone."

ROLE_CHOICES = ("STUDENT", "INSTRUCTOR", "ADMIN")
ROLE_CHANGE_FAILED = "Failed to update user role. Please try again."

logger = logging.getLogger("edumaster.dashboard")


@dataclass(frozen=True)
class ActivityItem:
    label: str
    value: int


@dataclass(frozen=True)
class UserDetail:
    """Everything the side panel shows for one user."""

    user_id: uuid.UUID
    name: str
    email: str
    avatar: str | None
    initial: str
    role: Badge
    active: bool
    joined: str
    last_active: str
    bio: str | None
    activity_title: str | None
    activity: tuple[ActivityItem, ...]

    @property
    def status_label(self) -> str:
        return "Active" if self.active else "Inactive"


def activity_for(user: AdminUserRead) -> tuple[str | None, tuple[ActivityItem, ...]]:
    """Role-specific activity section; admins have none."""
    stats = user.stats
    if user.role == "STUDENT":
        return "Learning Activity", (
            ActivityItem("Courses Enrolled", stats.courses_enrolled or 0),
            ActivityItem("Courses Completed", stats.courses_completed or 0),
        )
    if user.role == "INSTRUCTOR":
        return "Teaching Activity", (
            ActivityItem("Courses Created", stats.courses_created or 0),
            ActivityItem("Total Students", stats.total_students or 0),
        )
    return None, ()


def list_activity(user: AdminUserRead) -> str:
    """Short activity cell for the table row."""
    if user.role == "STUDENT":
        return f"{user.stats.courses_enrolled or 0} courses"
    if user.role == "INSTRUCTOR":
        return f"{user.stats.courses_created or 0} courses"
    return "-"


def build_detail(user: AdminUserRead, now: datetime | None = None) -> UserDetail:
    title, activity = activity_for(user)
    return UserDetail(
        user_id=user.id,
        name=user.name,
        email=user.email,
        avatar=user.avatar,
        initial=user.name[:1].upper(),
        role=role_badge(user.role),
        active=is_user_active(user.updated_at, now),
        joined=format_date(user.created_at),
        last_active=format_date(user.updated_at),
        bio=user.bio,
        activity_title=title,
        activity=activity,
    )


class UserManagementView(ListView[AdminUserRead, UserFilters]):
    load_failure_message = "Failed to load users. Please refresh the page."

    def __init__(self, client, **kwargs):
        kwargs.setdefault("filters", UserFilters())
        super().__init__(client, **kwargs)
        self.selected: AdminUserRead | None = None
        self.detail_open = False

    async def _fetch(self) -> list[AdminUserRead]:
        return await self.client.list_users()

    @property
    def users(self) -> tuple[AdminUserRead, ...]:
        return self.items

    @property
    def visible(self) -> list[AdminUserRead]:
        return filter_users(self.items, self.filters)

    def open_detail(self, user: AdminUserRead) -> None:
        self.selected = user
        self.detail_open = True

    def close_detail(self) -> None:
        self.detail_open = False

    def detail(self, now: datetime | None = None) -> UserDetail | None:
        if not self.detail_open or self.selected is None:
            return None
        return build_detail(self.selected, now)

    def _reconcile_role(self, confirmed: AdminUserRead) -> None:
        """Apply a server-confirmed role to the list and the open detail user."""
        self.items = tuple(
            u.model_copy(update={"role": confirmed.role}) if u.id == confirmed.id else u
            for u in self.items
        )
        if self.selected is not None and self.selected.id == confirmed.id:
            self.selected = self.selected.model_copy(update={"role": confirmed.role})

    async def change_role(self, user_id: uuid.UUID, role: str) -> bool:
        if role not in ROLE_CHOICES:
            logger.error("Refusing unknown role %r for user %s", role, user_id)
            self.notifier.error(ROLE_CHANGE_FAILED)
            return False
        ok, confirmed = await self._send(
            lambda: self.client.set_user_role(user_id, role),
            success="User role updated successfully",
            failure=ROLE_CHANGE_FAILED,
        )
        if not ok:
            return False
        self._reconcile_role(confirmed)
        await self.load()
        return True

    def request_delete(self, user_id: uuid.UUID) -> ConfirmationRequest:
        return ConfirmationRequest(action="delete_user", target_id=user_id, message=DELETE_USER_PROMPT)

    async def delete_user(self, user_id: uuid.UUID) -> bool:
        """Delete after confirmation, reload and close the detail panel."""
        if not await self._confirmed(self.request_delete(user_id)):
            return False
        ok, _ = await self._send(
            lambda: self.client.delete_user(user_id),
            success="User deleted successfully",
            failure="Failed to delete user. Please try again.",
        )
        if not ok:
            return False
        await self.load()
        self.close_detail()
        if self.selected is not None and self.selected.id == user_id:
            self.selected = None
        return True
