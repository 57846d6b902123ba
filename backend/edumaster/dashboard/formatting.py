"""Display helpers shared by the dashboards: badges, dates, activity."""

import math
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from edumaster.config import settings


@dataclass(frozen=True)
class Badge:
    label: str
    color: str


ROLE_COLORS = {
    "ADMIN": "red",
    "INSTRUCTOR": "blue",
    "STUDENT": "green",
}


def course_status_badge(status: str) -> Badge:
    if status == "published":
        return Badge("Published", "green")
    if status in ("pending", "draft"):
        return Badge("Pending/Draft", "yellow")
    return Badge(status, "gray")


def student_status_badge(status: str) -> Badge:
    if status == "completed":
        return Badge("Completed", "green")
    if status == "active":
        return Badge("Active", "blue")
    return Badge("Inactive", "gray")


def role_badge(role: str) -> Badge:
    return Badge(role, ROLE_COLORS.get(role, "gray"))


def to_datetime(value: datetime | str | None) -> datetime | None:
    """Parse an API timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def format_date(value: datetime | str | None) -> str:
    """Calendar date as M/D/YYYY, or "" when missing."""
    dt = to_datetime(value)
    if dt is None:
        return ""
    return f"{dt.month}/{dt.day}/{dt.year}"


def time_ago(value: datetime | str | None, now: datetime | None = None) -> str:
    """Relative time: Just now, 5m ago, 3h ago, 10d ago, then the date."""
    dt = to_datetime(value)
    if dt is None:
        return "Never"
    now = to_datetime(now) or datetime.now(timezone.utc)

    seconds = math.floor((now - dt).total_seconds())
    if seconds < 60:
        return "Just now"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m ago"
    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"
    days = hours // 24
    if days < 30:
        return f"{days}d ago"
    return format_date(dt)


def is_user_active(
    updated_at: datetime | str | None,
    now: datetime | None = None,
    *,
    window_days: int | None = None,
) -> bool:
    """True when the last update falls inside the activity window (30 days)."""
    dt = to_datetime(updated_at)
    if dt is None:
        return False
    now = to_datetime(now) or datetime.now(timezone.utc)
    days = window_days if window_days is not None else settings.user_activity_window_days
    return dt > now - timedelta(days=days)


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def average(values: Sequence[float]) -> int:
    """Arithmetic mean rounded half-up; 0 for no values."""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))
