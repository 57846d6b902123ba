"""Headless admin and instructor dashboards over the EduMaster REST API."""

from edumaster.dashboard.api import (  # noqa: F401
    ApiError,
    ApiResponseError,
    EduMasterClient,
    TransportError,
)
from edumaster.dashboard.confirm import (  # noqa: F401
    ConfirmationRequest,
    Decision,
    accept_all,
    decline_all,
)
from edumaster.dashboard.course_management import CourseManagementView  # noqa: F401
from edumaster.dashboard.notifications import Notice, Notifier  # noqa: F401
from edumaster.dashboard.student_progress import StudentProgressView  # noqa: F401
from edumaster.dashboard.user_management import UserManagementView  # noqa: F401
