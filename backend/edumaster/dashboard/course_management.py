"""Admin course management: list, filter, approve, unpublish, delete."""

import uuid
from dataclasses import dataclass

from edumaster.dashboard.base import ListView
from edumaster.dashboard.confirm import ConfirmationRequest
from edumaster.dashboard.filters import CourseFilters, course_categories, filter_courses
from edumaster.schemas.course import AdminCourseRead

DELETE_COURSE_PROMPT = (
    "Are you sure you want to delete this course? This action cannot be undone."
)


@dataclass(frozen=True)
class CourseStats:
    total: int
    published: int
    unpublished: int
    students: int


def course_stats(courses) -> CourseStats:
    published = sum(1 for c in courses if c.status == "published")
    return CourseStats(
        total=len(courses),
        published=published,
        unpublished=len(courses) - published,
        students=sum(c.students or 0 for c in courses),
    )


class CourseManagementView(ListView[AdminCourseRead, CourseFilters]):
    load_failure_message = "Failed to load courses"

    def __init__(self, client, **kwargs):
        kwargs.setdefault("filters", CourseFilters())
        super().__init__(client, **kwargs)

    async def _fetch(self) -> list[AdminCourseRead]:
        return await self.client.list_courses()

    @property
    def courses(self) -> tuple[AdminCourseRead, ...]:
        return self.items

    @property
    def visible(self) -> list[AdminCourseRead]:
        return filter_courses(self.items, self.filters)

    @property
    def categories(self) -> list[str]:
        return course_categories(self.items)

    @property
    def stats(self) -> CourseStats:
        return course_stats(self.items)

    async def _set_published(
        self, course_id: uuid.UUID, published: bool, *, success: str, failure: str
    ) -> bool:
        ok, _ = await self._send(
            lambda: self.client.set_course_status(course_id, published),
            success=success,
            failure=failure,
        )
        if ok:
            await self.load()
        return ok

    async def approve(self, course_id: uuid.UUID) -> bool:
        return await self._set_published(
            course_id,
            True,
            success="Course approved successfully",
            failure="Failed to approve course",
        )

    async def unpublish(self, course_id: uuid.UUID) -> bool:
        return await self._set_published(
            course_id,
            False,
            success="Course unpublished successfully",
            failure="Failed to unpublish course",
        )

    def request_delete(self, course_id: uuid.UUID) -> ConfirmationRequest:
        return ConfirmationRequest(
            action="delete_course", target_id=course_id, message=DELETE_COURSE_PROMPT
        )

    async def delete(self, course_id: uuid.UUID) -> bool:
        """Delete after confirmation. False when declined or on failure."""
        if not await self._confirmed(self.request_delete(course_id)):
            return False
        ok, _ = await self._send(
            lambda: self.client.delete_course(course_id),
            success="Course deleted successfully",
            failure="Failed to delete course",
        )
        if ok:
            await self.load()
        return ok
