"""REST client for the EduMaster API.

Thin async wrapper over httpx. Every failure surfaces as an ApiError:

  TransportError    no usable response (DNS, refused, timeout, bad encoding,
                    redirect loop)
  ApiResponseError  the server answered with a non-2xx status; carries the
                    decoded error payload
  ApiError          anything else, e.g. a response body that does not parse
"""

import uuid

import httpx
from pydantic import TypeAdapter, ValidationError

from edumaster.config import settings
from edumaster.schemas.auth import LoginResponse
from edumaster.schemas.course import AdminCourseRead, InstructorCourseRead
from edumaster.schemas.student import StudentProgressRow
from edumaster.schemas.user import AdminUserRead


class ApiError(Exception):
    """Base class for client-side API failures."""


class TransportError(ApiError):
    """Network, decoding or redirect failure; no usable response."""


class ApiResponseError(ApiError):
    """Non-2xx response from the server."""

    def __init__(self, status_code: int, payload):
        self.status_code = status_code
        self.payload = payload
        super().__init__(f"HTTP {status_code}: {payload}")


_courses = TypeAdapter(list[AdminCourseRead])
_users = TypeAdapter(list[AdminUserRead])
_students = TypeAdapter(list[StudentProgressRow])
_instructor_courses = TypeAdapter(list[InstructorCourseRead])


def _payload(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return response.text


class EduMasterClient:
    """Async API client. Use as an async context manager or call aclose()."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        token: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float | None = None,
        follow_redirects: bool = False,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            transport=transport,
            timeout=timeout if timeout is not None else settings.api_timeout_seconds,
            follow_redirects=follow_redirects,
        )
        self.token = token

    @property
    def token(self) -> str | None:
        return self._token

    @token.setter
    def token(self, value: str | None) -> None:
        self._token = value
        if value:
            self._client.headers["Authorization"] = f"Bearer {value}"
        else:
            self._client.headers.pop("Authorization", None)

    async def __aenter__(self) -> "EduMasterClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as exc:
            raise TransportError(str(exc) or exc.__class__.__name__) from exc
        if response.is_error:
            raise ApiResponseError(response.status_code, _payload(response))
        return response

    @staticmethod
    def _parse(adapter_or_model, response: httpx.Response):
        try:
            if isinstance(adapter_or_model, TypeAdapter):
                return adapter_or_model.validate_json(response.content)
            return adapter_or_model.model_validate_json(response.content)
        except ValidationError as exc:
            raise ApiError(f"Malformed response from {response.request.url}: {exc}") from exc

    # --- auth ---

    async def login(self, email: str, password: str) -> LoginResponse:
        """POST /auth/login; on success the client carries the bearer token."""
        response = await self._request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        login = self._parse(LoginResponse, response)
        self.token = login.token
        return login

    # --- admin: courses ---

    async def list_courses(self) -> list[AdminCourseRead]:
        return self._parse(_courses, await self._request("GET", "/admin/courses"))

    async def set_course_status(self, course_id: uuid.UUID | str, published: bool) -> AdminCourseRead:
        response = await self._request(
            "PUT", f"/admin/courses/{course_id}/status", json={"published": published}
        )
        return self._parse(AdminCourseRead, response)

    async def delete_course(self, course_id: uuid.UUID | str) -> None:
        await self._request("DELETE", f"/admin/courses/{course_id}")

    # --- admin: users ---

    async def list_users(self) -> list[AdminUserRead]:
        return self._parse(_users, await self._request("GET", "/admin/users"))

    async def set_user_role(self, user_id: uuid.UUID | str, role: str) -> AdminUserRead:
        response = await self._request("PUT", f"/admin/users/{user_id}/role", json={"role": role})
        return self._parse(AdminUserRead, response)

    async def delete_user(self, user_id: uuid.UUID | str) -> None:
        await self._request("DELETE", f"/admin/users/{user_id}")

    # --- instructor ---

    async def list_students(self) -> list[StudentProgressRow]:
        return self._parse(_students, await self._request("GET", "/instructor/students"))

    async def my_courses(self) -> list[InstructorCourseRead]:
        return self._parse(
            _instructor_courses, await self._request("GET", "/instructor/my-courses")
        )
