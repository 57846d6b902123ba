import uuid

from pydantic import Field

from edumaster.schemas.base import CamelModel


class LoginRequest(CamelModel):
    email: str = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class AuthUser(CamelModel):
    id: uuid.UUID
    name: str
    email: str
    role: str


class LoginResponse(CamelModel):
    token: str
    user: AuthUser
