from datetime import datetime, timedelta, timezone

import pytest
from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.core.auth import (
    _extract_bearer_token,
    hash_password,
    login_user,
    verify_password,
)
from edumaster.models.audit import AuditLogEvent
from edumaster.models.session import Session
from edumaster.models.user import User, UserRole


async def _create_user(
    db_session: AsyncSession,
    email: str = "auth@example.com",
    role: UserRole = UserRole.STUDENT,
) -> User:
    user = User(
        name="Auth User",
        email=email,
        password_hash=hash_password("SecurePass123!"),
        role=role,
    )
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.mark.asyncio
async def test_hash_and_verify_password():
    """bcrypt hash and verify round-trip."""
    pw = "SecurePass123!"
    hashed = hash_password(pw)
    assert hashed != pw
    assert verify_password(pw, hashed) is True
    assert verify_password("WrongPass", hashed) is False


def test_verify_against_malformed_hash():
    assert verify_password("anything", "not-a-bcrypt-hash") is False


@pytest.mark.asyncio
async def test_login_user_success(db_session: AsyncSession):
    """Login with valid credentials returns user + token and opens a session."""
    created = await _create_user(db_session)

    user, token = await login_user(
        db_session, email="auth@example.com", password="SecurePass123!", ip_address="10.0.0.1"
    )
    await db_session.commit()

    assert user.id == created.id
    assert len(token) == 64
    result = await db_session.execute(select(Session).where(Session.token == token))
    session = result.scalar_one()
    assert session.user_id == user.id
    assert session.revoked is False
    expires_at = session.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    assert expires_at > datetime.now(timezone.utc) + timedelta(hours=23)


@pytest.mark.asyncio
async def test_login_is_audited(db_session: AsyncSession):
    user = await _create_user(db_session)
    await login_user(
        db_session, email="auth@example.com", password="SecurePass123!", ip_address="10.0.0.1"
    )
    await db_session.commit()

    result = await db_session.execute(
        select(AuditLogEvent).where(AuditLogEvent.actor_id == user.id)
    )
    event = result.scalar_one()
    assert event.event_type == "auth.login"
    assert event.ip_address == "10.0.0.1"


@pytest.mark.asyncio
async def test_login_wrong_password(db_session: AsyncSession):
    await _create_user(db_session)
    with pytest.raises(HTTPException) as exc_info:
        await login_user(db_session, email="auth@example.com", password="WrongPass")
    assert exc_info.value.status_code == 401


@pytest.mark.asyncio
async def test_login_unknown_email(db_session: AsyncSession):
    """Unknown email gets the same 401 as a wrong password."""
    with pytest.raises(HTTPException) as exc_info:
        await login_user(db_session, email="nobody@example.com", password="SecurePass123!")
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid email or password"


@pytest.mark.asyncio
async def test_each_login_gets_a_new_token(db_session: AsyncSession):
    await _create_user(db_session)
    _, first = await login_user(db_session, email="auth@example.com", password="SecurePass123!")
    _, second = await login_user(db_session, email="auth@example.com", password="SecurePass123!")
    assert first != second


class _FakeRequest:
    def __init__(self, headers: dict):
        self.headers = headers


@pytest.mark.parametrize(
    "header,expected",
    [
        ("Bearer abc123", "abc123"),
        ("Bearer   abc123  ", "abc123"),
        ("Bearer ", None),
        ("Token abc123", None),
        (None, None),
    ],
)
def test_extract_bearer_token(header, expected):
    headers = {"Authorization": header} if header is not None else {}
    assert _extract_bearer_token(_FakeRequest(headers)) == expected
