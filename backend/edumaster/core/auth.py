"""Authentication: login, bearer-session lookup, role guards.

Opaque bearer sessions with bcrypt password hashing.
Logins are audit-logged.
"""

import secrets
from datetime import datetime, timedelta, timezone

import bcrypt
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.config import settings
from edumaster.dependencies import get_db
from edumaster.models.session import Session
from edumaster.models.user import User, UserRole
from edumaster.services import audit_service

AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False


def _generate_token() -> str:
    """Generate a cryptographically secure session token."""
    return secrets.token_hex(32)


def _extract_bearer_token(request: Request) -> str | None:
    header = request.headers.get(AUTHORIZATION_HEADER)
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):].strip()
    return token or None


async def login_user(
    db: AsyncSession,
    *,
    email: str,
    password: str,
    ip_address: str | None = None,
) -> tuple[User, str]:
    """Authenticate user, create session, return (user, token).

    Raises HTTPException on invalid credentials.
    """
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = _generate_token()
    session = Session(
        user_id=user.id,
        token=token,
        expires_at=datetime.now(timezone.utc) + timedelta(hours=settings.session_duration_hours),
    )
    db.add(session)
    await db.flush()

    await audit_service.log_event(
        db,
        actor_id=user.id,
        event_type="auth.login",
        entity_type="Session",
        entity_id=session.id,
        action="login",
        ip_address=ip_address,
    )

    return user, token


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> User:
    """FastAPI dependency: validate the bearer token, return the current user.

    Raises HTTPException 401 if token is missing, invalid, expired, or revoked.
    """
    token = _extract_bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )

    result = await db.execute(select(Session).where(Session.token == token))
    session = result.scalar_one_or_none()

    if session is None or session.revoked:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or revoked session",
        )

    expires_at = session.expires_at
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    if expires_at < datetime.now(timezone.utc):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session expired",
        )

    result = await db.execute(select(User).where(User.id == session.user_id))
    user = result.scalar_one_or_none()

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    request.state.user_id = str(user.id)
    return user


def require_roles(*roles: UserRole):
    """Build a dependency that admits only users holding one of `roles`."""

    async def _guard(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _guard


require_admin = require_roles(UserRole.ADMIN)
require_instructor = require_roles(UserRole.INSTRUCTOR, UserRole.ADMIN)
