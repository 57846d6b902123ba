"""Auth routes: login."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from edumaster.core.auth import login_user
from edumaster.dependencies import get_db
from edumaster.models.user import UserRole
from edumaster.schemas.auth import AuthUser, LoginRequest, LoginResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
):
    ip = request.client.host if request.client else None
    user, token = await login_user(db, email=body.email, password=body.password, ip_address=ip)
    return LoginResponse(
        token=token,
        user=AuthUser(id=user.id, name=user.name, email=user.email, role=UserRole(user.role).value),
    )
