"""
Authentication router
Handles login, self-registration, logout and password changes
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database.core import get_db
from ..dependencies import (
    create_access_token,
    get_current_active_user,
    get_password_hash,
    verify_password,
)
from ..middleware.rate_limiter import limiter, LOGIN_LIMIT
from ..models.revoked_tokens import RevokedToken
from ..models.users import User
from ..schemas.auth import (
    APIResponse,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    TokenPayload,
)
from ..schemas.enums import UserRole
from ..schemas.user import CurrentUser, UserRead
from ..services.permissions import resolve_capabilities

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.cookie_name,
        value=token,
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.secure_cookies,
        samesite="lax",
    )


async def _get_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return user


@router.post("/login", response_model=LoginResponse, summary="Login")
@limiter.limit(LOGIN_LIMIT)
async def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    db: AsyncSession = Depends(get_db)
):
    """
    Exchange username and password for an access token.
    The token is returned in the body and also set as an HttpOnly cookie.
    """
    result = await db.execute(select(User).where(User.username == credentials.username))
    user = result.scalar_one_or_none()

    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info(f"Failed login for username '{credentials.username}'")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Account is inactive"
        )

    token = create_access_token(user)
    _set_session_cookie(response, token)
    logger.info(f"User {user.id} logged in")

    return LoginResponse(
        access_token=token,
        expires_in=settings.access_token_expire_minutes * 60,
        user_id=user.id,
        role=user.role,
    )


@router.post("/register", response_model=UserRead, status_code=201, summary="Register")
async def register(
    payload: RegisterRequest,
    db: AsyncSession = Depends(get_db)
):
    """Self-registration; new accounts are always technicians"""
    existing = await db.execute(select(User).where(User.username == payload.username))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="Username already exists")

    user = User(
        username=payload.username,
        password_hash=get_password_hash(payload.password),
        full_name=payload.full_name,
        role=UserRole.TECHNICIAN.value,
        is_active=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Username already exists")
    await db.refresh(user)

    logger.info(f"Registered technician {user.id}")
    return user


@router.post(
    "/logout",
    response_model=APIResponse,
    summary="Logout",
    description="Revoke the current token and clear the session cookie"
)
async def logout(
    response: Response,
    current_user: TokenPayload = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    if current_user.jti:
        expires_at = (
            datetime.fromtimestamp(current_user.exp, tz=timezone.utc)
            if current_user.exp else datetime.now(timezone.utc)
        )
        db.add(RevokedToken(
            token_jti=current_user.jti,
            user_id=current_user.user_id,
            expires_at=expires_at,
        ))
        await db.commit()

    response.delete_cookie(settings.cookie_name)
    return APIResponse(status="success", message="Successfully logged out")


@router.get("/auth/user", response_model=CurrentUser, summary="Current user")
async def get_current_user_profile(
    current_user: TokenPayload = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    """Profile of the authenticated user with the capabilities their role grants"""
    user = await _get_user(db, current_user.user_id)
    profile = CurrentUser.model_validate(user)
    profile.capabilities = sorted(c.value for c in resolve_capabilities(user.role))
    return profile


@router.post("/auth/change-password", response_model=APIResponse, summary="Change password")
async def change_password(
    payload: ChangePasswordRequest,
    current_user: TokenPayload = Depends(get_current_active_user),
    db: AsyncSession = Depends(get_db)
):
    user = await _get_user(db, current_user.user_id)

    if not verify_password(payload.current_password, user.password_hash):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    user.password_hash = get_password_hash(payload.new_password)
    await db.commit()

    logger.info(f"User {user.id} changed their password")
    return APIResponse(status="success", message="Password updated")
