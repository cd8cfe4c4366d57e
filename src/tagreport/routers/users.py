"""
Admin user management router
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.core import get_db
from ..dependencies import get_password_hash, require_capability
from ..models.users import User
from ..schemas.auth import TokenPayload
from ..schemas.user import UserCreate, UserRead, UserStatusUpdate, UserUpdate
from ..services.permissions import Capability, can_assign_role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/users", tags=["Admin Users"])

require_user_admin = require_capability(Capability.MANAGE_USERS)


def _check_role_assignment(actor: TokenPayload, target_role) -> None:
    if not can_assign_role(actor.role, target_role):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Only super admins may create or modify super admin accounts"
        )


async def _get_user(db: AsyncSession, user_id: int) -> User:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise HTTPException(status_code=404, detail=f"User {user_id} not found")
    return user


@router.get("", response_model=List[UserRead])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_user_admin)
):
    result = await db.execute(select(User).order_by(User.username))
    return result.scalars().all()


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    payload: UserCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_user_admin)
):
    """Create an account with any role the caller is allowed to grant"""
    _check_role_assignment(current_user, payload.role)

    existing = await db.execute(select(User).where(User.username == payload.username))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=400, detail="Username already exists")

    user = User(
        username=payload.username,
        password_hash=get_password_hash(payload.password),
        full_name=payload.full_name,
        role=payload.role.value,
        is_active=payload.is_active,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Username already exists")
    await db.refresh(user)

    logger.info(f"User {current_user.user_id} created {user.role} account {user.id}")
    return user


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_user_admin)
):
    user = await _get_user(db, user_id)

    # Both the current and the requested role must be assignable by the caller
    _check_role_assignment(current_user, user.role)
    if payload.role is not None:
        _check_role_assignment(current_user, payload.role)

    update_data = payload.model_dump(exclude_unset=True)
    password = update_data.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)
    if "role" in update_data and update_data["role"] is not None:
        update_data["role"] = update_data["role"].value

    for field, value in update_data.items():
        if value is not None:
            setattr(user, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=400, detail="Username already exists")
    await db.refresh(user)
    return user


@router.patch("/{user_id}/status", response_model=UserRead)
async def update_user_status(
    user_id: int,
    payload: UserStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_user_admin)
):
    """Activate or deactivate an account. Deactivated users cannot log in."""
    if user_id == current_user.user_id and not payload.is_active:
        raise HTTPException(status_code=400, detail="You cannot deactivate your own account")

    user = await _get_user(db, user_id)
    _check_role_assignment(current_user, user.role)

    user.is_active = payload.is_active
    await db.commit()
    await db.refresh(user)

    logger.info(
        f"User {current_user.user_id} set account {user.id} "
        f"{'active' if user.is_active else 'inactive'}"
    )
    return user
