"""
Environments router: a technician's saved item presets
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.core import get_db
from ..dependencies import require_capability
from ..models.environments import Environment
from ..schemas.auth import TokenPayload
from ..schemas.enums import ServiceType
from ..schemas.environment import EnvironmentCreate, EnvironmentRead, EnvironmentUpdate
from ..services.permissions import Capability

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/environments", tags=["environments"])

require_environments = require_capability(Capability.MANAGE_ENVIRONMENTS)


async def _get_owned_environment(db: AsyncSession, environment_id: int, user_id: int) -> Environment:
    # Other users' environments are indistinguishable from missing ones
    result = await db.execute(
        select(Environment).where(
            Environment.id == environment_id,
            Environment.user_id == user_id
        )
    )
    environment = result.scalar_one_or_none()
    if environment is None:
        raise HTTPException(status_code=404, detail=f"Environment {environment_id} not found")
    return environment


@router.get("", response_model=List[EnvironmentRead])
async def list_environments(
    service_type: Optional[ServiceType] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_environments)
):
    query = select(Environment).where(Environment.user_id == current_user.user_id)
    if service_type is not None:
        query = query.where(Environment.service_type == service_type.value)
    result = await db.execute(query.order_by(Environment.name))
    return result.scalars().all()


@router.post("", response_model=EnvironmentRead, status_code=201)
async def create_environment(
    payload: EnvironmentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_environments)
):
    environment = Environment(
        user_id=current_user.user_id,
        name=payload.name,
        service_type=payload.service_type.value,
        items=[item.model_dump() for item in payload.items],
    )
    db.add(environment)
    await db.commit()
    await db.refresh(environment)
    return environment


@router.get("/{environment_id}", response_model=EnvironmentRead)
async def get_environment(
    environment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_environments)
):
    return await _get_owned_environment(db, environment_id, current_user.user_id)


@router.put("/{environment_id}", response_model=EnvironmentRead)
async def update_environment(
    environment_id: int,
    payload: EnvironmentUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_environments)
):
    environment = await _get_owned_environment(db, environment_id, current_user.user_id)

    if payload.name is not None:
        environment.name = payload.name
    if payload.service_type is not None:
        environment.service_type = payload.service_type.value
    if payload.items is not None:
        environment.items = [item.model_dump() for item in payload.items]

    await db.commit()
    await db.refresh(environment)
    return environment


@router.delete("/{environment_id}", status_code=204)
async def delete_environment(
    environment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_environments)
):
    environment = await _get_owned_environment(db, environment_id, current_user.user_id)
    await db.delete(environment)
    await db.commit()
    logger.info(f"User {current_user.user_id} deleted environment {environment_id}")
