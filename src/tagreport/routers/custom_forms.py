"""
Custom form types: admin-uploaded code -> item name lists
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..database.core import get_db
from ..dependencies import require_capability
from ..models.custom_forms import CustomFormItem, CustomFormType
from ..schemas.auth import TokenPayload
from ..schemas.custom_form import CustomFormTypeCreate, CustomFormTypeRead
from ..services.custom_forms import FormCsvError, parse_form_csv
from ..services.permissions import Capability

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/custom-forms", tags=["custom_forms"])


async def _get_form(db: AsyncSession, form_id: int) -> CustomFormType:
    result = await db.execute(
        select(CustomFormType)
        .options(selectinload(CustomFormType.items))
        .where(CustomFormType.id == form_id)
    )
    form = result.scalar_one_or_none()
    if form is None:
        raise HTTPException(status_code=404, detail=f"Custom form {form_id} not found")
    return form


@router.get("", response_model=List[CustomFormTypeRead])
async def list_custom_forms(
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_capability(Capability.VIEW_CUSTOM_FORMS))
):
    result = await db.execute(
        select(CustomFormType)
        .options(selectinload(CustomFormType.items))
        .order_by(CustomFormType.name)
    )
    return result.scalars().all()


@router.post("", response_model=CustomFormTypeRead, status_code=201)
async def create_custom_form(
    payload: CustomFormTypeCreate,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_capability(Capability.MANAGE_CUSTOM_FORMS))
):
    """Create a form type from `code,itemName` CSV lines"""
    try:
        pairs = parse_form_csv(payload.csv_data)
    except FormCsvError as e:
        raise HTTPException(status_code=400, detail=str(e))

    form = CustomFormType(
        name=payload.name,
        service_type=payload.service_type.value,
        csv_data=payload.csv_data,
        items=[
            CustomFormItem(code=code, item_name=item_name, position=position)
            for position, (code, item_name) in enumerate(pairs)
        ],
    )
    db.add(form)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=409, detail=f"A custom form named '{payload.name}' already exists")
    await db.refresh(form, attribute_names=["created_at"])

    logger.info(f"User {current_user.user_id} created custom form '{form.name}' with {len(pairs)} items")
    return form


@router.get("/{form_id}", response_model=CustomFormTypeRead)
async def get_custom_form(
    form_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_capability(Capability.VIEW_CUSTOM_FORMS))
):
    return await _get_form(db, form_id)


@router.delete("/{form_id}", status_code=204)
async def delete_custom_form(
    form_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: TokenPayload = Depends(require_capability(Capability.MANAGE_CUSTOM_FORMS))
):
    form = await _get_form(db, form_id)
    await db.delete(form)
    await db.commit()
    logger.info(f"User {current_user.user_id} deleted custom form {form_id}")
