from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from .enums import ServiceType


class CustomFormItemRead(BaseModel):
    code: str
    item_name: str
    position: int

    class Config:
        from_attributes = True


class CustomFormTypeCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    service_type: ServiceType = ServiceType.ELECTRICAL
    csv_data: str = Field(
        ...,
        min_length=1,
        description="One code,itemName pair per line, e.g. 1122,3D Printer"
    )


class CustomFormTypeRead(BaseModel):
    id: int
    name: str
    service_type: str
    created_at: Optional[datetime] = None
    items: List[CustomFormItemRead] = Field(default_factory=list)

    class Config:
        from_attributes = True
