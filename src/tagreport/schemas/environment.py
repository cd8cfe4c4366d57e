from datetime import datetime
from typing import Optional, List

from pydantic import BaseModel, Field

from .enums import ServiceType


class EnvironmentItem(BaseModel):
    type: str = Field(..., min_length=1, max_length=255)
    name: str = Field(..., min_length=1, max_length=255)
    icon: str = Field("📦", max_length=16)
    description: str = Field("", max_length=1000)


class EnvironmentCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    service_type: ServiceType = ServiceType.ELECTRICAL
    items: List[EnvironmentItem] = Field(default_factory=list)


class EnvironmentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    service_type: Optional[ServiceType] = None
    items: Optional[List[EnvironmentItem]] = None


class EnvironmentRead(BaseModel):
    id: int
    user_id: int
    name: str
    service_type: str
    items: List[EnvironmentItem] = Field(default_factory=list)
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
