"""
Pydantic schemas for Test Session API endpoints
"""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, Field

from .enums import Country, ServiceType


class TestSessionBase(BaseModel):
    """Base test session schema with common fields"""
    service_type: ServiceType = Field(
        default=ServiceType.ELECTRICAL,
        description="Kind of inspection performed"
    )
    test_date: date = Field(..., description="Date of the site visit")
    technician_name: str = Field(..., min_length=1, max_length=255)
    client_name: str = Field(..., min_length=1, max_length=255)
    site_contact: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    country: Country = Field(..., description="Governs which standard the report cites")
    starting_asset_number: Optional[int] = Field(None, ge=1)
    technician_licensed: Optional[bool] = None
    compliance_standard: Optional[str] = Field(None, max_length=100)


class TestSessionCreate(TestSessionBase):
    """Schema for creating a new test session"""


class TestSessionUpdate(BaseModel):
    """Schema for admin edits of an existing session"""
    service_type: Optional[ServiceType] = None
    test_date: Optional[date] = None
    technician_name: Optional[str] = Field(None, min_length=1, max_length=255)
    client_name: Optional[str] = Field(None, min_length=1, max_length=255)
    site_contact: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1)
    country: Optional[Country] = None
    technician_licensed: Optional[bool] = None
    compliance_standard: Optional[str] = Field(None, max_length=100)


class TestSessionRead(TestSessionBase):
    """Schema for reading test session data"""
    id: int = Field(..., description="Test session identifier")
    user_id: Optional[int] = Field(None, description="Owning technician")
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class TestSessionListItem(TestSessionRead):
    """Session row for dashboards, with item counts"""
    technician_full_name: Optional[str] = None
    total_items: int = 0
    failed_items: int = 0
