"""
Contact Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime

from crm_relations.schemas.area_of_activity import AreaOfActivityResponse


class ContactBase(BaseModel):
    """Base contact schema with common fields."""
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)


class ContactCreate(ContactBase):
    """Schema for creating a contact."""
    pass


class ContactUpdate(BaseModel):
    """Schema for updating a contact (all fields optional)."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(None, min_length=1, max_length=50)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    primary_company_id: Optional[int] = Field(None, gt=0)
    version: Optional[int] = Field(None, ge=1, description="Last version read; enables a stale-write check")

    @field_validator("first_name", "last_name")
    @classmethod
    def reject_null_names(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class ContactResponse(ContactBase):
    """Contact with its areas of activity, so callers see the whole aggregate after a write."""
    id: int
    primary_company_id: Optional[int] = None
    version: int
    areas_of_activity: List[AreaOfActivityResponse] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ContactListResponse(BaseModel):
    """Schema for contact list response."""
    items: List[ContactResponse]
    total: int


class CompanyContactCreate(ContactCreate):
    """Contact created directly at a company, with the role held there."""
    role: Optional[str] = Field("Employee", max_length=100)
    job_description: Optional[str] = None
