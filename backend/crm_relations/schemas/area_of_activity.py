"""
Area of activity Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AreaOfActivityBase(BaseModel):
    """Base area of activity schema with common fields."""
    role: Optional[str] = Field(None, max_length=100)
    job_description: Optional[str] = None


class AreaOfActivityCreate(AreaOfActivityBase):
    """Schema for linking a contact to a company."""
    company_id: int = Field(..., gt=0)
    is_primary: bool = False


class AreaOfActivityUpdate(BaseModel):
    """Schema for updating an area of activity (all fields optional)."""
    role: Optional[str] = Field(None, max_length=100)
    job_description: Optional[str] = None
    is_primary: Optional[bool] = None
    version: Optional[int] = Field(None, ge=1, description="Last version read; enables a stale-write check")


class AreaOfActivityResponse(AreaOfActivityBase):
    """Schema for area of activity response."""
    id: int
    contact_id: int
    company_id: int
    is_primary: bool
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CompanyLinkCreate(AreaOfActivityBase):
    """Optional details for linking a contact to a company by path."""
    pass
