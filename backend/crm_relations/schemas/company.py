"""
Company Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


class CompanyBase(BaseModel):
    """Base company schema with common fields."""
    name: str = Field(..., min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    website: Optional[str] = Field(None, max_length=255)


class CompanyCreate(CompanyBase):
    """Schema for creating a company."""
    pass


class CompanyUpdate(BaseModel):
    """Schema for updating a company (all fields optional)."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = Field(None, max_length=50)
    website: Optional[str] = Field(None, max_length=255)
    version: Optional[int] = Field(None, ge=1)

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class PrimaryContactUpdate(BaseModel):
    """Schema for setting or clearing a company's primary contact."""
    primary_contact_id: Optional[int] = Field(..., gt=0)
    version: Optional[int] = Field(None, ge=1, description="Last version read; enables a stale-write check")


class PrimaryContactSummary(BaseModel):
    """Short form of the company's primary contact."""
    id: int
    first_name: str
    last_name: str

    class Config:
        from_attributes = True


class CompanyResponse(CompanyBase):
    """Schema for company response."""
    id: int
    primary_contact_id: Optional[int] = None
    primary_contact: Optional[PrimaryContactSummary] = None
    version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CompanyListResponse(BaseModel):
    """Schema for company list response."""
    items: List[CompanyResponse]
    total: int
