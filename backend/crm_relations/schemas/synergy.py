"""
Synergy Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import Optional, List
from datetime import date, datetime


class SynergyBase(BaseModel):
    """Base synergy schema with common fields."""
    type: str = Field("business", min_length=1, max_length=50)
    status: str = Field("active", min_length=1, max_length=50)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @model_validator(mode="after")
    def check_dates(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class SynergyCreate(SynergyBase):
    """Schema for creating a single synergy. All three owners are required."""
    contact_id: int = Field(..., gt=0)
    company_id: int = Field(..., gt=0)
    deal_id: int = Field(..., gt=0)


class SynergyUpdate(BaseModel):
    """Schema for updating a synergy's descriptive fields. Owners cannot be changed."""
    type: Optional[str] = Field(None, min_length=1, max_length=50)
    status: Optional[str] = Field(None, min_length=1, max_length=50)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @field_validator("type", "status")
    @classmethod
    def reject_null_labels(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class DealSynergiesReplace(BaseModel):
    """Full set of connector contacts for a deal."""
    contact_ids: List[int] = Field(default_factory=list)
    company_id: Optional[int] = Field(None, gt=0, description="Defaults to the deal's company")


class SynergyResponse(BaseModel):
    """Schema for synergy response."""
    id: int
    contact_id: int
    company_id: int
    deal_id: int
    type: str
    status: str
    description: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
