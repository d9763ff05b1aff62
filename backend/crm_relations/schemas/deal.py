"""
Deal Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field
from typing import Optional
from decimal import Decimal
from datetime import datetime


class DealCreate(BaseModel):
    """Schema for creating a deal."""
    name: str = Field(..., min_length=1, max_length=100)
    company_id: Optional[int] = Field(None, gt=0)
    value: Optional[Decimal] = Field(None, ge=0)


class DealResponse(DealCreate):
    """Schema for deal response."""
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
