"""
Deal API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.db.session import get_db
from crm_relations.controllers.deal_controller import DealController
from crm_relations.schemas.deal import DealCreate, DealResponse
from crm_relations.schemas.synergy import DealSynergiesReplace, SynergyResponse
from crm_relations.schemas.cascade import CascadeReport

router = APIRouter()


@router.post("", response_model=DealResponse, status_code=status.HTTP_201_CREATED)
async def create_deal(
    deal_data: DealCreate,
    db: AsyncSession = Depends(get_db),
) -> DealResponse:
    """Create a new deal."""
    controller = DealController(db)
    return await controller.create_deal(deal_data)


@router.get("/{deal_id}", response_model=DealResponse)
async def get_deal(
    deal_id: int,
    db: AsyncSession = Depends(get_db),
) -> DealResponse:
    """Get deal by ID."""
    controller = DealController(db)
    return await controller.get_deal(deal_id)


@router.delete("/{deal_id}", response_model=CascadeReport)
async def delete_deal(
    deal_id: int,
    db: AsyncSession = Depends(get_db),
) -> CascadeReport:
    """Delete a deal together with its synergies."""
    controller = DealController(db)
    return await controller.delete_deal(deal_id)


@router.post("/{deal_id}/synergies", response_model=List[SynergyResponse])
async def replace_synergies(
    deal_id: int,
    data: DealSynergiesReplace,
    db: AsyncSession = Depends(get_db),
) -> List[SynergyResponse]:
    """
    Replace the deal's connector contacts with ``contact_ids``.
    Unchanged contacts keep their synergy; an empty list clears them all.
    """
    controller = DealController(db)
    return await controller.replace_synergies(deal_id, data)


@router.get("/{deal_id}/synergies", response_model=List[SynergyResponse])
async def list_synergies(
    deal_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[SynergyResponse]:
    """List the deal's synergies."""
    controller = DealController(db)
    return await controller.list_synergies(deal_id)
