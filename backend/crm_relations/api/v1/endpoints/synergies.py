"""
Synergy API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.db.session import get_db
from crm_relations.controllers.synergy_controller import SynergyController
from crm_relations.schemas.synergy import SynergyCreate, SynergyUpdate, SynergyResponse

router = APIRouter()


@router.post("", response_model=SynergyResponse, status_code=status.HTTP_201_CREATED)
async def create_synergy(
    synergy_data: SynergyCreate,
    db: AsyncSession = Depends(get_db),
) -> SynergyResponse:
    """Create a synergy between a contact, a company and a deal."""
    controller = SynergyController(db)
    return await controller.create_synergy(synergy_data)


@router.get("", response_model=List[SynergyResponse])
async def list_synergies(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
) -> List[SynergyResponse]:
    """List all synergies with pagination."""
    controller = SynergyController(db)
    return await controller.list_synergies(skip=skip, limit=limit)


@router.get("/{synergy_id}", response_model=SynergyResponse)
async def get_synergy(
    synergy_id: int,
    db: AsyncSession = Depends(get_db),
) -> SynergyResponse:
    """Get synergy by ID."""
    controller = SynergyController(db)
    return await controller.get_synergy(synergy_id)


@router.patch("/{synergy_id}", response_model=SynergyResponse)
async def update_synergy(
    synergy_id: int,
    synergy_data: SynergyUpdate,
    db: AsyncSession = Depends(get_db),
) -> SynergyResponse:
    """Update a synergy."""
    controller = SynergyController(db)
    return await controller.update_synergy(synergy_id, synergy_data)


@router.delete("/{synergy_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_synergy(
    synergy_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete a synergy."""
    controller = SynergyController(db)
    await controller.delete_synergy(synergy_id)
