"""
Area of activity API endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.db.session import get_db
from crm_relations.controllers.area_of_activity_controller import AreaOfActivityController
from crm_relations.schemas.area_of_activity import AreaOfActivityUpdate, AreaOfActivityResponse

router = APIRouter()


@router.get("/{area_id}", response_model=AreaOfActivityResponse)
async def get_area(
    area_id: int,
    db: AsyncSession = Depends(get_db),
) -> AreaOfActivityResponse:
    """Get area of activity by ID."""
    controller = AreaOfActivityController(db)
    return await controller.get_area(area_id)


@router.patch("/{area_id}", response_model=AreaOfActivityResponse)
async def update_area(
    area_id: int,
    patch: AreaOfActivityUpdate,
    db: AsyncSession = Depends(get_db),
) -> AreaOfActivityResponse:
    """Patch an area of activity."""
    controller = AreaOfActivityController(db)
    return await controller.update_area(area_id, patch)


@router.delete("/{area_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_area(
    area_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Delete an area of activity. Primary pointers on contact and company are left as they are."""
    controller = AreaOfActivityController(db)
    await controller.delete_area(area_id)


@router.post("/{area_id}/set-primary", response_model=AreaOfActivityResponse)
async def set_primary(
    area_id: int,
    db: AsyncSession = Depends(get_db),
) -> AreaOfActivityResponse:
    """Make the area its contact's primary area of activity."""
    controller = AreaOfActivityController(db)
    return await controller.set_primary(area_id)
