"""
Contact API endpoints.
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.db.session import get_db
from crm_relations.controllers.contact_controller import ContactController
from crm_relations.schemas.contact import (
    ContactCreate,
    ContactUpdate,
    ContactResponse,
    ContactListResponse,
)
from crm_relations.schemas.area_of_activity import (
    AreaOfActivityCreate,
    AreaOfActivityResponse,
    CompanyLinkCreate,
)
from crm_relations.schemas.company import CompanyResponse
from crm_relations.schemas.synergy import SynergyResponse
from crm_relations.schemas.cascade import CascadeReport

router = APIRouter()


@router.post("", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    contact_data: ContactCreate,
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    """Create a new contact."""
    controller = ContactController(db)
    return await controller.create_contact(contact_data)


@router.get("", response_model=ContactListResponse)
async def list_contacts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
) -> ContactListResponse:
    """List all contacts with pagination."""
    controller = ContactController(db)
    return await controller.list_contacts(
        skip=skip,
        limit=limit,
    )


@router.get("/{contact_id}", response_model=ContactResponse)
async def get_contact(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    """Get contact by ID, with its areas of activity."""
    controller = ContactController(db)
    return await controller.get_contact(contact_id)


@router.put("/{contact_id}", response_model=ContactResponse)
async def update_contact(
    contact_id: int,
    contact_data: ContactUpdate,
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    """Update a contact. ``primary_company_id`` is written as given."""
    controller = ContactController(db)
    return await controller.update_contact(contact_id, contact_data)


@router.delete("/{contact_id}", response_model=CascadeReport)
async def delete_contact(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> CascadeReport:
    """Delete a contact together with its areas of activity and synergies."""
    controller = ContactController(db)
    return await controller.delete_contact(contact_id)


@router.post(
    "/{contact_id}/areas-of-activity",
    response_model=AreaOfActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def associate_company(
    contact_id: int,
    area_data: AreaOfActivityCreate,
    db: AsyncSession = Depends(get_db),
) -> AreaOfActivityResponse:
    """
    Link the contact to a company.

    Responds 207 when the link was created but the primary designation could
    not be completed.
    """
    controller = ContactController(db)
    return await controller.associate_company(contact_id, area_data)


@router.get("/{contact_id}/areas-of-activity", response_model=List[AreaOfActivityResponse])
async def list_areas_of_activity(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[AreaOfActivityResponse]:
    """List the contact's areas of activity."""
    controller = ContactController(db)
    return await controller.list_areas_of_activity(contact_id)


@router.delete("/{contact_id}/companies/{company_id}", status_code=status.HTTP_204_NO_CONTENT)
async def disassociate_company(
    contact_id: int,
    company_id: int,
    db: AsyncSession = Depends(get_db),
):
    """Unlink the contact from a company, clearing primary designations on both sides."""
    controller = ContactController(db)
    await controller.disassociate_company(contact_id, company_id)


@router.get("/{contact_id}/synergies", response_model=List[SynergyResponse])
async def list_synergies(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[SynergyResponse]:
    """List the synergies the contact takes part in."""
    controller = ContactController(db)
    return await controller.list_synergies(contact_id)


@router.post("/{contact_id}/reconcile", response_model=ContactResponse)
async def reconcile_contact(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    """Resync ``primary_company_id`` with the contact's primary area."""
    controller = ContactController(db)
    return await controller.reconcile(contact_id)


@router.post(
    "/{contact_id}/companies/{company_id}",
    response_model=AreaOfActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def link_company(
    contact_id: int,
    company_id: int,
    response: Response,
    link_data: Optional[CompanyLinkCreate] = None,
    db: AsyncSession = Depends(get_db),
) -> AreaOfActivityResponse:
    """
    Link the contact to a company unless already linked.

    The first company a contact is linked to becomes its primary company.
    Responds 200 with the existing area when the link is already there.
    """
    controller = ContactController(db)
    area, created = await controller.link_company(contact_id, company_id, link_data or CompanyLinkCreate())
    if not created:
        response.status_code = status.HTTP_200_OK
    return area


@router.get("/{contact_id}/companies", response_model=List[CompanyResponse])
async def list_companies(
    contact_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[CompanyResponse]:
    """List the companies the contact works at, primary first."""
    controller = ContactController(db)
    return await controller.list_companies(contact_id)
