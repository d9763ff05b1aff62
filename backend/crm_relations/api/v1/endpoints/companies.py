"""
Company API endpoints.
"""

from typing import List
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.db.session import get_db
from crm_relations.controllers.company_controller import CompanyController
from crm_relations.schemas.company import (
    CompanyCreate,
    CompanyUpdate,
    CompanyResponse,
    CompanyListResponse,
    PrimaryContactUpdate,
)
from crm_relations.schemas.area_of_activity import AreaOfActivityResponse
from crm_relations.schemas.contact import CompanyContactCreate, ContactResponse
from crm_relations.schemas.synergy import SynergyResponse
from crm_relations.schemas.cascade import CascadeReport

router = APIRouter()


@router.post("", response_model=CompanyResponse, status_code=status.HTTP_201_CREATED)
async def create_company(
    company_data: CompanyCreate,
    db: AsyncSession = Depends(get_db),
) -> CompanyResponse:
    """Create a new company."""
    controller = CompanyController(db)
    return await controller.create_company(company_data)


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
) -> CompanyListResponse:
    """List companies with pagination."""
    controller = CompanyController(db)
    return await controller.list_companies(skip=skip, limit=limit)


@router.get("/{company_id}", response_model=CompanyResponse)
async def get_company(
    company_id: int,
    db: AsyncSession = Depends(get_db),
) -> CompanyResponse:
    """Get company by ID."""
    controller = CompanyController(db)
    return await controller.get_company(company_id)


@router.put("/{company_id}", response_model=CompanyResponse)
async def update_company(
    company_id: int,
    company_data: CompanyUpdate,
    db: AsyncSession = Depends(get_db),
) -> CompanyResponse:
    """Update a company."""
    controller = CompanyController(db)
    return await controller.update_company(company_id, company_data)


@router.patch("/{company_id}/primary-contact", response_model=CompanyResponse)
async def set_primary_contact(
    company_id: int,
    data: PrimaryContactUpdate,
    db: AsyncSession = Depends(get_db),
) -> CompanyResponse:
    """Set or clear (``null``) the company's primary contact."""
    controller = CompanyController(db)
    return await controller.set_primary_contact(company_id, data)


@router.delete("/{company_id}", response_model=CascadeReport)
async def delete_company(
    company_id: int,
    db: AsyncSession = Depends(get_db),
) -> CascadeReport:
    """Delete a company together with its areas of activity and synergies."""
    controller = CompanyController(db)
    return await controller.delete_company(company_id)


@router.get("/{company_id}/areas-of-activity", response_model=List[AreaOfActivityResponse])
async def list_areas_of_activity(
    company_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[AreaOfActivityResponse]:
    """List the areas of activity held at the company."""
    controller = CompanyController(db)
    return await controller.list_areas_of_activity(company_id)


@router.get("/{company_id}/synergies", response_model=List[SynergyResponse])
async def list_synergies(
    company_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[SynergyResponse]:
    """List the company's synergies."""
    controller = CompanyController(db)
    return await controller.list_synergies(company_id)


@router.post("/{company_id}/contacts", response_model=ContactResponse, status_code=status.HTTP_201_CREATED)
async def create_contact(
    company_id: int,
    contact_data: CompanyContactCreate,
    db: AsyncSession = Depends(get_db),
) -> ContactResponse:
    """
    Create a contact working at the company, with the company as its primary.

    Responds 207 when the contact was created but the link could not be completed.
    """
    controller = CompanyController(db)
    return await controller.create_contact(company_id, contact_data)


@router.get("/{company_id}/contacts", response_model=List[ContactResponse])
async def list_contacts(
    company_id: int,
    db: AsyncSession = Depends(get_db),
) -> List[ContactResponse]:
    """List the contacts working at the company."""
    controller = CompanyController(db)
    return await controller.list_contacts(company_id)
