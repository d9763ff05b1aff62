"""
Company service with business logic.
"""

from typing import List
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import ConflictError, NotFoundError
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.schemas.company import CompanyCreate, CompanyUpdate, CompanyResponse

logger = get_logger(__name__)


class CompanyService(BaseService):
    """Service for company operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.company_repo = CompanyRepository(session)

    async def create_company(self, company_data: CompanyCreate) -> CompanyResponse:
        """Create a new company."""
        async with self._unit_of_work("create_company"):
            company = await self.company_repo.create(**company_data.model_dump())
        logger.info("Company created", extra={"company_id": company.id})
        return await self.get_company(company.id)

    async def get_company(self, company_id: int) -> CompanyResponse:
        """Get company by ID, with its primary contact summary."""
        company = await self.company_repo.get(company_id)
        if not company:
            raise NotFoundError("Company", company_id)
        return CompanyResponse.model_validate(company)

    async def list_companies(
        self,
        skip: int = 0,
        limit: int = 100,
    ) -> tuple[List[CompanyResponse], int]:
        """List companies ordered by name."""
        companies = await self.company_repo.list(skip=skip, limit=limit)
        total = await self.company_repo.count()
        return [CompanyResponse.model_validate(company) for company in companies], total

    async def update_company(
        self,
        company_id: int,
        company_data: CompanyUpdate,
    ) -> CompanyResponse:
        """Update a company's descriptive fields."""
        company = await self.company_repo.get(company_id)
        if not company:
            raise NotFoundError("Company", company_id)

        update_dict = company_data.model_dump(exclude_unset=True)
        expected_version = update_dict.pop("version", None)
        if not update_dict and expected_version is None:
            return CompanyResponse.model_validate(company)

        async with self._unit_of_work("update_company"):
            updated = await self.company_repo.update(
                company_id, expected_version=expected_version, **update_dict
            )
            if updated is None:
                raise ConflictError(
                    f"Company {company_id} was modified by another request",
                    {"entity": "Company", "id": company_id, "expected_version": expected_version},
                )
        return await self.get_company(company_id)
