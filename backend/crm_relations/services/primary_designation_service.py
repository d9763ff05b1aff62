"""
Primary designation service.

Keeps the two "primary" designations of the contact <-> company association:
    - contact side: at most one area of activity per contact has is_primary=True
    - company side: Company.primary_contact_id, independent of any area flag

Neither designation takes locks. Without a version from the caller the last
successful write wins.
"""

from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import (
    AppException,
    ConflictError,
    NotFoundError,
    PartialSagaFailure,
    ValidationError,
)
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.schemas.area_of_activity import AreaOfActivityResponse
from crm_relations.schemas.company import CompanyResponse

logger = get_logger(__name__)

CLEAR_OTHER_PRIMARY_AREAS = "clear_other_primary_areas"
MARK_AREA_PRIMARY = "mark_area_primary"


class PrimaryDesignationService(BaseService):
    """Service enforcing the single-primary rules on both sides of an association."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.area_repo = AreaOfActivityRepository(session)
        self.contact_repo = ContactRepository(session)
        self.company_repo = CompanyRepository(session)

    async def set_contact_primary_area(self, contact_id: int, area_id: int) -> AreaOfActivityResponse:
        """
        Make ``area_id`` the contact's primary area of activity.

        Two committed steps:
            (a) demote every other primary area of the contact
            (b) mark the area primary (demoting anything a concurrent call
                promoted in between, in the same statement)

        If (b) fails after (a) the contact is left without a primary area.
        That is reported as PartialSagaFailure; re-issuing the call repairs it.

        Raises:
            NotFoundError: the area does not exist
            ValidationError: the area belongs to another contact
            PartialSagaFailure: step (b) failed after step (a) committed
        """
        area = await self.area_repo.get(area_id)
        if not area:
            raise NotFoundError("AreaOfActivity", area_id)
        if area.contact_id != contact_id:
            raise ValidationError(
                f"Area of activity {area_id} does not belong to contact {contact_id}",
                {"area_id": area_id, "contact_id": contact_id, "area_contact_id": area.contact_id},
            )

        async with self._unit_of_work(CLEAR_OTHER_PRIMARY_AREAS):
            demoted = await self.area_repo.clear_primary(contact_id, except_area_id=area_id)

        try:
            async with self._unit_of_work(MARK_AREA_PRIMARY):
                promoted = await self.area_repo.mark_primary(contact_id, area_id)
                if not promoted:
                    # Deleted between the two steps
                    raise NotFoundError("AreaOfActivity", area_id)
        except AppException as exc:
            logger.warning(
                "Primary area designation left incomplete",
                extra={"contact_id": contact_id, "area_id": area_id, "demoted": demoted, "error": exc.message},
            )
            raise PartialSagaFailure(
                saga="set_contact_primary_area",
                completed_steps=[CLEAR_OTHER_PRIMARY_AREAS],
                failed_step=MARK_AREA_PRIMARY,
                cause=exc,
                entity={"contact_id": contact_id, "area_id": area_id},
            ) from exc

        logger.info(
            "Primary area designated",
            extra={"contact_id": contact_id, "area_id": area_id, "demoted": demoted},
        )
        area = await self.area_repo.get(area_id)
        return AreaOfActivityResponse.model_validate(area)

    async def set_company_primary_contact(
        self,
        company_id: int,
        contact_id: Optional[int],
        expected_version: Optional[int] = None,
    ) -> CompanyResponse:
        """
        Set or clear ``Company.primary_contact_id``.

        Does not check that the contact holds an area of activity at the
        company, and clearing never deletes an area.

        Raises:
            NotFoundError: the company, or a non-null contact, does not exist
            ConflictError: ``expected_version`` is stale
        """
        company = await self.company_repo.get(company_id)
        if not company:
            raise NotFoundError("Company", company_id)
        if contact_id is not None and not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", contact_id)

        if expected_version is not None and company.version != expected_version:
            raise self._stale_company(company_id, expected_version, company.version)
        if company.primary_contact_id == contact_id:
            return CompanyResponse.model_validate(company)

        previous = company.primary_contact_id
        async with self._unit_of_work("set_company_primary_contact"):
            updated = await self.company_repo.set_primary_contact(
                company_id, contact_id, expected_version=expected_version
            )
            if updated is None:
                raise self._stale_company(company_id, expected_version, None)

        logger.info(
            "Company primary contact set",
            extra={"company_id": company_id, "previous_contact_id": previous, "contact_id": contact_id},
        )
        return CompanyResponse.model_validate(updated)

    def _stale_company(self, company_id: int, expected: Optional[int], current: Optional[int]) -> ConflictError:
        return ConflictError(
            f"Company {company_id} was modified by another request",
            {"entity": "Company", "id": company_id, "expected_version": expected, "current_version": current},
        )
