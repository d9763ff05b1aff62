"""
Synergy service: registry of contact / company / deal connector relationships.
"""

from datetime import date
from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.config import settings
from crm_relations.core.exceptions import ConflictError, NotFoundError, ValidationError
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.db.repositories.synergy_repository import SynergyRepository
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.db.repositories.deal_repository import DealRepository
from crm_relations.schemas.synergy import SynergyCreate, SynergyUpdate, SynergyResponse

logger = get_logger(__name__)

DEFAULT_SYNERGY_TYPE = "business"
DEFAULT_SYNERGY_STATUS = "active"
DEAL_SYNERGY_DESCRIPTION = "Created from deal"


class SynergyService(BaseService):
    """Service for synergy operations."""

    def __init__(self, session: AsyncSession, enforce_area_exclusivity: Optional[bool] = None):
        self.session = session
        self.synergy_repo = SynergyRepository(session)
        self.area_repo = AreaOfActivityRepository(session)
        self.contact_repo = ContactRepository(session)
        self.company_repo = CompanyRepository(session)
        self.deal_repo = DealRepository(session)
        if enforce_area_exclusivity is None:
            enforce_area_exclusivity = settings.ENFORCE_SYNERGY_AREA_EXCLUSIVITY
        self.enforce_area_exclusivity = enforce_area_exclusivity

    async def replace_deal_synergies(
        self,
        deal_id: int,
        company_id: Optional[int],
        contact_ids: List[int],
    ) -> List[SynergyResponse]:
        """
        Make ``contact_ids`` the exact set of connector contacts of a deal.

        Synergies of contacts no longer listed are deleted, newly listed
        contacts get one, the rest are left untouched (same ids). Calling it
        again with the same list changes nothing. ``company_id`` defaults to
        the deal's company.

        Raises:
            NotFoundError: the deal or company does not exist
            ValidationError: the deal has no company and none was given,
                or a contact does not exist
            ConflictError: exclusivity is enforced and a contact holds an
                area of activity at the company
        """
        deal = await self.deal_repo.get(deal_id)
        if not deal:
            raise NotFoundError("Deal", deal_id)
        if company_id is None:
            company_id = deal.company_id
        if company_id is None:
            raise ValidationError(
                f"Deal {deal_id} has no company; company_id is required to create synergies",
                {"deal_id": deal_id},
            )
        if not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)

        wanted = list(dict.fromkeys(contact_ids))
        missing = await self.contact_repo.missing_ids(wanted)
        if missing:
            raise ValidationError(
                "Unknown contacts in synergy list",
                {"deal_id": deal_id, "missing_contact_ids": missing},
            )
        await self._check_area_exclusivity(company_id, wanted)

        existing = await self.synergy_repo.list_by_deal(deal_id)
        kept = {}
        stale_ids = []
        for synergy in existing:
            if synergy.contact_id in wanted and synergy.contact_id not in kept:
                kept[synergy.contact_id] = synergy.id
            else:
                stale_ids.append(synergy.id)
        new_contact_ids = [contact_id for contact_id in wanted if contact_id not in kept]

        if stale_ids or new_contact_ids:
            async with self._unit_of_work("replace_deal_synergies"):
                await self.synergy_repo.delete_many(stale_ids)
                for contact_id in new_contact_ids:
                    await self.synergy_repo.create(
                        contact_id=contact_id,
                        company_id=company_id,
                        deal_id=deal_id,
                        type=DEFAULT_SYNERGY_TYPE,
                        status=DEFAULT_SYNERGY_STATUS,
                        description=DEAL_SYNERGY_DESCRIPTION,
                        start_date=date.today(),
                    )

        logger.info(
            "Deal synergies replaced",
            extra={
                "deal_id": deal_id,
                "company_id": company_id,
                "removed": len(stale_ids),
                "created": len(new_contact_ids),
                "unchanged": len(kept),
            },
        )
        synergies = await self.synergy_repo.list_by_deal(deal_id)
        return [SynergyResponse.model_validate(synergy) for synergy in synergies]

    async def list_synergies(self, skip: int = 0, limit: int = 100) -> List[SynergyResponse]:
        """List all synergies with pagination."""
        synergies = await self.synergy_repo.list(skip=skip, limit=limit)
        return [SynergyResponse.model_validate(synergy) for synergy in synergies]

    async def list_by_deal(self, deal_id: int) -> List[SynergyResponse]:
        """List synergies for a deal."""
        if not await self.deal_repo.exists(deal_id):
            raise NotFoundError("Deal", deal_id)
        synergies = await self.synergy_repo.list_by_deal(deal_id)
        return [SynergyResponse.model_validate(synergy) for synergy in synergies]

    async def list_by_contact(self, contact_id: int) -> List[SynergyResponse]:
        """List synergies for a contact."""
        if not await self.contact_repo.exists(contact_id):
            raise NotFoundError("Contact", contact_id)
        synergies = await self.synergy_repo.list_by_contact(contact_id)
        return [SynergyResponse.model_validate(synergy) for synergy in synergies]

    async def list_by_company(self, company_id: int) -> List[SynergyResponse]:
        """List synergies for a company."""
        if not await self.company_repo.exists(company_id):
            raise NotFoundError("Company", company_id)
        synergies = await self.synergy_repo.list_by_company(company_id)
        return [SynergyResponse.model_validate(synergy) for synergy in synergies]

    async def get_synergy(self, synergy_id: int) -> SynergyResponse:
        """Get synergy by ID."""
        synergy = await self.synergy_repo.get(synergy_id)
        if not synergy:
            raise NotFoundError("Synergy", synergy_id)
        return SynergyResponse.model_validate(synergy)

    async def create_synergy(self, synergy_data: SynergyCreate) -> SynergyResponse:
        """Create a single synergy. All three owners must exist."""
        if not await self.contact_repo.exists(synergy_data.contact_id):
            raise NotFoundError("Contact", synergy_data.contact_id)
        if not await self.company_repo.exists(synergy_data.company_id):
            raise NotFoundError("Company", synergy_data.company_id)
        if not await self.deal_repo.exists(synergy_data.deal_id):
            raise NotFoundError("Deal", synergy_data.deal_id)
        await self._check_area_exclusivity(synergy_data.company_id, [synergy_data.contact_id])

        synergy_dict = synergy_data.model_dump()
        if synergy_dict.get("start_date") is None:
            synergy_dict["start_date"] = date.today()

        async with self._unit_of_work("create_synergy"):
            synergy = await self.synergy_repo.create(**synergy_dict)
        logger.info(
            "Synergy created",
            extra={
                "synergy_id": synergy.id,
                "contact_id": synergy.contact_id,
                "company_id": synergy.company_id,
                "deal_id": synergy.deal_id,
            },
        )
        return SynergyResponse.model_validate(synergy)

    async def update_synergy(self, synergy_id: int, synergy_data: SynergyUpdate) -> SynergyResponse:
        """Update a synergy's descriptive fields."""
        synergy = await self.synergy_repo.get(synergy_id)
        if not synergy:
            raise NotFoundError("Synergy", synergy_id)

        update_dict = synergy_data.model_dump(exclude_unset=True)
        if "start_date" in update_dict and update_dict["start_date"] is None:
            raise ValidationError("start_date cannot be cleared", {"synergy_id": synergy_id})
        start_date = update_dict.get("start_date", synergy.start_date)
        end_date = update_dict.get("end_date", synergy.end_date)
        if end_date is not None and end_date < start_date:
            raise ValidationError("end_date must not be before start_date", {"synergy_id": synergy_id})
        if not update_dict:
            return SynergyResponse.model_validate(synergy)

        async with self._unit_of_work("update_synergy"):
            updated = await self.synergy_repo.update(synergy_id, **update_dict)
        return SynergyResponse.model_validate(updated)

    async def delete_synergy(self, synergy_id: int) -> None:
        """Delete a synergy."""
        async with self._unit_of_work("delete_synergy"):
            deleted = await self.synergy_repo.delete(synergy_id)
            if not deleted:
                raise NotFoundError("Synergy", synergy_id)
        logger.info("Synergy deleted", extra={"synergy_id": synergy_id})

    async def _check_area_exclusivity(self, company_id: int, contact_ids: List[int]) -> None:
        """A synergy contact is an external connector and should not work at the company."""
        employees = await self.area_repo.contact_ids_at_company(company_id, contact_ids)
        if not employees:
            return
        if self.enforce_area_exclusivity:
            raise ConflictError(
                "Synergy contacts already hold an area of activity at the company",
                {"company_id": company_id, "contact_ids": employees},
            )
        logger.warning(
            "Synergy contacts hold an area of activity at the company",
            extra={"company_id": company_id, "contact_ids": employees},
        )
