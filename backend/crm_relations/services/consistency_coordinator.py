"""
Consistency coordinator: multi-step relationship mutations.

A logical action such as "link this contact to this company as primary"
touches several rows. Each step is its own committed storage call, so the
sequence is not atomic. The coordinator runs the steps in order, stops at the
first failure and never compensates. A failure after at least one step
committed is raised as PartialSagaFailure naming what was applied; a failure
before anything committed surfaces unchanged.
"""

from typing import Any, Awaitable, Callable, List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.core.exceptions import NotFoundError, PartialSagaFailure
from crm_relations.core.logging import get_logger
from crm_relations.services.base_service import BaseService
from crm_relations.services.association_service import AssociationService
from crm_relations.services.primary_designation_service import PrimaryDesignationService
from crm_relations.services.contact_service import ContactService
from crm_relations.services.company_service import CompanyService
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.schemas.area_of_activity import AreaOfActivityResponse
from crm_relations.schemas.contact import ContactCreate, ContactResponse

logger = get_logger(__name__)

DEFAULT_EMPLOYEE_ROLE = "Employee"


class SagaRun:
    """Bookkeeping for one saga execution."""

    def __init__(self, saga: str, entity: dict):
        self.saga = saga
        self.entity = entity
        self.completed_steps: List[str] = []
        self.result: Any = None

    async def step(self, name: str, action: Callable[..., Awaitable[Any]], *args, mutates: bool = True) -> Any:
        """
        Run one step. Read-only steps (``mutates=False``) are not recorded as
        completed, since they leave nothing applied.
        """
        logger.info("Saga step started", extra={"saga": self.saga, "step": name, **self.entity})
        try:
            outcome = await action(*args)
        except Exception as exc:
            raise self._failure(name, exc) from exc
        if mutates:
            self.completed_steps.append(name)
        return outcome

    def skip(self, name: str) -> None:
        logger.info("Saga step skipped", extra={"saga": self.saga, "step": name, **self.entity})

    def _failure(self, name: str, exc: Exception) -> Exception:
        # A multi-step operation may have committed part of its own work
        applied = list(self.completed_steps)
        if isinstance(exc, PartialSagaFailure):
            applied.extend(exc.completed_steps)

        if not applied:
            logger.warning(
                "Saga aborted before any step committed",
                extra={"saga": self.saga, "step": name, "error": str(exc), **self.entity},
            )
            return exc
        logger.error(
            "Saga partially applied",
            extra={
                "saga": self.saga,
                "step": name,
                "completed_steps": applied,
                "error": str(exc),
                **self.entity,
            },
        )
        return PartialSagaFailure(
            saga=self.saga,
            completed_steps=applied,
            failed_step=name,
            cause=exc,
            entity=self.entity,
            result=self.result,
        )


class ConsistencyCoordinator(BaseService):
    """Sequences association, designation and denormalized-pointer updates."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.association_service = AssociationService(session)
        self.designation_service = PrimaryDesignationService(session)
        self.contact_service = ContactService(session)
        self.company_service = CompanyService(session)
        self.area_repo = AreaOfActivityRepository(session)

    async def associate_contact_to_company(
        self,
        contact_id: int,
        company_id: int,
        role: Optional[str] = None,
        is_primary: bool = False,
        job_description: Optional[str] = None,
    ) -> AreaOfActivityResponse:
        """
        Link a contact to a company, optionally as the contact's primary company.

        Steps:
            1. create_area
            2. set_contact_primary_area (only if is_primary)
            3. sync_contact_primary_company (only if is_primary)

        The area stays created when step 2 or 3 fails; the caller retries the
        designation alone (see promote_area).
        """
        run = SagaRun(
            "associate_contact_to_company",
            {"contact_id": contact_id, "company_id": company_id},
        )

        area = await run.step(
            "create_area",
            self.association_service.create_area,
            contact_id,
            company_id,
            role,
            job_description,
            False,
        )
        run.result = area.model_dump(mode="json")

        if not is_primary:
            run.skip("set_contact_primary_area")
            run.skip("sync_contact_primary_company")
            return area

        area = await run.step(
            "set_contact_primary_area",
            self.designation_service.set_contact_primary_area,
            contact_id,
            area.id,
        )
        run.result = area.model_dump(mode="json")

        await run.step(
            "sync_contact_primary_company",
            self.contact_service.set_primary_company,
            contact_id,
            company_id,
        )
        return area

    async def disassociate_contact_from_company(self, contact_id: int, company_id: int) -> None:
        """
        Remove the link between a contact and a company.

        Steps:
            1. clear_company_primary_contact (only if the contact is the company's primary contact)
            2. locate_area
            3. delete_area
            4. clear_contact_primary_company (only if the deleted area was primary)

        Raises:
            NotFoundError: the company does not exist, or there is no area to
                remove and nothing was changed
            PartialSagaFailure: a step failed after an earlier one committed
        """
        run = SagaRun(
            "disassociate_contact_from_company",
            {"contact_id": contact_id, "company_id": company_id},
        )

        company = await run.step(
            "load_company", self.company_service.get_company, company_id, mutates=False
        )
        if company.primary_contact_id == contact_id:
            await run.step(
                "clear_company_primary_contact",
                self.designation_service.set_company_primary_contact,
                company_id,
                None,
            )
        else:
            run.skip("clear_company_primary_contact")

        area = await run.step(
            "locate_area", self._locate_area, contact_id, company_id, mutates=False
        )
        await run.step("delete_area", self.association_service.delete_area, area.id)

        if area.is_primary:
            await run.step(
                "clear_contact_primary_company",
                self.contact_service.set_primary_company,
                contact_id,
                None,
            )
        else:
            run.skip("clear_contact_primary_company")

    async def promote_area(self, area_id: int) -> AreaOfActivityResponse:
        """
        Make an existing area its contact's primary area and sync the contact.
        Used to retry the designation after a partially applied association.
        """
        area = await self.association_service.get_area(area_id)
        run = SagaRun(
            "promote_area",
            {"contact_id": area.contact_id, "company_id": area.company_id, "area_id": area_id},
        )
        area = await run.step(
            "set_contact_primary_area",
            self.designation_service.set_contact_primary_area,
            area.contact_id,
            area_id,
        )
        run.result = area.model_dump(mode="json")
        await run.step(
            "sync_contact_primary_company",
            self.contact_service.set_primary_company,
            area.contact_id,
            area.company_id,
        )
        return area

    async def link_contact_to_company(
        self,
        contact_id: int,
        company_id: int,
        role: Optional[str] = None,
        job_description: Optional[str] = None,
    ) -> Tuple[AreaOfActivityResponse, bool]:
        """
        Link a contact to a company unless already linked.

        The link becomes primary only when it is the contact's first area.

        Returns:
            The area and whether it was created by this call
        """
        existing = await self.area_repo.get_by_contact_and_company(contact_id, company_id)
        if existing:
            logger.info(
                "Contact already linked to company",
                extra={"contact_id": contact_id, "company_id": company_id, "area_id": existing.id},
            )
            return AreaOfActivityResponse.model_validate(existing), False

        first_link = await self.area_repo.count(contact_id=contact_id) == 0
        area = await self.associate_contact_to_company(
            contact_id,
            company_id,
            role=role,
            is_primary=first_link,
            job_description=job_description,
        )
        return area, True

    async def create_contact_for_company(
        self,
        company_id: int,
        contact_data: ContactCreate,
        role: Optional[str] = DEFAULT_EMPLOYEE_ROLE,
        job_description: Optional[str] = None,
    ) -> ContactResponse:
        """
        Create a contact that works at ``company_id``, with that company as primary.

        Steps:
            1. create_contact
            2. create_area
            3. set_contact_primary_area
            4. sync_contact_primary_company

        Raises:
            NotFoundError: the company does not exist (nothing is created)
            PartialSagaFailure: a step failed after the contact was created
        """
        company = await self.company_service.get_company(company_id)
        if job_description is None:
            job_description = f"Works at {company.name}"

        run = SagaRun("create_contact_for_company", {"company_id": company_id})

        contact = await run.step("create_contact", self.contact_service.create_contact, contact_data)
        run.entity["contact_id"] = contact.id
        run.result = contact.model_dump(mode="json")

        area = await run.step(
            "create_area",
            self.association_service.create_area,
            contact.id,
            company_id,
            role,
            job_description,
            False,
        )
        await run.step(
            "set_contact_primary_area",
            self.designation_service.set_contact_primary_area,
            contact.id,
            area.id,
        )
        await run.step(
            "sync_contact_primary_company",
            self.contact_service.set_primary_company,
            contact.id,
            company_id,
        )
        return await self.contact_service.get_contact(contact.id)

    async def reconcile_contact(self, contact_id: int) -> ContactResponse:
        """
        Point ``primary_company_id`` at the company of the contact's primary
        area, or clear it when there is none. Idempotent.
        """
        contact = await self.contact_service.get_contact(contact_id)
        primary = await self.area_repo.get_primary(contact_id)
        expected = primary.company_id if primary else None
        if contact.primary_company_id == expected:
            return contact

        logger.info(
            "Reconciling contact primary company",
            extra={
                "contact_id": contact_id,
                "stale_company_id": contact.primary_company_id,
                "primary_company_id": expected,
            },
        )
        return await self.contact_service.set_primary_company(contact_id, expected)

    async def _locate_area(self, contact_id: int, company_id: int) -> AreaOfActivityResponse:
        areas = await self.association_service.list_by_contact(contact_id)
        for area in areas:
            if area.company_id == company_id:
                return area
        raise NotFoundError("AreaOfActivity", {"contact_id": contact_id, "company_id": company_id})
