"""
Cascade delete tests.
"""

import pytest

from crm_relations.core.exceptions import NotFoundError
from crm_relations.services.association_service import AssociationService
from crm_relations.services.cascade_service import CascadeService
from crm_relations.services.consistency_coordinator import ConsistencyCoordinator
from crm_relations.services.primary_designation_service import PrimaryDesignationService
from crm_relations.services.synergy_service import SynergyService
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.db.repositories.deal_repository import DealRepository
from crm_relations.db.repositories.synergy_repository import SynergyRepository


@pytest.mark.asyncio
async def test_delete_company_cascades(test_db_session, make_contact, make_company, make_deal):
    ada = await make_contact("Ada")
    alan = await make_contact("Alan", "Turing")
    company = await make_company()
    other = await make_company("Other")
    deal = await make_deal(company_id=company.id)

    coordinator = ConsistencyCoordinator(test_db_session)
    await coordinator.associate_contact_to_company(ada.id, company.id, role="Sales", is_primary=True)
    await coordinator.associate_contact_to_company(alan.id, company.id)
    kept_area = await coordinator.associate_contact_to_company(alan.id, other.id)
    await PrimaryDesignationService(test_db_session).set_company_primary_contact(company.id, ada.id)
    await SynergyService(test_db_session).replace_deal_synergies(deal.id, None, [alan.id])

    report = await CascadeService(test_db_session).delete_company(company.id)

    assert report.entity == "Company"
    assert report.areas_removed == 2
    assert report.synergies_removed == 1

    area_repo = AreaOfActivityRepository(test_db_session)
    assert await area_repo.list_by_company(company.id) == []
    assert [a.id for a in await area_repo.list_by_contact(alan.id)] == [kept_area.id]
    assert await SynergyRepository(test_db_session).list_by_deal(deal.id) == []
    assert not await CompanyRepository(test_db_session).exists(company.id)

    # Denormalized pointers are nulled, dependents of other owners survive
    assert (await ContactRepository(test_db_session).get(ada.id)).primary_company_id is None
    assert (await DealRepository(test_db_session).get(deal.id)).company_id is None


@pytest.mark.asyncio
async def test_delete_contact_cascades(test_db_session, make_contact, make_company, make_deal):
    ada = await make_contact()
    company = await make_company()
    deal = await make_deal(company_id=company.id)
    await AssociationService(test_db_session).create_area(ada.id, company.id)
    await PrimaryDesignationService(test_db_session).set_company_primary_contact(company.id, ada.id)
    await SynergyService(test_db_session).replace_deal_synergies(deal.id, None, [ada.id])

    report = await CascadeService(test_db_session).delete_contact(ada.id)

    assert (report.areas_removed, report.synergies_removed) == (1, 1)
    assert await AreaOfActivityRepository(test_db_session).count(company_id=company.id) == 0
    assert (await CompanyRepository(test_db_session).get(company.id)).primary_contact_id is None


@pytest.mark.asyncio
async def test_delete_deal_cascades(test_db_session, make_contact, make_company, make_deal):
    ada = await make_contact()
    company = await make_company()
    deal = await make_deal(company_id=company.id)
    await SynergyService(test_db_session).replace_deal_synergies(deal.id, None, [ada.id])

    report = await CascadeService(test_db_session).delete_deal(deal.id)

    assert report.synergies_removed == 1
    assert await SynergyRepository(test_db_session).count() == 0
    assert await ContactRepository(test_db_session).exists(ada.id)


@pytest.mark.asyncio
async def test_delete_missing_entities(test_db_session):
    service = CascadeService(test_db_session)

    for delete in (service.delete_contact, service.delete_company, service.delete_deal):
        with pytest.raises(NotFoundError):
            await delete(999)
