"""
Area of activity storage tests.
"""

import pytest

from crm_relations.core.exceptions import ConflictError, NotFoundError, ValidationError
from crm_relations.services.association_service import AssociationService
from crm_relations.schemas.area_of_activity import AreaOfActivityUpdate
from crm_relations.db.repositories.contact_repository import ContactRepository


@pytest.mark.asyncio
async def test_create_area_links_contact_and_company(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = AssociationService(test_db_session)

    area = await service.create_area(contact.id, company.id, role="Sales")

    assert area.contact_id == contact.id
    assert area.company_id == company.id
    assert area.role == "Sales"
    assert area.is_primary is False
    assert area.version == 1


@pytest.mark.asyncio
async def test_create_area_does_not_touch_primary_company(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = AssociationService(test_db_session)

    await service.create_area(contact.id, company.id, is_primary=True)

    stored = await ContactRepository(test_db_session).get(contact.id)
    assert stored.primary_company_id is None


@pytest.mark.asyncio
async def test_create_primary_area_demotes_siblings(test_db_session, make_contact, make_company):
    contact = await make_contact()
    first = await make_company("First")
    second = await make_company("Second")
    service = AssociationService(test_db_session)

    await service.create_area(contact.id, first.id, is_primary=True)
    await service.create_area(contact.id, second.id, is_primary=True)

    areas = await service.list_by_contact(contact.id)
    assert [(a.company_id, a.is_primary) for a in areas] == [(first.id, False), (second.id, True)]


@pytest.mark.asyncio
async def test_create_area_requires_identifiers(test_db_session, make_company):
    company = await make_company()
    service = AssociationService(test_db_session)

    with pytest.raises(ValidationError):
        await service.create_area(None, company.id)


@pytest.mark.asyncio
async def test_create_area_unknown_company(test_db_session, make_contact):
    contact = await make_contact()
    service = AssociationService(test_db_session)

    with pytest.raises(NotFoundError) as exc_info:
        await service.create_area(contact.id, 999)
    assert exc_info.value.details == {"entity": "Company", "id": 999}


@pytest.mark.asyncio
async def test_create_area_twice_conflicts(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = AssociationService(test_db_session)

    area = await service.create_area(contact.id, company.id)
    with pytest.raises(ConflictError) as exc_info:
        await service.create_area(contact.id, company.id)
    assert exc_info.value.details["area_id"] == area.id


@pytest.mark.asyncio
async def test_update_area_patches_fields(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = AssociationService(test_db_session)
    area = await service.create_area(contact.id, company.id, role="Sales")

    updated = await service.update_area(area.id, AreaOfActivityUpdate(role="Ops", job_description="Runs ops"))

    assert updated.role == "Ops"
    assert updated.job_description == "Runs ops"
    assert updated.version == area.version + 1


@pytest.mark.asyncio
async def test_update_area_stale_version_conflicts(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = AssociationService(test_db_session)
    area = await service.create_area(contact.id, company.id)
    await service.update_area(area.id, AreaOfActivityUpdate(role="Ops"))

    with pytest.raises(ConflictError):
        await service.update_area(area.id, AreaOfActivityUpdate(role="Sales", version=area.version))

    current = await service.get_area(area.id)
    assert current.role == "Ops"


@pytest.mark.asyncio
async def test_update_area_to_primary_demotes_siblings(test_db_session, make_contact, make_company):
    contact = await make_contact()
    first = await make_company("First")
    second = await make_company("Second")
    service = AssociationService(test_db_session)
    a1 = await service.create_area(contact.id, first.id, is_primary=True)
    a2 = await service.create_area(contact.id, second.id)

    await service.update_area(a2.id, AreaOfActivityUpdate(is_primary=True))

    assert (await service.get_area(a1.id)).is_primary is False
    assert (await service.get_area(a2.id)).is_primary is True


@pytest.mark.asyncio
async def test_delete_area(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = AssociationService(test_db_session)
    area = await service.create_area(contact.id, company.id)

    await service.delete_area(area.id)

    assert await service.list_by_contact(contact.id) == []
    with pytest.raises(NotFoundError):
        await service.delete_area(area.id)


@pytest.mark.asyncio
async def test_list_by_company(test_db_session, make_contact, make_company):
    ada = await make_contact("Ada")
    alan = await make_contact("Alan", "Turing")
    company = await make_company()
    other = await make_company("Other")
    service = AssociationService(test_db_session)
    await service.create_area(ada.id, company.id)
    await service.create_area(alan.id, company.id)
    await service.create_area(ada.id, other.id)

    areas = await service.list_by_company(company.id)

    assert sorted(a.contact_id for a in areas) == [ada.id, alan.id]
    with pytest.raises(NotFoundError):
        await service.list_by_company(999)
