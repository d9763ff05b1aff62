"""
Primary designation tests: single primary area per contact and the company primary contact.
"""

import pytest
from sqlalchemy.exc import SQLAlchemyError

from crm_relations.core.exceptions import (
    ConflictError,
    FatalError,
    NotFoundError,
    PartialSagaFailure,
    ValidationError,
)
from crm_relations.services.association_service import AssociationService
from crm_relations.services.primary_designation_service import (
    CLEAR_OTHER_PRIMARY_AREAS,
    MARK_AREA_PRIMARY,
    PrimaryDesignationService,
)
from crm_relations.db.repositories.area_of_activity_repository import AreaOfActivityRepository


async def _primary_ids(session, contact_id):
    areas = await AreaOfActivityRepository(session).list_by_contact(contact_id)
    return [area.id for area in areas if area.is_primary]


@pytest.fixture
async def three_areas(test_db_session, make_contact, make_company):
    contact = await make_contact()
    service = AssociationService(test_db_session)
    areas = []
    for name in ("A", "B", "C"):
        company = await make_company(name)
        areas.append(await service.create_area(contact.id, company.id))
    return contact, areas


@pytest.mark.asyncio
async def test_set_contact_primary_area(test_db_session, three_areas):
    contact, (a1, a2, a3) = three_areas
    service = PrimaryDesignationService(test_db_session)

    result = await service.set_contact_primary_area(contact.id, a2.id)
    assert result.is_primary is True
    assert await _primary_ids(test_db_session, contact.id) == [a2.id]

    await service.set_contact_primary_area(contact.id, a3.id)
    assert await _primary_ids(test_db_session, contact.id) == [a3.id]


@pytest.mark.asyncio
async def test_set_contact_primary_area_is_idempotent(test_db_session, three_areas):
    contact, (a1, _, _) = three_areas
    service = PrimaryDesignationService(test_db_session)

    first = await service.set_contact_primary_area(contact.id, a1.id)
    second = await service.set_contact_primary_area(contact.id, a1.id)

    assert second.version == first.version
    assert await _primary_ids(test_db_session, contact.id) == [a1.id]


@pytest.mark.asyncio
async def test_interleaved_designations_leave_one_primary(test_db_session, three_areas):
    """Two designations whose steps interleave still leave exactly one primary area."""
    contact, (a1, a2, _) = three_areas
    repo = AreaOfActivityRepository(test_db_session)

    await repo.clear_primary(contact.id, except_area_id=a1.id)
    await repo.clear_primary(contact.id, except_area_id=a2.id)
    await repo.mark_primary(contact.id, a1.id)
    await repo.mark_primary(contact.id, a2.id)
    await test_db_session.commit()

    assert await _primary_ids(test_db_session, contact.id) == [a2.id]


@pytest.mark.asyncio
async def test_set_contact_primary_area_rejects_foreign_area(test_db_session, three_areas, make_contact):
    _, (a1, _, _) = three_areas
    stranger = await make_contact("Grace", "Hopper")
    service = PrimaryDesignationService(test_db_session)

    with pytest.raises(ValidationError):
        await service.set_contact_primary_area(stranger.id, a1.id)
    with pytest.raises(NotFoundError):
        await service.set_contact_primary_area(stranger.id, 999)


@pytest.mark.asyncio
async def test_mark_step_failure_is_partial(test_db_session, three_areas, monkeypatch):
    contact, (a1, a2, _) = three_areas
    service = PrimaryDesignationService(test_db_session)
    await service.set_contact_primary_area(contact.id, a1.id)

    async def broken_mark_primary(self, contact_id, area_id):
        raise SQLAlchemyError("connection reset")

    monkeypatch.setattr(AreaOfActivityRepository, "mark_primary", broken_mark_primary)

    with pytest.raises(PartialSagaFailure) as exc_info:
        await service.set_contact_primary_area(contact.id, a2.id)

    failure = exc_info.value
    assert failure.completed_steps == [CLEAR_OTHER_PRIMARY_AREAS]
    assert failure.failed_step == MARK_AREA_PRIMARY
    assert isinstance(failure.cause, FatalError)
    assert failure.status_code == 207
    # The contact is left with no primary area until the call is retried
    assert await _primary_ids(test_db_session, contact.id) == []

    monkeypatch.undo()
    await service.set_contact_primary_area(contact.id, a2.id)
    assert await _primary_ids(test_db_session, contact.id) == [a2.id]


@pytest.mark.asyncio
async def test_company_primary_contact_set_and_clear(test_db_session, make_contact, make_company):
    """Setting then clearing the company primary contact never deletes an area."""
    contact = await make_contact()
    company = await make_company()
    area = await AssociationService(test_db_session).create_area(contact.id, company.id)
    service = PrimaryDesignationService(test_db_session)
    assert company.primary_contact_id is None

    updated = await service.set_company_primary_contact(company.id, contact.id)
    assert updated.primary_contact_id == contact.id
    assert updated.primary_contact.first_name == "Ada"

    cleared = await service.set_company_primary_contact(company.id, None)
    assert cleared.primary_contact_id is None
    assert cleared.primary_contact is None

    remaining = await AreaOfActivityRepository(test_db_session).list_by_contact(contact.id)
    assert [a.id for a in remaining] == [area.id]


@pytest.mark.asyncio
async def test_company_primary_contact_needs_no_area(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = PrimaryDesignationService(test_db_session)

    updated = await service.set_company_primary_contact(company.id, contact.id)

    assert updated.primary_contact_id == contact.id


@pytest.mark.asyncio
async def test_company_primary_contact_unknown_ids(test_db_session, make_contact, make_company):
    contact = await make_contact()
    company = await make_company()
    service = PrimaryDesignationService(test_db_session)

    with pytest.raises(NotFoundError):
        await service.set_company_primary_contact(999, contact.id)
    with pytest.raises(NotFoundError):
        await service.set_company_primary_contact(company.id, 999)


@pytest.mark.asyncio
async def test_company_primary_contact_stale_version(test_db_session, make_contact, make_company):
    ada = await make_contact("Ada")
    alan = await make_contact("Alan", "Turing")
    company = await make_company()
    service = PrimaryDesignationService(test_db_session)

    read_version = company.version
    first = await service.set_company_primary_contact(company.id, ada.id, expected_version=read_version)

    with pytest.raises(ConflictError) as exc_info:
        await service.set_company_primary_contact(company.id, alan.id, expected_version=read_version)
    assert exc_info.value.details["current_version"] == first.version

    # Without a version the last write wins
    latest = await service.set_company_primary_contact(company.id, alan.id)
    assert latest.primary_contact_id == alan.id
