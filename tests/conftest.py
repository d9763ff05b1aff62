"""
Pytest configuration and fixtures.
Provides test app client and async DB session replacement.
"""

import os

os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool

from crm_relations.main import app
from crm_relations.db.base import Base
from crm_relations.db.session import enable_sqlite_foreign_keys, get_db
from crm_relations.db.repositories.contact_repository import ContactRepository
from crm_relations.db.repositories.company_repository import CompanyRepository
from crm_relations.db.repositories.deal_repository import DealRepository

import crm_relations.models  # noqa: F401


# Test database URL (in-memory SQLite for testing)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture(scope="function")
async def test_db_session():
    """
    Create a test database session.
    Uses in-memory SQLite with foreign keys enforced so the delete cascades run.
    """
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(test_engine)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    test_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with test_session_maker() as session:
        yield session

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture(scope="function")
async def test_client(test_db_session):
    """
    Create a test HTTP client whose requests share the test database session.
    """
    async def override_get_db():
        yield test_db_session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def make_contact(test_db_session):
    """Factory for committed contacts, detached so a later rollback leaves their attributes readable."""
    async def _make(first_name: str = "Ada", last_name: str = "Lovelace", **kwargs):
        contact = await ContactRepository(test_db_session).create(
            first_name=first_name, last_name=last_name, **kwargs
        )
        await test_db_session.commit()
        test_db_session.expunge(contact)
        return contact
    return _make


@pytest.fixture
def make_company(test_db_session):
    """Factory for committed companies."""
    async def _make(name: str = "Acme", **kwargs):
        company = await CompanyRepository(test_db_session).create(name=name, **kwargs)
        await test_db_session.commit()
        test_db_session.expunge(company)
        return company
    return _make


@pytest.fixture
def make_deal(test_db_session):
    """Factory for committed deals."""
    async def _make(name: str = "Rollout", company_id=None, **kwargs):
        deal = await DealRepository(test_db_session).create(name=name, company_id=company_id, **kwargs)
        await test_db_session.commit()
        test_db_session.expunge(deal)
        return deal
    return _make
