"""
Database bootstrapping.
Creates the relationship tables for local development.
"""

from crm_relations.db.base import Base
from crm_relations.db import session as db_session
from crm_relations.core.logging import get_logger

import crm_relations.models  # noqa: F401  (registers all tables on Base.metadata)

logger = get_logger(__name__)


async def create_tables() -> None:
    """
    Create all database tables.
    Only used when DB_CREATE_TABLES is enabled; production schemas come from migrations.
    """
    if db_session.engine is None:
        db_session.create_engine()

    async with db_session.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database tables created", extra={"tables": sorted(Base.metadata.tables)})
