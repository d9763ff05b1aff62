"""
API v1 router that aggregates all endpoint routers.
"""

from fastapi import APIRouter

from crm_relations.api.v1.endpoints import (
    health,
    contacts,
    companies,
    deals,
    areas_of_activity,
    synergies,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(contacts.router, prefix="/contacts", tags=["contacts"])
api_router.include_router(companies.router, prefix="/companies", tags=["companies"])
api_router.include_router(deals.router, prefix="/deals", tags=["deals"])
api_router.include_router(
    areas_of_activity.router,
    prefix="/areas-of-activity",
    tags=["areas-of-activity"],
)
api_router.include_router(synergies.router, prefix="/synergies", tags=["synergies"])
