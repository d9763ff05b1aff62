"""
FastAPI application entry point.
Assembles the app with routers, middleware, lifespan handlers, and exception handlers.
"""

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from sqlalchemy.ext.asyncio import AsyncSession

from crm_relations.api.v1.router import api_router
from crm_relations.api.v1.endpoints.health import get_health
from crm_relations.core.config import settings
from crm_relations.core.exceptions import setup_exception_handlers
from crm_relations.core.logging import setup_logging
from crm_relations.core.integrations.observability import setup_observability
from crm_relations.db.session import init_db, close_db, get_db
from crm_relations.db.init_db import create_tables
from crm_relations.deps import di_container
from crm_relations.schemas.health import HealthResponse


# Initialize rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.RATE_LIMIT_PER_MINUTE}/minute"],
    enabled=settings.RATE_LIMIT_ENABLED,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    Initializes logging, telemetry, the database and the DI container.
    """
    # Startup
    setup_logging()
    setup_observability()

    await init_db()
    if settings.DB_CREATE_TABLES:
        await create_tables()

    container = di_container.Container()
    app.state.container = container
    di_container._container = container

    yield

    # Shutdown
    await close_db()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        description="Contact, company and deal relationship API",
        openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Rate limiting middleware
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Include API router
    app.include_router(api_router, prefix=settings.API_V1_PREFIX)

    # Add root-level health endpoint for convenience
    @app.get("/health", response_model=HealthResponse, include_in_schema=False)
    async def root_health(db: AsyncSession = Depends(get_db)) -> HealthResponse:
        """Root-level health check endpoint."""
        return await get_health(db)

    setup_exception_handlers(app)

    return app


app = create_app()
