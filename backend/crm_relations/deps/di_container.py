"""
Dependency injection container using dependency-injector.
Wires the application-wide services and controllers.
Request-scoped services are built per request from the database session.
"""

from dependency_injector import containers, providers

from crm_relations.services.health_service import HealthService
from crm_relations.controllers.health_controller import HealthController


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Services
    health_service = providers.Singleton(
        HealthService,
    )

    # Controllers
    health_controller = providers.Factory(
        HealthController,
        health_service=health_service,
    )


# Global container instance
_container: Container = None


def get_container() -> Container:
    """Get the global dependency injection container."""
    global _container
    if _container is None:
        _container = Container()
    return _container
