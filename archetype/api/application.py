"""FastAPI application factory for the archetype service.

All backend routes are grouped under the configured API prefix; the SPA and
static assets are mounted at the root.
"""

from fastapi import APIRouter, FastAPI

from archetype.checks import CheckCatalog, CheckRunner
from archetype.config import AppSettings
from archetype.storage import ScopedFileStore

from .routers import (
    api_attach_frontend,
    api_create_checks_router,
    api_create_data_router,
    api_create_health_router,
)


def create_api_application(
    settings: AppSettings,
    check_runner: CheckRunner,
    file_store: ScopedFileStore,
    check_catalog: CheckCatalog,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings.
        check_runner: Runner used by every check endpoint.
        file_store: Store scoped to the configured data directory.
        check_catalog: Checks wired at bootstrap.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when a dependency is missing.
    """

    application = FastAPI(title=settings.name, version=settings.version)

    api_router = APIRouter(prefix=settings.api_prefix)
    api_router.include_router(
        api_create_health_router(settings=settings, check_runner=check_runner, check_catalog=check_catalog)
    )
    api_router.include_router(
        api_create_checks_router(settings=settings, check_runner=check_runner, check_catalog=check_catalog)
    )
    api_router.include_router(
        api_create_data_router(
            settings=settings,
            check_runner=check_runner,
            file_store=file_store,
            check_catalog=check_catalog,
        )
    )
    application.include_router(api_router)
    api_attach_frontend(application=application, settings=settings)

    return application
