"""API router package for endpoint composition."""

from .checks import api_create_checks_router
from .data import api_create_data_router
from .frontend import api_attach_frontend
from .health import api_create_health_router

__all__ = [
    "api_attach_frontend",
    "api_create_checks_router",
    "api_create_data_router",
    "api_create_health_router",
]
