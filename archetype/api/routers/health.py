"""Health endpoint router composition for liveness, readiness and build info."""

from fastapi import APIRouter, Response, status
from fastapi.responses import JSONResponse

from archetype.checks import CheckCatalog, CheckRunner
from archetype.config import AppSettings
from archetype.domain import BuildMetadata

from ..responses import api_envelope_response


def api_create_health_router(
    settings: AppSettings,
    check_runner: CheckRunner,
    check_catalog: CheckCatalog,
) -> APIRouter:
    """Create health router with static probes and server information.

    Args:
        settings: Runtime settings providing build metadata and data dir.
        check_runner: Runner used for the server information check.
        check_catalog: Checks wired at bootstrap.

    Returns:
        APIRouter: Router exposing `/`, `/livez`, `/readyz`, `/healthz`,
        `/version` and `/server`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if check_runner is None:
        raise ValueError("check_runner must not be None")
    if check_catalog is None:
        raise ValueError("check_catalog must not be None")

    build_metadata = BuildMetadata(version=settings.version, revision=settings.revision, built_at=settings.built_at)
    router = APIRouter(tags=["health"])

    @router.get("/")
    def api_ping() -> JSONResponse:
        """Return a minimal response for routing verification."""

        payload = {
            "message": "pong",
            "service": settings.name,
            "environment": settings.env,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/livez")
    def api_livez() -> Response:
        """Return HTTP 200 with an empty body while the process serves requests."""

        return Response(status_code=status.HTTP_200_OK)

    @router.get("/readyz")
    def api_readyz() -> JSONResponse:
        """Return static readiness payload.

        Returns:
            JSONResponse: Readiness payload naming the data directory.
        """

        payload = {
            "status": "ok",
            "checks": {"static": "ok", "dataDir": settings.data_dir},
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/healthz")
    def api_healthz() -> JSONResponse:
        """Return health status together with build metadata.

        Returns:
            JSONResponse: Status, version, revision and build time.
        """

        payload = {"status": "ok", **build_metadata.metadata_to_payload()}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/version")
    def api_version() -> JSONResponse:
        """Return build metadata."""

        return JSONResponse(content=build_metadata.metadata_to_payload(), status_code=status.HTTP_200_OK)

    @router.get("/server")
    def api_server_info() -> JSONResponse:
        """Return server information as a check envelope."""

        return api_envelope_response(check_runner.runner_execute_definition(check_catalog.server_info))

    return router
