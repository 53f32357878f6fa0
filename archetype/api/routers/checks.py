"""Check endpoint router composition for database, services, metrics and storage."""

from fastapi import APIRouter, Query
from fastapi.responses import JSONResponse

from archetype.checks import CheckCatalog, CheckRunner
from archetype.config import AppSettings
from archetype.probes import EventLogTailProbe

from ..responses import api_envelope_response


def api_create_checks_router(
    settings: AppSettings,
    check_runner: CheckRunner,
    check_catalog: CheckCatalog,
) -> APIRouter:
    """Create check router where every endpoint returns a check envelope.

    Args:
        settings: Runtime settings providing the log file and timeouts.
        check_runner: Runner used for every check.
        check_catalog: Checks wired at bootstrap.

    Returns:
        APIRouter: Router exposing `/check/*` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if check_runner is None:
        raise ValueError("check_runner must not be None")
    if check_catalog is None:
        raise ValueError("check_catalog must not be None")

    router = APIRouter(prefix="/check", tags=["checks"])

    @router.get("/database")
    def api_check_database() -> JSONResponse:
        """Check database reachability over DSN or TCP fallback."""

        return api_envelope_response(check_runner.runner_execute_definition(check_catalog.database))

    @router.get("/services")
    def api_check_services() -> JSONResponse:
        """Check configured external services."""

        return api_envelope_response(check_runner.runner_execute_definition(check_catalog.services))

    @router.get("/metrics")
    def api_check_metrics() -> JSONResponse:
        """Report process runtime metrics."""

        return api_envelope_response(check_runner.runner_execute_definition(check_catalog.metrics))

    @router.post("/fs/selftest")
    def api_check_fs_selftest() -> JSONResponse:
        """Run the data directory self-test."""

        return api_envelope_response(check_runner.runner_execute_definition(check_catalog.fs_selftest))

    @router.get("/events")
    def api_check_event_log(lines: int = Query(default=100, ge=1, le=5000)) -> JSONResponse:
        """Return the tail of the service log file.

        Args:
            lines: Maximum number of trailing lines.

        Returns:
            JSONResponse: Event log envelope.
        """

        envelope = check_runner.runner_execute(
            name="event-log",
            timeout_seconds=settings.check_timeout_event_log_ms / 1000,
            probe=EventLogTailProbe(log_path=settings.log_file, max_lines=lines),
        )
        return api_envelope_response(envelope)

    return router
