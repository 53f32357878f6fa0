"""Static asset and single-page-app mounting outside the API prefix."""

import logging
from pathlib import Path

from fastapi import FastAPI, status
from fastapi.responses import FileResponse, PlainTextResponse, Response
from fastapi.staticfiles import StaticFiles

from archetype.config import AppSettings

logger = logging.getLogger(__name__)


def api_attach_frontend(application: FastAPI, settings: AppSettings) -> None:
    """Mount static assets and serve the SPA entry document under its base path.

    Any path equal to or below `ui_base_path` returns the entry document so
    client-side routing can resolve it.

    Args:
        application: Application to attach routes to.
        settings: Runtime settings with static directory and SPA options.

    Returns:
        None: Routes are registered as side effect.

    Raises:
        ValueError: Raised when application is None.
    """

    if application is None:
        raise ValueError("application must not be None")

    static_directory = Path(settings.static_dir)
    if static_directory.is_dir():
        application.mount("/static", StaticFiles(directory=static_directory), name="static")
    else:
        logger.info("static directory %s not found; /static is not mounted", static_directory)

    index_path = static_directory / settings.ui_index_file
    base_path = settings.ui_base_path

    def api_serve_spa_index() -> Response:
        if not index_path.is_file():
            return PlainTextResponse("not found", status_code=status.HTTP_404_NOT_FOUND)
        return FileResponse(index_path, media_type="text/html")

    def api_serve_spa_path(spa_path: str) -> Response:
        _ = spa_path
        return api_serve_spa_index()

    application.add_api_route(base_path, api_serve_spa_index, methods=["GET"], include_in_schema=False)
    application.add_api_route(
        f"{base_path}/{{spa_path:path}}",
        api_serve_spa_path,
        methods=["GET"],
        include_in_schema=False,
    )
