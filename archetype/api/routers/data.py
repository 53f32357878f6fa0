"""Data management router composition over the scoped file store."""

from __future__ import annotations

import logging

from fastapi import APIRouter, File, Query, Request, Response, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, ValidationError

from archetype.checks import CheckCatalog, CheckRunner
from archetype.config import AppSettings
from archetype.probes import DirectoryListingProbe, FileDeleteProbe
from archetype.storage import (
    FileStoreInvalidNameError,
    FileStoreIOError,
    FileStoreNotFoundError,
    ScopedFileStore,
    storage_is_safe_filename,
    storage_protected_message,
)

from ..responses import api_envelope_response

logger = logging.getLogger(__name__)

_MISSING_FILE_PARAM_MESSAGE = "missing 'file' query param"
_INVALID_FILENAME_MESSAGE = "invalid filename"
_INVALID_WRITE_BODY_MESSAGE = "provide JSON {file, content}"


class DataWriteRequest(BaseModel):
    """Request body for writing one text file.

    Attributes:
        file: Single-segment target filename.
        content: Text content to write.
    """

    file: str = ""
    content: str = ""


def api_create_data_router(
    settings: AppSettings,
    check_runner: CheckRunner,
    file_store: ScopedFileStore,
    check_catalog: CheckCatalog,
) -> APIRouter:
    """Create data router for listing, reading, writing and deleting files.

    Args:
        settings: Runtime settings providing data operation timeouts.
        check_runner: Runner used for envelope-style endpoints.
        file_store: Store scoped to the data directory.
        check_catalog: Checks wired at bootstrap.

    Returns:
        APIRouter: Router exposing `/data*` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if check_runner is None:
        raise ValueError("check_runner must not be None")
    if file_store is None:
        raise ValueError("file_store must not be None")
    if check_catalog is None:
        raise ValueError("check_catalog must not be None")

    data_timeout_seconds = settings.check_timeout_data_ms / 1000
    router = APIRouter(prefix="/data", tags=["data"])

    @router.get("/list")
    def api_data_list() -> JSONResponse:
        """List the data directory as a check envelope."""

        envelope = check_runner.runner_execute(
            name="data-list",
            timeout_seconds=data_timeout_seconds,
            probe=DirectoryListingProbe(file_store),
        )
        return api_envelope_response(envelope)

    @router.get("/read")
    def api_data_read(file: str = Query(default="")) -> Response:
        """Return raw file content as plain text.

        Args:
            file: Single-segment filename.

        Returns:
            Response: File bytes, or a plain-text error with 400, 404 or 500.
        """

        name = file.strip()
        if not name:
            return PlainTextResponse(_MISSING_FILE_PARAM_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)
        try:
            content = file_store.store_read_bytes(name)
        except FileStoreInvalidNameError as error:
            return PlainTextResponse(str(error), status_code=status.HTTP_400_BAD_REQUEST)
        except FileStoreNotFoundError as error:
            return PlainTextResponse(str(error), status_code=status.HTTP_404_NOT_FOUND)
        except FileStoreIOError as error:
            return PlainTextResponse(str(error), status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response(content=content, media_type="text/plain; charset=utf-8", status_code=status.HTTP_200_OK)

    @router.post("/write")
    async def api_data_write(request: Request) -> JSONResponse:
        """Create or overwrite one text file from a JSON `{file, content}` body.

        The body is validated here rather than by FastAPI so malformed input
        maps to 400 instead of 422.

        Args:
            request: Incoming request carrying the JSON body.

        Returns:
            JSONResponse: Written path and byte count, or an error payload.
        """

        try:
            write_request: DataWriteRequest | None = DataWriteRequest.model_validate_json(await request.body())
        except ValidationError:
            write_request = None
        if write_request is None or not write_request.file.strip():
            return JSONResponse(
                content={"error": _INVALID_WRITE_BODY_MESSAGE},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        name = write_request.file.strip()
        try:
            written_bytes = await run_in_threadpool(file_store.store_write_bytes, name, write_request.content)
        except FileStoreInvalidNameError as error:
            return JSONResponse(content={"error": str(error)}, status_code=status.HTTP_400_BAD_REQUEST)
        except FileStoreIOError as error:
            return JSONResponse(content={"error": str(error)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        payload = {"written": str(file_store.store_path_for(name)), "bytes": written_bytes}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.post("/upload")
    def api_data_upload(file: UploadFile | None = File(default=None)) -> JSONResponse:
        """Save one multipart upload from form field `file`.

        Args:
            file: Uploaded file.

        Returns:
            JSONResponse: Saved path and size, or an error payload.
        """

        if file is None:
            return JSONResponse(
                content={"error": "expected form file field 'file'"},
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        name = (file.filename or "").strip()
        try:
            saved_bytes = file_store.store_write_bytes(name, file.file.read())
        except FileStoreInvalidNameError as error:
            return JSONResponse(content={"error": str(error)}, status_code=status.HTTP_400_BAD_REQUEST)
        except FileStoreIOError as error:
            return JSONResponse(content={"error": str(error)}, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
        finally:
            file.file.close()
        payload = {"saved": str(file_store.store_path_for(name)), "size": saved_bytes}
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    def api_data_delete(file: str = Query(default="")) -> JSONResponse:
        """Delete one file unless it is protected.

        Protected names are refused here with 403 and again inside the store.

        Args:
            file: Single-segment filename.

        Returns:
            JSONResponse: 400/403 error payload or the delete envelope.
        """

        name = file.strip()
        if not name:
            return JSONResponse(content={"error": _MISSING_FILE_PARAM_MESSAGE}, status_code=status.HTTP_400_BAD_REQUEST)
        if not storage_is_safe_filename(name):
            return JSONResponse(content={"error": _INVALID_FILENAME_MESSAGE}, status_code=status.HTTP_400_BAD_REQUEST)
        if name in file_store.store_protected_names:
            logger.warning("refused delete of protected file %s", name)
            return JSONResponse(
                content={"error": storage_protected_message(name)},
                status_code=status.HTTP_403_FORBIDDEN,
            )

        envelope = check_runner.runner_execute(
            name="data-delete",
            timeout_seconds=data_timeout_seconds,
            probe=FileDeleteProbe(file_store, name),
        )
        return api_envelope_response(envelope)

    router.add_api_route("", api_data_delete, methods=["DELETE"])
    router.add_api_route("/", api_data_delete, methods=["DELETE"])

    @router.post("/selftest")
    def api_data_selftest() -> JSONResponse:
        """Run the data directory self-test."""

        return api_envelope_response(check_runner.runner_execute_definition(check_catalog.fs_selftest))

    return router
