"""Application bootstrap wiring for startup validation and dependency assembly."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI

from archetype.api import create_api_application
from archetype.checks import CheckCatalog, CheckDefinition, CheckRunner
from archetype.config import AppSettings, config_build_database_url, config_load_settings, config_service_urls
from archetype.domain import BuildMetadata
from archetype.probes import (
    FilesystemSelfTestProbe,
    HttpClientPort,
    HttpxServiceClient,
    RuntimeMetricsProbe,
    ServerInfoProbe,
    ServicesProbe,
    SocketTcpDialer,
    SQLAlchemyDatabaseProbe,
    TcpDatabaseProbe,
    TcpDialerPort,
)
from archetype.storage import ScopedFileStore

logger = logging.getLogger(__name__)


def bootstrap_create_file_store(settings: AppSettings) -> ScopedFileStore:
    """Build the file store for the configured data directory and ensure it exists.

    Args:
        settings: Validated runtime settings.

    Returns:
        ScopedFileStore: Store rooted at `settings.data_dir`.

    Raises:
        FileStoreIOError: Raised when the data directory cannot be created.
    """

    file_store = ScopedFileStore(root_directory=settings.data_dir)
    file_store.store_ensure_root()
    return file_store


def bootstrap_create_check_catalog(
    settings: AppSettings,
    file_store: ScopedFileStore,
    started_at: datetime,
    http_client: HttpClientPort | None = None,
    tcp_dialer: TcpDialerPort | None = None,
) -> CheckCatalog:
    """Assemble the named checks served by the API.

    The database check uses the DSN probe when a full DSN is configured and
    falls back to TCP reachability of `db.addr` otherwise.

    Args:
        settings: Validated runtime settings.
        file_store: Store used by the filesystem self-test.
        started_at: Application start time for uptime reporting.
        http_client: Optional HTTP client override.
        tcp_dialer: Optional TCP dialer override.

    Returns:
        CheckCatalog: Checks bound to their timeouts.

    Raises:
        SettingsLoadError: Raised when the explicit DSN cannot be parsed.
    """

    database_url = config_build_database_url(settings)
    if database_url is not None:
        database_check = CheckDefinition(
            name="database",
            timeout_seconds=settings.check_timeout_database_dsn_ms / 1000,
            probe=SQLAlchemyDatabaseProbe(database_url=database_url),
        )
    else:
        database_check = CheckDefinition(
            name="database",
            timeout_seconds=settings.check_timeout_database_tcp_ms / 1000,
            probe=TcpDatabaseProbe(address=settings.db.addr, dialer=tcp_dialer or SocketTcpDialer()),
        )

    build_metadata = BuildMetadata(version=settings.version, revision=settings.revision, built_at=settings.built_at)
    return CheckCatalog(
        database=database_check,
        services=CheckDefinition(
            name="services",
            timeout_seconds=settings.check_timeout_services_ms / 1000,
            probe=ServicesProbe(urls=config_service_urls(settings), http_client=http_client or HttpxServiceClient()),
        ),
        metrics=CheckDefinition(
            name="metrics",
            timeout_seconds=settings.check_timeout_metrics_ms / 1000,
            probe=RuntimeMetricsProbe(),
        ),
        server_info=CheckDefinition(
            name="server-info",
            timeout_seconds=settings.check_timeout_server_info_ms / 1000,
            probe=ServerInfoProbe(metadata=build_metadata, data_dir=settings.data_dir, started_at=started_at),
        ),
        fs_selftest=CheckDefinition(
            name="fs-selftest",
            timeout_seconds=settings.check_timeout_fs_selftest_ms / 1000,
            probe=FilesystemSelfTestProbe(file_store),
        ),
    )


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings; loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
        FileStoreIOError: Raised when the data directory cannot be created.
    """

    resolved_settings = settings or config_load_settings()
    started_at = datetime.now(timezone.utc)
    file_store = bootstrap_create_file_store(resolved_settings)
    check_catalog = bootstrap_create_check_catalog(
        settings=resolved_settings,
        file_store=file_store,
        started_at=started_at,
    )
    logger.info(
        "%s %s (%s) built %s; DATA_DIR=%s",
        resolved_settings.name,
        resolved_settings.version,
        resolved_settings.revision,
        resolved_settings.built_at,
        resolved_settings.data_dir,
    )
    return create_api_application(
        settings=resolved_settings,
        check_runner=CheckRunner(),
        file_store=file_store,
        check_catalog=check_catalog,
    )
