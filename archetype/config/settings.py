"""Typed runtime settings with dotenv support and startup validation."""

from __future__ import annotations

import os

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError

DEFAULT_SERVICE_URL = "https://api.github.com"
_PSYCOPG_DRIVER_NAME = "postgresql+psycopg"


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


def _config_default_data_dir() -> str:
    if os.environ.get("KUBERNETES_SERVICE_HOST"):
        return "/data"
    return "./data"


def _config_normalize_url_path(value: str) -> str:
    stripped_value = value.strip().strip("/")
    if not stripped_value:
        return ""
    return f"/{stripped_value}"


class DatabaseSettings(BaseModel):
    """Database connection inputs for the reachability check.

    Environment variables use the nested delimiter, e.g. `APP_DB__HOST`.

    Attributes:
        dsn: Explicit connection URL; takes precedence over the parts below.
        host: Database host.
        port: Database port, `0` when unset.
        name: Database name.
        username: Login role.
        password: Login password.
        ssl_mode: libpq `sslmode` value.
        addr: `host:port` used for the TCP fallback check.
    """

    model_config = ConfigDict(frozen=True)

    dsn: str = Field(default="")
    host: str = Field(default="")
    port: int = Field(default=0, ge=0, le=65535)
    name: str = Field(default="")
    username: str = Field(default="")
    password: str = Field(default="")
    ssl_mode: str = Field(default="require")
    addr: str = Field(default="localhost:5432")

    @field_validator("dsn", "host", "name", "username", "addr")
    @classmethod
    def _validate_strip(cls, value: str) -> str:
        return value.strip()

    @field_validator("ssl_mode")
    @classmethod
    def _validate_ssl_mode(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if not normalized_value:
            return "require"
        allowed_modes = {"disable", "allow", "prefer", "require", "verify-ca", "verify-full"}
        if normalized_value not in allowed_modes:
            raise ValueError(f"unsupported ssl_mode={normalized_value}")
        return normalized_value


class AppSettings(BaseSettings):
    """Application settings for the archetype service.

    Environment variable names are the field names in uppercase with an
    `APP_` prefix. Example: `data_dir` reads from `APP_DATA_DIR`.

    Attributes:
        name: Service name reported by the ping endpoint.
        env: Runtime environment label.
        version: Release version label.
        revision: Source revision identifier.
        built_at: Build timestamp label.
        data_dir: Root directory managed by the scoped file store.
        rest_host: Host interface for web server binding.
        rest_port: Web server port.
        api_prefix: Path prefix for all backend routes.
        static_dir: Directory with built front-end assets.
        ui_index_file: SPA entry document inside `static_dir`.
        ui_base_path: Base path that serves the SPA entry document.
        db: Database connection inputs.
        check_service_urls: Comma-separated external service URLs.
        check_timeout_*_ms: Per-check timeouts in milliseconds.
        log_level: Root logging level.
        log_file: Optional log file, also tailed by the event-log check.
    """

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
    )

    name: str = Field(default="tools-archetype", min_length=1)
    env: str = Field(default="development")
    version: str = Field(default="dev")
    revision: str = Field(default="unknown")
    built_at: str = Field(default="unknown")
    data_dir: str = Field(default_factory=_config_default_data_dir)
    rest_host: str = Field(default="0.0.0.0")
    rest_port: int = Field(default=8080, ge=1, le=65535)
    api_prefix: str = Field(default="/api")
    static_dir: str = Field(default="./static")
    ui_index_file: str = Field(default="monitoring.html")
    ui_base_path: str = Field(default="/monitoring")
    db: DatabaseSettings = Field(default_factory=DatabaseSettings)
    check_service_urls: str = Field(default="")
    check_timeout_database_dsn_ms: int = Field(default=2500, ge=1)
    check_timeout_database_tcp_ms: int = Field(default=1500, ge=1)
    check_timeout_services_ms: int = Field(default=2500, ge=1)
    check_timeout_metrics_ms: int = Field(default=800, ge=1)
    check_timeout_server_info_ms: int = Field(default=800, ge=1)
    check_timeout_fs_selftest_ms: int = Field(default=1500, ge=1)
    check_timeout_data_ms: int = Field(default=1500, ge=1)
    check_timeout_event_log_ms: int = Field(default=800, ge=1)
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="")

    @field_validator("data_dir")
    @classmethod
    def _validate_data_dir(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("data_dir must not be blank")
        return stripped_value

    @field_validator("api_prefix")
    @classmethod
    def _validate_api_prefix(cls, value: str) -> str:
        return _config_normalize_url_path(value)

    @field_validator("ui_base_path")
    @classmethod
    def _validate_ui_base_path(cls, value: str) -> str:
        normalized_value = _config_normalize_url_path(value)
        return normalized_value or "/monitoring"

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log_level={value}")
        return normalized_value


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated, immutable runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_service_urls(settings: AppSettings) -> tuple[str, ...]:
    """Return external service URLs to probe.

    Args:
        settings: Runtime settings.

    Returns:
        tuple[str, ...]: Non-blank URLs from `check_service_urls`, or the
        default service URL when none are configured.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    service_urls = tuple(
        stripped_url for stripped_url in (url.strip() for url in settings.check_service_urls.split(",")) if stripped_url
    )
    return service_urls or (DEFAULT_SERVICE_URL,)


def config_build_database_url(settings: AppSettings) -> str | None:
    """Build the SQLAlchemy URL for the DSN database check.

    An explicit `db.dsn` wins. Otherwise the URL is composed from host, port,
    name, username and password, all of which must be set.

    Args:
        settings: Runtime settings.

    Returns:
        str | None: Rendered URL, or None when the TCP fallback should be used.

    Raises:
        SettingsLoadError: Raised when the explicit DSN cannot be parsed.
    """

    database = settings.db
    if database.dsn:
        try:
            parsed_url = make_url(database.dsn)
        except ArgumentError as error:
            raise SettingsLoadError(f"Database DSN could not be parsed: {error}") from error
        if parsed_url.drivername in {"postgres", "postgresql"}:
            parsed_url = parsed_url.set(drivername=_PSYCOPG_DRIVER_NAME)
        return parsed_url.render_as_string(hide_password=False)

    if not (database.host and database.port and database.name and database.username and database.password):
        return None

    composed_url = URL.create(
        drivername=_PSYCOPG_DRIVER_NAME,
        username=database.username,
        password=database.password,
        host=database.host,
        port=database.port,
        database=database.name,
        query={"sslmode": database.ssl_mode},
    )
    return composed_url.render_as_string(hide_password=False)
