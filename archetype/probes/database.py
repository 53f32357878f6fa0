"""Database reachability probes over a full DSN or plain TCP."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any, Callable

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import NullPool

from archetype.checks import ProbeDeadline, ProbeError
from archetype.domain import Detail, domain_format_rfc3339_utc

from .interfaces import TcpDialerPort


class SQLAlchemyDatabaseProbe:
    """Database probe that connects, pings and reads server time and version."""

    def __init__(self, database_url: str, engine_factory: Callable[..., Engine] = create_engine):
        """Initialize DSN database probe.

        Args:
            database_url: SQLAlchemy database URL.
            engine_factory: Engine constructor, replaceable in tests.

        Raises:
            ValueError: Raised when the database URL is blank.
        """

        if not database_url.strip():
            raise ValueError("database_url must not be blank")
        self._database_url = database_url
        self._engine_factory = engine_factory
        self._is_postgresql = make_url(database_url).get_backend_name() == "postgresql"

    def db_connection_label(self) -> str:
        """Return the target database URL with the password masked."""

        return make_url(self._database_url).render_as_string(hide_password=True)

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """Check connectivity with a fresh, unpooled connection.

        Args:
            deadline: Cooperative deadline; sizes connect and statement timeouts.

        Returns:
            Detail: `{mode: "dsn", nowUTC, version}`. `version` is empty when
            the server does not report one.

        Raises:
            ProbeError: Raised with `{mode: "dsn"}` detail when connecting or
                querying the server time fails.
        """

        failure_detail: Detail = {"mode": "dsn"}
        deadline.deadline_raise_if_expired(failure_detail)

        engine_options: dict[str, Any] = {"poolclass": NullPool}
        if self._is_postgresql:
            # libpq only accepts whole seconds here.
            engine_options["connect_args"] = {
                "connect_timeout": max(1, math.ceil(deadline.deadline_remaining_seconds()))
            }
        engine: Engine | None = None
        try:
            engine = self._engine_factory(self._database_url, **engine_options)
            with engine.connect() as connection:
                if self._is_postgresql:
                    statement_timeout_ms = max(1, int(deadline.deadline_remaining_seconds() * 1000))
                    connection.execute(text(f"SET statement_timeout = {statement_timeout_ms}"))
                server_now = connection.execute(text("SELECT NOW()")).scalar_one()
                try:
                    server_version = str(connection.execute(text("SHOW server_version")).scalar_one())
                except SQLAlchemyError:
                    server_version = ""
        except SQLAlchemyError as error:
            raise ProbeError(str(getattr(error, "orig", None) or error), failure_detail) from error
        except Exception as error:  # pylint: disable=broad-exception-caught
            raise ProbeError(str(error) or type(error).__name__, failure_detail) from error
        finally:
            if engine is not None:
                engine.dispose()

        return {
            "mode": "dsn",
            "nowUTC": _database_format_server_time(server_now),
            "version": server_version,
        }


class TcpDatabaseProbe:
    """Database probe that only verifies TCP reachability of `host:port`."""

    def __init__(self, address: str, dialer: TcpDialerPort):
        """Initialize TCP database probe.

        Args:
            address: Database address in `host:port` form.
            dialer: TCP dialer implementation.

        Raises:
            ValueError: Raised when address is blank or dialer is None.
        """

        if not address.strip():
            raise ValueError("address must not be blank")
        if dialer is None:
            raise ValueError("dialer must not be None")
        self._address = address.strip()
        self._dialer = dialer

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """Dial the database address once.

        Args:
            deadline: Cooperative deadline used as the connect timeout.

        Returns:
            Detail: `{mode: "tcp", addr, reachable: true}`.

        Raises:
            ProbeError: Raised with `{mode: "tcp", addr}` detail on dial failure.
        """

        failure_detail: Detail = {"mode": "tcp", "addr": self._address}
        deadline.deadline_raise_if_expired(failure_detail)
        try:
            self._dialer.tcp_dial(self._address, deadline.deadline_remaining_seconds())
        except OSError as error:
            raise ProbeError(str(error) or f"dial tcp {self._address} failed", failure_detail) from error
        return {"mode": "tcp", "addr": self._address, "reachable": True}


def _database_format_server_time(server_now: object) -> str:
    if isinstance(server_now, str):
        server_now = datetime.fromisoformat(server_now)
    if isinstance(server_now, datetime):
        return domain_format_rfc3339_utc(server_now)
    return str(server_now)
