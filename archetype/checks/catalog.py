"""Named check definitions assembled at bootstrap and served by routers."""

from dataclasses import dataclass

from .interfaces import CheckDefinition


@dataclass(frozen=True)
class CheckCatalog:
    """Fixed set of checks exposed over HTTP.

    Attributes:
        database: DSN or TCP database reachability check.
        services: External service GET check.
        metrics: Runtime metrics check.
        server_info: Build and host information check.
        fs_selftest: Data directory write/read/delete round-trip check.
    """

    database: CheckDefinition
    services: CheckDefinition
    metrics: CheckDefinition
    server_info: CheckDefinition
    fs_selftest: CheckDefinition
