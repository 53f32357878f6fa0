"""Process runtime probes for metrics and server information."""

from __future__ import annotations

import gc
import os
import platform
import resource
import socket
import sys
import threading
from datetime import datetime, timezone
from typing import Callable

from archetype.checks import ProbeDeadline
from archetype.domain import BuildMetadata, Detail, domain_format_rfc3339_utc, domain_format_uptime


def _runtime_utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RuntimeMetricsProbe:
    """Report interpreter threads, memory and garbage collector counters."""

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """Collect runtime metrics. Never fails.

        Args:
            deadline: Unused; metrics collection does not block.

        Returns:
            Detail: Thread count, peak resident memory in bytes, GC collection
            count, GC-tracked object count and Python version.
        """

        _ = deadline
        usage = resource.getrusage(resource.RUSAGE_SELF)
        # ru_maxrss is bytes on macOS and kilobytes elsewhere.
        max_rss_bytes = usage.ru_maxrss if sys.platform == "darwin" else usage.ru_maxrss * 1024
        return {
            "threads": threading.active_count(),
            "maxRssBytes": int(max_rss_bytes),
            "gcCount": sum(int(generation["collections"]) for generation in gc.get_stats()),
            "gcTrackedObjects": len(gc.get_objects()),
            "pythonVersion": platform.python_version(),
        }


class ServerInfoProbe:
    """Report build metadata, host identity and uptime."""

    def __init__(
        self,
        metadata: BuildMetadata,
        data_dir: str,
        started_at: datetime,
        now_provider: Callable[[], datetime] = _runtime_utc_now,
    ):
        """Initialize server info probe.

        Args:
            metadata: Build metadata.
            data_dir: Configured data directory.
            started_at: Application start time, captured once at bootstrap.
            now_provider: Current UTC time source.
        """

        self._metadata = metadata
        self._data_dir = data_dir
        self._started_at = started_at
        self._now_provider = now_provider

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """Collect server information. Never fails.

        Args:
            deadline: Unused; collection does not block.

        Returns:
            Detail: Version, revision, build time, data dir, pid, hostname,
            Python version, uptime and current UTC time.
        """

        _ = deadline
        now = self._now_provider()
        return {
            **self._metadata.metadata_to_payload(),
            "dataDir": self._data_dir,
            "pid": os.getpid(),
            "hostname": socket.gethostname(),
            "pythonVersion": platform.python_version(),
            "uptime": domain_format_uptime(now - self._started_at),
            "nowUTC": domain_format_rfc3339_utc(now),
        }
