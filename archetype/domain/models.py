"""Typed domain models shared across runtime layers.

This module provides simple data contracts for cross-layer communication
between probes, the check runner, the file store and the API layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Final

Detail = dict[str, Any]
"""Ordered JSON-compatible probe result mapping."""

PROTECTED_FILENAMES: Final[frozenset[str]] = frozenset({".first-mount.sh", "lost+found"})


@dataclass(frozen=True)
class BuildMetadata:
    """Static build metadata for runtime identification.

    Attributes:
        version: Release version label.
        revision: Source revision identifier.
        built_at: Build timestamp label.
    """

    version: str
    revision: str
    built_at: str

    def metadata_to_payload(self) -> dict[str, str]:
        """Return build metadata as a JSON payload.

        Returns:
            dict[str, str]: Payload with `version`, `revision` and `builtAt` keys.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "version": self.version,
            "revision": self.revision,
            "builtAt": self.built_at,
        }


@dataclass(frozen=True)
class DirectoryEntry:
    """One non-recursive directory listing entry.

    Attributes:
        name: Entry name relative to the listed directory.
        is_dir: Whether the entry is a directory.
        size: Size in bytes, `0` when metadata is unavailable.
        mod_time: Modification time as UTC RFC3339, empty when unavailable.
        full_path: Entry path joined onto the listed directory.
    """

    name: str
    is_dir: bool
    size: int
    mod_time: str
    full_path: str

    def entry_to_payload(self) -> dict[str, Any]:
        """Return entry as a JSON payload.

        Returns:
            dict[str, Any]: Entry payload with camelCase keys.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return {
            "name": self.name,
            "isDir": self.is_dir,
            "size": self.size,
            "modTime": self.mod_time,
            "fullPath": self.full_path,
        }


@dataclass(frozen=True)
class CheckEnvelope:
    """Normalized outcome of one check execution.

    Attributes:
        status: `ok` or `error`.
        name: Check name.
        latency_ms: Elapsed probe time in whole milliseconds.
        detail: Probe detail, possibly partial on failure, or None.
        error: Error message, set only when status is `error`.
    """

    status: str
    name: str
    latency_ms: int
    detail: Detail | None
    error: str | None = None

    @property
    def envelope_is_ok(self) -> bool:
        """Return whether the envelope reports success."""

        return self.status == "ok"

    def envelope_to_payload(self) -> dict[str, Any]:
        """Return envelope as a JSON payload.

        The `error` key is present only for failed checks.

        Returns:
            dict[str, Any]: Envelope payload.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        payload: dict[str, Any] = {
            "status": self.status,
            "name": self.name,
            "latencyMs": self.latency_ms,
        }
        if self.error is not None:
            payload["error"] = self.error
        payload["detail"] = self.detail
        return payload
