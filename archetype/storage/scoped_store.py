"""Directory-scoped file store with filename safety and protected names."""

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from archetype.checks import ProbeError
from archetype.domain import PROTECTED_FILENAMES, Detail, DirectoryEntry, domain_format_rfc3339_utc

from .errors import (
    FileStoreInvalidNameError,
    FileStoreIOError,
    FileStoreNotFoundError,
    FileStoreProtectedError,
)

logger = logging.getLogger(__name__)

_INVALID_FILENAME_MESSAGE = "invalid filename"


def storage_is_safe_filename(name: str) -> bool:
    """Return whether `name` is a single safe path segment.

    Rejects the empty string, `.` and `..`, any name containing a path
    separator, a `..` sequence or a NUL byte, and any name whose basename
    differs from itself.

    Args:
        name: Candidate filename.

    Returns:
        bool: True when the name can be joined onto the store root.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if name in {"", ".", ".."}:
        return False
    if "/" in name or "\\" in name or "\x00" in name or ".." in name:
        return False
    return os.path.basename(name) == name


def storage_protected_message(name: str) -> str:
    """Return the refusal message for deleting a protected name."""

    return f"{json.dumps(name, ensure_ascii=False)} is protected and cannot be deleted"


class ScopedFileStore:
    """File operations confined to one root directory.

    The root is fixed at construction. No locking is performed, so concurrent
    write and delete requests against the same name may race.
    """

    def __init__(self, root_directory: str | Path, protected_names: Iterable[str] = PROTECTED_FILENAMES):
        """Initialize scoped file store.

        Args:
            root_directory: Directory all operations are confined to.
            protected_names: Names that delete operations must refuse.

        Raises:
            ValueError: Raised when root directory is blank.
        """

        if not str(root_directory).strip():
            raise ValueError("root_directory must not be blank")
        self._root_directory = Path(root_directory)
        self._protected_names = frozenset(protected_names)

    @property
    def store_root(self) -> Path:
        """Return the configured root directory."""

        return self._root_directory

    @property
    def store_protected_names(self) -> frozenset[str]:
        """Return the protected filename set."""

        return self._protected_names

    def store_ensure_root(self) -> None:
        """Create the root directory and its parents when missing.

        Raises:
            FileStoreIOError: Raised when the directory cannot be created.
        """

        try:
            self._root_directory.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise FileStoreIOError(f"cannot ensure data dir {str(self._root_directory)!r}: {error}") from error

    def store_path_for(self, name: str) -> Path:
        """Return the path of a validated name inside the root.

        Args:
            name: Single-segment filename.

        Returns:
            Path: Root joined with `name`.

        Raises:
            FileStoreInvalidNameError: Raised when the name is unsafe.
        """

        if not storage_is_safe_filename(name):
            raise FileStoreInvalidNameError(_INVALID_FILENAME_MESSAGE)
        return self._root_directory / name

    def store_list_entries(self) -> list[DirectoryEntry]:
        """List the root directory non-recursively, sorted by name.

        Returns:
            list[DirectoryEntry]: Entries with metadata captured at call time.

        Raises:
            FileStoreIOError: Raised when the directory cannot be read.
        """

        try:
            with os.scandir(self._root_directory) as directory_iterator:
                raw_entries = sorted(directory_iterator, key=lambda directory_entry: directory_entry.name)
        except OSError as error:
            raise FileStoreIOError(str(error)) from error

        entries: list[DirectoryEntry] = []
        for raw_entry in raw_entries:
            try:
                entry_stat = raw_entry.stat(follow_symlinks=False)
                size = int(entry_stat.st_size)
                mod_time = domain_format_rfc3339_utc(datetime.fromtimestamp(entry_stat.st_mtime, tz=timezone.utc))
            except OSError:
                size = 0
                mod_time = ""
            try:
                is_dir = raw_entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            entries.append(
                DirectoryEntry(
                    name=raw_entry.name,
                    is_dir=is_dir,
                    size=size,
                    mod_time=mod_time,
                    full_path=str(self._root_directory / raw_entry.name),
                )
            )
        return entries

    def store_read_bytes(self, name: str) -> bytes:
        """Return the full content of one file.

        Args:
            name: Single-segment filename.

        Returns:
            bytes: File content.

        Raises:
            FileStoreInvalidNameError: Raised when the name is unsafe.
            FileStoreNotFoundError: Raised when the file does not exist.
            FileStoreIOError: Raised when the file cannot be read.
        """

        file_path = self.store_path_for(name)
        try:
            return file_path.read_bytes()
        except FileNotFoundError as error:
            raise FileStoreNotFoundError("not found") from error
        except OSError as error:
            raise FileStoreIOError(str(error)) from error

    def store_write_bytes(self, name: str, content: bytes | str) -> int:
        """Create or overwrite one file.

        Args:
            name: Single-segment filename.
            content: Payload; text is encoded as UTF-8.

        Returns:
            int: Number of bytes written.

        Raises:
            FileStoreInvalidNameError: Raised when the name is unsafe.
            FileStoreIOError: Raised when the file cannot be written.
        """

        file_path = self.store_path_for(name)
        payload = content.encode("utf-8") if isinstance(content, str) else bytes(content)
        try:
            file_path.write_bytes(payload)
        except OSError as error:
            raise FileStoreIOError(str(error)) from error
        logger.info("wrote %s bytes to %s", len(payload), file_path)
        return len(payload)

    def store_delete(self, name: str, protected_names: Iterable[str] | None = None) -> Path:
        """Delete one file or empty directory unless its name is protected.

        The protected check runs before the filesystem is touched, so a
        protected name is refused even when nothing exists on disk.

        Args:
            name: Single-segment filename.
            protected_names: Override for the store's protected set.

        Returns:
            Path: Deleted path.

        Raises:
            FileStoreInvalidNameError: Raised when the name is unsafe.
            FileStoreProtectedError: Raised when the name is protected.
            FileStoreNotFoundError: Raised when nothing exists at the path.
            FileStoreIOError: Raised when removal fails.
        """

        file_path = self.store_path_for(name)
        effective_protected = self._protected_names if protected_names is None else frozenset(protected_names)
        if name in effective_protected:
            raise FileStoreProtectedError(storage_protected_message(name))
        try:
            if file_path.is_dir() and not file_path.is_symlink():
                file_path.rmdir()
            else:
                file_path.unlink()
        except FileNotFoundError as error:
            raise FileStoreNotFoundError("not found") from error
        except OSError as error:
            raise FileStoreIOError(str(error)) from error
        logger.info("deleted %s", file_path)
        return file_path

    def store_self_test(self) -> Detail:
        """Write, read back, compare and delete a uniquely named temp file.

        Returns:
            Detail: `dir`, `file`, `writeBytes`, `readBytes`, `match` and
            `deleteErr` (empty when deletion succeeded).

        Raises:
            ProbeError: Raised with `{step, path}` detail when the write or
                read step fails. A file written before a failed read is removed.
        """

        now = datetime.now(timezone.utc)
        name = f"selftest-{now.strftime('%Y%m%dT%H%M%S.%fZ')}-{uuid4().hex[:8]}.txt"
        file_path = self._root_directory / name
        content = f"selftest at {now.isoformat()}".encode("utf-8")

        try:
            file_path.write_bytes(content)
        except OSError as error:
            raise ProbeError(str(error), {"step": "write", "path": str(file_path)}) from error

        try:
            read_back = file_path.read_bytes()
        except OSError as error:
            with contextlib.suppress(OSError):
                file_path.unlink(missing_ok=True)
            raise ProbeError(str(error), {"step": "read", "path": str(file_path)}) from error

        delete_error = ""
        try:
            file_path.unlink()
        except OSError as error:
            delete_error = str(error)

        return {
            "dir": str(self._root_directory),
            "file": name,
            "writeBytes": len(content),
            "readBytes": len(read_back),
            "match": read_back == content,
            "deleteErr": delete_error,
        }
