"""Probe adapters exposing scoped file store operations to the check runner."""

from __future__ import annotations

from archetype.checks import ProbeDeadline
from archetype.domain import Detail
from archetype.storage import ScopedFileStore


class FilesystemSelfTestProbe:
    """Run the store's write/read/delete round-trip."""

    def __init__(self, store: ScopedFileStore):
        self._store = store

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        deadline.deadline_raise_if_expired()
        return self._store.store_self_test()


class DirectoryListingProbe:
    """List the store root."""

    def __init__(self, store: ScopedFileStore):
        self._store = store

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        deadline.deadline_raise_if_expired()
        entries = self._store.store_list_entries()
        return {
            "dir": str(self._store.store_root),
            "files": [entry.entry_to_payload() for entry in entries],
        }


class FileDeleteProbe:
    """Delete one named file through the store's protected-name guard."""

    def __init__(self, store: ScopedFileStore, name: str):
        self._store = store
        self._name = name

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        deadline.deadline_raise_if_expired()
        deleted_path = self._store.store_delete(self._name)
        return {"deleted": str(deleted_path)}
