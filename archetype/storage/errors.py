"""Project-native typed exceptions for scoped file store failures."""

from __future__ import annotations


class FileStoreError(Exception):
    """Base exception for file store failures."""

    def __init__(self, message: str):
        super().__init__(message)


class FileStoreInvalidNameError(FileStoreError, ValueError):
    """Filename is empty, a dot entry, or not a single safe path segment."""


class FileStoreNotFoundError(FileStoreError, FileNotFoundError):
    """Named file does not exist inside the store root."""


class FileStoreProtectedError(FileStoreError, PermissionError):
    """Named file is protected and must never be deleted."""


class FileStoreIOError(FileStoreError, OSError):
    """Underlying filesystem operation failed."""
