"""Storage layer package for the directory-scoped file store."""

from .errors import (
	FileStoreError,
	FileStoreInvalidNameError,
	FileStoreIOError,
	FileStoreNotFoundError,
	FileStoreProtectedError,
)
from .scoped_store import ScopedFileStore, storage_is_safe_filename, storage_protected_message

__all__ = [
	"FileStoreError",
	"FileStoreIOError",
	"FileStoreInvalidNameError",
	"FileStoreNotFoundError",
	"FileStoreProtectedError",
	"ScopedFileStore",
	"storage_is_safe_filename",
	"storage_protected_message",
]
