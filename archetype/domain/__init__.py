"""Domain models used across application layer boundaries."""

from .models import PROTECTED_FILENAMES, BuildMetadata, CheckEnvelope, Detail, DirectoryEntry
from .timestamps import domain_format_rfc3339_utc, domain_format_uptime

__all__ = [
    "PROTECTED_FILENAMES",
    "BuildMetadata",
    "CheckEnvelope",
    "Detail",
    "DirectoryEntry",
    "domain_format_rfc3339_utc",
    "domain_format_uptime",
]
