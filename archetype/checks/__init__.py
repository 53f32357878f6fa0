"""Check runner package for timed, deadline-bounded probe execution."""

from .interfaces import (
	CheckDefinition,
	ProbeDeadline,
	ProbeDeadlineExceededError,
	ProbeError,
	ProbePort,
)
from .catalog import CheckCatalog
from .runner import CheckRunner

__all__ = [
	"CheckCatalog",
	"CheckDefinition",
	"CheckRunner",
	"ProbeDeadline",
	"ProbeDeadlineExceededError",
	"ProbeError",
	"ProbePort",
]
