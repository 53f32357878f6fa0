"""Typed interfaces for probe execution under a cooperative deadline."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, Protocol

from archetype.domain import Detail


class ProbeError(Exception):
    """Probe failure carrying whatever partial detail the probe produced.

    Attributes:
        detail: Partial diagnostic detail, or None.
    """

    def __init__(self, message: str, detail: Detail | None = None):
        super().__init__(message)
        self.detail = detail


class ProbeDeadlineExceededError(ProbeError, TimeoutError):
    """Probe gave up because its deadline elapsed."""


@dataclass(frozen=True)
class ProbeDeadline:
    """Absolute monotonic deadline handed to probes.

    Probes size their socket, HTTP and database timeouts from
    `deadline_remaining_seconds` and poll `deadline_raise_if_expired`
    between steps.

    Attributes:
        expires_at: Expiry on the `clock` timeline.
        clock: Monotonic time source in seconds.
    """

    expires_at: float
    clock: Callable[[], float] = field(default=time.monotonic, repr=False, compare=False)

    @classmethod
    def deadline_after(cls, timeout_seconds: float, clock: Callable[[], float] = time.monotonic) -> ProbeDeadline:
        """Create a deadline expiring `timeout_seconds` from now.

        Args:
            timeout_seconds: Budget in seconds.
            clock: Monotonic time source.

        Returns:
            ProbeDeadline: New deadline.

        Raises:
            ValueError: Raised when timeout is negative.
        """

        if timeout_seconds < 0:
            raise ValueError("timeout_seconds must be >= 0")
        return cls(expires_at=clock() + timeout_seconds, clock=clock)

    def deadline_child(self, timeout_seconds: float) -> ProbeDeadline:
        """Derive a deadline bounded by both this deadline and a new budget.

        Args:
            timeout_seconds: Budget in seconds for the child.

        Returns:
            ProbeDeadline: Whichever expiry comes first.

        Raises:
            ValueError: Raised when timeout is negative.
        """

        candidate = ProbeDeadline.deadline_after(timeout_seconds, clock=self.clock)
        if candidate.expires_at < self.expires_at:
            return candidate
        return self

    def deadline_remaining_seconds(self) -> float:
        """Return seconds left before expiry, never negative."""

        return max(0.0, self.expires_at - self.clock())

    def deadline_expired(self) -> bool:
        """Return whether the deadline has elapsed."""

        return self.clock() >= self.expires_at

    def deadline_raise_if_expired(self, detail: Detail | None = None) -> None:
        """Raise when the deadline has elapsed.

        Args:
            detail: Partial detail attached to the raised error.

        Raises:
            ProbeDeadlineExceededError: Raised when the deadline has elapsed.
        """

        if self.deadline_expired():
            raise ProbeDeadlineExceededError("deadline exceeded", detail)


class ProbePort(Protocol):
    """Port definition for one diagnostic probe."""

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """Run the probe once.

        Args:
            deadline: Cooperative deadline the probe must observe.

        Returns:
            Detail: Probe result detail.

        Raises:
            ProbeError: Raised with partial detail when the probe fails.
        """


@dataclass(frozen=True)
class CheckDefinition:
    """Named probe bound to its timeout for route wiring.

    Attributes:
        name: Check name reported in the envelope.
        timeout_seconds: Probe budget in seconds.
        probe: Probe implementation.
    """

    name: str
    timeout_seconds: float
    probe: ProbePort
