"""Check runner that times probes and normalizes their outcome."""

from __future__ import annotations

import logging
import time
from typing import Callable

from archetype.domain import CheckEnvelope

from .interfaces import CheckDefinition, ProbeDeadline, ProbeError, ProbePort

logger = logging.getLogger(__name__)


class CheckRunner:
    """Execute probes under a deadline and build check envelopes.

    The runner holds no per-call state. Cancellation is cooperative: a probe
    that never consults its deadline runs to completion regardless of the
    nominal timeout.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        timer: Callable[[], float] = time.perf_counter,
    ):
        """Initialize check runner.

        Args:
            clock: Monotonic time source used for deadlines.
            timer: High-resolution time source used for latency.
        """

        self._clock = clock
        self._timer = timer

    def runner_execute(
        self,
        name: str,
        timeout_seconds: float,
        probe: ProbePort,
        parent_deadline: ProbeDeadline | None = None,
    ) -> CheckEnvelope:
        """Run one probe and return its normalized envelope.

        Args:
            name: Check name reported in the envelope.
            timeout_seconds: Probe budget in seconds.
            probe: Probe implementation.
            parent_deadline: Optional outer deadline that also bounds the probe.

        Returns:
            CheckEnvelope: `ok` envelope with full detail, or `error` envelope
            with the error message and any partial detail.

        Raises:
            ValueError: Raised when timeout is negative.
        """

        if parent_deadline is not None:
            deadline = parent_deadline.deadline_child(timeout_seconds)
        else:
            deadline = ProbeDeadline.deadline_after(timeout_seconds, clock=self._clock)

        started_at = self._timer()
        try:
            detail = probe.probe_execute(deadline)
        except ProbeError as error:
            latency_ms = self._runner_elapsed_ms(started_at)
            logger.warning("check %s failed after %sms: %s", name, latency_ms, error)
            return CheckEnvelope(
                status="error",
                name=name,
                latency_ms=latency_ms,
                detail=error.detail,
                error=str(error),
            )
        except Exception as error:  # pylint: disable=broad-exception-caught
            latency_ms = self._runner_elapsed_ms(started_at)
            logger.warning("check %s failed after %sms: %s", name, latency_ms, error)
            return CheckEnvelope(
                status="error",
                name=name,
                latency_ms=latency_ms,
                detail=None,
                error=str(error) or type(error).__name__,
            )

        latency_ms = self._runner_elapsed_ms(started_at)
        logger.debug("check %s succeeded in %sms", name, latency_ms)
        return CheckEnvelope(status="ok", name=name, latency_ms=latency_ms, detail=detail)

    def runner_execute_definition(
        self,
        definition: CheckDefinition,
        parent_deadline: ProbeDeadline | None = None,
    ) -> CheckEnvelope:
        """Run a bundled check definition.

        Args:
            definition: Named probe with its timeout.
            parent_deadline: Optional outer deadline.

        Returns:
            CheckEnvelope: Normalized check outcome.

        Raises:
            ValueError: Raised when the definition timeout is negative.
        """

        return self.runner_execute(
            name=definition.name,
            timeout_seconds=definition.timeout_seconds,
            probe=definition.probe,
            parent_deadline=parent_deadline,
        )

    def _runner_elapsed_ms(self, started_at: float) -> int:
        return max(0, int((self._timer() - started_at) * 1000))
