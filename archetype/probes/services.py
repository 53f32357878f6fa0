"""External service probe issuing one GET per configured URL."""

from __future__ import annotations

from collections.abc import Iterable

from archetype.checks import ProbeDeadline, ProbeError
from archetype.domain import Detail

from .interfaces import HttpClientPort


class ServicesProbe:
    """Probe a fixed list of service URLs and report each outcome.

    One failing or non-2xx URL fails the whole probe, but every URL keeps its
    own entry in the detail map.
    """

    def __init__(self, urls: Iterable[str], http_client: HttpClientPort):
        """Initialize services probe.

        Args:
            urls: Service URLs, probed in order.
            http_client: HTTP client implementation.

        Raises:
            ValueError: Raised when no URL is given or http_client is None.
        """

        self._urls = tuple(url.strip() for url in urls if url.strip())
        if not self._urls:
            raise ValueError("urls must contain at least one non-blank URL")
        if http_client is None:
            raise ValueError("http_client must not be None")
        self._http_client = http_client

    @property
    def services_urls(self) -> tuple[str, ...]:
        """Return configured URLs in probe order."""

        return self._urls

    def probe_execute(self, deadline: ProbeDeadline) -> Detail:
        """GET each URL once within the shared deadline.

        URLs not attempted because the deadline already elapsed are reported
        as errors.

        Args:
            deadline: Cooperative deadline shared by all requests.

        Returns:
            Detail: `{services: {url: {status: "ok", code}}}`.

        Raises:
            ProbeError: Raised with the full per-URL map when any URL fails.
        """

        results: dict[str, dict[str, object]] = {}
        all_ok = True
        for url in self._urls:
            if deadline.deadline_expired():
                results[url] = {"status": "error", "error": "deadline exceeded"}
                all_ok = False
                continue
            try:
                status_code = self._http_client.http_get_status(url, deadline.deadline_remaining_seconds())
            except Exception as error:  # pylint: disable=broad-exception-caught
                results[url] = {"status": "error", "error": str(error) or type(error).__name__}
                all_ok = False
                continue

            if 200 <= status_code < 300:
                results[url] = {"status": "ok", "code": status_code}
            else:
                results[url] = {"status": "degraded", "code": status_code}
                all_ok = False

        detail: Detail = {"services": results}
        if not all_ok:
            raise ProbeError("one or more services failing", detail)
        return detail
