"""Regression tests for the external services probe and its HTTP client."""

from __future__ import annotations

import httpx
import pytest

from archetype.checks import CheckRunner, ProbeDeadline, ProbeError
import archetype.probes.network as network_module
from archetype.probes import HttpxServiceClient, ServicesProbe


class _ScriptedHttpClient:
    """Deterministic HTTP client returning scripted status codes or errors."""

    def __init__(self, outcomes: dict[str, int | Exception]):
        """Initialize scripted client.

        Args:
            outcomes: Status code or exception per URL.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: This stub does not raise value errors.
        """

        self._outcomes = outcomes
        self.requested_urls: list[str] = []

    def http_get_status(self, url: str, timeout_seconds: float) -> int:
        _ = timeout_seconds
        self.requested_urls.append(url)
        outcome = self._outcomes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def test_probes_services_partial_failure_reports_every_url() -> None:
    """Fail the probe overall while reporting each URL's own outcome.

    Returns:
        None: Assertions validate aggregate and per-URL detail.

    Raises:
        AssertionError: Raised when partial failure is swallowed.
    """

    http_client = _ScriptedHttpClient(
        {
            "http://ok.example": 200,
            "http://down.example": ConnectionError("GET http://down.example: connection refused"),
        }
    )
    probe = ServicesProbe(urls=["http://ok.example", "http://down.example"], http_client=http_client)

    envelope = CheckRunner().runner_execute(name="services", timeout_seconds=2.5, probe=probe)

    assert envelope.status == "error"
    assert envelope.error == "one or more services failing"
    services = envelope.detail["services"]
    assert services["http://ok.example"] == {"status": "ok", "code": 200}
    assert services["http://down.example"]["status"] == "error"
    assert "connection refused" in services["http://down.example"]["error"]


def test_probes_services_all_success() -> None:
    http_client = _ScriptedHttpClient({"http://a.example": 200, "http://b.example": 204})
    probe = ServicesProbe(urls=["http://a.example", "http://b.example"], http_client=http_client)

    detail = probe.probe_execute(ProbeDeadline.deadline_after(2.5))

    assert detail == {
        "services": {
            "http://a.example": {"status": "ok", "code": 200},
            "http://b.example": {"status": "ok", "code": 204},
        }
    }


def test_probes_services_non_2xx_is_degraded_and_fails_probe() -> None:
    """Mark non-2xx responses as degraded and fail the aggregate."""

    http_client = _ScriptedHttpClient({"http://a.example": 200, "http://b.example": 503})
    probe = ServicesProbe(urls=["http://a.example", "http://b.example"], http_client=http_client)

    with pytest.raises(ProbeError) as error_info:
        probe.probe_execute(ProbeDeadline.deadline_after(2.5))

    assert error_info.value.detail["services"]["http://b.example"] == {"status": "degraded", "code": 503}
    assert error_info.value.detail["services"]["http://a.example"] == {"status": "ok", "code": 200}


def test_probes_services_expired_deadline_skips_requests() -> None:
    """Report URLs as deadline errors without issuing requests once the deadline elapsed."""

    http_client = _ScriptedHttpClient({"http://a.example": 200})
    probe = ServicesProbe(urls=["http://a.example"], http_client=http_client)

    with pytest.raises(ProbeError) as error_info:
        probe.probe_execute(ProbeDeadline.deadline_after(0.0))

    assert http_client.requested_urls == []
    assert error_info.value.detail["services"]["http://a.example"] == {
        "status": "error",
        "error": "deadline exceeded",
    }


def test_probes_services_requires_urls() -> None:
    with pytest.raises(ValueError, match="urls"):
        ServicesProbe(urls=[" ", ""], http_client=_ScriptedHttpClient({}))


def test_probes_httpx_client_returns_status_code(monkeypatch: pytest.MonkeyPatch) -> None:
    """Return the upstream status code through a mocked httpx transport.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate status mapping.

    Raises:
        AssertionError: Raised when the status code is not returned.
    """

    transport = httpx.MockTransport(lambda request: httpx.Response(418, request=request))
    real_client_class = httpx.Client

    def _client_factory(**kwargs: object) -> httpx.Client:
        return real_client_class(transport=transport, **kwargs)

    monkeypatch.setattr(network_module.httpx, "Client", _client_factory)

    assert HttpxServiceClient().http_get_status("http://teapot.example", 1.0) == 418


def test_probes_httpx_client_maps_transport_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Map httpx connect and timeout failures to builtin connection errors."""

    def _raise_connect_error(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    def _raise_timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    real_client_class = httpx.Client

    monkeypatch.setattr(
        network_module.httpx,
        "Client",
        lambda **kwargs: real_client_class(transport=httpx.MockTransport(_raise_connect_error), **kwargs),
    )
    with pytest.raises(ConnectionError, match="connection refused"):
        HttpxServiceClient().http_get_status("http://down.example", 1.0)

    monkeypatch.setattr(
        network_module.httpx,
        "Client",
        lambda **kwargs: real_client_class(transport=httpx.MockTransport(_raise_timeout), **kwargs),
    )
    with pytest.raises(TimeoutError, match="timed out"):
        HttpxServiceClient().http_get_status("http://slow.example", 1.0)


def test_probes_httpx_client_rejects_invalid_url() -> None:
    with pytest.raises(ConnectionError):
        HttpxServiceClient().http_get_status("not a url", 1.0)


def test_probes_services_unexpected_client_error_keeps_other_urls() -> None:
    """Record any client exception per URL instead of dropping the whole map.

    Returns:
        None: Assertions validate per-URL detail survives.

    Raises:
        AssertionError: Raised when the detail map is lost.
    """

    http_client = _ScriptedHttpClient(
        {
            "http://ok.example": 200,
            "http://xn--.example": UnicodeError("Malformed A-label, no Punycode eligible content found"),
            "http://later.example": 204,
        }
    )
    probe = ServicesProbe(
        urls=["http://ok.example", "http://xn--.example", "http://later.example"],
        http_client=http_client,
    )

    envelope = CheckRunner().runner_execute(name="services", timeout_seconds=2.5, probe=probe)

    assert envelope.error == "one or more services failing"
    services = envelope.detail["services"]
    assert services["http://ok.example"] == {"status": "ok", "code": 200}
    assert services["http://xn--.example"] == {
        "status": "error",
        "error": "Malformed A-label, no Punycode eligible content found",
    }
    assert services["http://later.example"] == {"status": "ok", "code": 204}


@pytest.mark.parametrize("url", ("http://xn--.com", "http://a" + "b" * 300 + ".com"))
def test_probes_httpx_client_maps_bad_hostnames_to_connection_error(url: str) -> None:
    with pytest.raises(ConnectionError):
        HttpxServiceClient().http_get_status(url, 1.0)
