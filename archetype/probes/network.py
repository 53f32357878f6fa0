"""Network-backed implementations of the HTTP and TCP probe seams."""

from __future__ import annotations

import socket
from typing import Final
from urllib.parse import urlsplit

import httpx

from .interfaces import HttpClientPort, TcpDialerPort

_MINIMUM_TIMEOUT_SECONDS: Final[float] = 0.001


class HttpxServiceClient(HttpClientPort):
    """HTTP client backed by `httpx` for external service probes."""

    _USER_AGENT: Final[str] = "tools-archetype/1.0 (Python/httpx)"

    def __init__(self, request_timeout_seconds: float = 2.0):
        """Initialize HTTP client.

        Args:
            request_timeout_seconds: Per-request cap applied on top of the
                caller-supplied timeout.

        Raises:
            ValueError: Raised when the timeout is not positive.
        """

        if request_timeout_seconds <= 0:
            raise ValueError("request_timeout_seconds must be > 0")
        self._request_timeout_seconds = request_timeout_seconds

    def http_get_status(self, url: str, timeout_seconds: float) -> int:
        """Issue one GET request and return its status code.

        Args:
            url: Absolute URL to request.
            timeout_seconds: Remaining caller budget in seconds.

        Returns:
            int: HTTP status code after following redirects.

        Raises:
            ConnectionError: Raised for invalid URLs and transport failures.
            TimeoutError: Raised when the request times out.
        """

        effective_timeout = max(_MINIMUM_TIMEOUT_SECONDS, min(timeout_seconds, self._request_timeout_seconds))
        try:
            with httpx.Client(timeout=effective_timeout, follow_redirects=True) as client:
                response = client.get(url, headers={"User-Agent": self._USER_AGENT})
        except httpx.TimeoutException as error:
            raise TimeoutError(f"GET {url}: request timed out") from error
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as error:
            # Host encoding failures surface as UnicodeError, a ValueError.
            raise ConnectionError(f"GET {url}: {error}") from error
        return int(response.status_code)


class SocketTcpDialer(TcpDialerPort):
    """TCP dialer backed by `socket.create_connection`."""

    def tcp_dial(self, address: str, timeout_seconds: float) -> None:
        """Open and immediately close one TCP connection.

        Args:
            address: Target in `host:port` or `[ipv6]:port` form.
            timeout_seconds: Connect timeout in seconds.

        Returns:
            None: Returns only when the connection succeeded.

        Raises:
            ConnectionError: Raised when the address is invalid or refused.
            TimeoutError: Raised when connecting exceeds the timeout.
        """

        host, port = network_split_address(address)
        effective_timeout = max(_MINIMUM_TIMEOUT_SECONDS, timeout_seconds)
        try:
            with socket.create_connection((host, port), timeout=effective_timeout):
                pass
        except TimeoutError as error:
            raise TimeoutError(f"dial tcp {address}: i/o timeout") from error
        except OSError as error:
            raise ConnectionError(f"dial tcp {address}: {error}") from error


def network_split_address(address: str) -> tuple[str, int]:
    """Split a `host:port` address.

    Args:
        address: Target address; IPv6 hosts must be bracketed.

    Returns:
        tuple[str, int]: Host and port.

    Raises:
        ConnectionError: Raised when host or port is missing or invalid.
    """

    parsed_address = urlsplit(f"//{address.strip()}")
    try:
        port = parsed_address.port
    except ValueError as error:
        raise ConnectionError(f"invalid address {address!r}: bad port") from error
    if not parsed_address.hostname or port is None:
        raise ConnectionError(f"invalid address {address!r}: expected host:port")
    return parsed_address.hostname, port
