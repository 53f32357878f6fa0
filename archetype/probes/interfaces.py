"""Typed interfaces for the network seams used by reachability probes."""

from typing import Protocol


class HttpClientPort(Protocol):
    """Port definition for one HTTP GET status probe."""

    def http_get_status(self, url: str, timeout_seconds: float) -> int:
        """Issue one GET request and return its status code.

        Args:
            url: Absolute URL to request.
            timeout_seconds: Upper bound for the whole request.

        Returns:
            int: HTTP status code of the final response.

        Raises:
            ConnectionError: Raised when the request cannot be completed.
            TimeoutError: Raised when the request exceeds its timeout.
        """


class TcpDialerPort(Protocol):
    """Port definition for TCP reachability checks."""

    def tcp_dial(self, address: str, timeout_seconds: float) -> None:
        """Open and immediately close one TCP connection.

        Args:
            address: Target in `host:port` form.
            timeout_seconds: Connect timeout.

        Returns:
            None: Returns only when the connection succeeded.

        Raises:
            ConnectionError: Raised when the address is invalid or refused.
            TimeoutError: Raised when connecting exceeds the timeout.
        """
