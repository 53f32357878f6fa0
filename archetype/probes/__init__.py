"""Probe package for reachability, runtime and storage diagnostics."""

from .database import SQLAlchemyDatabaseProbe, TcpDatabaseProbe
from .event_log import EventLogTailProbe
from .filesystem import DirectoryListingProbe, FileDeleteProbe, FilesystemSelfTestProbe
from .interfaces import HttpClientPort, TcpDialerPort
from .network import HttpxServiceClient, SocketTcpDialer
from .runtime import RuntimeMetricsProbe, ServerInfoProbe
from .services import ServicesProbe

__all__ = [
    "DirectoryListingProbe",
    "EventLogTailProbe",
    "FileDeleteProbe",
    "FilesystemSelfTestProbe",
    "HttpClientPort",
    "HttpxServiceClient",
    "RuntimeMetricsProbe",
    "SQLAlchemyDatabaseProbe",
    "ServerInfoProbe",
    "ServicesProbe",
    "SocketTcpDialer",
    "TcpDatabaseProbe",
    "TcpDialerPort",
]
