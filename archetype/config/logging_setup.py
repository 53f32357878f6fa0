"""Process logging setup for the service entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"


def config_configure_logging(level: str, log_file: str = "") -> None:
    """Configure root logging once for the process.

    Args:
        level: Logging level name such as `INFO`.
        log_file: Optional file path that receives a copy of every record.

    Returns:
        None: Configures the root logger as side effect.

    Raises:
        OSError: Raised when the log file cannot be opened.
    """

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file.strip():
        log_path = Path(log_file.strip())
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
