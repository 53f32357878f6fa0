"""Main module entrypoint for local runtime execution.

This module validates startup configuration and launches the FastAPI service
or runs a one-shot filesystem self-test.
"""

import argparse
import json
import logging

import uvicorn

from archetype.bootstrap import bootstrap_create_application, bootstrap_create_file_store
from archetype.checks import CheckRunner
from archetype.config import config_configure_logging, config_load_settings
from archetype.probes import FilesystemSelfTestProbe

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with code 1 when the self-test command fails.
    """

    argument_parser = argparse.ArgumentParser(description="tools-archetype runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "selftest"),
        help="Runtime command: `api` starts server, `selftest` runs one data directory self-test",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    config_configure_logging(level=settings.log_level, log_file=settings.log_file)

    if parsed_arguments.command == "selftest":
        file_store = bootstrap_create_file_store(settings)
        envelope = CheckRunner().runner_execute(
            name="fs-selftest",
            timeout_seconds=settings.check_timeout_fs_selftest_ms / 1000,
            probe=FilesystemSelfTestProbe(file_store),
        )
        print(json.dumps(envelope.envelope_to_payload(), indent=2))
        if not envelope.envelope_is_ok:
            raise SystemExit(1)
        return

    application = bootstrap_create_application(settings=settings)
    logger.info("listening on %s:%s", settings.rest_host, settings.rest_port)
    uvicorn.run(
        application,
        host=settings.rest_host,
        port=settings.rest_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
