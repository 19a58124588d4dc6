"""
Are.na MCP Server - Logging

Standard library logging routed to stderr; stdout carries the MCP stdio
stream.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(settings) -> None:
    """Install a stderr handler at ``LOG_LEVEL``."""
    logging.basicConfig(
        level=getattr(logging, settings.log.level, logging.INFO),
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
