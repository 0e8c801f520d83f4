"""Entrypoint for the AWS flow blocks HTTP host."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

if __package__ in (None, ""):
    sys.path.insert(0, str(Path(__file__).resolve().parents[1]))  # pragma: no cover

import uvicorn

from aws_flow_blocks import __version__
from aws_flow_blocks.config import load_settings
from aws_flow_blocks.logging_utils import configure_logging
from aws_flow_blocks.transport.http_server import create_http_app


def run_entrypoint() -> None:
    """Serve the block catalog over HTTP."""
    settings = load_settings()
    level = configure_logging(settings)

    logging.info(
        "Starting AWS flow blocks v%s on %s:%s",
        __version__,
        settings.server.host,
        settings.server.port,
    )
    uvicorn.run(
        create_http_app(),
        host=settings.server.host,
        port=settings.server.port,
        ws="none",
        log_config=None,
        log_level=level,
    )


if __name__ == "__main__":  # pragma: no cover
    run_entrypoint()
