"""Process-wide logging setup for the flow blocks host."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from aws_flow_blocks.config import Settings, load_settings

_logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

# Never below INFO, even when the package itself logs at DEBUG.
QUIET_LOGGERS = ("botocore", "boto3", "urllib3", "uvicorn.access")


def _formatter() -> logging.Formatter:
    return logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)


def _file_handler(path: str) -> logging.Handler | None:
    try:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, encoding="utf-8")
    except OSError as exc:
        _logger.warning("Failed to open log file %s: %s", path, exc)
        return None
    handler.setFormatter(_formatter())
    return handler


def resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(settings: Settings | None = None) -> int:
    """Install a stderr handler, plus a file handler when ``LOG_FILE`` is set.

    Returns the level applied to the root logger.
    """
    settings = settings or load_settings()
    level = resolve_level(settings.logging.level)

    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(_formatter())
    handlers: list[logging.Handler] = [stream_handler]
    if settings.logging.file:
        file_handler = _file_handler(settings.logging.file)
        if file_handler is not None:
            handlers.append(file_handler)

    logging.basicConfig(level=level, handlers=handlers, force=True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))
    return level
