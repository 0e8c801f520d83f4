"""Configuration management for the AWS flow blocks catalog."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

_config_logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = str(Path(__file__).resolve().parent / "blocks" / "catalog.yaml")


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Python logging level name")
    file: str | None = Field(default=None, description="Optional log file path")


class ExecutionSettings(BaseModel):
    sdk_timeout_seconds: int = Field(default=60, ge=1, le=300)
    max_retries: int | None = Field(
        default=None,
        ge=0,
        le=10,
        description="Override the SDK retry attempts. Unset keeps the SDK default policy.",
    )
    validate_input: bool = Field(
        default=False,
        description="Validate block config against its generated schema before calling AWS.",
    )


class CatalogSettings(BaseModel):
    path: str = Field(default=DEFAULT_CATALOG_PATH)
    max_schema_depth: int = Field(default=12, ge=1, le=32)


class ServerSettings(BaseModel):
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8000, ge=1024, le=65535)


class AWSSettings(BaseModel):
    default_region: str | None = Field(default=None)


class Settings(BaseModel):
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    execution: ExecutionSettings = Field(default_factory=ExecutionSettings)
    catalog: CatalogSettings = Field(default_factory=CatalogSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    aws: AWSSettings = Field(default_factory=AWSSettings)


ENV_KEYS = {
    "log_level": "LOG_LEVEL",
    "log_file": "LOG_FILE",
    "sdk_timeout": "SDK_TIMEOUT_SECONDS",
    "max_retries": "AWS_FLOW_BLOCKS_MAX_RETRIES",
    "validate_input": "AWS_FLOW_BLOCKS_VALIDATE_INPUT",
    "catalog_path": "BLOCK_CATALOG_PATH",
    "schema_max_depth": "BLOCK_SCHEMA_MAX_DEPTH",
    "host": "FLOW_BLOCKS_HOST",
    "port": "FLOW_BLOCKS_PORT",
    "aws_region": "AWS_DEFAULT_REGION",
}

_TRUE_VALUES = frozenset({"1", "true", "yes"})


def _project_root() -> Path:
    return Path(__file__).resolve().parents[2]


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _env_int(key: str, default: int | None) -> int | None:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        _config_logger.warning(
            "Invalid integer value for %s: %r, using default %s", key, value, default
        )
        return default


def load_settings() -> Settings:
    """Load configuration and cache the result."""

    return _load_settings_cached()


@lru_cache(maxsize=1)
def _load_settings_cached() -> Settings:
    load_dotenv(dotenv_path=_project_root() / ".env")

    settings_data: dict[str, object] = {
        "logging": {
            "level": os.getenv(ENV_KEYS["log_level"], LoggingSettings().level),
            "file": os.getenv(ENV_KEYS["log_file"]) or None,
        },
        "execution": {
            "sdk_timeout_seconds": _env_int(
                ENV_KEYS["sdk_timeout"],
                ExecutionSettings().sdk_timeout_seconds,
            ),
            "max_retries": _env_int(ENV_KEYS["max_retries"], None),
            "validate_input": _env_bool(
                ENV_KEYS["validate_input"],
                ExecutionSettings().validate_input,
            ),
        },
        "catalog": {
            "path": os.getenv(ENV_KEYS["catalog_path"]) or CatalogSettings().path,
            "max_schema_depth": _env_int(
                ENV_KEYS["schema_max_depth"],
                CatalogSettings().max_schema_depth,
            ),
        },
        "server": {
            "host": os.getenv(ENV_KEYS["host"], ServerSettings().host),
            "port": _env_int(ENV_KEYS["port"], ServerSettings().port),
        },
        "aws": {
            "default_region": os.getenv("AWS_REGION") or os.getenv(ENV_KEYS["aws_region"]),
        },
    }

    try:
        return Settings.model_validate(settings_data)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid configuration: {exc}") from exc
