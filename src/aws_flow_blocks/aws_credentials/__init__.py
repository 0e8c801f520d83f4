"""AWS credential utilities."""

from aws_flow_blocks.aws_credentials.models import APP_CONFIG_SCHEMA, AppConfig, AWSCredentials
from aws_flow_blocks.aws_credentials.sts_provider import (
    resolve_credentials,
    resolve_credentials_async,
    session_name,
)

__all__ = [
    "APP_CONFIG_SCHEMA",
    "AWSCredentials",
    "AppConfig",
    "resolve_credentials",
    "resolve_credentials_async",
    "session_name",
]
