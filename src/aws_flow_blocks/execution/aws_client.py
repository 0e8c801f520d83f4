"""AWS client factory and single-operation invocation.

Every invocation builds its own client from the credentials it resolved;
clients are never cached or shared between invocations.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import boto3
from botocore.config import Config

from aws_flow_blocks.aws_credentials.models import AWSCredentials
from aws_flow_blocks.config import Settings, load_settings
from aws_flow_blocks.domain.operations import OperationRef
from aws_flow_blocks.errors import UnknownOperationError

logger = logging.getLogger(__name__)


def create_client(
    service: str,
    region: str | None,
    credentials: AWSCredentials,
    endpoint: str | None = None,
    settings: Settings | None = None,
):
    settings = settings or load_settings()
    session = boto3.Session(
        aws_access_key_id=credentials.access_key_id,
        aws_secret_access_key=credentials.secret_access_key,
        aws_session_token=credentials.session_token,
        region_name=region or settings.aws.default_region,
    )
    config = _get_service_config(service, settings)
    if endpoint:
        return session.client(service, endpoint_url=endpoint, config=config)
    return session.client(service, config=config)


def _get_service_config(service: str, settings: Settings) -> Config:
    base: dict[str, object] = {
        "read_timeout": settings.execution.sdk_timeout_seconds,
        "connect_timeout": settings.execution.sdk_timeout_seconds,
    }
    if settings.execution.max_retries is not None:
        base["retries"] = {"max_attempts": settings.execution.max_retries}
    if service == "s3":
        base["request_checksum_calculation"] = "when_required"
        base["response_checksum_validation"] = "when_required"
    return Config(**base)


def invoke_operation(client, op_ref: OperationRef, params: Mapping[str, object]):
    """Send exactly one request for ``op_ref`` and return the raw response."""
    method = getattr(client, op_ref.method_name, None)
    if method is None or not callable(method):
        raise UnknownOperationError(op_ref.service, op_ref.operation)
    logger.debug("Calling %s.%s", op_ref.service, op_ref.method_name)
    return method(**params)


async def create_client_async(
    service: str,
    region: str | None,
    credentials: AWSCredentials,
    endpoint: str | None = None,
    settings: Settings | None = None,
):
    return await asyncio.to_thread(
        create_client, service, region, credentials, endpoint, settings
    )


async def invoke_operation_async(client, op_ref: OperationRef, params: Mapping[str, object]):
    return await asyncio.to_thread(invoke_operation, client, op_ref, params)
