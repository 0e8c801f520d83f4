"""Block invocation: credentials, one AWS call, one emitted event."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from aws_flow_blocks.aws_credentials.models import AppConfig
from aws_flow_blocks.aws_credentials.sts_provider import resolve_credentials_async
from aws_flow_blocks.config import Settings, load_settings
from aws_flow_blocks.errors import InputValidationError
from aws_flow_blocks.execution.aws_client import create_client_async, invoke_operation_async
from aws_flow_blocks.utils.jsonschema import validate_payload
from aws_flow_blocks.utils.serialization import serialize_aws_response

if TYPE_CHECKING:
    from aws_flow_blocks.blocks.descriptor import Block

logger = logging.getLogger(__name__)


class EventSink(Protocol):
    async def emit(self, payload: object) -> None: ...


@dataclass
class CollectingEventSink:
    """Event sink that keeps every emitted payload in memory."""

    events: list[object] = field(default_factory=list)

    async def emit(self, payload: object) -> None:
        self.events.append(payload)


@dataclass(frozen=True)
class BlockInvocation:
    """What the host engine hands a block: per-block config and app config."""

    input_config: Mapping[str, object]
    app: AppConfig

    @classmethod
    def from_payload(
        cls,
        input_config: Mapping[str, object] | None,
        app_config: Mapping[str, object] | None,
    ) -> "BlockInvocation":
        return cls(input_config=dict(input_config or {}), app=AppConfig.from_mapping(app_config))


def _drop_unset(value: object) -> object:
    # null means "not set": boto3 rejects None where the SDK serializers skip it.
    if isinstance(value, Mapping):
        return {key: _drop_unset(item) for key, item in value.items() if item is not None}
    if isinstance(value, list):
        return [_drop_unset(item) for item in value]
    return value


def split_input_config(
    config: Mapping[str, object],
) -> tuple[str | None, str | None, dict[str, object]]:
    """Separate ``region`` and ``assumeRoleArn`` from the command input.

    Keys whose value is ``None`` are dropped at every depth; everything else
    is passed through as given.
    """
    command_input = _drop_unset(config)
    region = command_input.pop("region", None)
    assume_role_arn = command_input.pop("assumeRoleArn", None)
    return region, assume_role_arn, command_input


async def run_block(
    block: "Block",
    invocation: BlockInvocation,
    sink: EventSink,
    settings: Settings | None = None,
) -> object:
    """Execute ``block`` once and emit its response.

    Errors from STS or the target service propagate unchanged and nothing is
    emitted. A falsy response is emitted as ``{}``.
    """
    settings = settings or load_settings()
    region, assume_role_arn, command_input = split_input_config(invocation.input_config)
    region = region or settings.aws.default_region

    if settings.execution.validate_input:
        checked = _drop_unset(invocation.input_config)
        if region:
            checked["region"] = region
        errors = validate_payload(block.input_schema, checked)
        if errors:
            raise InputValidationError(block.block_id, errors)

    started = time.perf_counter()
    logger.info(
        "Running block %s (%s.%s, region=%s, assume_role=%s)",
        block.block_id,
        block.service,
        block.operation,
        region,
        bool(assume_role_arn),
    )

    credentials = await resolve_credentials_async(assume_role_arn, invocation.app, region)
    client = await create_client_async(
        block.service, region, credentials, invocation.app.endpoint, settings
    )
    response = await invoke_operation_async(client, block.ref, command_input)

    if block.serialize_response:
        response = serialize_aws_response(response)
    payload = response or {}

    await sink.emit(payload)
    logger.info(
        "Block %s finished in %.0f ms", block.block_id, (time.perf_counter() - started) * 1000
    )
    return payload
