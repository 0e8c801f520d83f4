"""Starlette HTTP surface for a host engine to list and invoke blocks."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from aws_flow_blocks import __version__
from aws_flow_blocks.aws_credentials.models import APP_CONFIG_SCHEMA
from aws_flow_blocks.blocks.handler import BlockInvocation, CollectingEventSink
from aws_flow_blocks.blocks.registry import BlockRegistry, get_registry
from aws_flow_blocks.errors import (
    BlockNotFoundError,
    CredentialResolutionError,
    InputValidationError,
)
from aws_flow_blocks.utils.serialization import json_default

logger = logging.getLogger(__name__)


class SDKJSONResponse(JSONResponse):
    """JSONResponse that also renders datetimes, Decimals and byte payloads."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            separators=(",", ":"),
            default=json_default,
        ).encode("utf-8")


def _error(status_code: int, code: str, message: str) -> Response:
    return JSONResponse({"error": {"code": code, "message": message}}, status_code=status_code)


def create_http_app(registry: BlockRegistry | None = None) -> Starlette:
    """Create the HTTP application. ``registry`` defaults to the configured catalog."""

    def _registry() -> BlockRegistry:
        return registry if registry is not None else get_registry()

    async def health_handler(request: Request) -> Response:
        return JSONResponse({"status": "ok", "version": __version__})

    async def app_config_handler(request: Request) -> Response:
        return JSONResponse({"config": APP_CONFIG_SCHEMA})

    async def list_blocks_handler(request: Request) -> Response:
        query = request.query_params.get("q", "")
        category = request.query_params.get("category") or None
        blocks = await asyncio.to_thread(_registry().search, query, category)
        return JSONResponse({"blocks": [block.summary() for block in blocks]})

    async def get_block_handler(request: Request) -> Response:
        block_id = request.path_params["block_id"]
        try:
            block = await asyncio.to_thread(_registry().get, block_id)
        except BlockNotFoundError as exc:
            return _error(404, "block_not_found", str(exc))
        return JSONResponse(block.to_dict())

    async def invoke_block_handler(request: Request) -> Response:
        block_id = request.path_params["block_id"]
        try:
            block = await asyncio.to_thread(_registry().get, block_id)
        except BlockNotFoundError as exc:
            return _error(404, "block_not_found", str(exc))

        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _error(400, "invalid_json", "Request body must be a JSON object")
        if not isinstance(body, dict):
            return _error(400, "invalid_json", "Request body must be a JSON object")
        config = body.get("config", {})
        app_config = body.get("app", {})
        if not isinstance(config, dict) or not isinstance(app_config, dict):
            return _error(400, "invalid_request", "'config' and 'app' must be objects")

        sink = CollectingEventSink()
        try:
            await block.on_event(BlockInvocation.from_payload(config, app_config), sink)
        except InputValidationError as exc:
            return JSONResponse(
                {"error": {"code": "invalid_input", "message": str(exc), "details": exc.errors}},
                status_code=400,
            )
        except CredentialResolutionError as exc:
            return _error(400, "invalid_credentials", str(exc))
        except ClientError as exc:
            error = exc.response.get("Error", {})
            logger.warning("Block %s failed: %s", block_id, error.get("Code", "Unknown"))
            return _error(
                502,
                str(error.get("Code", "ClientError")),
                str(error.get("Message", exc)),
            )
        except BotoCoreError as exc:
            logger.warning("Block %s failed: %s", block_id, exc)
            return _error(502, type(exc).__name__, str(exc))

        return SDKJSONResponse({"events": sink.events})

    routes = [
        Route("/health", endpoint=health_handler, methods=["GET"]),
        Route("/app-config", endpoint=app_config_handler, methods=["GET"]),
        Route("/blocks", endpoint=list_blocks_handler, methods=["GET"]),
        Route("/blocks/{block_id}", endpoint=get_block_handler, methods=["GET"]),
        Route("/blocks/{block_id}/invoke", endpoint=invoke_block_handler, methods=["POST"]),
    ]
    return Starlette(routes=routes)
