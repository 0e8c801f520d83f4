"""JSON serialization utilities for SDK responses."""

from __future__ import annotations

import base64
import datetime
import decimal
import logging
from itertools import islice

logger = logging.getLogger(__name__)

_MAX_SERIALIZE_BYTES = 10 * 1024 * 1024  # 10 MB
_MAX_ITERABLE_ITEMS = 10_000

# Sentinel for values that must be dropped from their parent container.
_OMIT = object()


def _decode_bytes(content: bytes | bytearray) -> str:
    try:
        return bytes(content).decode("utf-8")
    except UnicodeDecodeError:
        return base64.b64encode(bytes(content)).decode("utf-8")


def _decimal_value(obj: decimal.Decimal) -> object:
    # Preserve numeric type: int if integral, float if lossless, else string.
    if obj == obj.to_integral_value():
        return int(obj)
    f = float(obj)
    if decimal.Decimal(str(f)) != obj:
        return str(obj)
    return f


def _is_stream(obj: object) -> bool:
    return hasattr(obj, "read") and callable(obj.read)


def _read_stream(obj: object) -> object:
    limited = True
    try:
        try:
            content = obj.read(_MAX_SERIALIZE_BYTES)
        except TypeError:
            limited = False
            content = obj.read()
    except (OSError, ValueError) as exc:
        logger.warning("Dropping unreadable stream %s: %s", type(obj).__name__, exc)
        return _OMIT
    if not content:
        return ""
    if limited and len(content) >= _MAX_SERIALIZE_BYTES:
        logger.warning(
            "Stream %s truncated to %d bytes", type(obj).__name__, _MAX_SERIALIZE_BYTES
        )
    if isinstance(content, (bytes, bytearray)):
        return _decode_bytes(content)
    return str(content)


def json_default(obj: object) -> object:
    """JSON serializer for objects not serializable by default json code."""
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    if isinstance(obj, decimal.Decimal):
        return _decimal_value(obj)
    if isinstance(obj, (bytes, bytearray)):
        return _decode_bytes(obj)
    if _is_stream(obj):
        value = _read_stream(obj)
        return "" if value is _OMIT else value
    if hasattr(obj, "__iter__") and not isinstance(obj, (str, bytes, dict, list)):
        try:
            return list(islice(obj, _MAX_ITERABLE_ITEMS))
        except (TypeError, StopIteration):
            pass
    return str(obj)


def serialize_aws_response(response: object) -> object:
    """Return a JSON-safe copy of an SDK response.

    Containers that reference one of their ancestors are dropped from their
    parent. Streams and binary payloads become text (UTF-8, or base64 when
    the bytes are not valid UTF-8). Values that carry no data (callables,
    unreadable streams) are omitted. Everything else is kept as is.
    """
    value = _serialize(response, ancestors=set())
    return None if value is _OMIT else value


def _serialize(value: object, ancestors: set[int]) -> object:
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, decimal.Decimal):
        return _decimal_value(value)
    if isinstance(value, (bytes, bytearray)):
        return _decode_bytes(value)

    if isinstance(value, dict):
        marker = id(value)
        if marker in ancestors:
            return _OMIT
        ancestors.add(marker)
        try:
            result: dict[str, object] = {}
            for key, item in value.items():
                converted = _serialize(item, ancestors)
                if converted is not _OMIT:
                    result[str(key)] = converted
            return result
        finally:
            ancestors.discard(marker)

    if isinstance(value, (list, tuple, set, frozenset)):
        marker = id(value)
        if marker in ancestors:
            return _OMIT
        ancestors.add(marker)
        try:
            items = []
            for item in value:
                converted = _serialize(item, ancestors)
                if converted is not _OMIT:
                    items.append(converted)
            return items
        finally:
            ancestors.discard(marker)

    if _is_stream(value):
        return _read_stream(value)

    if callable(value):
        return _OMIT

    # Event streams and other lazy iterables.
    if hasattr(value, "__iter__"):
        try:
            return _serialize(list(islice(value, _MAX_ITERABLE_ITEMS)), ancestors)
        except TypeError:
            return _OMIT

    return str(value)
