from __future__ import annotations

import base64
import io
import json
import logging
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
from botocore.response import StreamingBody

from aws_flow_blocks.utils import serialization
from aws_flow_blocks.utils.serialization import json_default, serialize_aws_response


class _BrokenStream:
    def read(self, *_args: object) -> bytes:
        raise OSError("connection reset")


def test_plain_response_is_kept_intact() -> None:
    response = {
        "Bucket": "b",
        "KeyCount": 2,
        "IsTruncated": False,
        "Contents": [{"Key": "a", "Size": 1}, {"Key": "b", "Size": 2}],
        "ContinuationToken": None,
    }

    assert serialize_aws_response(response) == response


def test_circular_references_are_dropped() -> None:
    response: dict[str, object] = {"Name": "root", "Children": []}
    child: dict[str, object] = {"Name": "child", "Parent": response}
    response["Children"].append(child)  # type: ignore[union-attr]
    response["Children"].append(response)  # type: ignore[union-attr]

    result = serialize_aws_response(response)

    assert result == {"Name": "root", "Children": [{"Name": "child"}]}
    json.dumps(result)


def test_shared_non_circular_objects_are_kept() -> None:
    owner = {"ID": "abc"}
    response = {"Owner": owner, "Grants": [{"Grantee": owner}]}

    assert serialize_aws_response(response) == {
        "Owner": {"ID": "abc"},
        "Grants": [{"Grantee": {"ID": "abc"}}],
    }


def test_streaming_body_becomes_text() -> None:
    body = StreamingBody(io.BytesIO(b"hello world"), len(b"hello world"))

    assert serialize_aws_response({"Body": body}) == {"Body": "hello world"}


def test_binary_stream_is_base64_encoded() -> None:
    raw = b"\xff\xfe\x00\x01"

    result = serialize_aws_response({"Body": io.BytesIO(raw), "Blob": raw})

    expected = base64.b64encode(raw).decode("utf-8")
    assert result == {"Body": expected, "Blob": expected}


def test_unreadable_stream_is_omitted() -> None:
    assert serialize_aws_response({"Body": _BrokenStream(), "ETag": "x"}) == {"ETag": "x"}


def test_scalars_are_made_transport_safe() -> None:
    response = {
        "CreationDate": datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc),
        "Day": date(2024, 5, 1),
        "Count": Decimal("3"),
        "Ratio": Decimal("0.5"),
        "Precise": Decimal("0.1000000000000000055511151231257827"),
        "Tags": ("a", "b"),
        "Callback": lambda: None,
    }

    assert serialize_aws_response(response) == {
        "CreationDate": "2024-05-01T12:00:00+00:00",
        "Day": "2024-05-01",
        "Count": 3,
        "Ratio": 0.5,
        "Precise": "0.1000000000000000055511151231257827",
        "Tags": ["a", "b"],
    }


def test_falsy_responses_pass_through() -> None:
    assert serialize_aws_response(None) is None
    assert serialize_aws_response({}) == {}


def test_json_default() -> None:
    assert json_default(datetime(2024, 1, 1, tzinfo=timezone.utc)) == "2024-01-01T00:00:00+00:00"
    assert json_default(Decimal("2")) == 2
    assert json_default(b"text") == "text"
    assert json_default(io.BytesIO(b"")) == ""
    assert json_default(_BrokenStream()) == ""
    assert json_default(iter([1, 2])) == [1, 2]


def test_stream_cut_at_size_limit_logs_warning(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(serialization, "_MAX_SERIALIZE_BYTES", 4)

    with caplog.at_level(logging.WARNING, logger="aws_flow_blocks.utils.serialization"):
        result = serialize_aws_response({"Body": io.BytesIO(b"hello world")})

    assert result == {"Body": "hell"}
    assert "truncated to 4 bytes" in caplog.text


def test_stream_under_size_limit_is_not_flagged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="aws_flow_blocks.utils.serialization"):
        serialize_aws_response({"Body": io.BytesIO(b"short")})

    assert "truncated" not in caplog.text
