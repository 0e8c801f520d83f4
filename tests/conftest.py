from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from aws_flow_blocks.blocks.catalog import load_catalog
from aws_flow_blocks.blocks.registry import BlockRegistry
from aws_flow_blocks.config import DEFAULT_CATALOG_PATH, _load_settings_cached

SMALL_CATALOG = """\
version: 1
categories:
  cloudformation:
    service: cloudformation
    operations:
      - DescribeStackInstance
      - ListStackSets
  kms:
    service: kms
    operations:
      - ListGrants
  s3:
    service: s3
    serialize_response: true
    operations:
      - PutBucketLogging
      - ListObjectsV2
"""


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for key in (
        "LOG_LEVEL",
        "LOG_FILE",
        "SDK_TIMEOUT_SECONDS",
        "AWS_FLOW_BLOCKS_MAX_RETRIES",
        "AWS_FLOW_BLOCKS_VALIDATE_INPUT",
        "BLOCK_CATALOG_PATH",
        "BLOCK_SCHEMA_MAX_DEPTH",
        "FLOW_BLOCKS_HOST",
        "FLOW_BLOCKS_PORT",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
    ):
        monkeypatch.delenv(key, raising=False)
    _load_settings_cached.cache_clear()
    yield
    _load_settings_cached.cache_clear()


@pytest.fixture
def small_catalog_path(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.yaml"
    path.write_text(SMALL_CATALOG, encoding="utf-8")
    return path


@pytest.fixture
def small_registry(small_catalog_path: Path) -> BlockRegistry:
    return BlockRegistry(load_catalog(str(small_catalog_path)))


@pytest.fixture(scope="session")
def full_registry() -> BlockRegistry:
    return BlockRegistry(load_catalog(DEFAULT_CATALOG_PATH))
