from __future__ import annotations

import pytest

from aws_flow_blocks import config


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, "load_dotenv", lambda **_: None)


def test_defaults() -> None:
    settings = config.load_settings()

    assert settings.logging.level == "INFO"
    assert settings.logging.file is None
    assert settings.execution.sdk_timeout_seconds == 60
    assert settings.execution.max_retries is None
    assert settings.execution.validate_input is False
    assert settings.catalog.path == config.DEFAULT_CATALOG_PATH
    assert settings.catalog.max_schema_depth == 12
    assert settings.aws.default_region is None


def test_load_settings_is_cached() -> None:
    assert config.load_settings() is config.load_settings()


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("SDK_TIMEOUT_SECONDS", "15")
    monkeypatch.setenv("AWS_FLOW_BLOCKS_MAX_RETRIES", "2")
    monkeypatch.setenv("AWS_FLOW_BLOCKS_VALIDATE_INPUT", "yes")
    monkeypatch.setenv("BLOCK_CATALOG_PATH", "/srv/catalog.yaml")
    monkeypatch.setenv("FLOW_BLOCKS_PORT", "9001")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    settings = config.load_settings()

    assert settings.logging.level == "DEBUG"
    assert settings.execution.sdk_timeout_seconds == 15
    assert settings.execution.max_retries == 2
    assert settings.execution.validate_input is True
    assert settings.catalog.path == "/srv/catalog.yaml"
    assert settings.server.port == 9001
    assert settings.aws.default_region == "eu-west-1"


def test_aws_region_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AWS_REGION", "ap-northeast-1")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    assert config.load_settings().aws.default_region == "ap-northeast-1"


def test_env_int_invalid_value_returns_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDK_TIMEOUT_SECONDS", "soon")

    assert config.load_settings().execution.sdk_timeout_seconds == 60


def test_env_int_uses_default_for_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEST_INT_VALUE", " ")
    assert config._env_int("TEST_INT_VALUE", 7) == 7


@pytest.mark.parametrize(("raw", "expected"), [("1", True), ("TRUE", True), ("no", False)])
def test_env_bool(monkeypatch: pytest.MonkeyPatch, raw: str, expected: bool) -> None:
    monkeypatch.setenv("TEST_BOOL_VALUE", raw)
    assert config._env_bool("TEST_BOOL_VALUE", not expected) is expected


def test_load_settings_raises_runtime_error_on_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BLOCK_SCHEMA_MAX_DEPTH", "0")

    with pytest.raises(RuntimeError, match="Invalid configuration"):
        config.load_settings()
