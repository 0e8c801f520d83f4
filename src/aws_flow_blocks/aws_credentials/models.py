"""Credential and app-level configuration models."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class AWSCredentials:
    """Immutable AWS credential triple handed to a client."""

    access_key_id: str | None
    secret_access_key: str | None
    session_token: str | None = None

    def __repr__(self) -> str:
        key = self.access_key_id or ""
        return f"AWSCredentials(access_key_id={key[:8]}***, ...)"


@dataclass(frozen=True)
class AppConfig:
    """Host application configuration shared by every block of the app.

    The host sends camelCase keys (``accessKeyId``); snake_case is accepted
    for callers building the config by hand.
    """

    credentials: AWSCredentials
    endpoint: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object] | None) -> "AppConfig":
        data = data or {}

        def _pick(*keys: str) -> str | None:
            for key in keys:
                value = data.get(key)
                if value:
                    return str(value)
            return None

        return cls(
            credentials=AWSCredentials(
                access_key_id=_pick("accessKeyId", "access_key_id"),
                secret_access_key=_pick("secretAccessKey", "secret_access_key"),
                session_token=_pick("sessionToken", "session_token"),
            ),
            endpoint=_pick("endpoint", "endpoint_url"),
        )

    def __repr__(self) -> str:
        return f"AppConfig(credentials={self.credentials!r}, endpoint={self.endpoint!r})"


# App-level config fields as declared to the host engine.
APP_CONFIG_SCHEMA: dict[str, dict[str, object]] = {
    "accessKeyId": {
        "name": "Access Key ID",
        "description": "AWS access key ID used to sign requests or to assume roles.",
        "type": "string",
        "required": True,
    },
    "secretAccessKey": {
        "name": "Secret Access Key",
        "description": "AWS secret access key paired with the access key ID.",
        "type": "string",
        "required": True,
        "sensitive": True,
    },
    "sessionToken": {
        "name": "Session Token",
        "description": "Optional session token for temporary credentials.",
        "type": "string",
        "required": False,
        "sensitive": True,
    },
    "endpoint": {
        "name": "Endpoint",
        "description": "Optional custom endpoint URL, e.g. for LocalStack or VPC endpoints.",
        "type": "string",
        "required": False,
    },
}
