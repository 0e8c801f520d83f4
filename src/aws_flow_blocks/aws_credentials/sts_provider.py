"""Credential resolution with optional STS AssumeRole.

A block either signs with the host app's static credentials or, when an
``assumeRoleArn`` is configured, with temporary credentials from one
``AssumeRole`` call made for that invocation alone. Nothing is cached: the
STS client and the credentials it returns live only as long as the
invocation.
"""

from __future__ import annotations

import asyncio
import logging
import time

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from aws_flow_blocks.aws_credentials.models import AppConfig, AWSCredentials
from aws_flow_blocks.config import load_settings
from aws_flow_blocks.errors import CredentialResolutionError

logger = logging.getLogger(__name__)

SESSION_NAME_PREFIX = "flows-session-"


def session_name(now_ms: int | None = None) -> str:
    """Return ``flows-session-<epoch millis>``."""
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"{SESSION_NAME_PREFIX}{now_ms}"


def require_app_credentials(app: AppConfig) -> AWSCredentials:
    """Return the app credentials, refusing an incomplete key pair.

    A client must never be built from a partial pair: boto3 would fill the gap
    from the host process's default credential chain.
    """
    creds = app.credentials
    if not creds.access_key_id or not creds.secret_access_key:
        raise CredentialResolutionError(
            "App config must provide both accessKeyId and secretAccessKey"
        )
    return creds


def create_sts_client(app: AppConfig, region: str | None):
    creds = app.credentials
    session = boto3.Session(
        aws_access_key_id=creds.access_key_id,
        aws_secret_access_key=creds.secret_access_key,
        aws_session_token=creds.session_token,
        region_name=region or load_settings().aws.default_region,
    )
    if app.endpoint:
        return session.client("sts", endpoint_url=app.endpoint)
    return session.client("sts")


def resolve_credentials(
    assume_role_arn: str | None,
    app: AppConfig,
    region: str | None,
) -> AWSCredentials:
    """
    Pick the credentials a block invocation signs with.

    Args:
        assume_role_arn: Role to assume; falsy means use the app credentials.
        app: Host app configuration (static credentials, optional endpoint).
        region: Region for the STS client.

    Returns:
        The app credentials unchanged, or the temporary AssumeRole triple.

    Raises:
        ClientError, BotoCoreError: Propagated from STS unchanged.
        CredentialResolutionError: If the app key pair is incomplete or STS
            returned no credentials.
    """
    app_credentials = require_app_credentials(app)
    if not assume_role_arn:
        return app_credentials

    client = create_sts_client(app, region)
    name = session_name()

    try:
        response = client.assume_role(RoleArn=assume_role_arn, RoleSessionName=name)
    except ClientError as exc:
        error = exc.response.get("Error", {})
        logger.warning(
            "STS AssumeRole failed: role=%s, session=%s, error=%s: %s",
            assume_role_arn,
            name,
            error.get("Code", "Unknown"),
            error.get("Message", str(exc)),
        )
        raise
    except BotoCoreError as exc:
        logger.warning("STS AssumeRole failed: role=%s, session=%s: %s", assume_role_arn, name, exc)
        raise

    creds = (response or {}).get("Credentials")
    if not creds:
        raise CredentialResolutionError(
            f"AssumeRole for {assume_role_arn} returned no credentials"
        )

    logger.info("Assumed role: %s, session=%s", assume_role_arn, name)

    return AWSCredentials(
        access_key_id=creds["AccessKeyId"],
        secret_access_key=creds["SecretAccessKey"],
        session_token=creds["SessionToken"],
    )


async def resolve_credentials_async(
    assume_role_arn: str | None,
    app: AppConfig,
    region: str | None,
) -> AWSCredentials:
    if not assume_role_arn:
        return require_app_credentials(app)
    return await asyncio.to_thread(resolve_credentials, assume_role_arn, app, region)
