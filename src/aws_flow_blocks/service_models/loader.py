"""botocore service model loading."""

from __future__ import annotations

import threading
from functools import lru_cache

import botocore.session
from botocore.exceptions import UnknownServiceError
from botocore.model import ServiceModel

from aws_flow_blocks.errors import CatalogError

_session_lock = threading.Lock()


@lru_cache(maxsize=1)
def _botocore_session() -> botocore.session.Session:
    return botocore.session.get_session()


@lru_cache(maxsize=64)
def load_service_model(service: str) -> ServiceModel:
    """Load the botocore model for ``service`` (e.g. ``"cloudformation"``)."""
    with _session_lock:
        try:
            return _botocore_session().get_service_model(service)
        except UnknownServiceError as exc:
            raise CatalogError(f"Unknown AWS service in catalog: {service}") from exc


def has_operation(service_model: ServiceModel, operation: str) -> bool:
    return operation in service_model.operation_names
