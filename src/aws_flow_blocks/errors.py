"""Exceptions raised by the flow blocks package.

AWS SDK errors (``botocore.exceptions.ClientError`` and ``BotoCoreError``)
are never wrapped; they reach the host engine unchanged.
"""

from __future__ import annotations


class FlowBlocksError(Exception):
    """Base class for errors raised by this package."""


class CatalogError(FlowBlocksError):
    """Raised when the block catalog cannot be loaded or is inconsistent."""


class BlockNotFoundError(FlowBlocksError, LookupError):
    def __init__(self, block_id: str) -> None:
        super().__init__(f"Unknown block: {block_id}")
        self.block_id = block_id


class CredentialResolutionError(FlowBlocksError):
    """Raised when STS answers without a usable credential set."""


class UnknownOperationError(FlowBlocksError, AttributeError):
    def __init__(self, service: str, operation: str) -> None:
        super().__init__(f"Client for '{service}' has no operation '{operation}'")
        self.service = service
        self.operation = operation


class InputValidationError(FlowBlocksError, ValueError):
    def __init__(self, block_id: str, errors: list[str]) -> None:
        super().__init__(f"Input validation failed for {block_id}: " + "; ".join(errors))
        self.block_id = block_id
        self.errors = errors
