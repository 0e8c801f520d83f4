"""Domain objects for AWS operations."""

from __future__ import annotations

from dataclasses import dataclass

from botocore import xform_name


@dataclass(frozen=True)
class OperationRef:
    service: str
    operation: str

    @property
    def key(self) -> str:
        return f"{self.service}:{self.operation}"

    @property
    def method_name(self) -> str:
        """boto3 client method, e.g. ``DescribeStackInstance -> describe_stack_instance``."""
        return xform_name(self.operation)
