"""Block catalog loader for catalog.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from aws_flow_blocks.domain.operations import OperationRef
from aws_flow_blocks.errors import CatalogError
from aws_flow_blocks.service_models.naming import lower_camel


class CatalogCategory(BaseModel):
    model_config = ConfigDict(extra="forbid")

    service: str
    serialize_response: bool = Field(default=False)
    operations: list[str] = Field(default_factory=list)

    @field_validator("operations", mode="before")
    @classmethod
    def _validate_operations(cls, v: Any) -> list:
        if v is None:
            return []
        return v


class CatalogEntry(BaseModel):
    """One exposed operation, addressed by ``<category>.<camelCaseOperation>``."""

    model_config = ConfigDict(frozen=True)

    block_id: str
    category: str
    service: str
    operation: str
    serialize_response: bool = False

    @property
    def ref(self) -> OperationRef:
        return OperationRef(service=self.service, operation=self.operation)


class BlockCatalog(BaseModel):
    model_config = ConfigDict(extra="forbid")

    version: int = Field(default=1)
    categories: dict[str, CatalogCategory] = Field(default_factory=dict)

    def entries(self) -> list[CatalogEntry]:
        seen: set[str] = set()
        entries: list[CatalogEntry] = []
        for category, group in self.categories.items():
            for operation in group.operations:
                block_id = f"{category}.{lower_camel(operation)}"
                if block_id in seen:
                    raise CatalogError(f"Duplicate block id in catalog: {block_id}")
                seen.add(block_id)
                entries.append(
                    CatalogEntry(
                        block_id=block_id,
                        category=category,
                        service=group.service,
                        operation=operation,
                        serialize_response=group.serialize_response,
                    )
                )
        return entries


def load_catalog(path: str) -> BlockCatalog:
    catalog_path = Path(path)
    if not catalog_path.exists():
        raise FileNotFoundError(f"Block catalog not found: {catalog_path}")
    with catalog_path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}
    try:
        return BlockCatalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(f"Invalid block catalog {catalog_path}: {exc}") from exc
