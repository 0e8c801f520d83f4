"""Registry of catalog blocks with lazily generated descriptors."""

from __future__ import annotations

import json
import logging
import threading
from collections.abc import Iterable
from functools import lru_cache
from pathlib import Path

from aws_flow_blocks.aws_credentials.models import APP_CONFIG_SCHEMA
from aws_flow_blocks.blocks.catalog import BlockCatalog, CatalogEntry, load_catalog
from aws_flow_blocks.blocks.descriptor import Block, build_block
from aws_flow_blocks.config import load_settings
from aws_flow_blocks.errors import BlockNotFoundError
from aws_flow_blocks.service_models.loader import has_operation, load_service_model
from aws_flow_blocks.service_models.schema_generator import BlockSchemaGenerator

logger = logging.getLogger(__name__)


class BlockRegistry:
    """Blocks addressed by id; descriptors are built on first use.

    Catalog operations missing from the installed botocore models are
    skipped with a warning so an older SDK still serves the rest.
    """

    def __init__(self, catalog: BlockCatalog, max_schema_depth: int = 12) -> None:
        self._entries: dict[str, CatalogEntry] = {
            entry.block_id: entry for entry in catalog.entries()
        }
        self._max_schema_depth = max_schema_depth
        self._generators: dict[str, BlockSchemaGenerator] = {}
        self._blocks: dict[str, Block] = {}
        self._unavailable: set[str] = set()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, block_id: object) -> bool:
        return block_id in self._entries

    def entries(self) -> Iterable[CatalogEntry]:
        return self._entries.values()

    def get(self, block_id: str) -> Block:
        block = self._blocks.get(block_id)
        if block is not None:
            return block

        entry = self._entries.get(block_id)
        if entry is None or not self._is_available(entry):
            raise BlockNotFoundError(block_id)

        with self._lock:
            block = self._blocks.get(block_id)
            if block is None:
                block = build_block(entry, self._generator(entry.service))
                self._blocks[block_id] = block
        return block

    def list(self, category: str | None = None) -> list[Block]:
        blocks = []
        for entry in self._entries.values():
            if category and entry.category != category:
                continue
            if not self._is_available(entry):
                continue
            blocks.append(self.get(entry.block_id))
        return blocks

    def search(self, query: str, category: str | None = None) -> list[Block]:
        terms = query.lower().split()
        if not terms:
            return self.list(category)

        results = []
        for block in self.list(category):
            haystack = " ".join(
                (block.block_id, block.name, block.service, block.description)
            ).lower()
            if all(term in haystack for term in terms):
                results.append(block)
        return results

    def export(self, path: str) -> int:
        """Write every descriptor (plus the app config schema) to ``path`` as JSON."""
        blocks = self.list()
        document = {
            "app": {"config": APP_CONFIG_SCHEMA},
            "blocks": {block.block_id: block.to_dict() for block in blocks},
        }
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as handle:
            json.dump(document, handle, indent=2, ensure_ascii=False)
        logger.info("Exported %d block descriptors to %s", len(blocks), target)
        return len(blocks)

    def _generator(self, service: str) -> BlockSchemaGenerator:
        generator = self._generators.get(service)
        if generator is None:
            generator = BlockSchemaGenerator(
                load_service_model(service), max_depth=self._max_schema_depth
            )
            self._generators[service] = generator
        return generator

    def _is_available(self, entry: CatalogEntry) -> bool:
        if entry.block_id in self._unavailable:
            return False
        if has_operation(load_service_model(entry.service), entry.operation):
            return True
        logger.warning(
            "Skipping block %s: botocore has no %s operation for %s",
            entry.block_id,
            entry.operation,
            entry.service,
        )
        self._unavailable.add(entry.block_id)
        return False


@lru_cache(maxsize=1)
def get_registry() -> BlockRegistry:
    """Process-wide registry built from the configured catalog."""
    settings = load_settings()
    catalog = load_catalog(settings.catalog.path)
    registry = BlockRegistry(catalog, max_schema_depth=settings.catalog.max_schema_depth)
    logger.info("Loaded block catalog %s (%d blocks)", settings.catalog.path, len(registry))
    return registry
