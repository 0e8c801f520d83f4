"""Flow blocks: one AWS operation each."""

from aws_flow_blocks.blocks.catalog import BlockCatalog, CatalogEntry, load_catalog
from aws_flow_blocks.blocks.descriptor import Block, build_block
from aws_flow_blocks.blocks.handler import (
    BlockInvocation,
    CollectingEventSink,
    EventSink,
    run_block,
    split_input_config,
)
from aws_flow_blocks.blocks.registry import BlockRegistry, get_registry

__all__ = [
    "Block",
    "BlockCatalog",
    "BlockInvocation",
    "BlockRegistry",
    "CatalogEntry",
    "CollectingEventSink",
    "EventSink",
    "build_block",
    "get_registry",
    "load_catalog",
    "run_block",
    "split_input_config",
]
