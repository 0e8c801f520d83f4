"""Block descriptors as consumed by the host flow engine."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cached_property

from aws_flow_blocks.blocks.catalog import CatalogEntry
from aws_flow_blocks.blocks.handler import BlockInvocation, EventSink, run_block
from aws_flow_blocks.domain.operations import OperationRef
from aws_flow_blocks.service_models.naming import humanize, summarize_documentation
from aws_flow_blocks.service_models.schema_generator import (
    BlockSchemaGenerator,
    config_to_schema,
)


@dataclass(frozen=True)
class Block:
    block_id: str
    name: str
    description: str
    category: str
    service: str
    operation: str
    config: dict[str, dict[str, object]]
    output: dict[str, object]
    serialize_response: bool = False

    @property
    def ref(self) -> OperationRef:
        return OperationRef(service=self.service, operation=self.operation)

    @cached_property
    def input_schema(self) -> dict[str, object]:
        return config_to_schema(self.config)

    async def on_event(self, invocation: BlockInvocation, sink: EventSink) -> object:
        return await run_block(self, invocation, sink)

    def summary(self) -> dict[str, object]:
        return {
            "id": self.block_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
        }

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.block_id,
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "service": self.service,
            "operation": self.operation,
            "inputs": {"default": {"config": self.config}},
            "outputs": {"default": self.output},
        }


def build_block(entry: CatalogEntry, generator: BlockSchemaGenerator) -> Block:
    op_model = generator.operation(entry.operation)
    name = humanize(entry.operation)
    return Block(
        block_id=entry.block_id,
        name=name,
        description=summarize_documentation(op_model.documentation),
        category=entry.category,
        service=entry.service,
        operation=entry.operation,
        config=generator.input_config(entry.operation),
        output={
            "name": f"{name} Result",
            "description": f"Result from {entry.operation} operation",
            "possiblePrimaryParents": ["default"],
            "type": generator.output_schema(entry.operation),
        },
        serialize_response=entry.serialize_response,
    )
