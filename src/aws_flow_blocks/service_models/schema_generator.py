"""Block config fields and output schemas generated from botocore shapes."""

from __future__ import annotations

from botocore.model import ListShape, MapShape, OperationModel, ServiceModel, Shape, StructureShape

from aws_flow_blocks.service_models.naming import humanize, summarize_documentation

REGION_FIELD: dict[str, object] = {
    "name": "Region",
    "description": "AWS region for this operation",
    "type": "string",
    "required": True,
}

ASSUME_ROLE_FIELD: dict[str, object] = {
    "name": "Assume Role ARN",
    "description": (
        "Optional IAM role ARN to assume before executing this operation. If provided, "
        "the block will use STS to assume this role and use the temporary credentials."
    ),
    "type": "string",
    "required": False,
}

RESERVED_FIELDS = ("region", "assumeRoleArn")

_OPEN_OBJECT: dict[str, object] = {"type": "object", "additionalProperties": True}

_INTEGER_TYPES = frozenset({"integer", "long", "short", "byte", "bigInteger"})
_NUMBER_TYPES = frozenset({"float", "double", "bigDecimal"})


def config_to_schema(fields: dict[str, dict[str, object]]) -> dict[str, object]:
    """JSON schema equivalent of a block's config fields, for validation."""
    properties: dict[str, object] = {}
    required: list[str] = []
    for key, field in fields.items():
        field_type = field["type"]
        properties[key] = field_type if isinstance(field_type, dict) else {"type": field_type}
        if field.get("required"):
            required.append(key)
    schema: dict[str, object] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return schema


class BlockSchemaGenerator:
    def __init__(self, service_model: ServiceModel, max_depth: int = 12) -> None:
        self._model = service_model
        self._max_depth = max_depth

    @property
    def service_model(self) -> ServiceModel:
        return self._model

    def operation(self, operation: str) -> OperationModel:
        return self._model.operation_model(operation)

    def input_config(self, operation: str) -> dict[str, dict[str, object]]:
        """Config fields for the block: region, assumeRoleArn, then the request members."""
        op_model = self.operation(operation)
        fields: dict[str, dict[str, object]] = {
            "region": dict(REGION_FIELD),
            "assumeRoleArn": dict(ASSUME_ROLE_FIELD),
        }
        shape = op_model.input_shape
        if shape is None:
            return fields

        required = set(shape.required_members)
        for name, member in shape.members.items():
            if name in RESERVED_FIELDS:
                # Never shadow the block's own fields.
                continue
            fields[name] = {
                "name": humanize(name),
                "description": summarize_documentation(member.documentation),
                "type": self._field_type(member, ancestors=(shape.name,)),
                "required": name in required,
            }
        return fields

    def input_schema(self, operation: str) -> dict[str, object]:
        return config_to_schema(self.input_config(operation))

    def output_schema(self, operation: str) -> dict[str, object]:
        """JSON schema of the response; illustrative, so the top level stays open."""
        op_model = self.operation(operation)
        shape = op_model.output_shape
        if shape is None:
            return {"type": "object", "additionalProperties": True}

        properties: dict[str, object] = {}
        for name, member in shape.members.items():
            prop = self._shape_to_schema(member, ancestors=(shape.name,), depth=1, strict=False)
            description = summarize_documentation(member.documentation)
            if description:
                prop = {**prop, "description": description}
            properties[name] = prop
        return {
            "type": "object",
            "properties": properties,
            "additionalProperties": True,
        }

    def _field_type(self, shape: Shape, ancestors: tuple[str, ...]) -> str | dict[str, object]:
        type_name = shape.type_name
        if type_name == "string":
            enum = getattr(shape, "enum", None)
            if enum:
                return {"type": "string", "enum": list(enum)}
            return "string"
        if type_name in {"timestamp", "blob"}:
            return "string"
        if type_name in _INTEGER_TYPES or type_name in _NUMBER_TYPES:
            return "number"
        if type_name == "boolean":
            return "boolean"
        return self._shape_to_schema(shape, ancestors=ancestors, depth=1, strict=True)

    def _shape_to_schema(
        self,
        shape: Shape,
        ancestors: tuple[str, ...],
        depth: int,
        strict: bool,
    ) -> dict[str, object]:
        # strict=True renders request shapes (required lists kept).
        is_container = isinstance(shape, (StructureShape, ListShape, MapShape))
        if is_container and depth > self._max_depth:
            return dict(_OPEN_OBJECT)

        if isinstance(shape, StructureShape):
            if getattr(shape, "is_document_type", False):
                return {}
            if shape.name in ancestors:
                return dict(_OPEN_OBJECT)
            path = ancestors + (shape.name,)
            properties: dict[str, object] = {}
            for name, member in shape.members.items():
                properties[name] = self._shape_to_schema(member, path, depth + 1, strict)
            schema: dict[str, object] = {
                "type": "object",
                "properties": properties,
                "additionalProperties": False,
            }
            if shape.serialization.get("eventstream"):
                schema["additionalProperties"] = True
            required = [name for name in shape.required_members if name in properties]
            if strict and required:
                schema["required"] = required
            return schema

        if isinstance(shape, ListShape):
            return {
                "type": "array",
                "items": self._shape_to_schema(shape.member, ancestors, depth + 1, strict),
            }

        if isinstance(shape, MapShape):
            return {
                "type": "object",
                "additionalProperties": self._shape_to_schema(
                    shape.value, ancestors, depth + 1, strict
                ),
            }

        return self._primitive_schema(shape)

    def _primitive_schema(self, shape: Shape) -> dict[str, object]:
        type_name = shape.type_name
        if type_name in _INTEGER_TYPES:
            return {"type": "integer"}
        if type_name in _NUMBER_TYPES:
            return {"type": "number"}
        if type_name == "boolean":
            return {"type": "boolean"}
        if type_name == "timestamp":
            return {"type": "string"}
        if type_name == "blob":
            return {"type": "string", "description": "Binary data, base64 or text encoded."}
        schema: dict[str, object] = {"type": "string"}
        enum = getattr(shape, "enum", None)
        if enum:
            schema["enum"] = list(enum)
        return schema
