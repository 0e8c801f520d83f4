"""JSON Schema validation wrapper."""

from __future__ import annotations

from jsonschema import Draft202012Validator


def validate_payload(schema: dict[str, object], payload: dict[str, object]) -> list[str]:
    """Validate payload against schema and return error messages.

    Args:
        schema: JSON Schema to validate against.
        payload: Data to validate.

    Returns:
        List of error message strings, prefixed with the field path when known.
    """
    validator = Draft202012Validator(schema)
    errors: list[str] = []
    ordered = sorted(
        validator.iter_errors(payload),
        key=lambda e: [str(p) for p in e.absolute_path],
    )
    for error in ordered:
        if error.absolute_path:
            path = ".".join(str(p) for p in error.absolute_path)
            errors.append(f"{path}: {error.message}")
        else:
            errors.append(error.message)
    return errors


def check_schema(schema: dict[str, object]) -> None:
    """Raise ``jsonschema.SchemaError`` if ``schema`` is not a valid 2020-12 schema."""
    Draft202012Validator.check_schema(schema)
