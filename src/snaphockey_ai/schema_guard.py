"""Response schema guard — keeps forced-JSON schemas inside Gemini's limits.

Gemini rejects structured-output schemas that nest too deeply, declare too
many properties, or carry oversized enums, and the failure comes back as an
opaque 400. Checking before dispatch turns that into a local error.
"""

from __future__ import annotations

from collections.abc import Iterator


class SchemaComplexityError(ValueError):
    """Raised when a response schema exceeds structured output limits."""


def _children(schema: dict) -> Iterator[tuple[dict, int]]:
    """Yield ``(subschema, depth_increment)`` for every nested schema."""
    for prop in schema.get("properties", {}).values():
        yield prop, 1
    items = schema.get("items")
    if isinstance(items, dict):
        yield items, 1
    for key in ("allOf", "anyOf", "oneOf"):
        for sub in schema.get(key, ()):
            yield sub, 0


def _walk(schema: dict, depth: int = 0) -> Iterator[tuple[dict, int]]:
    yield schema, depth
    for child, step in _children(schema):
        yield from _walk(child, depth + step)


def check_schema_complexity(
    schema: dict,
    *,
    max_depth: int = 5,
    max_properties: int = 60,
    max_enum_size: int = 20,
) -> None:
    """Validate *schema* against structured output limits.

    Raises:
        SchemaComplexityError: If depth, total property count, or any enum
            size exceeds its limit.
    """
    deepest = 0
    total_properties = 0
    for node, depth in _walk(schema):
        deepest = max(deepest, depth)
        total_properties += len(node.get("properties", {}))
        enum = node.get("enum")
        if enum is not None and len(enum) > max_enum_size:
            raise SchemaComplexityError(
                f"Enum has {len(enum)} values, exceeds limit {max_enum_size}."
            )

    if deepest > max_depth:
        raise SchemaComplexityError(
            f"Schema depth {deepest} exceeds limit {max_depth}. Flatten nested objects."
        )
    if total_properties > max_properties:
        raise SchemaComplexityError(
            f"Schema has {total_properties} properties, exceeds limit {max_properties}."
        )
