"""
api-specs Schema Inference

Derives a structural schema from one observed payload. Only the JSON value
shape is inspected: no integer/float split, no format detection.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..common import is_json_content_type, safe_json_parse

PRIMITIVE_KINDS = ("string", "number", "boolean", "null")

_NOT_JSON = object()


class InferredSchema:
    """Base class for inferred schemas."""

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class PrimitiveSchema(InferredSchema):
    kind: str

    def __post_init__(self):
        if self.kind not in PRIMITIVE_KINDS:
            raise ValueError(f"Unknown primitive kind: {self.kind}")

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind}


@dataclass
class ObjectSchema(InferredSchema):
    properties: Dict[str, InferredSchema] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {name: schema.to_dict() for name, schema in self.properties.items()},
        }


@dataclass
class ArraySchema(InferredSchema):
    # Schema of the first element; None for an empty array
    items: Optional[InferredSchema] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "array", "items": self.items.to_dict() if self.items else {}}


STRING_SCHEMA = PrimitiveSchema("string")


def schema_from_value(data: Any) -> InferredSchema:
    """
    Infer schema from a decoded JSON value.

    Args:
        data: The data to analyze (dict, list, or primitive)

    Returns:
        InferredSchema describing the value's shape
    """
    if data is None:
        return PrimitiveSchema("null")

    # bool first: bool is an int subclass
    if isinstance(data, bool):
        return PrimitiveSchema("boolean")

    if isinstance(data, (int, float)):
        return PrimitiveSchema("number")

    if isinstance(data, str):
        return PrimitiveSchema("string")

    if isinstance(data, list):
        if not data:
            return ArraySchema()
        return ArraySchema(items=schema_from_value(data[0]))

    if isinstance(data, dict):
        return ObjectSchema(properties={key: schema_from_value(value) for key, value in data.items()})

    return PrimitiveSchema("string")


def infer_schema(body_text: str, content_type: str) -> InferredSchema:
    """
    Infer a schema for a request or response body.

    Non-JSON content types and unparseable JSON both degrade to a string
    schema; this never raises.

    Example:
        infer_schema('{"a": 1, "b": [true]}', 'application/json').to_dict()
        # {'type': 'object', 'properties': {'a': {'type': 'number'},
        #  'b': {'type': 'array', 'items': {'type': 'boolean'}}}}
    """
    if not is_json_content_type(content_type):
        return STRING_SCHEMA

    value = safe_json_parse(body_text, _NOT_JSON)
    if value is _NOT_JSON:
        return STRING_SCHEMA

    try:
        return schema_from_value(value)
    except RecursionError:
        return STRING_SCHEMA
