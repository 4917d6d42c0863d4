"""
api-specs OpenAPI Module

Schema inference, path templating and OpenAPI document synthesis from
captured traces.
"""

from .schema import ArraySchema, InferredSchema, ObjectSchema, PrimitiveSchema, infer_schema, schema_from_value
from .generator import OPERATION_METHODS, OpenAPIGenerator, synthesize
from .exporters import OpenAPIExporter

__all__ = [
    'ArraySchema',
    'InferredSchema',
    'ObjectSchema',
    'PrimitiveSchema',
    'infer_schema',
    'schema_from_value',
    'OPERATION_METHODS',
    'OpenAPIGenerator',
    'synthesize',
    'OpenAPIExporter',
]
