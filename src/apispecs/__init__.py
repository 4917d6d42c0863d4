"""
api-specs

Run Postman-style collections against live APIs, capture the traffic as
HAR and generate OpenAPI specifications from the observed responses.
"""

__version__ = '1.0.0'

from .collection import Collection, Environment, CollectionLoader
from .runner import CollectionRunner, RequestExecutor, RunConfig, RunResult
from .capture import TraceRecorder, TraceEntry, HarExporter
from .openapi import OpenAPIGenerator, OpenAPIExporter, infer_schema, synthesize
from .common import normalize_path

__all__ = [
    'Collection',
    'Environment',
    'CollectionLoader',
    'CollectionRunner',
    'RequestExecutor',
    'RunConfig',
    'RunResult',
    'TraceRecorder',
    'TraceEntry',
    'HarExporter',
    'OpenAPIGenerator',
    'OpenAPIExporter',
    'infer_schema',
    'synthesize',
    'normalize_path',
]
