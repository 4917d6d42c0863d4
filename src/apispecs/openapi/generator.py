"""
api-specs OpenAPI Generator

Folds a captured trace into an OpenAPI 3.0 document: one path per
normalized path template, one operation per observed method.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..capture import TraceEntry
from ..common import PATH_PARAM_TOKEN, is_json_content_type, normalize_path, safe_json_parse, split_url
from ..runner.config import RunConfig
from .schema import infer_schema

logger = logging.getLogger("apispecs.openapi")

OPENAPI_VERSION = "3.0.0"

# Methods representable as operations, in output order
OPERATION_METHODS = ("get", "post", "put", "delete", "patch")

_NO_EXAMPLE = object()


def _parse_example(text: str, content_type: str) -> Any:
    if not is_json_content_type(content_type):
        return _NO_EXAMPLE
    return safe_json_parse(text, _NO_EXAMPLE)


def _media_type(text: str, content_type: str) -> Dict[str, Any]:
    media = {"schema": infer_schema(text, content_type).to_dict()}
    example = _parse_example(text, content_type)
    if example is not _NO_EXAMPLE:
        media["example"] = example
    return media


class OpenAPIGenerator:
    """
    Generates an OpenAPI specification from a trace.

    The same path template and method seen twice keeps only the later
    observation. HEAD, OPTIONS and other methods outside OPERATION_METHODS
    are dropped.

    Example:
        generator = OpenAPIGenerator(title="Pet Store")
        spec = generator.from_trace(result.trace)
    """

    def __init__(
        self,
        title: Optional[str] = None,
        version: Optional[str] = None,
        description: Optional[str] = None,
        config: Optional[RunConfig] = None
    ):
        config = config or RunConfig()
        self.title = title or config.title
        self.version = version or config.version
        self.description = description or config.description

    def from_trace(self, trace: Iterable[TraceEntry]) -> Dict[str, Any]:
        """
        Build the specification document.

        Args:
            trace: TraceRecorder or any iterable of entries, in execution order

        Returns:
            OpenAPI document as a dict
        """
        # Ordered sets/maps local to this call
        servers: Dict[str, None] = {}
        paths: Dict[str, Dict[str, Dict[str, Any]]] = {}

        for entry in trace:
            components = split_url(entry.request.url)
            if components is None:
                logger.debug("Skipping entry with unparseable URL: %s", entry.request.url)
                continue

            servers[components.server] = None
            template = normalize_path(components.path)
            operations = paths.setdefault(template, {})

            method = entry.request.method.lower()
            if method not in OPERATION_METHODS:
                logger.debug("Dropping %s %s: method not representable", entry.request.method, template)
                continue

            operations[method] = self._build_operation(entry, template, components.query)

        return {
            "openapi": OPENAPI_VERSION,
            "info": {
                "title": self.title,
                "version": self.version,
                "description": self.description,
            },
            "servers": [{"url": url} for url in servers],
            "paths": {
                template: {m: operations[m] for m in OPERATION_METHODS if m in operations}
                for template, operations in paths.items()
            },
        }

    def _build_operation(
        self,
        entry: TraceEntry,
        template: str,
        query: List[Tuple[str, str]]
    ) -> Dict[str, Any]:
        """Build one operation object from a trace entry."""
        operation: Dict[str, Any] = {}

        if entry.comment:
            operation["summary"] = entry.comment

        parameters = self._extract_parameters(template, query)
        if parameters:
            operation["parameters"] = parameters

        post_data = entry.request.post_data
        if post_data is not None:
            operation["requestBody"] = {
                "required": True,
                "content": {post_data.mime_type: _media_type(post_data.text, post_data.mime_type)},
            }

        operation["responses"] = self._build_responses(entry)
        return operation

    @staticmethod
    def _extract_parameters(template: str, query: List[Tuple[str, str]]) -> List[Dict[str, Any]]:
        """
        Query parameters observed in the URL plus the {id} path parameter.
        """
        parameters = []

        if PATH_PARAM_TOKEN in template:
            parameters.append({
                "name": "id",
                "in": "path",
                "required": True,
                "schema": {"type": "string"},
            })

        seen = set()
        for name, value in query:
            if name in seen:
                continue
            seen.add(name)
            parameters.append({
                "name": name,
                "in": "query",
                "required": False,
                "schema": {"type": "string"},
                "example": value,
            })

        return parameters

    @staticmethod
    def _build_responses(entry: TraceEntry) -> Dict[str, Any]:
        """Responses object keyed by the observed status code."""
        response = entry.response
        status = str(response.status)

        result: Dict[str, Any] = {"description": response.status_text or f"Response for {status}"}
        if response.body_text:
            result["content"] = {response.content_type: _media_type(response.body_text, response.content_type)}

        return {status: result}


def synthesize(trace: Iterable[TraceEntry], config: Optional[RunConfig] = None) -> Dict[str, Any]:
    """Build an OpenAPI document from a trace with the configured info block."""
    return OpenAPIGenerator(config=config).from_trace(trace)
