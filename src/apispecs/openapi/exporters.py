"""
Export functionality for generated OpenAPI specifications.
"""

import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from ..common import dump_json, write_text_document
from ..errors import SerializationError

logger = logging.getLogger("apispecs.openapi")

JSON_SUFFIXES = ('.json',)


class OpenAPIExporter:
    """
    Writes an OpenAPI document as JSON (.json) or YAML (anything else).
    """

    @staticmethod
    def dumps(spec: Dict[str, Any], fmt: str = "yaml") -> str:
        """
        Encode a specification.

        Args:
            spec: OpenAPI document
            fmt: 'json' or 'yaml'

        Raises:
            SerializationError: If the document can't be encoded
        """
        if fmt == "json":
            return dump_json(spec)

        try:
            return yaml.safe_dump(spec, sort_keys=False, allow_unicode=True, default_flow_style=False)
        except yaml.YAMLError as e:
            raise SerializationError(f"Failed to encode YAML: {e}") from e

    @staticmethod
    def export(spec: Dict[str, Any], output_path: str) -> None:
        """
        Encode and write a specification. Nothing is written if encoding fails.

        Raises:
            SerializationError: If the document can't be encoded
            IoError: If the file can't be written
        """
        fmt = "json" if Path(output_path).suffix.lower() in JSON_SUFFIXES else "yaml"
        text = OpenAPIExporter.dumps(spec, fmt)
        write_text_document(text, output_path)

        logger.info("Exported OpenAPI %s spec with %d paths → %s", fmt.upper(), len(spec.get("paths", {})), output_path)
