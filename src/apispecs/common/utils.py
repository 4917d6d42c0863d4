"""
api-specs Common Utilities

Shared helpers for JSON handling and document file I/O.
"""

import json
from pathlib import Path
from typing import Any

from ..errors import IoError, ParseError, SerializationError


def safe_json_parse(text: str, default: Any = None) -> Any:
    """
    Parse a captured body as JSON, returning default instead of raising.

    Pass a sentinel as default when null is a meaningful result.
    """
    if not text:
        return default

    try:
        return json.loads(text)
    except (json.JSONDecodeError, TypeError, ValueError, RecursionError):
        return default


def is_json_content_type(content_type: str) -> bool:
    """Return True if the media type looks like JSON (application/json, */*+json, ...)."""
    return bool(content_type) and 'json' in content_type.lower()


def read_json_document(file_path: str, kind: str = "document") -> Any:
    """
    Read and parse a JSON document from disk.

    Args:
        file_path: Path to the JSON file
        kind: Human readable document kind used in error messages

    Returns:
        Parsed JSON value

    Raises:
        IoError: If the file doesn't exist or can't be read
        ParseError: If the file is not valid JSON
    """
    path = Path(file_path)
    if not path.exists():
        raise IoError(f"{kind.capitalize()} file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise IoError(f"Failed to read {kind} file {path}: {e}") from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Failed to parse {kind} JSON in {path}: {e}") from e


def write_text_document(text: str, output_path: str) -> Path:
    """
    Write an already encoded document, creating parent directories.

    Raises:
        IoError: If the directory or file can't be written
    """
    output_file = Path(output_path)
    try:
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(text)
    except OSError as e:
        raise IoError(f"Error writing to {output_path}: {e}") from e

    return output_file


def dump_json(data: Any) -> str:
    """
    Encode data as pretty-printed JSON.

    Raises:
        SerializationError: If the data isn't JSON serializable
    """
    try:
        return json.dumps(data, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Failed to encode JSON: {e}") from e
