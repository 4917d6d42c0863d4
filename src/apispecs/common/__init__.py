"""
api-specs Common Utilities

Shared utilities and helpers used across api-specs modules.
"""

from .utils import safe_json_parse, is_json_content_type, read_json_document, write_text_document, dump_json
from .url_utils import PathNormalizer, URLComponents, normalize_path, split_url, query_pairs, PATH_PARAM_TOKEN

__all__ = [
    'safe_json_parse',
    'is_json_content_type',
    'read_json_document',
    'write_text_document',
    'dump_json',
    'PathNormalizer',
    'URLComponents',
    'normalize_path',
    'split_url',
    'query_pairs',
    'PATH_PARAM_TOKEN',
]
