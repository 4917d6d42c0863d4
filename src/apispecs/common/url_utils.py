"""
api-specs URL Utilities

URL parsing and path-template normalization shared by the runner and
the OpenAPI generator.
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urlparse, parse_qsl

# Placeholder used for identifier-like path segments
PATH_PARAM_TOKEN = "{id}"

# Segments longer than this are treated as opaque identifiers (UUIDs, hashes, tokens)
MAX_LITERAL_SEGMENT_LENGTH = 20

_INTEGER_RE = re.compile(r'[+-]?[0-9]+')


@dataclass
class URLComponents:
    """Parts of an absolute URL needed for spec synthesis."""

    server: str
    path: str
    query: List[Tuple[str, str]] = field(default_factory=list)


class PathNormalizer:
    """
    Turns concrete request paths into reusable path templates.

    Examples:
        /users/123 → /users/{id}
        /files/3f2b9c1e8d7a6b5c4d3e2f1a → /files/{id}
        /users/abc → /users/abc
    """

    @staticmethod
    def is_identifier_segment(segment: str) -> bool:
        """Check if a single path segment looks like an identifier."""
        if _INTEGER_RE.fullmatch(segment):
            return True
        return len(segment) > MAX_LITERAL_SEGMENT_LENGTH

    @staticmethod
    def normalize(path: str) -> str:
        """
        Replace identifier-like segments with the {id} placeholder.

        Empty segments are kept, so leading and trailing slashes survive.
        The result is stable: normalizing a template returns it unchanged.

        Args:
            path: URL path (no scheme, host or query)

        Returns:
            Path template
        """
        segments = path.split('/')
        return '/'.join(
            PATH_PARAM_TOKEN if segment and PathNormalizer.is_identifier_segment(segment) else segment
            for segment in segments
        )


def normalize_path(path: str) -> str:
    """Module-level shortcut for PathNormalizer.normalize."""
    return PathNormalizer.normalize(path)


def split_url(url: str) -> Optional[URLComponents]:
    """
    Parse an absolute URL into server, path and query pairs.

    Args:
        url: Absolute URL

    Returns:
        URLComponents, or None if the URL has no scheme/host or is malformed
    """
    try:
        parsed = urlparse(url)
        # Accessing port validates it; the port itself is not part of the server
        parsed.port
    except ValueError:
        return None

    if not parsed.scheme or not parsed.hostname:
        return None

    host = parsed.hostname
    if ':' in host:
        host = f"[{host}]"
    return URLComponents(
        server=f"{parsed.scheme}://{host}",
        path=parsed.path or '/',
        query=parse_qsl(parsed.query, keep_blank_values=True)
    )


def query_pairs(url: str) -> List[Tuple[str, str]]:
    """Return the query string of a URL as ordered (name, value) pairs."""
    try:
        return parse_qsl(urlparse(url).query, keep_blank_values=True)
    except ValueError:
        return []
