"""
api-specs Trace Recorder

Ordered record of executed request/response pairs and its HAR 1.2
representation.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ..errors import ParseError
from .. import __version__

HAR_VERSION = "1.2"
CREATOR_NAME = "api-specs"
HTTP_VERSION = "HTTP/1.1"


def _headers_to_har(headers: List[Tuple[str, str]]) -> List[Dict[str, str]]:
    return [{"name": name, "value": value} for name, value in headers]


def _headers_from_har(headers: Any) -> List[Tuple[str, str]]:
    return [(h.get("name", ""), h.get("value", "")) for h in headers or [] if isinstance(h, dict)]


@dataclass
class PostData:
    """Body that was actually sent with a request."""

    mime_type: str
    text: str


@dataclass
class TraceRequest:
    """Fully resolved outgoing request."""

    method: str
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    query: List[Tuple[str, str]] = field(default_factory=list)
    post_data: Optional[PostData] = None

    def to_har(self) -> Dict[str, Any]:
        har = {
            "method": self.method,
            "url": self.url,
            "httpVersion": HTTP_VERSION,
            "cookies": [],
            "headers": _headers_to_har(self.headers),
            "queryString": _headers_to_har(self.query),
            "headersSize": -1,
            "bodySize": len(self.post_data.text.encode("utf-8")) if self.post_data else 0,
        }
        if self.post_data:
            har["postData"] = {"mimeType": self.post_data.mime_type, "text": self.post_data.text}
        return har

    @classmethod
    def from_har(cls, data: Dict[str, Any]) -> 'TraceRequest':
        for key in ("method", "url"):
            if not isinstance(data.get(key), str):
                raise ParseError(f"HAR request field '{key}' must be a string")

        post = data.get("postData")
        post_data = None
        if isinstance(post, dict) and post.get("text") is not None:
            post_data = PostData(mime_type=post.get("mimeType", ""), text=post["text"])
        return cls(
            method=data["method"],
            url=data["url"],
            headers=_headers_from_har(data.get("headers")),
            query=_headers_from_har(data.get("queryString")),
            post_data=post_data
        )


@dataclass
class TraceResponse:
    """Observed response."""

    status: int
    status_text: str = ""
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body_text: str = ""
    content_type: str = "application/octet-stream"

    def to_har(self) -> Dict[str, Any]:
        size = len(self.body_text.encode("utf-8"))
        return {
            "status": self.status,
            "statusText": self.status_text,
            "httpVersion": HTTP_VERSION,
            "cookies": [],
            "headers": _headers_to_har(self.headers),
            "content": {"size": size, "mimeType": self.content_type, "text": self.body_text},
            "redirectURL": "",
            "headersSize": -1,
            "bodySize": size,
        }

    @classmethod
    def from_har(cls, data: Dict[str, Any]) -> 'TraceResponse':
        content = data.get("content") or {}
        return cls(
            status=int(data["status"]),
            status_text=data.get("statusText", ""),
            headers=_headers_from_har(data.get("headers")),
            body_text=content.get("text") or "",
            content_type=content.get("mimeType") or "application/octet-stream"
        )


@dataclass
class TraceEntry:
    """One executed request/response pair with timing."""

    started_date_time: str
    time_ms: float
    request: TraceRequest
    response: TraceResponse
    comment: Optional[str] = None

    def to_har(self) -> Dict[str, Any]:
        """Convert to a HAR entry. No phase breakdown: the whole duration is 'wait'."""
        entry = {
            "startedDateTime": self.started_date_time,
            "time": self.time_ms,
            "request": self.request.to_har(),
            "response": self.response.to_har(),
            "cache": {},
            "timings": {"send": 0, "wait": self.time_ms, "receive": 0},
        }
        if self.comment:
            entry["comment"] = self.comment
        return entry

    @classmethod
    def from_har(cls, data: Dict[str, Any]) -> 'TraceEntry':
        """
        Create an entry from a HAR entry dict.

        Raises:
            ParseError: If required fields are missing or malformed
        """
        try:
            return cls(
                started_date_time=data.get("startedDateTime", ""),
                time_ms=max(float(data.get("time", 0) or 0), 0.0),
                request=TraceRequest.from_har(data["request"]),
                response=TraceResponse.from_har(data["response"]),
                comment=data.get("comment")
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ParseError(f"Malformed HAR entry: {e}") from e


class TraceRecorder:
    """
    Collects trace entries in execution order.

    Example:
        recorder = TraceRecorder()
        recorder.record(entry)
        har = recorder.to_har()
    """

    def __init__(self, entries: Optional[List[TraceEntry]] = None):
        self.entries: List[TraceEntry] = list(entries or [])

    def record(self, entry: TraceEntry) -> None:
        self.entries.append(entry)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def to_har(self) -> Dict[str, Any]:
        """Build the HAR document."""
        return {
            "log": {
                "version": HAR_VERSION,
                "creator": {"name": CREATOR_NAME, "version": __version__},
                "entries": [entry.to_har() for entry in self.entries],
            }
        }

    @classmethod
    def from_har(cls, data: Any) -> 'TraceRecorder':
        """
        Rebuild a trace from a HAR document.

        Raises:
            ParseError: If the document isn't HAR shaped
        """
        if not isinstance(data, dict) or not isinstance(data.get("log"), dict):
            raise ParseError("Expected HAR document with a 'log' object")
        entries = data["log"].get("entries", [])
        if not isinstance(entries, list):
            raise ParseError("HAR 'log.entries' must be an array")
        return cls([TraceEntry.from_har(entry) for entry in entries])
