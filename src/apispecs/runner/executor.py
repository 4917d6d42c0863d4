"""
api-specs Request Executor

Materializes one collection request (variable substitution, header and
body resolution), sends it with requests and captures the exchange as a
trace entry.
"""

import logging
import time
from datetime import datetime, timezone
from http import HTTPStatus
from typing import Dict, List, Optional, Tuple

import requests
import urllib3

from ..capture import PostData, TraceEntry, TraceRequest, TraceResponse
from ..collection import Body, RawUrl, Request, SimpleRequest, Url
from ..common import query_pairs
from ..errors import TransportError, UnsupportedMethod, UnsupportedRequestForm
from .config import RunConfig
from .variables import VariableScope, VariableSubstitutor

logger = logging.getLogger("apispecs.runner")

SUPPORTED_METHODS = ("GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS")

DEFAULT_BODY_CONTENT_TYPE = "application/json"
DEFAULT_RESPONSE_CONTENT_TYPE = "application/octet-stream"

# options.raw.language → media type
RAW_LANGUAGE_CONTENT_TYPES = {
    'json': 'application/json',
    'xml': 'application/xml',
    'html': 'text/html',
    'text': 'text/plain',
    'javascript': 'application/javascript',
}


def _status_phrase(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return ""


def _combine_headers(headers: List[Tuple[str, str]]) -> List[Tuple[str, str]]:
    """
    Fold repeated header names into one field, values joined with ", ".

    Names compare case-insensitively; the first spelling seen is kept.
    """
    combined: Dict[str, Tuple[str, List[str]]] = {}
    for name, value in headers:
        key = name.lower()
        if key not in combined:
            combined[key] = (name, [])
        combined[key][1].append(value)
    return [(name, ", ".join(values)) for name, values in combined.values()]


class RequestExecutor:
    """
    Execute collection requests against a live server.

    Only the 'raw' body mode is sent. 'urlencoded' and 'formdata' bodies are
    accepted by the model but not materialized. Structured URLs are sent
    using their 'raw' field only.

    Example:
        executor = RequestExecutor(RunConfig(timeout=10))
        entry = executor.execute(item.request, {'base_url': 'https://api.example.com'})
        print(entry.response.status)
    """

    def __init__(self, config: Optional[RunConfig] = None, session: Optional[requests.Session] = None):
        """
        Initialize executor.

        Args:
            config: Run configuration (TLS verification is off by default)
            session: Optional requests session to reuse
        """
        self.config = config or RunConfig()
        self.session = session or requests.Session()

        if not self.config.verify_ssl:
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    @staticmethod
    def resolve_url(url: Url) -> str:
        """Pick the URL text to send: the string form, or the raw field of a structured URL."""
        if isinstance(url, RawUrl):
            return url.raw
        return url.raw or ""

    @staticmethod
    def _declared_content_type(body: Body, headers: List[Tuple[str, str]]) -> str:
        for name, value in headers:
            if name.lower() == 'content-type' and value:
                return value
        language = (body.raw_language or '').lower()
        return RAW_LANGUAGE_CONTENT_TYPES.get(language, DEFAULT_BODY_CONTENT_TYPE)

    def _build_post_data(
        self,
        body: Optional[Body],
        substitutor: VariableSubstitutor,
        headers: List[Tuple[str, str]]
    ) -> Optional[PostData]:
        if body is None:
            return None

        if body.mode != 'raw':
            if body.urlencoded or body.formdata:
                logger.warning("Body mode '%s' is not sent; request goes out without a body", body.mode)
            return None

        if body.raw is None:
            return None

        return PostData(
            mime_type=self._declared_content_type(body, headers),
            text=substitutor.substitute(body.raw)
        )

    def execute(self, request: Request, scope: VariableScope, name: Optional[str] = None) -> TraceEntry:
        """
        Resolve and send one request.

        Args:
            request: Request definition from the collection
            scope: Merged variable scope
            name: Optional request name, kept as the trace entry comment

        Returns:
            TraceEntry for the exchange

        Raises:
            UnsupportedRequestForm: For bare-string requests
            UnsupportedMethod: For methods outside SUPPORTED_METHODS
            TransportError: If the HTTP call fails
        """
        if isinstance(request, SimpleRequest):
            raise UnsupportedRequestForm(f"Simple URL requests are not supported: {request.url}")

        substitutor = VariableSubstitutor(scope)
        url = substitutor.substitute(self.resolve_url(request.url))

        method = request.method.upper()
        if method not in SUPPORTED_METHODS:
            raise UnsupportedMethod(method)

        headers = substitutor.substitute_headers(
            (header.key, header.value) for header in request.header if not header.disabled
        )
        if self.config.user_agent and not any(name.lower() == 'user-agent' for name, _ in headers):
            headers.append(('User-Agent', self.config.user_agent))
        # What is sent is exactly what the trace records
        headers = _combine_headers(headers)
        post_data = self._build_post_data(request.body, substitutor, headers)

        started_date_time = datetime.now(timezone.utc).isoformat()
        start_time = time.time()

        try:
            response = self.session.request(
                method=method,
                url=url,
                headers=dict(headers),
                data=post_data.text.encode('utf-8') if post_data else None,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
                allow_redirects=self.config.follow_redirects
            )
        # http.client reports unencodable header values as ValueError
        except (requests.exceptions.RequestException, ValueError) as e:
            raise TransportError(f"{method} {url}: {e}") from e

        duration_ms = max((time.time() - start_time) * 1000, 0.0)

        trace_response = TraceResponse(
            status=response.status_code,
            status_text=response.reason or _status_phrase(response.status_code),
            headers=list(response.headers.items()),
            body_text=response.text,
            content_type=response.headers.get('Content-Type', DEFAULT_RESPONSE_CONTENT_TYPE)
        )

        return TraceEntry(
            started_date_time=started_date_time,
            time_ms=duration_ms,
            request=TraceRequest(
                method=method,
                url=url,
                headers=headers,
                query=query_pairs(url),
                post_data=post_data
            ),
            response=trace_response,
            comment=name
        )

    def close(self) -> None:
        self.session.close()
