"""
Tests for the request executor.

Covers:
- URL, header and body resolution
- Method allow-list and unsupported request forms
- Transport failures
- Captured trace entry contents
"""

from unittest.mock import patch

import pytest
import requests

from apispecs.collection import parse_request
from apispecs.errors import TransportError, UnsupportedMethod, UnsupportedRequestForm
from apispecs.runner import RequestExecutor, RunConfig


@pytest.fixture
def executor(mock_session):
    return RequestExecutor(RunConfig(), session=mock_session)


SCOPE = {"base_url": "https://api.example.com", "id": "7", "token": "abc", "name": "Ada"}


class TestUrlResolution:
    """Test which URL text is sent."""

    def test_string_url(self, executor, mock_session):
        request = parse_request({"method": "GET", "url": "{{base_url}}/users/{{id}}"})

        entry = executor.execute(request, SCOPE)

        assert entry.request.url == "https://api.example.com/users/7"
        assert mock_session.request.call_args.kwargs["url"] == "https://api.example.com/users/7"

    def test_structured_url_uses_raw(self, executor, mock_session):
        request = parse_request({
            "method": "GET",
            "url": {"raw": "{{base_url}}/a", "protocol": "http", "host": ["other", "host"], "path": ["b"]}
        })

        entry = executor.execute(request, SCOPE)

        assert entry.request.url == "https://api.example.com/a"

    def test_structured_url_without_raw_is_empty(self):
        request = parse_request({"method": "GET", "url": {"host": ["x", "test"], "path": ["a"]}})

        assert RequestExecutor.resolve_url(request.url) == ""

    def test_query_recorded(self, executor):
        request = parse_request({"method": "GET", "url": "{{base_url}}/search?q={{name}}&page=2"})

        entry = executor.execute(request, SCOPE)

        assert entry.request.query == [("q", "Ada"), ("page", "2")]


class TestHeadersAndBody:
    """Test header and body materialization."""

    def test_disabled_headers_dropped(self, executor, mock_session):
        request = parse_request({
            "method": "GET",
            "url": "https://x.test",
            "header": [
                {"key": "Authorization", "value": "Bearer {{token}}"},
                {"key": "X-Off", "value": "{{token}}", "disabled": True}
            ]
        })

        entry = executor.execute(request, SCOPE)

        assert entry.request.headers == [("Authorization", "Bearer abc")]
        assert mock_session.request.call_args.kwargs["headers"] == {"Authorization": "Bearer abc"}

    def test_repeated_headers_combined(self, executor, mock_session):
        request = parse_request({
            "method": "GET",
            "url": "https://x.test",
            "header": [
                {"key": "Accept", "value": "a/b"},
                {"key": "X-Token", "value": "{{token}}"},
                {"key": "accept", "value": "c/d"}
            ]
        })

        entry = executor.execute(request, SCOPE)

        sent = mock_session.request.call_args.kwargs["headers"]
        assert sent == {"Accept": "a/b, c/d", "X-Token": "abc"}
        assert entry.request.headers == list(sent.items())

    def test_user_agent_from_config(self, mock_session):
        executor = RequestExecutor(RunConfig(user_agent="spec-bot/1.0"), session=mock_session)

        entry = executor.execute(parse_request({"method": "GET", "url": "https://x.test"}), SCOPE)

        assert mock_session.request.call_args.kwargs["headers"] == {"User-Agent": "spec-bot/1.0"}
        assert entry.request.headers == [("User-Agent", "spec-bot/1.0")]

    def test_request_user_agent_wins(self, mock_session):
        executor = RequestExecutor(RunConfig(user_agent="spec-bot/1.0"), session=mock_session)
        request = parse_request({
            "method": "GET",
            "url": "https://x.test",
            "header": [{"key": "user-agent", "value": "custom"}]
        })

        executor.execute(request, SCOPE)

        assert mock_session.request.call_args.kwargs["headers"] == {"user-agent": "custom"}

    def test_raw_body_substituted(self, executor, mock_session):
        request = parse_request({
            "method": "POST",
            "url": "https://x.test/users",
            "header": [{"key": "Content-Type", "value": "application/json; charset=utf-8"}],
            "body": {"mode": "raw", "raw": "{\"name\": \"{{name}}\"}"}
        })

        entry = executor.execute(request, SCOPE)

        assert entry.request.post_data.text == '{"name": "Ada"}'
        assert entry.request.post_data.mime_type == "application/json; charset=utf-8"
        assert mock_session.request.call_args.kwargs["data"] == b'{"name": "Ada"}'

    def test_raw_body_language_content_type(self, executor):
        request = parse_request({
            "method": "POST",
            "url": "https://x.test",
            "body": {"mode": "raw", "raw": "<a/>", "options": {"raw": {"language": "xml"}}}
        })

        entry = executor.execute(request, SCOPE)

        assert entry.request.post_data.mime_type == "application/xml"

    def test_raw_body_default_content_type(self, executor):
        request = parse_request({"method": "PUT", "url": "https://x.test", "body": {"mode": "raw", "raw": "{}"}})

        entry = executor.execute(request, SCOPE)

        assert entry.request.post_data.mime_type == "application/json"

    @pytest.mark.parametrize("mode", ["urlencoded", "formdata"])
    def test_form_bodies_not_sent(self, executor, mock_session, mode):
        request = parse_request({
            "method": "POST",
            "url": "https://x.test",
            "body": {"mode": mode, mode: [{"key": "a", "value": "1"}]}
        })

        entry = executor.execute(request, SCOPE)

        assert entry.request.post_data is None
        assert mock_session.request.call_args.kwargs["data"] is None

    def test_no_body(self, executor, mock_session):
        request = parse_request({"method": "GET", "url": "https://x.test"})

        entry = executor.execute(request, SCOPE)

        assert entry.request.post_data is None


class TestMethods:
    """Test method handling."""

    @pytest.mark.parametrize("method", ["get", "POST", "Put", "DELETE", "patch", "HEAD", "OPTIONS"])
    def test_supported_methods_uppercased(self, executor, mock_session, method):
        request = parse_request({"method": method, "url": "https://x.test"})

        entry = executor.execute(request, SCOPE)

        assert entry.request.method == method.upper()
        assert mock_session.request.call_args.kwargs["method"] == method.upper()

    def test_unsupported_method(self, executor, mock_session):
        request = parse_request({"method": "TRACE", "url": "https://x.test"})

        with pytest.raises(UnsupportedMethod) as exc_info:
            executor.execute(request, SCOPE)

        assert exc_info.value.method == "TRACE"
        mock_session.request.assert_not_called()

    def test_bare_string_request_rejected(self, executor, mock_session):
        with pytest.raises(UnsupportedRequestForm):
            executor.execute(parse_request("https://x.test"), SCOPE)

        mock_session.request.assert_not_called()


class TestTransport:
    """Test the HTTP call itself."""

    def test_tls_verification_disabled_by_default(self, executor, mock_session):
        executor.execute(parse_request({"method": "GET", "url": "https://x.test"}), SCOPE)

        assert mock_session.request.call_args.kwargs["verify"] is False
        assert mock_session.request.call_args.kwargs["timeout"] is None

    def test_config_passed_through(self, mock_session):
        executor = RequestExecutor(RunConfig(timeout=5, verify_ssl=True, follow_redirects=False), session=mock_session)

        executor.execute(parse_request({"method": "GET", "url": "https://x.test"}), SCOPE)

        kwargs = mock_session.request.call_args.kwargs
        assert kwargs["timeout"] == 5
        assert kwargs["verify"] is True
        assert kwargs["allow_redirects"] is False

    def test_connection_error(self, executor, mock_session):
        mock_session.request.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(TransportError, match="Connection refused"):
            executor.execute(parse_request({"method": "GET", "url": "https://x.test"}), SCOPE)

    def test_missing_schema_is_transport_error(self, executor, mock_session):
        mock_session.request.side_effect = requests.exceptions.MissingSchema("No scheme supplied")

        with pytest.raises(TransportError):
            executor.execute(parse_request({"method": "GET", "url": {"path": ["a"]}}), SCOPE)

    @patch('apispecs.runner.executor.requests.Session')
    def test_creates_session_when_not_given(self, mock_session_class):
        executor = RequestExecutor()

        assert executor.session is mock_session_class.return_value


class TestCapturedEntry:
    """Test the trace entry built from the response."""

    def test_response_fields(self, executor, mock_session, make_response):
        mock_session.request.return_value = make_response(
            status=201, reason="Created", body='{"id": 1}', content_type="application/json",
            headers={"X-Request-Id": "r1"}
        )

        entry = executor.execute(parse_request({"method": "POST", "url": "https://x.test"}), SCOPE, name="Create")

        assert entry.response.status == 201
        assert entry.response.status_text == "Created"
        assert entry.response.body_text == '{"id": 1}'
        assert entry.response.content_type == "application/json"
        assert ("X-Request-Id", "r1") in entry.response.headers
        assert entry.comment == "Create"
        assert entry.time_ms >= 0
        assert entry.started_date_time

    def test_missing_content_type(self, executor, mock_session, make_response):
        mock_session.request.return_value = make_response(body="hi", content_type=None)

        entry = executor.execute(parse_request({"method": "GET", "url": "https://x.test"}), SCOPE)

        assert entry.response.content_type == "application/octet-stream"

    def test_reason_fallback(self, executor, mock_session, make_response):
        mock_session.request.return_value = make_response(status=404, reason="")

        entry = executor.execute(parse_request({"method": "GET", "url": "https://x.test"}), SCOPE)

        assert entry.response.status_text == "Not Found"
