"""
Shared fixtures for api-specs tests.
"""

from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict


def build_response(status=200, body='', content_type='application/json', reason='OK', headers=None):
    """Build a fake requests.Response."""
    response = Mock(spec=requests.Response)
    response.status_code = status
    response.reason = reason
    all_headers = CaseInsensitiveDict(headers or {})
    if content_type is not None:
        all_headers['Content-Type'] = content_type
    response.headers = all_headers
    response.text = body
    return response


@pytest.fixture
def make_response():
    """Factory for fake responses."""
    return build_response


@pytest.fixture
def mock_session(make_response):
    """requests.Session double returning a JSON 200 by default."""
    session = Mock(spec=requests.Session)
    session.request.return_value = make_response(body='{"ok": true}')
    return session


@pytest.fixture
def sample_collection_data():
    """Collection with variables, nested folders and every request shape."""
    return {
        "info": {
            "name": "User API",
            "description": "Users and orders",
            "schema": "https://schema.getpostman.com/json/collection/v2.1.0/collection.json"
        },
        "variable": [
            {"key": "base_url", "value": "https://api.example.com"},
            {"key": "user_id", "value": "7"},
            {"key": "token", "value": "collection-token", "type": "string"}
        ],
        "item": [
            {
                "name": "Get user",
                "request": {
                    "method": "get",
                    "url": "{{base_url}}/users/{{user_id}}",
                    "header": [
                        {"key": "Authorization", "value": "Bearer {{token}}"},
                        {"key": "X-Debug", "value": "1", "disabled": True}
                    ]
                }
            },
            {
                "name": "Users",
                "item": [
                    {
                        "name": "Create user",
                        "request": {
                            "method": "POST",
                            "url": {
                                "raw": "{{base_url}}/users",
                                "protocol": "https",
                                "host": ["api", "example", "com"],
                                "path": ["users"]
                            },
                            "header": [{"key": "Content-Type", "value": "application/json"}],
                            "body": {"mode": "raw", "raw": "{\"name\": \"{{name}}\"}"}
                        }
                    },
                    {
                        "name": "Orders",
                        "item": [
                            {"name": "Legacy ping", "request": "{{base_url}}/ping"}
                        ]
                    }
                ]
            },
            {
                "name": "Delete user",
                "request": {"method": "DELETE", "url": "{{base_url}}/users/{{user_id}}"}
            }
        ]
    }


@pytest.fixture
def sample_environment_data():
    """Environment overriding the collection token."""
    return {
        "name": "staging",
        "values": [
            {"key": "token", "value": "env-token", "type": "secret"},
            {"key": "name", "value": "Ada"},
            {"key": "unused", "value": "x", "enabled": False}
        ]
    }
