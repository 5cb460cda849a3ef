"""Pytest configuration and shared fixtures for service-client-core tests."""

import pytest

from service_client_core.description import StaticApiDescription
from service_client_core.testing import RecordingHandler


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear test-related environment variables before each test.

    This prevents test pollution when testing credential and env resolution.
    """
    import os

    test_prefixes = ("TEST_", "API_", "CLIENT_", "SERVICE_")

    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in test_prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def handler():
    """Mock transport replying 200 with a small JSON body."""
    return RecordingHandler(json={"count": 42, "url": "http://www.google.com/"})


@pytest.fixture
def echo_description():
    """Inline description with one operation per parameter location."""
    return StaticApiDescription(
        {
            "baseUrl": "https://api.example.com/v1/",
            "operations": {
                "getItem": {
                    "httpMethod": "GET",
                    "uri": "items/{id}",
                    "responseModel": "Json",
                    "parameters": {
                        "id": {"location": "uri", "required": True},
                        "fields": {"location": "query"},
                        "page": {"location": "query", "default": 1},
                        "trace": {"location": "header", "sentAs": "X-Trace-Id"},
                    },
                },
                "createItem": {
                    "httpMethod": "post",
                    "uri": "items",
                    "responseModel": "Json",
                    "parameters": {"name": {"location": "json", "required": True}},
                },
                "login": {
                    "httpMethod": "POST",
                    "uri": "login",
                    "responseModel": "Text",
                    "parameters": {"user": {"location": "form"}},
                },
                "search": {
                    "httpMethod": "GET",
                    "uri": "search",
                    "additionalParameters": True,
                    "parameters": {"q": {"location": "query", "required": True}},
                },
            },
            "models": {
                "Json": {"type": "object", "additionalProperties": {"location": "json"}},
                "Text": {"type": "string", "location": "body"},
            },
        }
    )
