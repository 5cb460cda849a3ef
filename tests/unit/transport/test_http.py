"""Tests for the httpx-backed transport."""

import httpx
import pytest

from service_client_core.testing import RecordingHandler
from service_client_core.transport import Emitter, HttpTransport


@pytest.mark.unit
def test_defaults_configure_the_httpx_client():
    """Test recognised default options reach httpx.Client."""
    handler = RecordingHandler(json={})
    transport = HttpTransport(
        base_url="https://api.example.com/v1/",
        defaults={"headers": {"X-Client": "tests"}, "query": {"lang": "en"}, "timeout": 3.0, "custom": 1},
        handler=handler,
    )

    transport.send(transport.build_request("GET", "status"))

    request = handler.last_request
    assert str(request.url) == "https://api.example.com/v1/status?lang=en"
    assert request.headers["X-Client"] == "tests"
    assert transport.client.timeout.connect == 3.0
    assert transport.get_default_option("custom") == 1


@pytest.mark.unit
def test_uses_supplied_emitter():
    emitter = Emitter()

    assert HttpTransport(emitter=emitter).emitter is emitter


@pytest.mark.unit
def test_default_auth_option_is_stamped_on_requests():
    transport = HttpTransport()
    assert transport.build_request("GET", "https://api.example.com/").extensions["auth"] is None

    transport.set_default_option("auth", "oauth2")

    assert transport.build_request("GET", "https://api.example.com/").extensions["auth"] == "oauth2"
    assert transport.build_request("GET", "https://api.example.com/", auth="basic").extensions["auth"] == "basic"


@pytest.mark.unit
def test_message_factory_builds_requests():
    calls = []

    def message_factory(method, url, **kwargs):
        calls.append((method, url))
        return httpx.Request(method, url, **kwargs)

    transport = HttpTransport(message_factory=message_factory)

    request = transport.build_request("DELETE", "https://api.example.com/items/1")

    assert calls == [("DELETE", "https://api.example.com/items/1")]
    assert request.method == "DELETE"


@pytest.mark.unit
def test_send_emits_before_and_complete():
    """Test before listeners can rewrite the request and complete sees the response."""
    handler = RecordingHandler(json={"ok": True})
    transport = HttpTransport(handler=handler)
    seen = []

    def sign(event):
        event.request = httpx.Request(event.request.method, event.request.url.copy_add_param("sig", "abc"))

    transport.emitter.on("before", sign)
    transport.emitter.on("complete", lambda event: seen.append(event.response.status_code))
    transport.emitter.on("error", lambda event: seen.append("error"))

    response = transport.send(transport.build_request("GET", "https://api.example.com/"))

    assert response.json() == {"ok": True}
    assert handler.last_request.url.params["sig"] == "abc"
    assert seen == [200]


@pytest.mark.unit
def test_error_status_emits_error_and_returns_response():
    transport = HttpTransport(handler=RecordingHandler(500, text="boom"))
    errors = []
    transport.emitter.on("error", errors.append)

    response = transport.send(transport.build_request("GET", "https://api.example.com/"))

    assert response.status_code == 500
    assert len(errors) == 1
    assert errors[0].response is response
    assert errors[0].exception is None


@pytest.mark.unit
def test_transport_exception_emits_error_and_reraises():
    def fail(request):
        raise httpx.ConnectError("connection refused", request=request)

    transport = HttpTransport(handler=httpx.MockTransport(fail))
    errors = []
    transport.emitter.on("error", errors.append)

    with pytest.raises(httpx.ConnectError):
        transport.send(transport.build_request("GET", "https://api.example.com/"))

    assert isinstance(errors[0].exception, httpx.ConnectError)
    assert errors[0].response is None


@pytest.mark.unit
def test_context_manager_closes_client():
    with HttpTransport() as transport:
        pass

    assert transport.client.is_closed
