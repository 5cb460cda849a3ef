"""Tests for debug logging instrumentation."""

import logging

import httpx
import pytest

from service_client_core.testing import RecordingHandler
from service_client_core.transport import DebugLogSubscriber, Emitter, HttpTransport, attach_debugger
from service_client_core.transport.debug import DEFAULT_DEBUG_LOGGER


@pytest.mark.unit
def test_attach_debugger_registers_two_listeners():
    """Test one complete listener and one error listener are attached."""
    emitter = Emitter()

    subscriber = attach_debugger(emitter)

    listeners = emitter.listeners()
    assert len(listeners) == 2
    assert listeners["complete"][0].__self__ is subscriber
    assert listeners["error"][0].__self__ is subscriber


@pytest.mark.unit
def test_default_logger():
    assert DebugLogSubscriber().logger.name == DEFAULT_DEBUG_LOGGER


@pytest.mark.unit
def test_logs_request_and_response(caplog):
    caplog.set_level(logging.DEBUG, logger="tests.transport.debug")
    transport = HttpTransport(handler=RecordingHandler(json={"count": 3}))
    attach_debugger(transport.emitter, logging.getLogger("tests.transport.debug"))

    transport.send(transport.build_request("POST", "https://api.example.com/items", json={"name": "widget"}))

    records = [r for r in caplog.records if r.name == "tests.transport.debug"]
    message = records[-1].getMessage()
    assert records[-1].levelno == logging.DEBUG
    assert "POST https://api.example.com/items" in message
    assert '"name"' in message
    assert "200 OK" in message
    assert '"count"' in message


@pytest.mark.unit
def test_logs_error_responses(caplog):
    caplog.set_level(logging.DEBUG, logger="tests.transport.debug")
    transport = HttpTransport(handler=RecordingHandler(503, text="unavailable"))
    attach_debugger(transport.emitter, logging.getLogger("tests.transport.debug"))

    transport.send(transport.build_request("GET", "https://api.example.com/"))

    records = [r for r in caplog.records if r.name == "tests.transport.debug"]
    assert len(records) == 1
    assert "503 Service Unavailable" in records[0].getMessage()
    assert "unavailable" in records[0].getMessage()


@pytest.mark.unit
def test_logs_transport_exceptions(caplog):
    caplog.set_level(logging.DEBUG, logger="tests.transport.debug")

    def fail(request):
        raise httpx.ReadTimeout("timed out", request=request)

    transport = HttpTransport(handler=httpx.MockTransport(fail))
    attach_debugger(transport.emitter, logging.getLogger("tests.transport.debug"))

    with pytest.raises(httpx.ReadTimeout):
        transport.send(transport.build_request("GET", "https://api.example.com/"))

    records = [r for r in caplog.records if r.name == "tests.transport.debug"]
    assert "(no response)" in records[0].getMessage()
    assert "ReadTimeout" in records[0].getMessage()
