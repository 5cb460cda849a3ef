"""Debug logging for the HTTP transport.

When a client is built with ``debug`` enabled, a :class:`DebugLogSubscriber`
is attached to its emitter. It listens on the ``complete`` and ``error``
events and writes the full request and response (or exception) to the
configured logger at DEBUG level.
"""

import logging

import httpx

from service_client_core.transport.emitter import COMPLETE, ERROR, LATE, CompleteEvent, Emitter, ErrorEvent

DEFAULT_DEBUG_LOGGER = "service_client_core.debug"


def format_request(request: httpx.Request) -> str:
    lines = [f"{request.method} {request.url}"]
    lines.extend(f"{name}: {value}" for name, value in request.headers.items())
    body = request.content.decode("utf-8", errors="replace") if request.content else ""
    if body:
        lines.extend(["", body])
    return "\n".join(lines)


def format_response(response: httpx.Response) -> str:
    lines = [f"{response.http_version} {response.status_code} {response.reason_phrase}"]
    lines.extend(f"{name}: {value}" for name, value in response.headers.items())
    if response.content:
        lines.extend(["", response.text])
    return "\n".join(lines)


class DebugLogSubscriber:
    """Log every request/response pair and every error.

    Args:
        logger: Destination logger. Defaults to the
            ``service_client_core.debug`` logger.
    """

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter | None = None):
        self.logger = logger or logging.getLogger(DEFAULT_DEBUG_LOGGER)

    def get_events(self) -> dict[str, tuple[str, int]]:
        return {
            COMPLETE: ("on_complete", LATE),
            ERROR: ("on_error", LATE),
        }

    def on_complete(self, event: CompleteEvent) -> None:
        self.logger.debug(
            f">>>>>>>>\n{format_request(event.request)}\n<<<<<<<<\n{format_response(event.response)}\n--------"
        )

    def on_error(self, event: ErrorEvent) -> None:
        response = format_response(event.response) if event.response is not None else "(no response)"
        error = repr(event.exception) if event.exception is not None else "(no exception)"
        self.logger.debug(f">>>>>>>>\n{format_request(event.request)}\n<<<<<<<<\n{response}\n--------\n{error}")


def attach_debugger(
    emitter: Emitter, logger: logging.Logger | logging.LoggerAdapter | None = None
) -> DebugLogSubscriber:
    """Attach a debug log subscriber to ``emitter`` and return it."""
    subscriber = DebugLogSubscriber(logger)
    emitter.attach(subscriber)
    return subscriber
