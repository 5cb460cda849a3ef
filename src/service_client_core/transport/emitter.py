"""Event emitter used by the HTTP transport to expose request hooks.

Three events are emitted for every request sent through
:class:`~service_client_core.transport.http.HttpTransport`:

- ``before``: the request is about to be sent. Listeners may mutate or
  replace ``event.request`` (this is where authenticators sign requests).
- ``complete``: a response was received.
- ``error``: the response had an error status, or the transport raised.

Listeners are plain callables taking the event object. Subscribers are
objects exposing ``get_events()``, which maps event names to a
``(method_name, priority)`` tuple; attaching a subscriber registers each
named bound method.

Example:
    ```python
    emitter = Emitter()
    emitter.on("before", lambda event: event.request.headers.update({"X-Trace": "1"}))
    emitter.listeners()  # {"before": [<function <lambda>>]}
    ```
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

# Listener priorities, higher runs first
EARLY = 10000
LATE = -10000
SIGN_REQUEST = -10000

BEFORE = "before"
COMPLETE = "complete"
ERROR = "error"

Listener = Callable[[Any], None]


@dataclass
class BeforeEvent:
    """Emitted before a request is sent."""

    request: httpx.Request


@dataclass
class CompleteEvent:
    """Emitted after a response is received."""

    request: httpx.Request
    response: httpx.Response


@dataclass
class ErrorEvent:
    """Emitted for error responses and transport failures."""

    request: httpx.Request
    response: httpx.Response | None = None
    exception: Exception | None = None


class Subscriber(Protocol):
    def get_events(self) -> dict[str, tuple[str, int]]: ...


class Emitter:
    """Registry of prioritised listeners keyed by event name."""

    def __init__(self) -> None:
        # event name -> list of (priority, listener) in registration order
        self._listeners: dict[str, list[tuple[int, Listener]]] = {}

    def on(self, event_name: str, listener: Listener, priority: int = 0) -> None:
        """Register ``listener`` for ``event_name``."""
        self._listeners.setdefault(event_name, []).append((priority, listener))

    def remove_listener(self, event_name: str, listener: Listener) -> None:
        """Remove ``listener`` from ``event_name`` if present."""
        entries = self._listeners.get(event_name)
        if not entries:
            return
        entries[:] = [(p, fn) for p, fn in entries if fn != listener]
        if not entries:
            del self._listeners[event_name]

    def attach(self, subscriber: Subscriber) -> None:
        """Register every listener a subscriber declares."""
        for event_name, (method_name, priority) in subscriber.get_events().items():
            self.on(event_name, getattr(subscriber, method_name), priority)

    def detach(self, subscriber: Subscriber) -> None:
        """Remove every listener a subscriber declared."""
        for event_name, (method_name, _priority) in subscriber.get_events().items():
            self.remove_listener(event_name, getattr(subscriber, method_name))

    def listeners(self, event_name: str | None = None) -> Any:
        """Return listeners sorted by priority.

        Args:
            event_name: When given, return the list for that event only.

        Returns:
            A list of callables for one event, or a dict of event name to
            list for every event that has at least one listener.
        """
        if event_name is not None:
            return self._sorted(event_name)
        return {name: self._sorted(name) for name in self._listeners if self._listeners[name]}

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def emit(self, event_name: str, event: Any) -> Any:
        """Call each listener for ``event_name`` with ``event`` and return it."""
        for listener in self._sorted(event_name):
            listener(event)
        return event

    def _sorted(self, event_name: str) -> list[Listener]:
        entries = self._listeners.get(event_name, [])
        # sorted() is stable, so equal priorities keep registration order
        return [fn for _priority, fn in sorted(entries, key=lambda entry: -entry[0])]
