"""Transport layer: an httpx-backed transport with request hooks.

Modules:
    emitter: Event emitter and event objects (before/complete/error)
    http: HttpTransport wrapping httpx.Client
    debug: Debug logging subscriber

Example:
    ```python
    from service_client_core.transport import HttpTransport, attach_debugger

    transport = HttpTransport(base_url="https://api.example.com")
    attach_debugger(transport.emitter)
    ```
"""

from service_client_core.transport.debug import DebugLogSubscriber, attach_debugger
from service_client_core.transport.emitter import (
    BeforeEvent,
    CompleteEvent,
    Emitter,
    ErrorEvent,
)
from service_client_core.transport.http import HttpTransport

__all__ = [
    "BeforeEvent",
    "CompleteEvent",
    "DebugLogSubscriber",
    "Emitter",
    "ErrorEvent",
    "HttpTransport",
    "attach_debugger",
]
