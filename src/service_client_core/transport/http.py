"""HTTP transport built on httpx.

:class:`HttpTransport` owns an ``httpx.Client`` configured from the
transport options of a client configuration and routes every request
through an :class:`~service_client_core.transport.emitter.Emitter`, so
authenticators and debug loggers can hook in without touching httpx.

Example:
    ```python
    import httpx

    from service_client_core.transport.http import HttpTransport

    transport = HttpTransport(
        base_url="https://api.example.com",
        defaults={"headers": {"Accept": "application/json"}, "timeout": 5.0},
        handler=httpx.MockTransport(lambda request: httpx.Response(200, json={})),
    )
    response = transport.send(transport.build_request("GET", "/status"))
    ```
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from service_client_core.transport.emitter import (
    BEFORE,
    COMPLETE,
    ERROR,
    BeforeEvent,
    CompleteEvent,
    Emitter,
    ErrorEvent,
)

logger = logging.getLogger(__name__)

# Keys of the ``defaults`` option forwarded to httpx.Client, and their httpx names
_HTTPX_DEFAULTS = {
    "headers": "headers",
    "query": "params",
    "cookies": "cookies",
    "timeout": "timeout",
    "follow_redirects": "follow_redirects",
}

DEFAULT_TIMEOUT = 10.0

MessageFactory = Callable[..., httpx.Request]


class HttpTransport:
    """Synchronous HTTP transport with request hooks.

    Args:
        base_url: Base URL for relative request URLs.
        defaults: Default request options. ``headers``, ``query``,
            ``cookies``, ``timeout`` and ``follow_redirects`` configure the
            underlying httpx client; ``auth`` is the authentication type
            stamped on each request. Anything else is kept as-is.
        emitter: Emitter to use instead of a new one.
        handler: Low-level ``httpx.BaseTransport`` (e.g. ``httpx.MockTransport``).
        message_factory: Callable ``(method, url, **kwargs)`` returning an
            ``httpx.Request``. Defaults to ``httpx.Client.build_request``.
    """

    def __init__(
        self,
        *,
        base_url: str | httpx.URL = "",
        defaults: Mapping[str, Any] | None = None,
        emitter: Emitter | None = None,
        handler: httpx.BaseTransport | None = None,
        message_factory: MessageFactory | None = None,
    ) -> None:
        self._defaults: dict[str, Any] = dict(defaults or {})
        self.emitter = emitter if emitter is not None else Emitter()

        client_kwargs: dict[str, Any] = {"base_url": base_url or "", "timeout": DEFAULT_TIMEOUT}
        for option, httpx_name in _HTTPX_DEFAULTS.items():
            if option in self._defaults:
                client_kwargs[httpx_name] = self._defaults[option]
        if handler is not None:
            client_kwargs["transport"] = handler

        self._client = httpx.Client(**client_kwargs)
        self._message_factory = message_factory or self._client.build_request

    @property
    def base_url(self) -> httpx.URL:
        return self._client.base_url

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx client."""
        return self._client

    def get_default_option(self, key: str, default: Any = None) -> Any:
        return self._defaults.get(key, default)

    def set_default_option(self, key: str, value: Any) -> None:
        self._defaults[key] = value

    def build_request(
        self, method: str, url: str | httpx.URL, *, auth: str | None = None, **kwargs: Any
    ) -> httpx.Request:
        """Build a request, stamping its authentication type.

        Args:
            method: HTTP method.
            url: Absolute URL, or a path relative to ``base_url``.
            auth: Authentication type for this request. Falls back to the
                ``auth`` default option.
            **kwargs: Passed to the message factory (``params``,
                ``headers``, ``json``, ``data``...).
        """
        request = self._message_factory(method, url, **kwargs)
        request.extensions["auth"] = auth if auth is not None else self._defaults.get("auth")
        return request

    def send(self, request: httpx.Request) -> httpx.Response:
        """Emit ``before``, send the request, then emit ``complete`` or ``error``.

        Error status responses are returned after the ``error`` event;
        deciding whether they are fatal is up to the caller. Transport
        exceptions are emitted on ``error`` and re-raised.
        """
        before = self.emitter.emit(BEFORE, BeforeEvent(request=request))
        request = before.request

        try:
            response = self._client.send(request)
        except httpx.HTTPError as e:
            logger.debug(f"{request.method} {request.url} failed: {e}")
            self.emitter.emit(ERROR, ErrorEvent(request=request, exception=e))
            raise

        if response.is_error:
            self.emitter.emit(ERROR, ErrorEvent(request=request, response=response))
        else:
            self.emitter.emit(COMPLETE, CompleteEvent(request=request, response=response))
        return response

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
