"""Base client class for description-driven API clients.

A concrete client declares its defaults and its authenticator registry,
and everything else comes from the API description::

    class TwitterUrlsApiClient(ApiClient):
        default_config = {"apiDescription": TwitterUrlsApiDescription}
        authenticators = {"oauth2": TwitterUrlsOauthAuthenticator}

    with TwitterUrlsApiClient({"authType": "oauth2", "debug": True}) as twitter:
        twitter.count(url="http://www.google.com")

Construction runs in a fixed order: merge defaults with the caller's
config, split transport options from client options, build the transport,
attach the debug logger, attach the authenticator, resolve the description.
If any step fails the client is not created and anything it attached to
the emitter is removed again.
"""

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any, ClassVar

from service_client_core.auth.authenticators import Authenticator, resolve_authenticator
from service_client_core.auth.credentials import CredentialResolver
from service_client_core.config import (
    API_DESCRIPTION,
    AUTH_TOKEN,
    AUTH_TYPE,
    DEBUG,
    DEBUG_LOGGER,
    configuration_exists,
    partition_config,
)
from service_client_core.description import ApiDescription, resolve_description
from service_client_core.errors.handler import raise_for_status
from service_client_core.operations import build_request, parse_response
from service_client_core.transport.debug import DebugLogSubscriber, attach_debugger
from service_client_core.transport.http import HttpTransport

logger = logging.getLogger(__name__)


class ApiClient:
    """Base class for API clients driven by an :class:`ApiDescription`.

    Class attributes:
        default_config: Default configuration for this client type. Caller
            configuration wins, except that an empty caller value for a
            client option falls back to the default.
        authenticators: Authentication-type name -> Authenticator subclass.
            Frozen into a read-only mapping when the subclass is defined.

    Args:
        config: Configuration map. Transport keys (``base_url``,
            ``defaults``, ``emitter``, ``handler``, ``message_factory``) go to
            the HTTP transport; ``apiDescription``, ``authType``, ``authToken``,
            ``debug`` and ``debugLogger`` configure the client.

    Raises:
        UnregisteredAuthenticatorError: If ``authType`` names no usable
            authenticator.
        InvalidDescriptionError: If the API description is missing or
            malformed.
    """

    default_config: ClassVar[Mapping[str, Any]] = MappingProxyType({})
    authenticators: ClassVar[Mapping[str, type[Authenticator]]] = MappingProxyType({})

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for attribute in ("default_config", "authenticators"):
            if attribute in cls.__dict__:
                setattr(cls, attribute, MappingProxyType(dict(cls.__dict__[attribute])))

    def __init__(self, config: Mapping[str, Any] | None = None):
        merged = {**self.default_config, **(config or {})}
        self._transport_config, self._api_config = partition_config(merged)

        self._debug_mode = self._option(DEBUG) is True
        self._debug_logger = self._option(DEBUG_LOGGER) if self._debug_mode else None
        self._auth_type: str | None = self._option(AUTH_TYPE)
        self._authenticator: Authenticator | None = None
        self._debugger: DebugLogSubscriber | None = None

        self._transport = HttpTransport(**self._transport_config)
        try:
            if self.is_in_debug_mode():
                self._debugger = attach_debugger(self._transport.emitter, self._debug_logger)
            if self.needs_authentication():
                self._authenticate()
            self._description: ApiDescription = resolve_description(self._option(API_DESCRIPTION))
        except Exception:
            self._rollback()
            raise

        shadowed = sorted(name for name in self._description.operations if hasattr(type(self), name))
        if shadowed:
            logger.warning(
                f"Operations {shadowed} are shadowed by {type(self).__name__} members; call them through execute()"
            )
        logger.debug(f"{type(self).__name__} ready with {len(self._description.operations)} operations")

    def _option(self, key: str) -> Any:
        """Read a client option, falling back to the type default when empty."""
        if configuration_exists(self._api_config, key):
            return self._api_config[key]
        if configuration_exists(self.default_config, key):
            return self.default_config[key]
        return None

    def _authenticate(self) -> None:
        authenticator = resolve_authenticator(self._auth_type, self.authenticators, self)
        self._transport.emitter.attach(authenticator)
        self._transport.set_default_option("auth", self._auth_type)
        self._authenticator = authenticator
        logger.debug(f"Signing requests with {type(authenticator).__name__} ({self._auth_type})")

    def _rollback(self) -> None:
        # The emitter may be shared through the ``emitter`` option
        emitter = self._transport.emitter
        for subscriber in (self._authenticator, self._debugger):
            if subscriber is not None:
                emitter.detach(subscriber)
        self._authenticator = None
        self._debugger = None
        self._transport.close()

    @classmethod
    def from_env(
        cls,
        prefix: str,
        config: Mapping[str, Any] | None = None,
        *,
        resolver: CredentialResolver | None = None,
    ) -> "ApiClient":
        """Build a client from ``<prefix>BASE_URL``, ``AUTH_TYPE``, ``AUTH_TOKEN`` and ``DEBUG``.

        Values are resolved from the environment (and .env files); entries
        in ``config`` take precedence.
        """
        resolver = resolver or CredentialResolver()
        env_config: dict[str, Any] = {}

        base_url = resolver.resolve(env_var_name=f"{prefix}BASE_URL", mask_in_logs=False)
        if base_url:
            env_config["base_url"] = base_url
        auth_type = resolver.resolve(env_var_name=f"{prefix}AUTH_TYPE", mask_in_logs=False)
        if auth_type:
            env_config[AUTH_TYPE] = auth_type
        token = resolver.resolve(env_var_name=f"{prefix}AUTH_TOKEN")
        if token:
            env_config[AUTH_TOKEN] = token
        if resolver.resolve_bool(env_var_name=f"{prefix}DEBUG"):
            env_config[DEBUG] = True

        return cls({**env_config, **(config or {})})

    @property
    def api_config(self) -> Mapping[str, Any]:
        """Client options (everything that is not a transport option)."""
        return MappingProxyType(self._api_config)

    @property
    def transport_config(self) -> Mapping[str, Any]:
        """Transport options handed to the HTTP transport."""
        return MappingProxyType(self._transport_config)

    @property
    def auth_type(self) -> str | None:
        return self._auth_type

    @property
    def authenticator(self) -> Authenticator | None:
        return self._authenticator

    @property
    def debug_logger(self) -> Any:
        return self._debug_logger

    @property
    def description(self) -> ApiDescription:
        """The loaded API description."""
        return self._description

    @property
    def http_transport(self) -> HttpTransport:
        return self._transport

    def is_in_debug_mode(self) -> bool:
        return self._debug_mode

    def needs_authentication(self) -> bool:
        return bool(self._auth_type)

    def execute(self, name: str, params: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Any:
        """Invoke the described operation ``name``.

        Args:
            name: Operation name in the API description.
            params: Operation parameters.
            **kwargs: More parameters, overriding ``params``.

        Returns:
            The decoded response body, or the ``httpx.Response`` when the
            operation declares no response model.

        Raises:
            UnknownOperationError: If the operation is not described.
            InvalidParameterError: If parameters are missing or unknown.
            APIError: If the response has an error status.
        """
        operation = self._description.get_operation(name)
        request = build_request(self._transport, self._description, name, {**(params or {}), **kwargs})
        response = self._transport.send(request)
        raise_for_status(response, operation=name)
        return parse_response(self._description, operation, response)

    def __getattr__(self, name: str) -> Callable[..., Any]:
        # Only reached when normal lookup fails, so members such as close or
        # execute win over operations of the same name.
        description = self.__dict__.get("_description")
        if name.startswith("_") or description is None or not description.has_operation(name):
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

        def invoke(params: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Any:
            return self.execute(name, params, **kwargs)

        invoke.__name__ = name
        return invoke

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
