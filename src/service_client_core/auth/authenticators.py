"""Request-signing authenticators and their registry lookup.

Each client type declares a registry mapping authentication-type names to
:class:`Authenticator` subclasses::

    class TwitterUrlsApiClient(ApiClient):
        authenticators = {"oauth2": TwitterUrlsOauthAuthenticator}

When a client is built with ``{"authType": "oauth2"}`` the registered class
is instantiated with the client and attached to the transport emitter as a
``before`` listener. Its :meth:`Authenticator.sign` runs for every request
and may modify ``event.request`` (add query parameters, headers, signatures).
"""

import inspect
import weakref
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar

import httpx

from service_client_core.auth.credentials import CredentialResolver
from service_client_core.config import AUTH_TOKEN, configuration_exists
from service_client_core.errors.exceptions import UnregisteredAuthenticatorError
from service_client_core.transport.emitter import BEFORE, SIGN_REQUEST, BeforeEvent

if TYPE_CHECKING:
    from service_client_core.client import ApiClient


class Authenticator(ABC):
    """Base class for authenticators that sign outgoing requests.

    The authenticator only keeps a weak reference to its client, so it
    never keeps the client alive on its own.
    """

    def __init__(self, client: "ApiClient"):
        self._client_ref = weakref.ref(client)

    @property
    def client(self) -> "ApiClient":
        """The client this authenticator signs requests for."""
        client = self._client_ref()
        if client is None:
            raise ReferenceError("The client owning this authenticator no longer exists")
        return client

    def get_events(self) -> dict[str, tuple[str, int]]:
        return {BEFORE: ("sign", SIGN_REQUEST)}

    @staticmethod
    def request_has_auth(request: httpx.Request, auth_type: str) -> bool:
        """Return True if ``request`` is flagged for ``auth_type``."""
        return request.extensions.get("auth") == auth_type

    @abstractmethod
    def sign(self, event: BeforeEvent) -> None:
        """Sign ``event.request`` before it is sent."""


class TokenAuthenticator(Authenticator):
    """Authenticator that applies a static API token.

    The token is resolved on first use, in order: the client's
    ``authToken`` option, the environment variable named by
    ``token_env_var`` (including .env files), then ``default_token``.
    """

    token_env_var: ClassVar[str | None] = None
    default_token: ClassVar[str | None] = None

    def __init__(self, client: "ApiClient", resolver: CredentialResolver | None = None):
        super().__init__(client)
        self._resolver = resolver
        self._token: str | None = None

    @property
    def token(self) -> str:
        if self._token is None:
            config = self.client.api_config
            explicit = config[AUTH_TOKEN] if configuration_exists(config, AUTH_TOKEN) else None
            resolver = self._resolver or CredentialResolver()
            self._token = resolver.resolve(
                value=explicit,
                env_var_name=self.token_env_var,
                default=self.default_token,
                required=True,
            )
        return self._token

    def sign(self, event: BeforeEvent) -> None:
        if self.request_has_auth(event.request, self.client.auth_type):
            self.apply_token(event.request, self.token)

    @abstractmethod
    def apply_token(self, request: httpx.Request, token: str) -> None:
        """Write ``token`` into ``request``."""


class BearerTokenAuthenticator(TokenAuthenticator):
    """Send the token as ``Authorization: Bearer <token>``."""

    def apply_token(self, request: httpx.Request, token: str) -> None:
        request.headers["Authorization"] = f"Bearer {token}"


class QueryTokenAuthenticator(TokenAuthenticator):
    """Send the token as a query string parameter."""

    token_param: ClassVar[str] = "access_token"

    def apply_token(self, request: httpx.Request, token: str) -> None:
        request.url = request.url.copy_add_param(self.token_param, token)


def resolve_authenticator(
    auth_type: Any, registry: Mapping[str, Any], client: "ApiClient"
) -> Authenticator | None:
    """Instantiate the authenticator registered under ``auth_type``.

    Args:
        auth_type: Requested authentication type. Empty values skip
            authentication.
        registry: The client type's name -> authenticator class mapping.
        client: The client the authenticator will sign requests for.

    Returns:
        The authenticator, or None when ``auth_type`` is empty.

    Raises:
        UnregisteredAuthenticatorError: If the name is not registered, or
            is registered to something that is not a concrete Authenticator.
    """
    if not auth_type:
        return None

    try:
        authenticator_class = registry[auth_type]
    except (KeyError, TypeError):
        raise UnregisteredAuthenticatorError(auth_type) from None

    if (
        not inspect.isclass(authenticator_class)
        or not issubclass(authenticator_class, Authenticator)
        or inspect.isabstract(authenticator_class)
    ):
        raise UnregisteredAuthenticatorError(auth_type)

    return authenticator_class(client)
