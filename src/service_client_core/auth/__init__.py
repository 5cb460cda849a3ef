"""Authentication components for API clients.

This module provides:
- The Authenticator base class and registry lookup used at client construction
- Ready-made token authenticators (bearer header, query parameter)
- Multi-source credential resolution (value → env → .env → default)

Example:
    ```python
    from service_client_core.auth import QueryTokenAuthenticator

    class MyTokenAuthenticator(QueryTokenAuthenticator):
        token_env_var = "MY_API_TOKEN"
    ```
"""

from service_client_core.auth.authenticators import (
    Authenticator,
    BearerTokenAuthenticator,
    QueryTokenAuthenticator,
    TokenAuthenticator,
    resolve_authenticator,
)
from service_client_core.auth.credentials import CredentialResolver
from service_client_core.auth.exceptions import CredentialError, CredentialNotFoundError

__all__ = [
    "Authenticator",
    "BearerTokenAuthenticator",
    "CredentialError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "QueryTokenAuthenticator",
    "TokenAuthenticator",
    "resolve_authenticator",
]
