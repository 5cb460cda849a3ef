"""Service Client Core - bootstrap layer for description-driven HTTP API clients.

This library takes care of the plumbing shared by every API client:
- Splitting one configuration map into transport and client options
- Attaching request-signing authenticators selected by name
- Lazily resolving a declarative API description (operations, parameters, models)
- Optional debug logging of every request and response

Example:
    ```python
    from service_client_core import ApiClient, StaticApiDescription
    from service_client_core.auth import BearerTokenAuthenticator

    class StatusApiClient(ApiClient):
        default_config = {
            "apiDescription": StaticApiDescription({
                "baseUrl": "https://api.example.com/",
                "operations": {"status": {"httpMethod": "GET", "uri": "status", "responseModel": "Json"}},
                "models": {"Json": {"type": "object", "location": "json"}},
            }),
        }
        authenticators = {"bearer": BearerTokenAuthenticator}

    client = StatusApiClient({"authType": "bearer", "authToken": "secret"})
    client.status()
    ```
"""

from service_client_core.client import ApiClient
from service_client_core.description import (
    ApiDescription,
    StaticApiDescription,
    register_description,
    resolve_description,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiDescription",
    "StaticApiDescription",
    "__version__",
    "register_description",
    "resolve_description",
]
