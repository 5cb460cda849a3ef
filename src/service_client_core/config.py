"""Configuration partitioning for API clients.

A client is constructed from a single flat configuration map. Keys that the
HTTP transport understands are split off into transport options; everything
else stays with the client.

Example:
    ```python
    from service_client_core.config import partition_config

    transport_options, client_options = partition_config(
        {"base_url": "https://api.example.com", "authType": "oauth2"}
    )
    # transport_options == {"base_url": "https://api.example.com"}
    # client_options == {"authType": "oauth2"}
    ```
"""

from collections.abc import Mapping
from typing import Any

# Keys consumed by the HTTP transport
TRANSPORT_CONFIG_KEYS: tuple[str, ...] = (
    "base_url",
    "defaults",
    "emitter",
    "handler",
    "message_factory",
)

# Keys consumed by the client
API_DESCRIPTION = "apiDescription"
AUTH_TYPE = "authType"
AUTH_TOKEN = "authToken"
DEBUG = "debug"
DEBUG_LOGGER = "debugLogger"


def partition_config(config: Mapping[str, Any] | None = None) -> tuple[dict[str, Any], dict[str, Any]]:
    """Split a configuration map into transport options and client options.

    Only key presence decides where an entry goes, so an allow-listed key
    with an empty value (``defaults: {}``) is still a transport option.

    Args:
        config: Configuration map supplied to the client. Not mutated.

    Returns:
        Tuple of (transport_options, client_options) with disjoint keys.
    """
    transport_options: dict[str, Any] = {}
    client_options: dict[str, Any] = {}

    for key, value in (config or {}).items():
        if key in TRANSPORT_CONFIG_KEYS:
            transport_options[key] = value
        else:
            client_options[key] = value

    return transport_options, client_options


def configuration_exists(config: Mapping[str, Any], key: str) -> bool:
    """Return True if ``key`` is present in ``config`` with a truthy value.

    ``None``, ``""``, ``False``, ``0`` and empty containers all count as
    unset, so an explicitly empty override behaves like a missing one.
    """
    return key in config and bool(config[key])


def configuration_empty(config: Mapping[str, Any], key: str) -> bool:
    """Inverse of :func:`configuration_exists`."""
    return not configuration_exists(config, key)
