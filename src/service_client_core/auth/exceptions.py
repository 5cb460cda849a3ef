"""Exceptions for credential resolution.

Example:
    ```python
    from service_client_core.auth.exceptions import CredentialNotFoundError

    if not token:
        raise CredentialNotFoundError("API token not found", env_var_name="MY_API_TOKEN")
    ```
"""

from service_client_core.errors.exceptions import ApiClientError


class CredentialError(ApiClientError):
    """Base exception for credential-related errors."""

    pass


class CredentialNotFoundError(CredentialError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).

    Example:
        ```python
        try:
            token = resolver.resolve(env_var_name="MY_API_TOKEN", required=True)
        except CredentialNotFoundError as e:
            print(f"Missing credential: {e.env_var_name}")
        ```
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name
