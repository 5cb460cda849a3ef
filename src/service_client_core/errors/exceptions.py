"""Structured exceptions for client construction and API errors."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from service_client_core.description import ResolutionState


class ApiClientError(Exception):
    """Base exception for everything raised by service-client-core."""

    pass


class UnregisteredAuthenticatorError(ApiClientError):
    """Raised when an ``authType`` does not name a usable authenticator.

    The name may be missing from the client's registry, map to something
    that is not a class, or map to a class that is not a concrete
    :class:`~service_client_core.auth.Authenticator`.

    Attributes:
        auth_type: The authentication type that was requested.
    """

    def __init__(self, auth_type: str):
        super().__init__(f"{auth_type} is not a registered authentication type")
        self.auth_type = auth_type


class InvalidDescriptionError(ApiClientError):
    """Raised when the API description cannot be resolved.

    Attributes:
        reason: ``ResolutionState.NOT_FOUND`` when nothing was supplied,
            ``ResolutionState.MALFORMED`` when something unusable was.
    """

    def __init__(self, message: str, reason: "ResolutionState | None" = None):
        super().__init__(message)
        self.reason = reason


class UnknownOperationError(ApiClientError, AttributeError):
    """Raised when invoking an operation the description does not define."""

    def __init__(self, operation: str):
        super().__init__(f"Operation '{operation}' is not defined by the API description")
        self.operation = operation


class InvalidParameterError(ApiClientError):
    """Raised when operation parameters are missing or not recognised."""

    def __init__(self, message: str, operation: str, parameter: str):
        super().__init__(message)
        self.operation = operation
        self.parameter = parameter


class APIError(ApiClientError):
    """Base exception for HTTP error responses returned by an operation."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        operation: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.operation = operation


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class RateLimitError(ClientError):
    """429 Too Many Requests."""

    def __init__(self, message: str, retry_after: int | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.retry_after = retry_after


class ServerError(APIError):
    """5xx server errors."""

    pass
