"""Error handling utilities for operation responses."""

import httpx

from service_client_core.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
)

_EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    429: RateLimitError,
}


def raise_for_status(response: httpx.Response, operation: str | None = None) -> None:
    """Raise the matching APIError subclass for a non-2xx response.

    Args:
        response: HTTP response returned by the transport
        operation: Name of the described operation that produced it

    Raises:
        APIError subclass based on status code
    """
    if response.is_success:
        return

    status_code = response.status_code

    if status_code in _EXCEPTION_MAP:
        exc_class = _EXCEPTION_MAP[status_code]
    elif 400 <= status_code < 500:
        exc_class = ClientError
    elif 500 <= status_code < 600:
        exc_class = ServerError
    else:
        exc_class = APIError

    prefix = f"HTTP {status_code}"
    if operation:
        prefix += f" from '{operation}'"
    response_text = response.text[:200]
    message = f"{prefix}: {response_text}" if response_text else prefix

    if exc_class is RateLimitError:
        retry_after = None
        try:
            retry_after = int(response.headers["retry-after"])
        except (KeyError, ValueError, TypeError):
            # Missing or HTTP-date formatted header
            retry_after = None
        raise RateLimitError(
            message=message,
            retry_after=retry_after,
            status_code=status_code,
            response=response,
            operation=operation,
        )

    raise exc_class(
        message=message,
        status_code=status_code,
        response=response,
        operation=operation,
    )
