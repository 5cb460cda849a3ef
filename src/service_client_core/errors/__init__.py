"""Error types raised while building clients and invoking operations."""

from service_client_core.errors.exceptions import (
    APIError,
    ApiClientError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    InvalidDescriptionError,
    InvalidParameterError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    UnknownOperationError,
    UnregisteredAuthenticatorError,
)
from service_client_core.errors.handler import raise_for_status

__all__ = [
    "APIError",
    "ApiClientError",
    "BadRequestError",
    "ClientError",
    "ConflictError",
    "ForbiddenError",
    "InvalidDescriptionError",
    "InvalidParameterError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    "UnauthorizedError",
    "UnknownOperationError",
    "UnregisteredAuthenticatorError",
    "raise_for_status",
]
