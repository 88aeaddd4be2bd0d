"""Mapping from domain error kinds to HTTP responses."""

import logfire
from fastapi import HTTPException, status

from tribuna.domain.error import AuthError, DomainError, ErrorKind

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.AUTH: status.HTTP_403_FORBIDDEN,
    ErrorKind.DEPTH_EXCEEDED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.IN_FLIGHT: status.HTTP_409_CONFLICT,
    ErrorKind.TIMEOUT: status.HTTP_504_GATEWAY_TIMEOUT,
    ErrorKind.BACKEND: status.HTTP_502_BAD_GATEWAY,
}


def to_http_exception(error: DomainError) -> HTTPException:
    """Convert a domain error into an HTTPException carrying its kind.

    Authentication failures for anonymous callers become 401.
    """
    status_code = STATUS_BY_KIND[error.kind]
    if isinstance(error, AuthError) and error.anonymous:
        status_code = status.HTTP_401_UNAUTHORIZED

    if status_code >= 500:
        logfire.error("Request failed", kind=error.kind.value, error=str(error))
    else:
        logfire.warn("Request rejected", kind=error.kind.value, error=str(error))

    return HTTPException(
        status_code=status_code,
        detail={"kind": error.kind.value, "message": str(error)},
    )
