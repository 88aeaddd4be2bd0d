"""Domain layer errors.

Every error carries a ``kind`` so callers (session results, the HTTP
layer, UI toasts) can choose messaging without matching on strings.
"""

from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Distinguishable failure kinds."""

    VALIDATION = "validation"
    AUTH = "auth"
    DEPTH_EXCEEDED = "depth_exceeded"
    NOT_FOUND = "not_found"
    BACKEND = "backend"
    TIMEOUT = "timeout"
    IN_FLIGHT = "in_flight"


class DomainError(Exception):
    """Base domain error."""

    kind: ClassVar[ErrorKind] = ErrorKind.BACKEND


class ValidationError(DomainError):
    """Bad input shape or length. Never sent to the backend."""

    kind = ErrorKind.VALIDATION


class AuthError(DomainError):
    """Missing or insufficient permission."""

    kind = ErrorKind.AUTH

    def __init__(self, message: str, *, anonymous: bool = False):
        # No user signed in
        self.anonymous = anonymous
        super().__init__(message)

    @classmethod
    def unauthenticated(cls, action: str) -> "AuthError":
        return cls(f"Authentication required to {action}", anonymous=True)

    @classmethod
    def not_permitted(cls, action: str, resource_id: str, user_id: str) -> "AuthError":
        return cls(f"User {user_id} is not authorized to {action} {resource_id}")


class DepthExceededError(DomainError):
    """Reply would exceed the configured storage depth."""

    kind = ErrorKind.DEPTH_EXCEEDED

    def __init__(self, depth: int, max_depth: int):
        self.depth = depth
        self.max_depth = max_depth
        super().__init__(f"Reply depth {depth} exceeds maximum of {max_depth}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class BackendError(DomainError):
    """Network or server failure. Retryable by the caller."""

    kind = ErrorKind.BACKEND


class RequestTimeoutError(BackendError):
    """Backend call did not complete within the request timeout."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, operation: str, timeout: float):
        self.operation = operation
        self.timeout = timeout
        super().__init__(f"{operation} timed out after {timeout:g}s")


class OperationInFlightError(DomainError):
    """Another operation on the same comment has not finished yet."""

    kind = ErrorKind.IN_FLIGHT

    def __init__(self, comment_id: str):
        self.comment_id = comment_id
        super().__init__(f"An operation on comment {comment_id} is already in flight")
