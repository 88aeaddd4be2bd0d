"""Typed outcomes of thread session operations."""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from tribuna.domain.error import DomainError, ErrorKind

T = TypeVar("T")


class OperationState(str, Enum):
    """Lifecycle of a single operation.

    idle -> submitting -> committed | rolled_back. An operation that fails
    local checks never leaves idle.
    """

    IDLE = "idle"
    SUBMITTING = "submitting"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Either a value or a typed error, plus the state the operation ended in."""

    state: OperationState
    value: Optional[T] = None
    error: Optional[DomainError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None

    @classmethod
    def committed(cls, value: T) -> "OperationResult[T]":
        return cls(state=OperationState.COMMITTED, value=value)

    @classmethod
    def rejected(cls, error: DomainError) -> "OperationResult[T]":
        """Failed before reaching the backend; nothing changed."""
        return cls(state=OperationState.IDLE, error=error)

    @classmethod
    def rolled_back(cls, error: DomainError) -> "OperationResult[T]":
        return cls(state=OperationState.ROLLED_BACK, error=error)
