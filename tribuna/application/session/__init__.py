"""Thread sessions: optimistic, per-viewer comment thread state."""

from .factory import ThreadSessionFactory
from .result import OperationResult, OperationState
from .thread_session import ThreadSession

__all__ = [
    "OperationResult",
    "OperationState",
    "ThreadSession",
    "ThreadSessionFactory",
]
