"""In-memory repository implementations for testing."""

from .comment import InMemoryCommentRepository
from .comment_like import InMemoryCommentLikeRepository
from .comment_report import InMemoryCommentReportRepository

__all__ = [
    "InMemoryCommentRepository",
    "InMemoryCommentLikeRepository",
    "InMemoryCommentReportRepository",
]
