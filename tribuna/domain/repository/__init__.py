"""Repository interfaces for the Tribuna domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from tribuna.domain.repository.comment import CommentRepository
from tribuna.domain.repository.comment_like import CommentLikeRepository
from tribuna.domain.repository.comment_report import CommentReportRepository

__all__ = [
    "CommentRepository",
    "CommentLikeRepository",
    "CommentReportRepository",
]
