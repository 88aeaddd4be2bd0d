"""PostgreSQL repository implementations."""

from tribuna.persistence.repository.comment import PostgresCommentRepository
from tribuna.persistence.repository.comment_like import PostgresCommentLikeRepository
from tribuna.persistence.repository.comment_report import (
    PostgresCommentReportRepository,
)

__all__ = [
    "PostgresCommentRepository",
    "PostgresCommentLikeRepository",
    "PostgresCommentReportRepository",
]
