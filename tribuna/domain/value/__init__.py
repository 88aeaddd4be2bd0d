"""Domain value objects for Tribuna."""

from tribuna.domain.value.identifiers import (
    CommentId,
    CommentLikeId,
    PostId,
    ReportId,
    UserId,
)
from tribuna.domain.value.types import (
    LikeState,
    ReportReason,
    ReportStatus,
    ReviewAction,
    SortMode,
    UserRole,
)

__all__ = [
    # Identifiers
    "UserId",
    "PostId",
    "CommentId",
    "CommentLikeId",
    "ReportId",
    # Types
    "LikeState",
    "ReportReason",
    "ReportStatus",
    "ReviewAction",
    "SortMode",
    "UserRole",
]
