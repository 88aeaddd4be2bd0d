"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's imperative mapping.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import UUID

from tribuna.domain.model import Comment, CommentLike, CommentReport
from tribuna.domain.value import (
    CommentId,
    CommentLikeId,
    PostId,
    ReportId,
    ReportReason,
    ReportStatus,
    UserId,
)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive timestamps from the driver as UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def row_to_comment(row: Dict[str, Any]) -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict

    Returns:
        Comment domain model
    """
    return Comment(
        id=CommentId(_uuid(row["id"])),
        post_id=PostId(_uuid(row["post_id"])),
        author_id=UserId(_uuid(row["author_id"])),
        parent_comment_id=CommentId(_uuid(row["parent_comment_id"]))
        if row.get("parent_comment_id")
        else None,
        content=row["content"],
        created_at=_aware(row["created_at"]),
        updated_at=_aware(row["updated_at"]),
        deleted_at=_aware(row.get("deleted_at")),
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict."""
    return comment.model_dump()


def row_to_comment_like(row: Dict[str, Any]) -> CommentLike:
    """Convert database row to CommentLike domain model."""
    return CommentLike(
        id=CommentLikeId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        user_id=UserId(_uuid(row["user_id"])),
        created_at=_aware(row["created_at"]),
    )


def comment_like_to_dict(like: CommentLike) -> Dict[str, Any]:
    """Convert CommentLike domain model to database dict."""
    return like.model_dump()


def row_to_comment_report(row: Dict[str, Any]) -> CommentReport:
    """Convert database row to CommentReport domain model.

    Args:
        row: Database row as dict

    Returns:
        CommentReport domain model
    """
    return CommentReport(
        id=ReportId(_uuid(row["id"])),
        comment_id=CommentId(_uuid(row["comment_id"])),
        reporter_id=UserId(_uuid(row["reporter_id"])),
        reason=ReportReason(row["reason"]),
        description=row.get("description"),
        status=ReportStatus(row["status"]),
        created_at=_aware(row["created_at"]),
        reviewed_at=_aware(row.get("reviewed_at")),
        reviewed_by=UserId(_uuid(row["reviewed_by"]))
        if row.get("reviewed_by")
        else None,
    )


def comment_report_to_dict(report: CommentReport) -> Dict[str, Any]:
    """Convert CommentReport domain model to database dict.

    Enums are stored by value.
    """
    return report.model_dump(mode="python") | {
        "reason": report.reason.value,
        "status": report.status.value,
    }
