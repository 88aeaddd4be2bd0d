"""Comment report entity."""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from tribuna.domain.model.common import DomainModel
from tribuna.domain.value import CommentId, ReportId, ReportReason, ReportStatus, UserId


class CommentReport(DomainModel):
    """A user's report of a comment, queued for moderation.

    Reports never mutate the comment itself. A moderator moves the report
    from pending to resolved or dismissed.
    """

    id: ReportId
    comment_id: CommentId
    reporter_id: UserId
    reason: ReportReason
    description: Optional[str] = None
    status: ReportStatus = ReportStatus.PENDING
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[UserId] = None
