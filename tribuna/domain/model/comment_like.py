"""Comment like entity.

A like is a (comment, user) pair. Its existence means "liked"; toggling
creates or deletes the row.
"""

from datetime import datetime, timezone

from pydantic import Field

from tribuna.domain.model.common import DomainModel
from tribuna.domain.value import CommentId, CommentLikeId, UserId


class CommentLike(DomainModel):
    """Comment like entity.

    Business rules:
    - At most one like per user per comment (enforced by unique constraint)
    - Never mutated, only created or deleted
    """

    id: CommentLikeId
    comment_id: CommentId
    user_id: UserId
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
