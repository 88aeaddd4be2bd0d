"""Comment entity.

Comments are threaded discussions on articles. Storage depth is unbounded;
the thread is rebuilt from flat rows on every read.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from tribuna.domain.model.common import DomainModel
from tribuna.domain.value import CommentId, PostId, UserId


class Comment(DomainModel):
    """Comment entity.

    Represents a comment on a post or a reply to another comment.

    Threading is managed through parent_comment_id only (None for roots).
    Deletion is a tombstone: deleted_at is set and the row keeps its place
    in the thread so replies are never orphaned.
    """

    id: CommentId
    post_id: PostId
    author_id: UserId
    parent_comment_id: Optional[CommentId] = None
    content: str = Field(min_length=1)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = None

    @property
    def is_deleted(self) -> bool:
        """Whether the comment has been tombstoned."""
        return self.deleted_at is not None
