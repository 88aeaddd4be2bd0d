"""In-memory comment repository for testing."""

from datetime import datetime, timezone
from typing import Optional

from tribuna.domain.model.comment import Comment
from tribuna.domain.repository.comment import CommentRepository
from tribuna.domain.value import CommentId, PostId


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        # Insertion ordered, like rows returned by created_at
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> list[Comment]:
        """Find all comments for a post, flat."""
        comments = [c for c in self._comments.values() if c.post_id == post_id]

        if not include_deleted:
            comments = [c for c in comments if c.deleted_at is None]

        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save or update a comment."""
        self._comments[comment.id] = comment
        return comment

    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace content of a live comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.deleted_at is not None:
            return None

        # Comments are immutable, store an updated copy
        updated = comment.model_copy(
            update={"content": content, "updated_at": datetime.now(timezone.utc)}
        )
        self._comments[comment_id] = updated
        return updated

    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Tombstone a live comment."""
        comment = self._comments.get(comment_id)
        if comment is None or comment.deleted_at is not None:
            return None

        deleted = comment.model_copy(update={"deleted_at": datetime.now(timezone.utc)})
        self._comments[comment_id] = deleted
        return deleted
