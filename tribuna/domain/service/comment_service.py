"""Comment domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from tribuna.config import ThreadSettings
from tribuna.domain.error import DepthExceededError, NotFoundError, ValidationError
from tribuna.domain.model.comment import Comment
from tribuna.domain.repository import CommentRepository
from tribuna.domain.value import CommentId, PostId, UserId

from .base import Service


def normalize_content(content: str, max_length: int) -> str:
    """Trim and validate comment content.

    Args:
        content: Raw content as typed by the user
        max_length: Canonical maximum length

    Returns:
        Content with surrounding whitespace removed

    Raises:
        ValidationError: If content is empty or too long after trimming
    """
    text = (content or "").strip()
    if not text:
        raise ValidationError("Comment content cannot be empty")
    if len(text) > max_length:
        raise ValidationError(
            f"Comment content exceeds {max_length} characters ({len(text)})"
        )
    return text


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(
        self, comment_repository: CommentRepository, thread_settings: ThreadSettings
    ) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
            thread_settings: Thread limits (content length, storage depth)
        """
        self.comment_repository = comment_repository
        self.thread_settings = thread_settings

    def validate_content(self, content: str) -> str:
        """Trim and validate content against the configured limit."""
        return normalize_content(content, self.thread_settings.max_content_length)

    async def create_comment(
        self,
        post_id: PostId,
        author_id: UserId,
        parent_comment_id: CommentId | None,
        content: str,
    ) -> Comment:
        """Create a comment on a post or a reply to another comment.

        Args:
            post_id: Post ID
            author_id: Author user ID
            parent_comment_id: Parent comment ID for replies (None for roots)
            content: Comment text

        Returns:
            Created comment

        Raises:
            ValidationError: If content is invalid or parent is on another post
            NotFoundError: If the parent comment is missing or tombstoned
            DepthExceededError: If a storage depth cap is configured and exceeded
        """
        with logfire.span(
            "comment_service.create_comment",
            post_id=str(post_id),
            author_id=str(author_id),
            parent_comment_id=str(parent_comment_id) if parent_comment_id else None,
        ):
            text = self.validate_content(content)

            if parent_comment_id:
                parent = await self.comment_repository.find_by_id(parent_comment_id)
                if not parent or parent.is_deleted:
                    logfire.warn(
                        "Parent comment not found",
                        parent_comment_id=str(parent_comment_id),
                        post_id=str(post_id),
                    )
                    raise NotFoundError("Comment", str(parent_comment_id))
                if parent.post_id != post_id:
                    logfire.error(
                        "Parent comment does not belong to post",
                        parent_comment_id=str(parent_comment_id),
                        parent_post_id=str(parent.post_id),
                        target_post_id=str(post_id),
                    )
                    raise ValidationError("Parent comment does not belong to this post")

                max_stored_depth = self.thread_settings.max_stored_depth
                if max_stored_depth is not None:
                    depth = await self.depth_of(parent) + 1
                    if depth > max_stored_depth:
                        logfire.warn(
                            "Reply depth exceeded",
                            parent_comment_id=str(parent_comment_id),
                            depth=depth,
                            max_stored_depth=max_stored_depth,
                        )
                        raise DepthExceededError(depth, max_stored_depth)

            now = datetime.now(timezone.utc)
            comment = Comment(
                id=CommentId(uuid4()),
                post_id=post_id,
                author_id=author_id,
                parent_comment_id=parent_comment_id,
                content=text,
                created_at=now,
                updated_at=now,
                deleted_at=None,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                post_id=str(post_id),
                is_reply=parent_comment_id is not None,
            )
            return saved

    async def depth_of(self, comment: Comment) -> int:
        """Compute the storage depth of a comment (roots are 0).

        Walks the parent chain; stops at a missing parent or a cycle.
        """
        depth = 0
        seen = {comment.id}
        current = comment
        while current.parent_comment_id is not None:
            if current.parent_comment_id in seen:
                break
            parent = await self.comment_repository.find_by_id(
                current.parent_comment_id
            )
            if parent is None:
                break
            seen.add(parent.id)
            depth += 1
            current = parent
        return depth

    async def fetch_comments(self, post_id: PostId) -> list[Comment]:
        """Get all comments of a post, flat, tombstones included.

        Args:
            post_id: Post ID

        Returns:
            Flat list of comments
        """
        with logfire.span("comment_service.fetch_comments", post_id=str(post_id)):
            comments = await self.comment_repository.find_by_post(
                post_id=post_id, include_deleted=True
            )
            logfire.info(
                "Comments retrieved for post",
                post_id=str(post_id),
                count=len(comments),
            )
            return comments

    async def get_comment_by_id(self, comment_id: CommentId) -> Comment | None:
        """Get a comment by ID.

        Args:
            comment_id: Comment ID

        Returns:
            Comment if found, None otherwise
        """
        with logfire.span(
            "comment_service.get_comment_by_id", comment_id=str(comment_id)
        ):
            comment = await self.comment_repository.find_by_id(comment_id)
            if comment:
                logfire.info("Comment found", comment_id=str(comment_id))
            else:
                logfire.warn("Comment not found", comment_id=str(comment_id))
            return comment

    async def get_live_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment that exists and is not tombstoned.

        Raises:
            NotFoundError: If the comment is missing or tombstoned
        """
        comment = await self.get_comment_by_id(comment_id)
        if comment is None or comment.is_deleted:
            raise NotFoundError("Comment", str(comment_id))
        return comment

    async def update_comment(self, comment_id: CommentId, content: str) -> Comment:
        """Update the content of a comment.

        Args:
            comment_id: Comment ID
            content: New content

        Returns:
            Updated comment

        Raises:
            ValidationError: If content is invalid
            NotFoundError: If the comment is missing or tombstoned
        """
        with logfire.span(
            "comment_service.update_comment",
            comment_id=str(comment_id),
            content_length=len(content),
        ):
            text = self.validate_content(content)
            updated = await self.comment_repository.update_content(comment_id, text)

            if updated is None:
                logfire.warn(
                    "Comment not found or deleted for content update",
                    comment_id=str(comment_id),
                )
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment content updated",
                comment_id=str(comment_id),
                post_id=str(updated.post_id),
                content_length=len(updated.content),
            )
            return updated

    async def delete_comment(self, comment_id: CommentId) -> Comment:
        """Tombstone a comment, keeping its replies in place.

        Args:
            comment_id: Comment ID

        Returns:
            The tombstoned comment

        Raises:
            NotFoundError: If the comment is missing or already tombstoned
        """
        with logfire.span("comment_service.delete_comment", comment_id=str(comment_id)):
            deleted = await self.comment_repository.soft_delete(comment_id)
            if deleted is None:
                logfire.warn("Comment not found for deletion", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            logfire.info(
                "Comment deleted", comment_id=str(comment_id), post_id=str(deleted.post_id)
            )
            return deleted
