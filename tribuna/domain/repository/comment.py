"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from tribuna.domain.model.comment import Comment
from tribuna.domain.value import CommentId, PostId


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found (tombstoned or not), None otherwise
        """
        pass

    @abstractmethod
    async def find_by_post(
        self,
        post_id: PostId,
        include_deleted: bool = True,
    ) -> List[Comment]:
        """Find all comments for a post, all depths, flat.

        Tombstones are included by default so the thread keeps its shape.

        Args:
            post_id: The post ID
            include_deleted: Whether to include tombstoned comments

        Returns:
            Flat list of comments in creation order
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Save a comment (create or update).

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def update_content(
        self, comment_id: CommentId, content: str
    ) -> Optional[Comment]:
        """Replace the content of a live comment and bump updated_at.

        Args:
            comment_id: The comment ID
            content: New content

        Returns:
            The updated comment, None if missing or tombstoned
        """
        pass

    @abstractmethod
    async def soft_delete(self, comment_id: CommentId) -> Optional[Comment]:
        """Tombstone a live comment.

        Args:
            comment_id: The comment ID

        Returns:
            The tombstoned comment, None if missing or already tombstoned
        """
        pass
