"""Comment like repository interface."""

from abc import ABC, abstractmethod
from typing import Dict, Optional, Sequence

from tribuna.domain.model.comment_like import CommentLike
from tribuna.domain.value import CommentId, LikeState, UserId


class CommentLikeRepository(ABC):
    """Repository for CommentLike entity."""

    @abstractmethod
    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment.

        Args:
            user_id: The user's ID
            comment_id: The comment's ID

        Returns:
            The like if found, None otherwise
        """
        pass

    @abstractmethod
    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes on a comment."""
        pass

    @abstractmethod
    async def find_like_state(
        self,
        comment_ids: Sequence[CommentId],
        user_id: Optional[UserId],
    ) -> Dict[CommentId, LikeState]:
        """Aggregate like counts and the viewer's like flag (batch query).

        Comments without likes may be absent from the result.

        Args:
            comment_ids: Comments to aggregate
            user_id: Viewing user, None for anonymous viewers

        Returns:
            Mapping of comment ID to its like state
        """
        pass

    @abstractmethod
    async def toggle(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Create the like if absent, delete it otherwise.

        Args:
            comment_id: The comment's ID
            user_id: The user's ID

        Returns:
            Like state after the toggle
        """
        pass
