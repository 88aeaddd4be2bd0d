"""Comment like domain service."""

from typing import Sequence

import logfire

from tribuna.domain.repository import CommentLikeRepository
from tribuna.domain.value import CommentId, LikeState, UserId

from .base import Service
from .comment_service import CommentService


class LikeService(Service):
    """Domain service for comment likes."""

    def __init__(
        self,
        like_repository: CommentLikeRepository,
        comment_service: CommentService,
    ) -> None:
        """Initialize like service.

        Args:
            like_repository: Comment like repository
            comment_service: Comment domain service
        """
        self.like_repository = like_repository
        self.comment_service = comment_service

    async def toggle_like(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Like a comment, or remove the like if it already exists.

        Args:
            comment_id: Comment ID
            user_id: User ID

        Returns:
            Like count and the user's like flag after the toggle

        Raises:
            NotFoundError: If the comment is missing or tombstoned
        """
        with logfire.span(
            "like_service.toggle_like", comment_id=str(comment_id), user_id=str(user_id)
        ):
            await self.comment_service.get_live_comment(comment_id)

            state = await self.like_repository.toggle(comment_id, user_id)
            logfire.info(
                "Comment like toggled",
                comment_id=str(comment_id),
                user_id=str(user_id),
                liked=state.user_has_liked,
                count=state.count,
            )
            return state

    async def fetch_like_state(
        self, comment_ids: Sequence[CommentId], user_id: UserId | None
    ) -> dict[CommentId, LikeState]:
        """Get like aggregates for a batch of comments.

        Args:
            comment_ids: Comments to aggregate
            user_id: Viewing user (None for anonymous viewers)

        Returns:
            Like state for every requested comment
        """
        if not comment_ids:
            return {}

        # Batch query to avoid N+1
        found = await self.like_repository.find_like_state(comment_ids, user_id)
        return {cid: found.get(cid, LikeState()) for cid in comment_ids}
