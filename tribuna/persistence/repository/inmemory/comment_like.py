"""In-memory comment like repository for testing."""

from datetime import datetime, timezone
from typing import Optional, Sequence
from uuid import uuid4

from tribuna.domain.model.comment_like import CommentLike
from tribuna.domain.repository.comment_like import CommentLikeRepository
from tribuna.domain.value import CommentId, CommentLikeId, LikeState, UserId


class InMemoryCommentLikeRepository(CommentLikeRepository):
    """In-memory implementation of CommentLikeRepository for testing."""

    def __init__(self) -> None:
        self._likes: list[CommentLike] = []

    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[CommentLike]:
        """Find a like by user and comment."""
        for like in self._likes:
            if like.user_id == user_id and like.comment_id == comment_id:
                return like
        return None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes for a comment."""
        return sum(1 for like in self._likes if like.comment_id == comment_id)

    async def find_like_state(
        self,
        comment_ids: Sequence[CommentId],
        user_id: Optional[UserId],
    ) -> dict[CommentId, LikeState]:
        """Aggregate like state for multiple comments (batch query)."""
        wanted = set(comment_ids)
        counts: dict[CommentId, int] = {}
        liked: set[CommentId] = set()
        for like in self._likes:
            if like.comment_id not in wanted:
                continue
            counts[like.comment_id] = counts.get(like.comment_id, 0) + 1
            if user_id is not None and like.user_id == user_id:
                liked.add(like.comment_id)

        return {
            cid: LikeState(count=count, user_has_liked=cid in liked)
            for cid, count in counts.items()
        }

    async def toggle(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Create the like if absent, delete it otherwise."""
        existing = await self.find_by_user_and_comment(user_id, comment_id)
        if existing:
            self._likes = [like for like in self._likes if like.id != existing.id]
        else:
            self._likes.append(
                CommentLike(
                    id=CommentLikeId(uuid4()),
                    comment_id=comment_id,
                    user_id=user_id,
                    created_at=datetime.now(timezone.utc),
                )
            )

        return LikeState(
            count=await self.count_by_comment(comment_id),
            user_has_liked=existing is None,
        )
