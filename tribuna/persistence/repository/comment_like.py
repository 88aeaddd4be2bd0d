"""PostgreSQL implementation of CommentLike repository."""

from datetime import datetime, timezone
from typing import Dict, Optional, Sequence
from uuid import uuid4

from sqlalchemy import and_, delete, false, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from tribuna.domain.model import CommentLike
from tribuna.domain.repository import CommentLikeRepository
from tribuna.domain.value import CommentId, CommentLikeId, LikeState, UserId
from tribuna.persistence.mappers import comment_like_to_dict, row_to_comment_like
from tribuna.persistence.tables import comment_likes_table


class PostgresCommentLikeRepository(CommentLikeRepository):
    """PostgreSQL implementation of CommentLikeRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_user_and_comment(
        self, user_id: UserId, comment_id: CommentId
    ) -> Optional[CommentLike]:
        """Find a user's like on a comment."""
        stmt = select(comment_likes_table).where(
            and_(
                comment_likes_table.c.user_id == user_id,
                comment_likes_table.c.comment_id == comment_id,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_like(row._asdict()) if row else None

    async def count_by_comment(self, comment_id: CommentId) -> int:
        """Count likes for a comment."""
        stmt = (
            select(func.count())
            .select_from(comment_likes_table)
            .where(comment_likes_table.c.comment_id == comment_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def find_like_state(
        self,
        comment_ids: Sequence[CommentId],
        user_id: Optional[UserId],
    ) -> Dict[CommentId, LikeState]:
        """Aggregate like counts and the viewer's flag (batch query)."""
        if not comment_ids:
            return {}

        if user_id is not None:
            liked = func.bool_or(comment_likes_table.c.user_id == user_id)
        else:
            liked = func.bool_or(false())

        stmt = (
            select(
                comment_likes_table.c.comment_id,
                func.count().label("likes_count"),
                liked.label("user_has_liked"),
            )
            .where(comment_likes_table.c.comment_id.in_(comment_ids))
            .group_by(comment_likes_table.c.comment_id)
        )
        result = await self.session.execute(stmt)
        return {
            CommentId(row.comment_id): LikeState(
                count=row.likes_count, user_has_liked=bool(row.user_has_liked)
            )
            for row in result.fetchall()
        }

    async def toggle(self, comment_id: CommentId, user_id: UserId) -> LikeState:
        """Delete the user's like if present, otherwise create it."""
        removed = await self.session.execute(
            delete(comment_likes_table)
            .where(
                and_(
                    comment_likes_table.c.comment_id == comment_id,
                    comment_likes_table.c.user_id == user_id,
                )
            )
            .returning(comment_likes_table.c.id)
        )
        liked = removed.fetchone() is None

        if liked:
            like = CommentLike(
                id=CommentLikeId(uuid4()),
                comment_id=comment_id,
                user_id=user_id,
                created_at=datetime.now(timezone.utc),
            )
            # A concurrent toggle may have inserted the same pair already
            stmt = (
                insert(comment_likes_table)
                .values(**comment_like_to_dict(like))
                .on_conflict_do_nothing(constraint="uq_comment_like")
            )
            await self.session.execute(stmt)

        await self.session.flush()
        return LikeState(
            count=await self.count_by_comment(comment_id), user_has_liked=liked
        )
