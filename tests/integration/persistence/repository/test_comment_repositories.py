"""Integration tests for the PostgreSQL comment repositories.

Run against a migrated database:

    DATABASE__URL=postgresql+asyncpg://... alembic upgrade head
    DATABASE__URL=postgresql+asyncpg://... pytest tests/integration
"""

import os
from uuid import uuid4

import pytest

from tests.harness import create_env_fixture, make_comment
from tribuna.domain.model import CommentReport
from tribuna.domain.repository import (
    CommentLikeRepository,
    CommentReportRepository,
    CommentRepository,
)
from tribuna.domain.value import (
    LikeState,
    PostId,
    ReportId,
    ReportReason,
    ReportStatus,
    UserId,
)

pytestmark = pytest.mark.skipif(
    not os.getenv("DATABASE__URL"), reason="DATABASE__URL not set"
)

integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresCommentRepository:
    """Integration tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_save_and_find_by_post_keeps_tombstones(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        post_id = PostId(uuid4())
        root = await comment_repo.save(make_comment(post_id))
        reply = await comment_repo.save(make_comment(post_id, parent=root, minutes=1))

        # Act
        deleted = await comment_repo.soft_delete(root.id)
        all_rows = await comment_repo.find_by_post(post_id)
        live_rows = await comment_repo.find_by_post(post_id, include_deleted=False)

        # Assert
        assert deleted is not None and deleted.is_deleted
        assert [c.id for c in all_rows] == [root.id, reply.id]
        assert [c.id for c in live_rows] == [reply.id]
        assert all(c.created_at.tzinfo is not None for c in all_rows)

    @pytest.mark.asyncio
    async def test_update_content_skips_tombstones(self, integration_env):
        comment_repo = await integration_env.get(CommentRepository)
        post_id = PostId(uuid4())
        live = await comment_repo.save(make_comment(post_id))
        dead = await comment_repo.save(make_comment(post_id, deleted=True, minutes=1))

        updated = await comment_repo.update_content(live.id, "Edited")
        skipped = await comment_repo.update_content(dead.id, "Edited")

        assert updated.content == "Edited"
        assert skipped is None


class TestPostgresCommentLikeRepository:
    """Integration tests for PostgresCommentLikeRepository."""

    @pytest.mark.asyncio
    async def test_toggle_and_aggregate(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        like_repo = await integration_env.get(CommentLikeRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        viewer = UserId(uuid4())

        # Act
        liked = await like_repo.toggle(comment.id, viewer)
        await like_repo.toggle(comment.id, UserId(uuid4()))
        as_viewer = await like_repo.find_like_state([comment.id], viewer)
        anonymous = await like_repo.find_like_state([comment.id], None)
        unliked = await like_repo.toggle(comment.id, viewer)

        # Assert
        assert liked == LikeState(count=1, user_has_liked=True)
        assert as_viewer[comment.id] == LikeState(count=2, user_has_liked=True)
        assert anonymous[comment.id] == LikeState(count=2, user_has_liked=False)
        assert unliked == LikeState(count=1, user_has_liked=False)


class TestPostgresCommentReportRepository:
    """Integration tests for PostgresCommentReportRepository."""

    @pytest.mark.asyncio
    async def test_save_and_find_pending(self, integration_env):
        # Arrange
        comment_repo = await integration_env.get(CommentRepository)
        report_repo = await integration_env.get(CommentReportRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        reporter = UserId(uuid4())
        report = CommentReport(
            id=ReportId(uuid4()),
            comment_id=comment.id,
            reporter_id=reporter,
            reason=ReportReason.HATE_SPEECH,
        )

        # Act
        await report_repo.save(report)
        pending = await report_repo.find_pending_by_reporter(comment.id, reporter)
        resolved = await report_repo.save(
            report.model_copy(update={"status": ReportStatus.RESOLVED})
        )
        after = await report_repo.find_pending_by_reporter(comment.id, reporter)

        # Assert
        assert pending.id == report.id
        assert pending.reason == ReportReason.HATE_SPEECH
        assert resolved.status == ReportStatus.RESOLVED
        assert after is None
