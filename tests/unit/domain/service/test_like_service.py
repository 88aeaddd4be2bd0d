"""Unit tests for LikeService."""

from uuid import uuid4

import pytest

from tests.harness import create_env_fixture, make_comment
from tribuna.domain.error import NotFoundError
from tribuna.domain.repository import CommentRepository
from tribuna.domain.service import LikeService
from tribuna.domain.value import CommentId, LikeState, PostId, UserId

unit_env = create_env_fixture()


class TestToggleLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_first_toggle_likes_comment(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        # Act
        state = await like_service.toggle_like(comment.id, UserId(uuid4()))

        # Assert
        assert state == LikeState(count=1, user_has_liked=True)

    @pytest.mark.asyncio
    async def test_double_toggle_restores_original_state(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        other_user = UserId(uuid4())
        user = UserId(uuid4())
        await like_service.toggle_like(comment.id, other_user)
        before = await like_service.fetch_like_state([comment.id], user)

        # Act
        await like_service.toggle_like(comment.id, user)
        state = await like_service.toggle_like(comment.id, user)

        # Assert
        assert state == LikeState(count=1, user_has_liked=False)
        assert await like_service.fetch_like_state([comment.id], user) == before

    @pytest.mark.asyncio
    async def test_toggle_on_tombstoned_comment_raises(self, unit_env):
        like_service = await unit_env.get(LikeService)
        comment_repo = await unit_env.get(CommentRepository)
        dead = await comment_repo.save(make_comment(PostId(uuid4()), deleted=True))

        with pytest.raises(NotFoundError):
            await like_service.toggle_like(dead.id, UserId(uuid4()))

    @pytest.mark.asyncio
    async def test_toggle_on_missing_comment_raises(self, unit_env):
        like_service = await unit_env.get(LikeService)

        with pytest.raises(NotFoundError):
            await like_service.toggle_like(CommentId(uuid4()), UserId(uuid4()))


class TestFetchLikeState:
    """Tests for fetch_like_state method."""

    @pytest.mark.asyncio
    async def test_every_requested_comment_gets_a_state(self, unit_env):
        # Arrange
        like_service = await unit_env.get(LikeService)
        comment_repo = await unit_env.get(CommentRepository)
        post_id = PostId(uuid4())
        liked = await comment_repo.save(make_comment(post_id))
        unliked = await comment_repo.save(make_comment(post_id, minutes=1))
        viewer = UserId(uuid4())
        await like_service.toggle_like(liked.id, viewer)
        await like_service.toggle_like(liked.id, UserId(uuid4()))

        # Act
        states = await like_service.fetch_like_state([liked.id, unliked.id], viewer)

        # Assert
        assert states[liked.id] == LikeState(count=2, user_has_liked=True)
        assert states[unliked.id] == LikeState()

    @pytest.mark.asyncio
    async def test_anonymous_viewer_never_has_liked(self, unit_env):
        like_service = await unit_env.get(LikeService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        await like_service.toggle_like(comment.id, UserId(uuid4()))

        states = await like_service.fetch_like_state([comment.id], None)

        assert states[comment.id] == LikeState(count=1, user_has_liked=False)

    @pytest.mark.asyncio
    async def test_empty_batch_returns_empty_mapping(self, unit_env):
        like_service = await unit_env.get(LikeService)

        assert await like_service.fetch_like_state([], UserId(uuid4())) == {}
