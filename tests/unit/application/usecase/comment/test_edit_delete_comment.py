"""Unit tests for EditCommentUseCase and DeleteCommentUseCase."""

from uuid import uuid4

import pytest

from tests.harness import create_env_fixture, make_comment
from tribuna.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentUseCase,
)
from tribuna.domain.error import AuthError, NotFoundError
from tribuna.domain.repository import CommentRepository
from tribuna.domain.value import PostId, UserId, UserRole

unit_env = create_env_fixture()


class TestEditComment:
    """Tests for editing comments."""

    @pytest.mark.asyncio
    async def test_author_can_edit(self, unit_env):
        # Arrange
        use_case = await unit_env.get(EditCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        author = UserId(uuid4())
        comment = await comment_repo.save(make_comment(PostId(uuid4()), author_id=author))

        # Act
        response = await use_case.execute(
            EditCommentRequest(
                comment_id=str(comment.id), editor_id=str(author), content="Fixed typo"
            )
        )

        # Assert
        assert response.comment.content == "Fixed typo"
        assert (await comment_repo.find_by_id(comment.id)).content == "Fixed typo"

    @pytest.mark.asyncio
    async def test_non_author_edit_leaves_store_unchanged(self, unit_env):
        # Arrange
        use_case = await unit_env.get(EditCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        # Act
        with pytest.raises(AuthError, match="not authorized"):
            await use_case.execute(
                EditCommentRequest(
                    comment_id=str(comment.id),
                    editor_id=str(uuid4()),
                    content="Hijacked",
                )
            )

        # Assert
        assert await comment_repo.find_by_id(comment.id) == comment

    @pytest.mark.asyncio
    async def test_edit_missing_comment_is_not_found(self, unit_env):
        use_case = await unit_env.get(EditCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                EditCommentRequest(
                    comment_id=str(uuid4()), editor_id=str(uuid4()), content="?"
                )
            )


class TestDeleteComment:
    """Tests for deleting comments."""

    @pytest.mark.asyncio
    async def test_author_can_delete(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        author = UserId(uuid4())
        comment = await comment_repo.save(make_comment(PostId(uuid4()), author_id=author))

        response = await use_case.execute(
            DeleteCommentRequest(comment_id=str(comment.id), requester_id=str(author))
        )

        assert response.comment.is_deleted
        assert (await comment_repo.find_by_id(comment.id)).is_deleted

    @pytest.mark.parametrize("role", [UserRole.EDITOR, UserRole.ADMINISTRATOR])
    @pytest.mark.asyncio
    async def test_moderator_can_delete_any_comment(self, unit_env, role):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        response = await use_case.execute(
            DeleteCommentRequest(
                comment_id=str(comment.id),
                requester_id=str(uuid4()),
                requester_role=role,
            )
        )

        assert response.comment.is_deleted

    @pytest.mark.parametrize("role", [UserRole.REGISTERED_USER, UserRole.JOURNALIST])
    @pytest.mark.asyncio
    async def test_other_users_cannot_delete(self, unit_env, role):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))

        with pytest.raises(AuthError):
            await use_case.execute(
                DeleteCommentRequest(
                    comment_id=str(comment.id),
                    requester_id=str(uuid4()),
                    requester_role=role,
                )
            )

        assert not (await comment_repo.find_by_id(comment.id)).is_deleted

    @pytest.mark.asyncio
    async def test_deleting_a_tombstone_is_not_found(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        author = UserId(uuid4())
        comment = await comment_repo.save(
            make_comment(PostId(uuid4()), author_id=author, deleted=True)
        )

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteCommentRequest(comment_id=str(comment.id), requester_id=str(author))
            )
