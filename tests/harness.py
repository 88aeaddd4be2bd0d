"""Test harness for unit and integration tests.

Settings are loaded from environment variables (configure via .env or export).
Integration tests assume PostgreSQL is running and migrated.
"""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest_asyncio

from tribuna.domain.model import Comment
from tribuna.domain.value import CommentId, PostId, UserId
from tribuna.util.di import Component
from tests.di import build_test_container

BASE_TIME = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


def create_env_fixture(unmock: set[Component] | None = None):
    """Factory for creating test environment fixtures.

    Creates a pytest fixture that builds a test container with the given
    components unmocked and yields a request-scoped container.

    Args:
        unmock: Components to use real implementations for

    Returns:
        Pytest fixture function that yields AsyncContainer

    Usage:
        # Unit tests - everything mocked, no database needed
        unit_env = create_env_fixture()

        # Integration tests - real persistence, assumes postgres running
        integration_env = create_env_fixture(unmock={"persistence"})

        @pytest.mark.asyncio
        async def test_save_comment(integration_env):
            repo = await integration_env.get(CommentRepository)
            saved = await repo.save(comment)
            assert saved.id == comment.id
    """

    @pytest_asyncio.fixture
    async def _test_environment():
        container = build_test_container(unmock=unmock or set())

        async with container() as request_container:
            yield request_container

        await container.close()

    return _test_environment


def make_comment(
    post_id: PostId,
    *,
    parent: Comment | CommentId | None = None,
    content: str = "Great match report",
    minutes: float = 0,
    author_id: UserId | None = None,
    deleted: bool = False,
    comment_id: CommentId | None = None,
) -> Comment:
    """Build a comment for tests.

    Args:
        post_id: Post the comment belongs to
        parent: Parent comment (or its ID) for replies
        content: Comment text
        minutes: Offset of created_at from BASE_TIME
        author_id: Author (random when omitted)
        deleted: Whether the comment is tombstoned
        comment_id: Explicit ID (random when omitted)
    """
    created_at = BASE_TIME + timedelta(minutes=minutes)
    parent_id = parent.id if isinstance(parent, Comment) else parent
    return Comment(
        id=comment_id or CommentId(uuid4()),
        post_id=post_id,
        author_id=author_id or UserId(uuid4()),
        parent_comment_id=parent_id,
        content=content,
        created_at=created_at,
        updated_at=created_at,
        deleted_at=created_at + timedelta(minutes=1) if deleted else None,
    )
