"""Mock persistence providers for testing."""

from dishka import Scope, provide

from tribuna.domain.repository import (
    CommentLikeRepository,
    CommentReportRepository,
    CommentRepository,
)
from tribuna.persistence.repository.inmemory import (
    InMemoryCommentLikeRepository,
    InMemoryCommentReportRepository,
    InMemoryCommentRepository,
)
from tribuna.util.di.base import ProviderBase
from tribuna.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses REQUEST scope to ensure test isolation - each test gets fresh repositories.
    """

    __is_mock__ = True

    @provide(scope=Scope.REQUEST)
    def get_comment_repository(self) -> CommentRepository:
        """Provide in-memory comment repository."""
        return InMemoryCommentRepository()

    @provide(scope=Scope.REQUEST)
    def get_comment_like_repository(self) -> CommentLikeRepository:
        """Provide in-memory comment like repository."""
        return InMemoryCommentLikeRepository()

    @provide(scope=Scope.REQUEST)
    def get_comment_report_repository(self) -> CommentReportRepository:
        """Provide in-memory comment report repository."""
        return InMemoryCommentReportRepository()


class SharedInMemoryPersistenceProvider(ProviderBase):
    """In-memory repositories shared across requests.

    For API tests, where every HTTP call opens its own request scope.
    Not a PersistenceProvider subclass, so it never competes with the
    mock selected by ``get_provider``.
    """

    @provide(scope=Scope.APP)
    def get_comment_repository(self) -> CommentRepository:
        return InMemoryCommentRepository()

    @provide(scope=Scope.APP)
    def get_comment_like_repository(self) -> CommentLikeRepository:
        return InMemoryCommentLikeRepository()

    @provide(scope=Scope.APP)
    def get_comment_report_repository(self) -> CommentReportRepository:
        return InMemoryCommentReportRepository()
