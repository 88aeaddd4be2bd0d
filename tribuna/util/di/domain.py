"""Domain layer DI providers."""

from dishka import Scope, provide

from tribuna.config import ThreadSettings
from tribuna.domain.repository import (
    CommentLikeRepository,
    CommentReportRepository,
    CommentRepository,
)
from tribuna.domain.service import CommentService, LikeService, ReportService
from tribuna.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_comment_service(
        self, comment_repository: CommentRepository, thread_settings: ThreadSettings
    ) -> CommentService:
        """Provide comment domain service."""
        return CommentService(
            comment_repository=comment_repository, thread_settings=thread_settings
        )

    @provide
    def get_like_service(
        self, like_repository: CommentLikeRepository, comment_service: CommentService
    ) -> LikeService:
        """Provide like domain service."""
        return LikeService(
            like_repository=like_repository, comment_service=comment_service
        )

    @provide
    def get_report_service(
        self,
        report_repository: CommentReportRepository,
        comment_service: CommentService,
        thread_settings: ThreadSettings,
    ) -> ReportService:
        """Provide report domain service."""
        return ReportService(
            report_repository=report_repository,
            comment_service=comment_service,
            thread_settings=thread_settings,
        )
