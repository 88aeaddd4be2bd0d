"""Application layer DI providers."""

from dishka import Scope, provide

from tribuna.application.session import ThreadSessionFactory
from tribuna.application.usecase.comment import (
    AddCommentUseCase,
    AddReplyUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
    GetThreadUseCase,
)
from tribuna.application.usecase.like import ToggleLikeUseCase
from tribuna.application.usecase.report import (
    ListReportsUseCase,
    ReportCommentUseCase,
    ReviewReportUseCase,
)
from tribuna.config import ThreadSettings
from tribuna.domain.service import CommentService, LikeService, ReportService
from tribuna.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Comment use cases
    @provide(scope=Scope.REQUEST)
    def get_add_comment_use_case(
        self, comment_service: CommentService
    ) -> AddCommentUseCase:
        """Provide add comment use case."""
        return AddCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_add_reply_use_case(self, comment_service: CommentService) -> AddReplyUseCase:
        """Provide add reply use case."""
        return AddReplyUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_comment_use_case(
        self, comment_service: CommentService
    ) -> EditCommentUseCase:
        """Provide edit comment use case."""
        return EditCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_delete_comment_use_case(
        self, comment_service: CommentService
    ) -> DeleteCommentUseCase:
        """Provide delete comment use case."""
        return DeleteCommentUseCase(comment_service=comment_service)

    @provide(scope=Scope.REQUEST)
    def get_get_thread_use_case(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        thread_settings: ThreadSettings,
    ) -> GetThreadUseCase:
        """Provide get thread use case."""
        return GetThreadUseCase(
            comment_service=comment_service,
            like_service=like_service,
            thread_settings=thread_settings,
        )

    # Like use cases
    @provide(scope=Scope.REQUEST)
    def get_toggle_like_use_case(self, like_service: LikeService) -> ToggleLikeUseCase:
        """Provide toggle like use case."""
        return ToggleLikeUseCase(like_service=like_service)

    # Report use cases
    @provide(scope=Scope.REQUEST)
    def get_report_comment_use_case(
        self, report_service: ReportService
    ) -> ReportCommentUseCase:
        """Provide report comment use case."""
        return ReportCommentUseCase(report_service=report_service)

    @provide(scope=Scope.REQUEST)
    def get_list_reports_use_case(
        self, report_service: ReportService
    ) -> ListReportsUseCase:
        """Provide list reports use case."""
        return ListReportsUseCase(report_service=report_service)

    @provide(scope=Scope.REQUEST)
    def get_review_report_use_case(
        self, report_service: ReportService, comment_service: CommentService
    ) -> ReviewReportUseCase:
        """Provide review report use case."""
        return ReviewReportUseCase(
            report_service=report_service, comment_service=comment_service
        )

    # Thread sessions
    @provide(scope=Scope.REQUEST)
    def get_thread_session_factory(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        add_comment_use_case: AddCommentUseCase,
        add_reply_use_case: AddReplyUseCase,
        edit_comment_use_case: EditCommentUseCase,
        delete_comment_use_case: DeleteCommentUseCase,
        toggle_like_use_case: ToggleLikeUseCase,
        report_comment_use_case: ReportCommentUseCase,
        thread_settings: ThreadSettings,
    ) -> ThreadSessionFactory:
        """Provide thread session factory."""
        return ThreadSessionFactory(
            comment_service=comment_service,
            like_service=like_service,
            add_comment_use_case=add_comment_use_case,
            add_reply_use_case=add_reply_use_case,
            edit_comment_use_case=edit_comment_use_case,
            delete_comment_use_case=delete_comment_use_case,
            toggle_like_use_case=toggle_like_use_case,
            report_comment_use_case=report_comment_use_case,
            thread_settings=thread_settings,
        )
