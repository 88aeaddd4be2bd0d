"""Creates thread sessions wired to the request's services."""

from tribuna.application.usecase.comment import (
    AddCommentUseCase,
    AddReplyUseCase,
    DeleteCommentUseCase,
    EditCommentUseCase,
)
from tribuna.application.usecase.like import ToggleLikeUseCase
from tribuna.application.usecase.report import ReportCommentUseCase
from tribuna.config import ThreadSettings
from tribuna.domain.model import Viewer
from tribuna.domain.service import CommentService, LikeService
from tribuna.domain.value import PostId

from .thread_session import ThreadSession


class ThreadSessionFactory:
    """Builds a ThreadSession per (post, viewer)."""

    def __init__(
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
    ) -> None:
        self.comment_service = comment_service
        self.like_service = like_service
        self.add_comment_use_case = add_comment_use_case
        self.add_reply_use_case = add_reply_use_case
        self.edit_comment_use_case = edit_comment_use_case
        self.delete_comment_use_case = delete_comment_use_case
        self.toggle_like_use_case = toggle_like_use_case
        self.report_comment_use_case = report_comment_use_case
        self.thread_settings = thread_settings

    def create(self, post_id: PostId, viewer: Viewer) -> ThreadSession:
        """Create an empty session; call ``refresh()`` to load it."""
        return ThreadSession(
            post_id,
            viewer,
            comment_service=self.comment_service,
            like_service=self.like_service,
            add_comment_use_case=self.add_comment_use_case,
            add_reply_use_case=self.add_reply_use_case,
            edit_comment_use_case=self.edit_comment_use_case,
            delete_comment_use_case=self.delete_comment_use_case,
            toggle_like_use_case=self.toggle_like_use_case,
            report_comment_use_case=self.report_comment_use_case,
            thread_settings=self.thread_settings,
        )

    async def open(self, post_id: PostId, viewer: Viewer) -> ThreadSession:
        """Create a session and load the thread.

        Raises:
            DomainError: If the initial load fails
        """
        session = self.create(post_id, viewer)
        result = await session.refresh()
        if result.error is not None:
            raise result.error
        return session
