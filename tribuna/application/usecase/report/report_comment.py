"""Report comment use case."""

from pydantic import BaseModel

from tribuna.application.policy import require_user
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.model import CommentReport
from tribuna.domain.service import ReportService, normalize_description, parse_reason
from tribuna.domain.value import CommentId, UserId


class ReportCommentRequest(BaseModel):
    """Report comment request."""

    comment_id: str
    reporter_id: str | None
    reason: str  # Checked against ReportReason by the service
    description: str | None = None


class ReportCommentResponse(BaseModel):
    """Report comment response."""

    report: CommentReport


class ReportCommentUseCase(BaseUseCase):
    """Use case for flagging a comment for moderation.

    Reporting never changes the comment itself.
    """

    def __init__(self, report_service: ReportService) -> None:
        """Initialize report comment use case.

        Args:
            report_service: Report domain service
        """
        self.report_service = report_service

    async def execute(self, request: ReportCommentRequest) -> ReportCommentResponse:
        """Execute report comment flow.

        Raises:
            AuthError: If no user is signed in
            ValidationError: If the reason is unknown or the description too long
            NotFoundError: If the comment is missing or tombstoned
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        reporter_id = require_user(
            parse_optional_uuid(request.reporter_id, "reporter_id"), "report comments"
        )
        reason = parse_reason(request.reason)
        normalize_description(
            request.description,
            self.report_service.thread_settings.max_report_description_length,
        )

        report = await self.report_service.create_report(
            comment_id=comment_id,
            reporter_id=UserId(reporter_id),
            reason=reason,
            description=request.description,
        )
        return ReportCommentResponse(report=report)
