"""Review report use case."""

from pydantic import BaseModel

from tribuna.application.policy import ensure_moderator
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.error import ValidationError
from tribuna.domain.model import Comment, CommentReport
from tribuna.domain.service import CommentService, ReportService
from tribuna.domain.value import (
    ReportId,
    ReportStatus,
    ReviewAction,
    UserId,
    UserRole,
)


class ReviewReportRequest(BaseModel):
    """Review report request."""

    report_id: str
    reviewer_id: str | None
    reviewer_role: UserRole = UserRole.REGISTERED_USER
    action: ReviewAction
    delete_comment: bool = False  # Tombstone the reported comment as well


class ReviewReportResponse(BaseModel):
    """Review report response."""

    report: CommentReport
    deleted_comment: Comment | None = None


class ReviewReportUseCase(BaseUseCase):
    """Use case for a moderator resolving or dismissing a report."""

    def __init__(
        self, report_service: ReportService, comment_service: CommentService
    ) -> None:
        """Initialize review report use case.

        Args:
            report_service: Report domain service
            comment_service: Comment domain service
        """
        self.report_service = report_service
        self.comment_service = comment_service

    async def execute(self, request: ReviewReportRequest) -> ReviewReportResponse:
        """Execute review report flow.

        Deleting the comment always resolves the report.

        Raises:
            AuthError: If the reviewer is not a moderator
            ValidationError: If asked to dismiss and delete at once, or the
                report was already reviewed
            NotFoundError: If the report (or comment to delete) is missing
        """
        report_id = ReportId(parse_uuid(request.report_id, "report_id"))
        reviewer_id = parse_optional_uuid(request.reviewer_id, "reviewer_id")
        reviewer = ensure_moderator(
            UserId(reviewer_id) if reviewer_id else None,
            request.reviewer_role,
            "review reports",
        )
        if request.delete_comment and request.action == ReviewAction.DISMISS:
            raise ValidationError("A dismissed report cannot delete the comment")

        deleted_comment = None
        if request.delete_comment:
            report = await self.report_service.get_report(report_id)
            if report.status != ReportStatus.PENDING:
                raise ValidationError(
                    f"Report {request.report_id} was already {report.status.value}"
                )
            comment = await self.comment_service.get_comment_by_id(report.comment_id)
            # An already tombstoned comment just resolves the report
            if comment is not None and not comment.is_deleted:
                deleted_comment = await self.comment_service.delete_comment(
                    comment.id
                )

        reviewed = await self.report_service.review_report(
            report_id, reviewer, request.action
        )
        return ReviewReportResponse(report=reviewed, deleted_comment=deleted_comment)
