"""Comment report domain service."""

from datetime import datetime, timezone
from uuid import uuid4

import logfire

from tribuna.config import ThreadSettings
from tribuna.domain.error import NotFoundError, ValidationError
from tribuna.domain.model.comment_report import CommentReport
from tribuna.domain.repository import CommentReportRepository
from tribuna.domain.value import (
    CommentId,
    ReportId,
    ReportReason,
    ReportStatus,
    ReviewAction,
    UserId,
)

from .base import Service
from .comment_service import CommentService


def parse_reason(reason: ReportReason | str) -> ReportReason:
    """Coerce a reason into the fixed enumeration.

    Raises:
        ValidationError: If the reason is not one of the known values
    """
    try:
        return ReportReason(reason)
    except ValueError:
        allowed = ", ".join(r.value for r in ReportReason)
        raise ValidationError(f"Unknown report reason '{reason}' (allowed: {allowed})")


def normalize_description(description: str | None, max_length: int) -> str | None:
    """Trim an optional report description; blank becomes None.

    Raises:
        ValidationError: If the description is too long
    """
    if description is None:
        return None
    text = description.strip()
    if not text:
        return None
    if len(text) > max_length:
        raise ValidationError(f"Report description exceeds {max_length} characters")
    return text


class ReportService(Service):
    """Domain service for comment reports and their moderation."""

    def __init__(
        self,
        report_repository: CommentReportRepository,
        comment_service: CommentService,
        thread_settings: ThreadSettings,
    ) -> None:
        """Initialize report service.

        Args:
            report_repository: Comment report repository
            comment_service: Comment domain service
            thread_settings: Thread limits (description length)
        """
        self.report_repository = report_repository
        self.comment_service = comment_service
        self.thread_settings = thread_settings

    async def create_report(
        self,
        comment_id: CommentId,
        reporter_id: UserId,
        reason: ReportReason | str,
        description: str | None = None,
    ) -> CommentReport:
        """File a report against a comment.

        A reporter has at most one pending report per comment: repeating the
        call returns the pending report instead of creating another one.

        Args:
            comment_id: Reported comment
            reporter_id: Reporting user
            reason: One of the fixed report reasons
            description: Optional free-text details

        Returns:
            The new (or already pending) report

        Raises:
            ValidationError: If reason or description is invalid
            NotFoundError: If the comment is missing or tombstoned
        """
        with logfire.span(
            "report_service.create_report",
            comment_id=str(comment_id),
            reporter_id=str(reporter_id),
            reason=str(reason),
        ):
            parsed_reason = parse_reason(reason)
            text = normalize_description(
                description, self.thread_settings.max_report_description_length
            )

            await self.comment_service.get_live_comment(comment_id)

            existing = await self.report_repository.find_pending_by_reporter(
                comment_id, reporter_id
            )
            if existing:
                logfire.info(
                    "Pending report already exists",
                    report_id=str(existing.id),
                    comment_id=str(comment_id),
                )
                return existing

            report = CommentReport(
                id=ReportId(uuid4()),
                comment_id=comment_id,
                reporter_id=reporter_id,
                reason=parsed_reason,
                description=text,
                status=ReportStatus.PENDING,
                created_at=datetime.now(timezone.utc),
            )
            saved = await self.report_repository.save(report)
            logfire.info(
                "Comment reported",
                report_id=str(saved.id),
                comment_id=str(comment_id),
                reason=parsed_reason.value,
            )
            return saved

    async def list_reports(
        self, status: ReportStatus | None = None, limit: int = 50, offset: int = 0
    ) -> list[CommentReport]:
        """List reports, newest first."""
        with logfire.span(
            "report_service.list_reports",
            status=status.value if status else None,
            limit=limit,
            offset=offset,
        ):
            reports = await self.report_repository.find_by_status(
                status=status, limit=limit, offset=offset
            )
            logfire.info("Reports listed", count=len(reports))
            return reports

    async def get_report(self, report_id: ReportId) -> CommentReport:
        """Get a report by ID.

        Raises:
            NotFoundError: If the report does not exist
        """
        report = await self.report_repository.find_by_id(report_id)
        if report is None:
            logfire.warn("Report not found", report_id=str(report_id))
            raise NotFoundError("Report", str(report_id))
        return report

    async def review_report(
        self, report_id: ReportId, reviewer_id: UserId, action: ReviewAction
    ) -> CommentReport:
        """Resolve or dismiss a pending report.

        Args:
            report_id: Report ID
            reviewer_id: Moderator reviewing the report
            action: Resolve or dismiss

        Returns:
            The reviewed report

        Raises:
            NotFoundError: If the report does not exist
            ValidationError: If the report was already reviewed
        """
        with logfire.span(
            "report_service.review_report",
            report_id=str(report_id),
            reviewer_id=str(reviewer_id),
            action=action.value,
        ):
            report = await self.get_report(report_id)
            if report.status != ReportStatus.PENDING:
                raise ValidationError(
                    f"Report {report_id} was already {report.status.value}"
                )

            status = (
                ReportStatus.RESOLVED
                if action == ReviewAction.RESOLVE
                else ReportStatus.DISMISSED
            )
            reviewed = await self.report_repository.save(
                report.model_copy(
                    update={
                        "status": status,
                        "reviewed_at": datetime.now(timezone.utc),
                        "reviewed_by": reviewer_id,
                    }
                )
            )
            logfire.info(
                "Report reviewed",
                report_id=str(report_id),
                comment_id=str(report.comment_id),
                status=status.value,
            )
            return reviewed
