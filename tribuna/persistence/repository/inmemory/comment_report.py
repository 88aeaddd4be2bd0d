"""In-memory comment report repository for testing."""

from typing import Optional

from tribuna.domain.model.comment_report import CommentReport
from tribuna.domain.repository.comment_report import CommentReportRepository
from tribuna.domain.value import CommentId, ReportId, ReportStatus, UserId


class InMemoryCommentReportRepository(CommentReportRepository):
    """In-memory implementation of CommentReportRepository for testing."""

    def __init__(self) -> None:
        self._reports: dict[ReportId, CommentReport] = {}

    async def find_by_id(self, report_id: ReportId) -> Optional[CommentReport]:
        """Find a report by ID."""
        return self._reports.get(report_id)

    async def find_pending_by_reporter(
        self, comment_id: CommentId, reporter_id: UserId
    ) -> Optional[CommentReport]:
        """Find a reporter's pending report on a comment."""
        for report in self._reports.values():
            if (
                report.comment_id == comment_id
                and report.reporter_id == reporter_id
                and report.status == ReportStatus.PENDING
            ):
                return report
        return None

    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[CommentReport]:
        """List reports, newest first."""
        reports = list(self._reports.values())

        if status is not None:
            reports = [r for r in reports if r.status == status]

        reports.sort(key=lambda r: r.created_at, reverse=True)

        # Paginate
        return reports[offset : offset + limit]

    async def save(self, report: CommentReport) -> CommentReport:
        """Save or update a report."""
        self._reports[report.id] = report
        return report
