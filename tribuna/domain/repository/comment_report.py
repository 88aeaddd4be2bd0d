"""Comment report repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from tribuna.domain.model.comment_report import CommentReport
from tribuna.domain.value import CommentId, ReportId, ReportStatus, UserId


class CommentReportRepository(ABC):
    """Repository for CommentReport entity."""

    @abstractmethod
    async def find_by_id(self, report_id: ReportId) -> Optional[CommentReport]:
        """Find a report by ID."""
        pass

    @abstractmethod
    async def find_pending_by_reporter(
        self, comment_id: CommentId, reporter_id: UserId
    ) -> Optional[CommentReport]:
        """Find a reporter's pending report on a comment.

        Args:
            comment_id: The reported comment
            reporter_id: The reporting user

        Returns:
            The pending report if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[CommentReport]:
        """List reports, newest first.

        Args:
            status: Only reports with this status (None for all)
            limit: Maximum number of reports to return
            offset: Number of reports to skip

        Returns:
            List of reports
        """
        pass

    @abstractmethod
    async def save(self, report: CommentReport) -> CommentReport:
        """Save a report (create or update)."""
        pass
