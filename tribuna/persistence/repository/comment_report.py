"""PostgreSQL implementation of CommentReport repository."""

from typing import List, Optional

from sqlalchemy import and_, desc, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from tribuna.domain.model import CommentReport
from tribuna.domain.repository import CommentReportRepository
from tribuna.domain.value import CommentId, ReportId, ReportStatus, UserId
from tribuna.persistence.mappers import comment_report_to_dict, row_to_comment_report
from tribuna.persistence.tables import comment_reports_table


class PostgresCommentReportRepository(CommentReportRepository):
    """PostgreSQL implementation of CommentReportRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, report_id: ReportId) -> Optional[CommentReport]:
        """Find a report by ID."""
        stmt = select(comment_reports_table).where(
            comment_reports_table.c.id == report_id
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_report(row._asdict()) if row else None

    async def find_pending_by_reporter(
        self, comment_id: CommentId, reporter_id: UserId
    ) -> Optional[CommentReport]:
        """Find a reporter's pending report on a comment."""
        stmt = select(comment_reports_table).where(
            and_(
                comment_reports_table.c.comment_id == comment_id,
                comment_reports_table.c.reporter_id == reporter_id,
                comment_reports_table.c.status == ReportStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.fetchone()
        return row_to_comment_report(row._asdict()) if row else None

    async def find_by_status(
        self,
        status: Optional[ReportStatus] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> List[CommentReport]:
        """List reports, newest first."""
        stmt = select(comment_reports_table)

        if status is not None:
            stmt = stmt.where(comment_reports_table.c.status == status.value)

        stmt = (
            stmt.order_by(desc(comment_reports_table.c.created_at))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        return [row_to_comment_report(row._asdict()) for row in result.fetchall()]

    async def save(self, report: CommentReport) -> CommentReport:
        """Save a report (insert or overwrite)."""
        report_dict = comment_report_to_dict(report)
        stmt = insert(comment_reports_table).values(**report_dict)
        stmt = stmt.on_conflict_do_update(
            index_elements=[comment_reports_table.c.id],
            set_={k: v for k, v in report_dict.items() if k != "id"},
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return report
