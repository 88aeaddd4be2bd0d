"""Report and moderation routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from tribuna.application.usecase.report import (
    ListReportsRequest,
    ListReportsResponse,
    ListReportsUseCase,
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
    ReviewReportRequest,
    ReviewReportResponse,
    ReviewReportUseCase,
)
from tribuna.domain.error import DomainError
from tribuna.domain.model import Viewer
from tribuna.domain.value import ReportStatus, ReviewAction
from tribuna.interface.api.viewer import get_viewer
from tribuna.interface.error import to_http_exception

router = APIRouter(tags=["reports"], route_class=DishkaRoute)


def _user_id(viewer: Viewer) -> str | None:
    return str(viewer.user_id) if viewer.user_id else None


class ReportCommentAPIRequest(BaseModel):
    """API request for reporting a comment."""

    reason: str
    description: str | None = None


@router.post(
    "/comments/{comment_id}/reports",
    response_model=ReportCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def report_comment(
    comment_id: str,
    request: ReportCommentAPIRequest,
    report_comment_use_case: FromDishka[ReportCommentUseCase],
    viewer: Viewer = Depends(get_viewer),
) -> ReportCommentResponse:
    """Report a comment for moderation.

    Repeating a report while it is pending returns the pending report.
    """
    try:
        return await report_comment_use_case.execute(
            ReportCommentRequest(
                comment_id=comment_id,
                reporter_id=_user_id(viewer),
                reason=request.reason,
                description=request.description,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.get("/reports", response_model=ListReportsResponse)
async def list_reports(
    list_reports_use_case: FromDishka[ListReportsUseCase],
    viewer: Viewer = Depends(get_viewer),
    report_status: ReportStatus | None = Query(default=None, alias="status"),
    limit: int = Query(default=50, ge=1, le=200),
    offset: int = Query(default=0, ge=0),
) -> ListReportsResponse:
    """List reports, newest first. Moderators only."""
    try:
        return await list_reports_use_case.execute(
            ListReportsRequest(
                viewer_id=_user_id(viewer),
                viewer_role=viewer.role,
                status=report_status,
                limit=limit,
                offset=offset,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


class ReviewReportAPIRequest(BaseModel):
    """API request for reviewing a report."""

    action: ReviewAction
    delete_comment: bool = False


@router.post("/reports/{report_id}/review", response_model=ReviewReportResponse)
async def review_report(
    report_id: str,
    request: ReviewReportAPIRequest,
    review_report_use_case: FromDishka[ReviewReportUseCase],
    viewer: Viewer = Depends(get_viewer),
) -> ReviewReportResponse:
    """Resolve or dismiss a report, optionally deleting the comment. Moderators only."""
    try:
        return await review_report_use_case.execute(
            ReviewReportRequest(
                report_id=report_id,
                reviewer_id=_user_id(viewer),
                reviewer_role=viewer.role,
                action=request.action,
                delete_comment=request.delete_comment,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
