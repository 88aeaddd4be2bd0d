"""List reports use case."""

from pydantic import BaseModel, Field

from tribuna.application.policy import ensure_moderator
from tribuna.application.usecase.base import BaseUseCase, parse_optional_uuid
from tribuna.domain.model import CommentReport
from tribuna.domain.service import ReportService
from tribuna.domain.value import ReportStatus, UserId, UserRole


class ListReportsRequest(BaseModel):
    """List reports request."""

    viewer_id: str | None
    viewer_role: UserRole = UserRole.REGISTERED_USER
    status: ReportStatus | None = None  # All statuses when None
    limit: int = Field(default=50, ge=1, le=200)
    offset: int = Field(default=0, ge=0)


class ListReportsResponse(BaseModel):
    """List reports response."""

    reports: list[CommentReport]
    total: int


class ListReportsUseCase(BaseUseCase):
    """Use case for the moderation queue."""

    def __init__(self, report_service: ReportService) -> None:
        self.report_service = report_service

    async def execute(self, request: ListReportsRequest) -> ListReportsResponse:
        """Execute list reports flow.

        Raises:
            AuthError: If the viewer is not a moderator
        """
        viewer_id = parse_optional_uuid(request.viewer_id, "viewer_id")
        ensure_moderator(
            UserId(viewer_id) if viewer_id else None,
            request.viewer_role,
            "list reports",
        )

        reports = await self.report_service.list_reports(
            status=request.status, limit=request.limit, offset=request.offset
        )
        return ListReportsResponse(reports=reports, total=len(reports))
