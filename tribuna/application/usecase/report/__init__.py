"""Report use cases."""

from .list_reports import ListReportsRequest, ListReportsResponse, ListReportsUseCase
from .report_comment import (
    ReportCommentRequest,
    ReportCommentResponse,
    ReportCommentUseCase,
)
from .review_report import (
    ReviewReportRequest,
    ReviewReportResponse,
    ReviewReportUseCase,
)

__all__ = [
    "ListReportsRequest",
    "ListReportsResponse",
    "ListReportsUseCase",
    "ReportCommentRequest",
    "ReportCommentResponse",
    "ReportCommentUseCase",
    "ReviewReportRequest",
    "ReviewReportResponse",
    "ReviewReportUseCase",
]
