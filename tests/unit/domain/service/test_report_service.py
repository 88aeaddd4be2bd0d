"""Unit tests for ReportService."""

from uuid import uuid4

import pytest

from tests.harness import create_env_fixture, make_comment
from tribuna.domain.error import NotFoundError, ValidationError
from tribuna.domain.repository import CommentRepository
from tribuna.domain.service import ReportService, normalize_description, parse_reason
from tribuna.domain.value import (
    PostId,
    ReportId,
    ReportReason,
    ReportStatus,
    ReviewAction,
    UserId,
)

unit_env = create_env_fixture()


class TestReportInputs:
    """Tests for reason and description parsing."""

    def test_parse_reason_accepts_known_values(self):
        assert parse_reason("spam") == ReportReason.SPAM
        assert parse_reason(ReportReason.OTHER) == ReportReason.OTHER

    def test_parse_reason_rejects_unknown_value(self):
        with pytest.raises(ValidationError, match="Unknown report reason"):
            parse_reason("boring")

    def test_blank_description_becomes_none(self):
        assert normalize_description("   ", 500) is None
        assert normalize_description(None, 500) is None
        assert normalize_description(" offside ", 500) == "offside"

    def test_long_description_is_rejected(self):
        with pytest.raises(ValidationError):
            normalize_description("d" * 501, 500)


class TestCreateReport:
    """Tests for create_report method."""

    @pytest.mark.asyncio
    async def test_create_report_is_pending(self, unit_env):
        # Arrange
        report_service = await unit_env.get(ReportService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        reporter = UserId(uuid4())

        # Act
        report = await report_service.create_report(
            comment.id, reporter, "harassment", "Targets another user"
        )

        # Assert
        assert report.status == ReportStatus.PENDING
        assert report.reason == ReportReason.HARASSMENT
        assert report.description == "Targets another user"
        assert report.reviewed_at is None

    @pytest.mark.asyncio
    async def test_repeat_report_returns_pending_one(self, unit_env):
        report_service = await unit_env.get(ReportService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        reporter = UserId(uuid4())

        first = await report_service.create_report(comment.id, reporter, "spam")
        second = await report_service.create_report(comment.id, reporter, "other")

        assert second.id == first.id
        assert len(await report_service.list_reports()) == 1

    @pytest.mark.asyncio
    async def test_report_on_tombstoned_comment_raises(self, unit_env):
        report_service = await unit_env.get(ReportService)
        comment_repo = await unit_env.get(CommentRepository)
        dead = await comment_repo.save(make_comment(PostId(uuid4()), deleted=True))

        with pytest.raises(NotFoundError):
            await report_service.create_report(dead.id, UserId(uuid4()), "spam")


class TestReviewReport:
    """Tests for review_report method."""

    @pytest.mark.asyncio
    async def test_resolve_marks_report_reviewed(self, unit_env):
        # Arrange
        report_service = await unit_env.get(ReportService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        report = await report_service.create_report(comment.id, UserId(uuid4()), "spam")
        moderator = UserId(uuid4())

        # Act
        reviewed = await report_service.review_report(
            report.id, moderator, ReviewAction.RESOLVE
        )

        # Assert
        assert reviewed.status == ReportStatus.RESOLVED
        assert reviewed.reviewed_by == moderator
        assert reviewed.reviewed_at is not None
        pending = await report_service.list_reports(status=ReportStatus.PENDING)
        assert pending == []

    @pytest.mark.asyncio
    async def test_second_review_is_rejected(self, unit_env):
        report_service = await unit_env.get(ReportService)
        comment_repo = await unit_env.get(CommentRepository)
        comment = await comment_repo.save(make_comment(PostId(uuid4())))
        report = await report_service.create_report(comment.id, UserId(uuid4()), "spam")
        await report_service.review_report(report.id, UserId(uuid4()), ReviewAction.DISMISS)

        with pytest.raises(ValidationError, match="already dismissed"):
            await report_service.review_report(
                report.id, UserId(uuid4()), ReviewAction.RESOLVE
            )

    @pytest.mark.asyncio
    async def test_review_unknown_report_raises(self, unit_env):
        report_service = await unit_env.get(ReportService)

        with pytest.raises(NotFoundError):
            await report_service.review_report(
                ReportId(uuid4()), UserId(uuid4()), ReviewAction.RESOLVE
            )
