"""Edit comment use case."""

from pydantic import BaseModel

from tribuna.application.policy import ensure_can_edit
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.error import NotFoundError
from tribuna.domain.model import Comment
from tribuna.domain.service import CommentService
from tribuna.domain.value import CommentId, UserId


class EditCommentRequest(BaseModel):
    """Edit comment request."""

    comment_id: str  # UUID string
    editor_id: str | None  # Must be the author
    content: str  # New content (required, cannot be empty)


class EditCommentResponse(BaseModel):
    """Edit comment response."""

    comment: Comment


class EditCommentUseCase(BaseUseCase):
    """Use case for changing the content of one's own comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize edit comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: EditCommentRequest) -> EditCommentResponse:
        """Execute edit comment flow.

        Args:
            request: Comment ID, editor ID and new content

        Returns:
            The updated comment

        Raises:
            AuthError: If the editor is not the author
            ValidationError: If content is empty or too long
            NotFoundError: If the comment is missing or tombstoned
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        editor_id = parse_optional_uuid(request.editor_id, "editor_id")
        self.comment_service.validate_content(request.content)

        # 1. Retrieve existing comment
        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None or comment.is_deleted:
            raise NotFoundError("Comment", request.comment_id)

        # 2. Check authorization (user owns comment)
        ensure_can_edit(comment, UserId(editor_id) if editor_id else None)

        # 3. Update via service
        updated = await self.comment_service.update_comment(
            comment_id, request.content
        )
        return EditCommentResponse(comment=updated)
