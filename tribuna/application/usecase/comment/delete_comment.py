"""Delete comment use case."""

from pydantic import BaseModel

from tribuna.application.policy import ensure_can_delete
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.error import NotFoundError
from tribuna.domain.model import Comment
from tribuna.domain.service import CommentService
from tribuna.domain.value import CommentId, UserId, UserRole


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    requester_id: str | None
    requester_role: UserRole = UserRole.REGISTERED_USER


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    comment: Comment  # The tombstone


class DeleteCommentUseCase(BaseUseCase):
    """Use case for tombstoning a comment.

    Replies stay attached; the thread shows a placeholder in the deleted
    comment's place.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            AuthError: If the requester is neither the author nor a moderator
            NotFoundError: If the comment is missing or already deleted
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        requester_id = parse_optional_uuid(request.requester_id, "requester_id")

        comment = await self.comment_service.get_comment_by_id(comment_id)
        if comment is None or comment.is_deleted:
            raise NotFoundError("Comment", request.comment_id)

        ensure_can_delete(
            comment,
            UserId(requester_id) if requester_id else None,
            request.requester_role,
        )

        deleted = await self.comment_service.delete_comment(comment_id)
        return DeleteCommentResponse(comment=deleted)
