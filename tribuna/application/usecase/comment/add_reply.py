"""Add reply use case."""

from pydantic import BaseModel

from tribuna.application.policy import require_user
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.error import NotFoundError, ValidationError
from tribuna.domain.model import Comment
from tribuna.domain.service import CommentService
from tribuna.domain.value import CommentId, UserId


class AddReplyRequest(BaseModel):
    """Add reply request."""

    parent_id: str  # UUID string of the comment being answered
    author_id: str | None
    content: str
    post_id: str | None = None  # When given, the parent must belong to it


class AddReplyResponse(BaseModel):
    """Add reply response."""

    comment: Comment


class AddReplyUseCase(BaseUseCase):
    """Use case for replying to a comment at any depth."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: AddReplyRequest) -> AddReplyResponse:
        """Execute add reply flow.

        The reply is stored under its true parent. Display depth is capped
        when the thread is rendered, so deep chains never fail here unless a
        storage depth cap is configured.

        Raises:
            AuthError: If no user is signed in
            ValidationError: If content is invalid or the parent is on another post
            NotFoundError: If the parent is missing or tombstoned
            DepthExceededError: If a storage depth cap is configured and exceeded
        """
        parent_id = CommentId(parse_uuid(request.parent_id, "parent_id"))
        expected_post_id = parse_optional_uuid(request.post_id, "post_id")
        author_id = require_user(
            parse_optional_uuid(request.author_id, "author_id"), "reply"
        )
        self.comment_service.validate_content(request.content)

        parent = await self.comment_service.get_comment_by_id(parent_id)
        if parent is None or parent.is_deleted:
            raise NotFoundError("Comment", request.parent_id)
        if expected_post_id is not None and parent.post_id != expected_post_id:
            raise ValidationError("Parent comment does not belong to this post")

        comment = await self.comment_service.create_comment(
            post_id=parent.post_id,
            author_id=UserId(author_id),
            parent_comment_id=parent_id,
            content=request.content,
        )
        return AddReplyResponse(comment=comment)
