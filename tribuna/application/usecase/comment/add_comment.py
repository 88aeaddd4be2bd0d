"""Add comment use case."""

from pydantic import BaseModel

from tribuna.application.policy import require_user
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.model import Comment
from tribuna.domain.service import CommentService
from tribuna.domain.value import PostId, UserId


class AddCommentRequest(BaseModel):
    """Add comment request."""

    post_id: str  # UUID string
    author_id: str | None  # None when nobody is signed in
    content: str


class AddCommentResponse(BaseModel):
    """Add comment response."""

    comment: Comment


class AddCommentUseCase(BaseUseCase):
    """Use case for posting a root comment on a post."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize add comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: AddCommentRequest) -> AddCommentResponse:
        """Execute add comment flow.

        Authentication and content are checked before the backend call.

        Raises:
            AuthError: If no user is signed in
            ValidationError: If content is empty or too long
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        author_id = require_user(
            parse_optional_uuid(request.author_id, "author_id"), "comment"
        )
        self.comment_service.validate_content(request.content)

        comment = await self.comment_service.create_comment(
            post_id=post_id,
            author_id=UserId(author_id),
            parent_comment_id=None,
            content=request.content,
        )
        return AddCommentResponse(comment=comment)
