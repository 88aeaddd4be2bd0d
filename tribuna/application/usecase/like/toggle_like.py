"""Toggle like use case."""

from pydantic import BaseModel

from tribuna.application.policy import require_user
from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.domain.service import LikeService
from tribuna.domain.value import CommentId, UserId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    comment_id: str  # UUID string
    user_id: str | None


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    comment_id: str
    likes_count: int
    user_has_liked: bool


class ToggleLikeUseCase(BaseUseCase):
    """Use case for liking a comment or taking the like back."""

    def __init__(self, like_service: LikeService) -> None:
        """Initialize toggle like use case.

        Args:
            like_service: Like domain service
        """
        self.like_service = like_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Two sequential toggles by the same user restore the original state.

        Raises:
            AuthError: If no user is signed in
            NotFoundError: If the comment is missing or tombstoned
        """
        comment_id = CommentId(parse_uuid(request.comment_id, "comment_id"))
        user_id = require_user(
            parse_optional_uuid(request.user_id, "user_id"), "like comments"
        )

        state = await self.like_service.toggle_like(comment_id, UserId(user_id))

        return ToggleLikeResponse(
            comment_id=request.comment_id,
            likes_count=state.count,
            user_has_liked=state.user_has_liked,
        )
