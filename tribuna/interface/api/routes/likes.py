"""Like routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends

from tribuna.application.usecase.like import (
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
)
from tribuna.domain.error import DomainError
from tribuna.domain.model import Viewer
from tribuna.interface.api.viewer import get_viewer
from tribuna.interface.error import to_http_exception

router = APIRouter(prefix="/comments", tags=["likes"], route_class=DishkaRoute)


@router.post("/{comment_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    comment_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    viewer: Viewer = Depends(get_viewer),
) -> ToggleLikeResponse:
    """Like a comment, or remove the like if already given.

    Requires authentication.

    Returns:
        New like count and the viewer's like flag
    """
    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(
                comment_id=comment_id,
                user_id=str(viewer.user_id) if viewer.user_id else None,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
