"""Comment routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, Field

from tribuna.application.usecase.comment import (
    AddCommentRequest,
    AddCommentResponse,
    AddCommentUseCase,
    AddReplyRequest,
    AddReplyUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    EditCommentRequest,
    EditCommentResponse,
    EditCommentUseCase,
    GetThreadRequest,
    GetThreadResponse,
    GetThreadUseCase,
)
from tribuna.domain.error import DomainError
from tribuna.domain.model import Viewer
from tribuna.domain.value import SortMode
from tribuna.interface.api.viewer import get_viewer
from tribuna.interface.error import to_http_exception

router = APIRouter(tags=["comments"], route_class=DishkaRoute)


def _user_id(viewer: Viewer) -> str | None:
    return str(viewer.user_id) if viewer.user_id else None


@router.get("/posts/{post_id}/comments", response_model=GetThreadResponse)
async def get_thread(
    post_id: str,
    get_thread_use_case: FromDishka[GetThreadUseCase],
    viewer: Viewer = Depends(get_viewer),
    sort: SortMode | None = None,
    collapsed: list[str] | None = Query(default=None),
) -> GetThreadResponse:
    """Get the comment thread of a post, ready for display.

    Args:
        post_id: Post UUID
        get_thread_use_case: Get thread use case from DI
        viewer: Current viewer (anonymous viewers get no like flags)
        sort: recent, oldest or popular (configured default when omitted)
        collapsed: Comment IDs whose replies are hidden
    """
    try:
        return await get_thread_use_case.execute(
            GetThreadRequest(
                post_id=post_id,
                viewer_id=_user_id(viewer),
                sort=sort,
                collapsed=collapsed or [],
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment or a reply."""

    content: str = Field(min_length=1)  # Length is checked after trimming
    parent_comment_id: str | None = None


@router.post(
    "/posts/{post_id}/comments",
    response_model=AddCommentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    post_id: str,
    request: CreateCommentAPIRequest,
    add_comment_use_case: FromDishka[AddCommentUseCase],
    add_reply_use_case: FromDishka[AddReplyUseCase],
    viewer: Viewer = Depends(get_viewer),
) -> AddCommentResponse:
    """Create a root comment, or a reply when parent_comment_id is given.

    Requires authentication.
    """
    try:
        if request.parent_comment_id:
            reply = await add_reply_use_case.execute(
                AddReplyRequest(
                    parent_id=request.parent_comment_id,
                    author_id=_user_id(viewer),
                    content=request.content,
                    post_id=post_id,
                )
            )
            return AddCommentResponse(comment=reply.comment)

        return await add_comment_use_case.execute(
            AddCommentRequest(
                post_id=post_id,
                author_id=_user_id(viewer),
                content=request.content,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


class EditCommentAPIRequest(BaseModel):
    """API request for editing a comment."""

    content: str = Field(min_length=1)


@router.patch("/comments/{comment_id}", response_model=EditCommentResponse)
async def edit_comment(
    comment_id: str,
    request: EditCommentAPIRequest,
    edit_comment_use_case: FromDishka[EditCommentUseCase],
    viewer: Viewer = Depends(get_viewer),
) -> EditCommentResponse:
    """Edit a comment's content. Only the author can edit."""
    try:
        return await edit_comment_use_case.execute(
            EditCommentRequest(
                comment_id=comment_id,
                editor_id=_user_id(viewer),
                content=request.content,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    viewer: Viewer = Depends(get_viewer),
) -> DeleteCommentResponse:
    """Delete a comment (tombstone). Authors and moderators only."""
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(
                comment_id=comment_id,
                requester_id=_user_id(viewer),
                requester_role=viewer.role,
            )
        )
    except DomainError as e:
        raise to_http_exception(e)
