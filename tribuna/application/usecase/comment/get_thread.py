"""Get thread use case."""

from datetime import datetime
from typing import Sequence

from pydantic import BaseModel, Field

from tribuna.application.usecase.base import (
    BaseUseCase,
    parse_optional_uuid,
    parse_uuid,
)
from tribuna.config import ThreadSettings
from tribuna.domain.model import DisplayNode
from tribuna.domain.service import (
    CommentService,
    LikeService,
    build_display_forest,
    build_forest,
    sort_forest,
)
from tribuna.domain.value import CommentId, PostId, SortMode, UserId


class ThreadCommentItem(BaseModel):
    """Comment in a rendered thread."""

    comment_id: str
    post_id: str
    author_id: str
    parent_comment_id: str | None
    in_reply_to: str | None  # Real parent of a flattened reply
    content: str
    preview: str
    is_truncated: bool
    is_deleted: bool
    likes_count: int
    user_has_liked: bool
    display_depth: int
    true_depth: int
    reply_count: int
    collapsed: bool
    pending: bool
    created_at: datetime
    updated_at: datetime
    replies: list["ThreadCommentItem"] = Field(default_factory=list)

    @classmethod
    def from_display_node(cls, node: DisplayNode) -> "ThreadCommentItem":
        comment = node.comment
        return cls(
            comment_id=str(comment.id),
            post_id=str(comment.post_id),
            author_id=str(comment.author_id),
            parent_comment_id=str(comment.parent_comment_id)
            if comment.parent_comment_id
            else None,
            in_reply_to=str(node.in_reply_to) if node.in_reply_to else None,
            content=node.content,
            preview=node.preview,
            is_truncated=node.is_truncated,
            is_deleted=node.is_deleted,
            likes_count=node.likes_count,
            user_has_liked=node.user_has_liked,
            display_depth=node.display_depth,
            true_depth=node.true_depth,
            reply_count=node.reply_count,
            collapsed=node.collapsed,
            pending=node.pending,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
            replies=[cls.from_display_node(reply) for reply in node.replies],
        )


def to_thread_items(display_forest: Sequence[DisplayNode]) -> list[ThreadCommentItem]:
    return [ThreadCommentItem.from_display_node(node) for node in display_forest]


class GetThreadRequest(BaseModel):
    """Get thread request."""

    post_id: str  # UUID string
    viewer_id: str | None = None  # Anonymous viewers see no like flags
    sort: SortMode | None = None  # Falls back to the configured default
    collapsed: list[str] = Field(default_factory=list)


class GetThreadResponse(BaseModel):
    """Get thread response."""

    post_id: str
    sort: SortMode
    max_depth: int
    total: int  # Live comments, tombstones excluded
    comments: list[ThreadCommentItem]


class GetThreadUseCase(BaseUseCase):
    """Use case for reading a post's comment thread, ready for display."""

    def __init__(
        self,
        comment_service: CommentService,
        like_service: LikeService,
        thread_settings: ThreadSettings,
    ) -> None:
        """Initialize get thread use case.

        Args:
            comment_service: Comment domain service
            like_service: Like domain service
            thread_settings: Display depth, preview length and default sort
        """
        self.comment_service = comment_service
        self.like_service = like_service
        self.thread_settings = thread_settings

    async def execute(self, request: GetThreadRequest) -> GetThreadResponse:
        """Execute get thread flow.

        Steps:
        1. Fetch the post's flat comment rows (tombstones included)
        2. Fetch like aggregates for the viewer in one batch
        3. Build the forest, sort every sibling list, render with the
           display depth cap

        Args:
            request: Post ID, optional viewer, sort mode and collapsed IDs

        Returns:
            Rendered thread
        """
        post_id = PostId(parse_uuid(request.post_id, "post_id"))
        viewer_id = parse_optional_uuid(request.viewer_id, "viewer_id")
        sort = request.sort or self.thread_settings.default_sort
        collapsed = frozenset(
            CommentId(parse_uuid(cid, "collapsed")) for cid in request.collapsed
        )

        comments = await self.comment_service.fetch_comments(post_id)
        like_state = await self.like_service.fetch_like_state(
            [c.id for c in comments], UserId(viewer_id) if viewer_id else None
        )

        forest = sort_forest(build_forest(comments, like_state), sort)
        display = build_display_forest(
            forest,
            max_depth=self.thread_settings.max_depth,
            preview_length=self.thread_settings.preview_length,
            collapsed=collapsed,
        )

        return GetThreadResponse(
            post_id=request.post_id,
            sort=sort,
            max_depth=self.thread_settings.max_depth,
            total=sum(1 for c in comments if not c.is_deleted),
            comments=to_thread_items(display),
        )
