"""Derived, in-memory thread structures.

These are rebuilt from flat comment rows on every fetch or mutation and
are never persisted.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from tribuna.domain.model.comment import Comment
from tribuna.domain.value import CommentId


@dataclass(frozen=True)
class CommentNode:
    """Node in the comment forest.

    Wraps a comment with its like aggregates (relative to the viewing user)
    and its direct replies.
    """

    comment: Comment
    likes_count: int = 0
    user_has_liked: bool = False
    replies: tuple["CommentNode", ...] = ()

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def parent_comment_id(self) -> Optional[CommentId]:
        return self.comment.parent_comment_id

    @property
    def created_at(self) -> datetime:
        return self.comment.created_at

    @property
    def is_deleted(self) -> bool:
        return self.comment.is_deleted


@dataclass(frozen=True)
class DisplayNode:
    """Node in the display forest.

    Storage depth is unbounded; display depth is capped. Nodes deeper than
    the cap are hoisted next to their depth-capped ancestor and keep a
    pointer to their real parent in ``in_reply_to``.
    """

    comment: Comment
    likes_count: int
    user_has_liked: bool
    display_depth: int
    true_depth: int
    content: str
    preview: str
    is_truncated: bool
    reply_count: int
    in_reply_to: Optional[CommentId] = None
    collapsed: bool = False
    pending: bool = False
    replies: tuple["DisplayNode", ...] = field(default_factory=tuple)

    @property
    def id(self) -> CommentId:
        return self.comment.id

    @property
    def is_deleted(self) -> bool:
        return self.comment.is_deleted

    @property
    def is_flattened(self) -> bool:
        """Whether the node is shown shallower than it is stored."""
        return self.display_depth < self.true_depth
