"""Domain model entities for Tribuna."""

from tribuna.domain.model.comment import Comment
from tribuna.domain.model.comment_like import CommentLike
from tribuna.domain.model.comment_report import CommentReport
from tribuna.domain.model.thread import CommentNode, DisplayNode
from tribuna.domain.model.viewer import Viewer

__all__ = [
    "Comment",
    "CommentLike",
    "CommentReport",
    "CommentNode",
    "DisplayNode",
    "Viewer",
]
