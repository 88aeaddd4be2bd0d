"""Domain services."""

from .base import Service
from .comment_service import CommentService, normalize_content
from .like_service import LikeService
from .report_service import ReportService, normalize_description, parse_reason
from .thread_builder import build_forest, iter_nodes
from .thread_display import DELETED_PLACEHOLDER, build_display_forest, truncate_preview
from .thread_sorter import sort_forest

__all__ = [
    "CommentService",
    "DELETED_PLACEHOLDER",
    "LikeService",
    "ReportService",
    "Service",
    "build_display_forest",
    "build_forest",
    "iter_nodes",
    "normalize_content",
    "normalize_description",
    "parse_reason",
    "sort_forest",
    "truncate_preview",
]
