"""Render a sorted comment forest for presentation.

This is the single presentation policy shared by every UI: storage depth is
unbounded, display depth is capped at ``max_depth``. A node at the cap keeps
no nested replies; its descendants are hoisted right after it, in thread
order, at the same display depth and tagged with the comment they answer.
"""

from typing import AbstractSet, Sequence

from tribuna.domain.model.thread import CommentNode, DisplayNode
from tribuna.domain.value import CommentId

DELETED_PLACEHOLDER = "[deleted]"
ELLIPSIS = "..."


def truncate_preview(content: str, preview_length: int) -> tuple[str, bool]:
    """Shorten content for previews.

    Args:
        content: Full comment text
        preview_length: Maximum characters kept before the ellipsis

    Returns:
        Tuple of (preview text, whether it was truncated)
    """
    if len(content) <= preview_length:
        return content, False
    return content[:preview_length].rstrip() + ELLIPSIS, True


def build_display_forest(
    forest: Sequence[CommentNode],
    max_depth: int,
    preview_length: int,
    collapsed: AbstractSet[CommentId] = frozenset(),
    pending: AbstractSet[CommentId] = frozenset(),
) -> list[DisplayNode]:
    """Convert a (sorted) forest into display nodes.

    Tombstoned comments keep their place while they still have live
    descendants and are dropped otherwise. Collapsed nodes keep their
    reply count but hide their replies.

    Args:
        forest: Root nodes, already ordered
        max_depth: Deepest display level (roots are level 0)
        preview_length: Characters kept in each preview
        collapsed: IDs whose replies are hidden
        pending: IDs of optimistic, not yet confirmed comments

    Returns:
        Display roots with nested (depth-capped) replies
    """
    if max_depth < 1:
        raise ValueError("max_depth must be at least 1")

    def render(
        node: CommentNode, true_depth: int, hidden: bool
    ) -> tuple[list[DisplayNode], int]:
        """Render a subtree.

        Returns the display nodes it contributes at the caller's level and
        the number of live comments in the subtree.
        """
        is_collapsed = node.id in collapsed
        at_cap = true_depth >= max_depth

        nested: list[DisplayNode] = []
        hoisted: list[DisplayNode] = []
        live_descendants = 0
        for reply in node.replies:
            rendered, live = render(
                reply, true_depth + 1, hidden or (at_cap and is_collapsed)
            )
            live_descendants += live
            if at_cap:
                hoisted.extend(rendered)
            else:
                nested.extend(rendered)

        live_total = live_descendants + (0 if node.is_deleted else 1)
        if live_total == 0:
            return [], 0

        if node.is_deleted:
            content = DELETED_PLACEHOLDER
        else:
            content = node.comment.content
        preview, is_truncated = truncate_preview(content, preview_length)

        display = DisplayNode(
            comment=node.comment,
            likes_count=node.likes_count,
            user_has_liked=node.user_has_liked,
            display_depth=min(true_depth, max_depth),
            true_depth=true_depth,
            content=content,
            preview=preview,
            is_truncated=is_truncated,
            reply_count=live_descendants,
            in_reply_to=node.parent_comment_id if true_depth > max_depth else None,
            collapsed=is_collapsed,
            pending=node.id in pending,
            replies=() if is_collapsed else tuple(nested),
        )

        if hidden:
            return [], live_total
        if is_collapsed:
            return [display], live_total
        return [display, *hoisted], live_total

    roots: list[DisplayNode] = []
    for node in forest:
        rendered, _ = render(node, 0, False)
        roots.extend(rendered)
    return roots
