"""Order a comment forest."""

from dataclasses import replace
from typing import Callable, Sequence

from tribuna.domain.model.thread import CommentNode
from tribuna.domain.value import SortMode


def _sort_siblings(
    nodes: Sequence[CommentNode], mode: SortMode
) -> list[CommentNode]:
    # list.sort is stable, also with reverse=True, so equal keys keep their
    # incoming order and sorting an already sorted list changes nothing
    key: Callable[[CommentNode], object]
    if mode == SortMode.OLDEST:
        key, reverse = (lambda node: node.created_at), False
    elif mode == SortMode.RECENT:
        key, reverse = (lambda node: node.created_at), True
    else:
        # Equally liked comments: most recent first
        key, reverse = (lambda node: (node.likes_count, node.created_at)), True

    ordered = list(nodes)
    ordered.sort(key=key, reverse=reverse)
    return ordered


def sort_forest(
    forest: Sequence[CommentNode], mode: SortMode | str
) -> list[CommentNode]:
    """Return a new forest ordered by ``mode`` at every level.

    - recent: created_at descending
    - oldest: created_at ascending
    - popular: likes_count descending, ties by created_at descending

    Input nodes are never mutated; every returned node is a fresh copy.

    Args:
        forest: Root nodes to sort
        mode: Sort mode (enum or its string value)

    Returns:
        Sorted copy of the forest

    Raises:
        ValueError: If mode is not a known sort mode
    """
    mode = SortMode(mode)

    def sort_subtree(node: CommentNode) -> CommentNode:
        replies = _sort_siblings(node.replies, mode)
        return replace(node, replies=tuple(sort_subtree(reply) for reply in replies))

    return [sort_subtree(node) for node in _sort_siblings(forest, mode)]
