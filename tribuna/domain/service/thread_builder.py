"""Build a comment forest from flat comment rows."""

from collections import defaultdict
from typing import Mapping, Sequence

import logfire

from tribuna.domain.model.comment import Comment
from tribuna.domain.model.thread import CommentNode
from tribuna.domain.value import CommentId, LikeState

_NO_LIKES = LikeState()


def build_forest(
    comments: Sequence[Comment],
    like_state: Mapping[CommentId, LikeState],
) -> list[CommentNode]:
    """Convert flat comment rows into a rooted forest.

    Algorithm:
    1. Index comments by ID
    2. Attach each comment to its parent when the parent exists on the same
       post; otherwise the comment becomes a root (orphan fallback)
    3. Build subtrees depth-first from each root, keeping input order
       within every sibling group
    4. Any comment still unvisited sits on a parent cycle; promote the first
       one in input order to a root and repeat until every comment is placed

    Every input comment appears exactly once in the result. The function is
    pure: ordering is decided solely by the input sequence.

    Args:
        comments: Flat comment rows of a single post, any depth
        like_state: Like aggregates per comment; missing entries mean no likes

    Returns:
        Root nodes in input order, each with replies attached recursively
    """
    by_id: dict[CommentId, Comment] = {}
    for comment in comments:
        by_id.setdefault(comment.id, comment)
    unique = list(by_id.values())

    # Build adjacency map: parent_id -> [child comments]
    children: dict[CommentId, list[Comment]] = defaultdict(list)
    roots: list[Comment] = []
    orphans = 0
    for comment in unique:
        parent_id = comment.parent_comment_id
        parent = by_id.get(parent_id) if parent_id is not None else None
        if parent is None or parent.post_id != comment.post_id or parent_id == comment.id:
            if parent_id is not None:
                orphans += 1
            roots.append(comment)
        else:
            children[parent.id].append(comment)

    visited: set[CommentId] = set()

    def build_subtree(comment: Comment) -> CommentNode:
        # Iterative depth-first walk; reply chains can be arbitrarily deep
        visited.add(comment.id)
        order: list[Comment] = [comment]
        stack = [comment]
        while stack:
            current = stack.pop()
            for child in children.get(current.id, ()):
                if child.id not in visited:
                    visited.add(child.id)
                    order.append(child)
                    stack.append(child)

        nodes: dict[CommentId, CommentNode] = {}
        for current in reversed(order):
            state = like_state.get(current.id, _NO_LIKES)
            nodes[current.id] = CommentNode(
                comment=current,
                likes_count=state.count,
                user_has_liked=state.user_has_liked,
                replies=tuple(
                    nodes[child.id]
                    for child in children.get(current.id, ())
                    if child.id in nodes
                ),
            )
        return nodes[comment.id]

    forest = [build_subtree(root) for root in roots]

    cycles = 0
    for comment in unique:
        if comment.id not in visited:
            cycles += 1
            forest.append(build_subtree(comment))

    if orphans or cycles:
        logfire.warn(
            "Malformed comment parents promoted to roots",
            orphaned=orphans,
            cycles_broken=cycles,
        )

    return forest


def iter_nodes(forest: Sequence[CommentNode]):
    """Yield every node of a forest in depth-first pre-order."""
    stack = list(reversed(forest))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.replies))
