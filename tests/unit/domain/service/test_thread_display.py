"""Unit tests for the depth-capped display forest."""

from uuid import uuid4

import pytest

from tests.harness import make_comment
from tribuna.domain.service import (
    DELETED_PLACEHOLDER,
    build_display_forest,
    build_forest,
    truncate_preview,
)
from tribuna.domain.value import PostId

POST = PostId(uuid4())
MAX_DEPTH = 3
PREVIEW = 300


def _flatten(display_forest):
    result = []
    stack = list(reversed(display_forest))
    while stack:
        node = stack.pop()
        result.append(node)
        stack.extend(reversed(node.replies))
    return result


def _chain(length):
    comments = [make_comment(POST)]
    for i in range(1, length):
        comments.append(make_comment(POST, parent=comments[-1], minutes=i))
    return comments


class TestTruncatePreview:
    """Tests for truncate_preview."""

    def test_short_content_is_unchanged(self):
        assert truncate_preview("Nice goal", 300) == ("Nice goal", False)

    def test_long_content_is_cut_with_ellipsis(self):
        preview, truncated = truncate_preview("x" * 301, 300)

        assert truncated is True
        assert preview == "x" * 300 + "..."

    def test_content_at_limit_is_not_truncated(self):
        assert truncate_preview("y" * 300, 300) == ("y" * 300, False)


class TestBuildDisplayForest:
    """Tests for build_display_forest."""

    def test_deep_chain_is_flattened_at_max_depth(self):
        # Arrange - storage depth well past the display cap
        comments = _chain(MAX_DEPTH + 6)
        forest = build_forest(comments, {})

        # Act
        display = build_display_forest(forest, MAX_DEPTH, PREVIEW)

        # Assert
        nodes = _flatten(display)
        assert [n.id for n in nodes] == [c.id for c in comments]
        assert max(n.display_depth for n in nodes) == MAX_DEPTH
        for depth, (node, comment) in enumerate(zip(nodes, comments)):
            assert node.true_depth == depth
            if node.true_depth > MAX_DEPTH:
                assert node.display_depth == MAX_DEPTH
                assert node.in_reply_to == comment.parent_comment_id
                assert node.is_flattened
            else:
                assert node.in_reply_to is None

    def test_hoisted_replies_follow_capped_ancestor(self):
        comments = _chain(MAX_DEPTH + 2)
        display = build_display_forest(build_forest(comments, {}), MAX_DEPTH, PREVIEW)

        depth_two = display[0].replies[0].replies[0]
        assert [n.id for n in depth_two.replies] == [comments[3].id, comments[4].id]
        assert depth_two.replies[0].replies == ()
        assert depth_two.replies[1].display_depth == MAX_DEPTH

    def test_tombstone_with_live_replies_shows_placeholder(self):
        # Arrange
        root = make_comment(POST, deleted=True, content="rude words")
        reply = make_comment(POST, parent=root, minutes=2)

        # Act
        display = build_display_forest(build_forest([root, reply], {}), MAX_DEPTH, PREVIEW)

        # Assert
        assert display[0].content == DELETED_PLACEHOLDER
        assert display[0].preview == DELETED_PLACEHOLDER
        assert display[0].is_deleted
        assert display[0].reply_count == 1
        assert [r.id for r in display[0].replies] == [reply.id]

    def test_tombstone_without_live_descendants_is_dropped(self):
        root = make_comment(POST)
        dead = make_comment(POST, parent=root, deleted=True, minutes=1)
        dead_child = make_comment(POST, parent=dead, deleted=True, minutes=2)
        lonely = make_comment(POST, deleted=True, minutes=3)

        display = build_display_forest(
            build_forest([root, dead, dead_child, lonely], {}), MAX_DEPTH, PREVIEW
        )

        assert [n.id for n in display] == [root.id]
        assert display[0].replies == ()
        assert display[0].reply_count == 0

    def test_collapsed_node_hides_replies_but_keeps_count(self):
        root = make_comment(POST)
        reply = make_comment(POST, parent=root, minutes=1)
        nested = make_comment(POST, parent=reply, minutes=2)

        display = build_display_forest(
            build_forest([root, reply, nested], {}),
            MAX_DEPTH,
            PREVIEW,
            collapsed={root.id},
        )

        assert display[0].collapsed is True
        assert display[0].replies == ()
        assert display[0].reply_count == 2

    def test_collapsed_node_at_cap_hides_hoisted_descendants(self):
        comments = _chain(MAX_DEPTH + 3)
        capped = comments[MAX_DEPTH]

        display = build_display_forest(
            build_forest(comments, {}), MAX_DEPTH, PREVIEW, collapsed={capped.id}
        )

        ids = [n.id for n in _flatten(display)]
        assert ids == [c.id for c in comments[: MAX_DEPTH + 1]]

    def test_pending_flag_and_preview(self):
        root = make_comment(POST, content="z" * 400)

        display = build_display_forest(
            build_forest([root], {}), MAX_DEPTH, PREVIEW, pending={root.id}
        )

        assert display[0].pending is True
        assert display[0].is_truncated is True
        assert display[0].content == "z" * 400
        assert len(display[0].preview) == PREVIEW + 3

    def test_max_depth_must_be_positive(self):
        with pytest.raises(ValueError):
            build_display_forest([], 0, PREVIEW)
