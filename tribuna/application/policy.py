"""Authorization rules shared by use cases and thread sessions.

Rules are checked locally, before any backend call.
"""

from typing import Optional

from tribuna.domain.error import AuthError
from tribuna.domain.model import Comment
from tribuna.domain.value import UserId, UserRole


def require_user(user_id: Optional[UserId], action: str) -> UserId:
    """Return the acting user or fail when nobody is signed in."""
    if user_id is None:
        raise AuthError.unauthenticated(action)
    return user_id


def ensure_can_edit(comment: Comment, editor_id: Optional[UserId]) -> UserId:
    """Only the author may edit; moderators may not rewrite other users' text."""
    editor = require_user(editor_id, "edit comments")
    if comment.author_id != editor:
        raise AuthError.not_permitted("edit comment", str(comment.id), str(editor))
    return editor


def ensure_can_delete(
    comment: Comment, requester_id: Optional[UserId], requester_role: UserRole
) -> UserId:
    """The author or a moderator may delete a comment."""
    requester = require_user(requester_id, "delete comments")
    if comment.author_id != requester and not requester_role.is_moderator:
        raise AuthError.not_permitted(
            "delete comment", str(comment.id), str(requester)
        )
    return requester


def ensure_moderator(user_id: Optional[UserId], role: UserRole, action: str) -> UserId:
    """Moderation actions are restricted to editors and administrators."""
    user = require_user(user_id, action)
    if not role.is_moderator:
        raise AuthError(f"User {user} with role {role.value} may not {action}")
    return user
