"""Domain value objects for Tribuna.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum

from pydantic import Field

from tribuna.domain.value.common import ValueObject


class SortMode(str, Enum):
    """Ordering applied to every sibling list of a comment thread."""

    RECENT = "recent"
    OLDEST = "oldest"
    POPULAR = "popular"


class UserRole(str, Enum):
    """Platform roles.

    Editors and administrators moderate comments; journalists write
    articles but have no moderation rights over comments.
    """

    REGISTERED_USER = "registered_user"
    JOURNALIST = "journalist"
    EDITOR = "editor"
    ADMINISTRATOR = "administrator"

    @property
    def is_moderator(self) -> bool:
        """Whether the role may delete other users' comments and review reports."""
        return self in (UserRole.EDITOR, UserRole.ADMINISTRATOR)


class ReportReason(str, Enum):
    """Fixed set of reasons a comment can be reported for."""

    SPAM = "spam"
    HARASSMENT = "harassment"
    HATE_SPEECH = "hate_speech"
    MISINFORMATION = "misinformation"
    INAPPROPRIATE = "inappropriate"
    COPYRIGHT = "copyright"
    OTHER = "other"


class ReportStatus(str, Enum):
    """Moderation status of a report."""

    PENDING = "pending"
    RESOLVED = "resolved"
    DISMISSED = "dismissed"


class ReviewAction(str, Enum):
    """Moderator decision on a pending report."""

    RESOLVE = "resolve"
    DISMISS = "dismiss"


class LikeState(ValueObject):
    """Aggregated like state of a comment relative to the viewing user."""

    count: int = Field(default=0, ge=0)
    user_has_liked: bool = False
