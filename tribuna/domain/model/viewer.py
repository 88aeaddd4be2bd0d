"""Viewer of a comment thread."""

from typing import Optional

from tribuna.domain.model.common import DomainModel
from tribuna.domain.value import UserId, UserRole


class Viewer(DomainModel):
    """The user looking at (and acting on) a thread.

    Supplied by the authentication collaborator. Anonymous viewers have
    no user_id and may only read.
    """

    user_id: Optional[UserId] = None
    role: UserRole = UserRole.REGISTERED_USER

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None

    @property
    def is_moderator(self) -> bool:
        return self.is_authenticated and self.role.is_moderator

    @classmethod
    def anonymous(cls) -> "Viewer":
        return cls()
