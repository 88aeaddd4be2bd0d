"""Viewer identity from gateway headers.

Authentication happens upstream; the gateway forwards the signed-in user's
id and role. Requests without ``X-User-Id`` are anonymous.
"""

from uuid import UUID

from fastapi import Header, HTTPException, status

from tribuna.domain.model import Viewer
from tribuna.domain.value import UserId, UserRole


def get_viewer(
    x_user_id: str | None = Header(default=None),
    x_user_role: str | None = Header(default=None),
) -> Viewer:
    """Build the viewer for the current request."""
    if not x_user_id:
        return Viewer.anonymous()

    try:
        user_id = UserId(UUID(x_user_id))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid X-User-Id header",
        )

    try:
        role = UserRole(x_user_role) if x_user_role else UserRole.REGISTERED_USER
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown role: {x_user_role}",
        )

    return Viewer(user_id=user_id, role=role)
