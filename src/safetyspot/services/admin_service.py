"""Admin-set membership checks."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core.errors import ForbiddenError, UnauthorizedError
from ..models import Admin


def is_admin(session: Session, actor_id: Optional[str]) -> bool:
    if not actor_id:
        return False
    stmt = select(Admin.line_user_id).where(Admin.line_user_id == actor_id)
    return session.execute(stmt).scalar_one_or_none() is not None


def ensure_admin(session: Session, actor_id: Optional[str]) -> str:
    """Gate for admin-only operations.

    No identity is 401; an identity outside the admin set is 403.
    """

    if not actor_id:
        raise UnauthorizedError("Missing requesterId.")
    if not is_admin(session, actor_id):
        raise ForbiddenError("Requester is not an admin.")
    return actor_id
