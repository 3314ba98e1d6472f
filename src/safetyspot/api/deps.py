"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.errors import ServiceError
from ..services import admin_service

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def http_error(exc: ServiceError) -> HTTPException:
    """Translate a domain error into the HTTP error the handlers render."""

    return HTTPException(status_code=exc.status_code, detail=exc.detail)


async def get_requester_id(request: Request) -> Optional[str]:
    """Read ``requesterId`` from the query string, falling back to a JSON body."""

    requester_id = request.query_params.get("requesterId")
    if requester_id:
        return requester_id
    if request.method not in _BODY_METHODS:
        return None
    try:
        payload = await request.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and payload.get("requesterId"):
        return str(payload["requesterId"])
    return None


def require_admin(
    requester_id: Optional[str] = Depends(get_requester_id),
    db: Session = Depends(get_db),
) -> str:
    """Admin gate: 401 without an identity, 403 outside the admin set."""

    try:
        return admin_service.ensure_admin(db, requester_id)
    except ServiceError as exc:
        raise http_error(exc) from exc
