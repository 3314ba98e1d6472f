"""Notification inbox endpoints."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...core.database import get_db, transaction
from ...models import Notification
from ...schemas import ApiResponse, MarkedRead, MarkReadRequest, NotificationRead, UnreadCount
from ...services import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


def notification_read(notification: Notification) -> NotificationRead:
    return NotificationRead(
        notification_id=notification.notification_id,
        recipient_user_id=notification.recipient_user_id,
        message=notification.message,
        type=notification.type.value,
        related_item_id=notification.related_item_id,
        triggering_user_id=notification.triggering_user_id,
        is_read=notification.is_read,
        created_at=notification.created_at,
    )


@router.get("", response_model=ApiResponse[List[NotificationRead]], summary="Notifications, newest first")
def list_notifications(
    requester_id: str = Query(..., alias="requesterId"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    notifications = notification_service.list_for_recipient(db, requester_id)
    return ApiResponse(data=[notification_read(n) for n in notifications])


@router.get("/unread-count", response_model=ApiResponse[UnreadCount], summary="Unread notification count")
def get_unread_count(
    requester_id: str = Query(..., alias="requesterId"),
    db: Session = Depends(get_db),
) -> ApiResponse:
    return ApiResponse(data=UnreadCount(unread_count=notification_service.unread_count(db, requester_id)))


@router.post("/mark-read", response_model=ApiResponse[MarkedRead], summary="Mark all notifications read")
def mark_read(payload: MarkReadRequest, db: Session = Depends(get_db)) -> ApiResponse:
    with transaction(db):
        updated = notification_service.mark_all_read(db, payload.requester_id)
    return ApiResponse(data=MarkedRead(updated=updated))
