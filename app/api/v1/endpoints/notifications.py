"""Notification API: the caller's own in-app notifications."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from app.api.v1.dependencies import get_notification_service, require_permission
from app.application.services.authorization_service import AccessContext
from app.application.use_cases.notifications import NotificationService
from app.core.limiter import limit_writes
from app.schemas.notification import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter()

Notifications = Annotated[NotificationService, Depends(get_notification_service)]


@router.get("", response_model=list[NotificationResponse])
async def list_notifications(
    notifications: Notifications,
    ctx: Annotated[AccessContext, Depends(require_permission("notification", "read"))],
    unread_only: bool = False,
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
):
    """List the caller's notifications, newest first."""
    result = await notifications.list_notifications(
        ctx.caller_tenant_id, ctx.user_id, unread_only=unread_only, skip=skip, limit=limit
    )
    return [NotificationResponse.model_validate(n) for n in result]


@router.get("/unread-count", response_model=UnreadCountResponse)
async def get_unread_count(
    notifications: Notifications,
    ctx: Annotated[AccessContext, Depends(require_permission("notification", "read"))],
):
    count = await notifications.unread_count(ctx.caller_tenant_id, ctx.user_id)
    return UnreadCountResponse(unread_count=count)


@router.post("/read-all", response_model=MarkAllReadResponse)
@limit_writes
async def mark_all_as_read(
    request: Request,
    notifications: Notifications,
    ctx: Annotated[AccessContext, Depends(require_permission("notification", "update"))],
):
    updated = await notifications.mark_all_as_read(ctx.caller_tenant_id, ctx.user_id)
    return MarkAllReadResponse(updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationResponse)
@limit_writes
async def mark_as_read(
    request: Request,
    notification_id: str,
    notifications: Notifications,
    ctx: Annotated[AccessContext, Depends(require_permission("notification", "update"))],
):
    notification = await notifications.mark_as_read(
        ctx.caller_tenant_id, ctx.user_id, notification_id
    )
    return NotificationResponse.model_validate(notification)
