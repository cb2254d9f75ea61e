"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    WebSocket,
    WebSocketDisconnect,
    status,
)

from chattrix.application.use_cases.notifications import (
    NotificationDispatcher,
    NotificationService,
    build_notification_service,
)
from chattrix.domain.entities import Notification, User
from chattrix.domain.exceptions import (
    NotificationNotFoundError,
    NotificationPersistenceError,
    NotificationValidationError,
)
from chattrix.infrastructure.database import SessionLocal
from chattrix.infrastructure.notifications import (
    notification_manager,
    serialize_notification,
)
from chattrix.interfaces.api.dependencies import (
    get_current_active_user,
    get_notification_dispatcher,
    get_notification_service,
    resolve_current_user,
)
from chattrix.interfaces.api.schemas import (
    MessageResponse,
    NotificationCreate,
    NotificationRead,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _storage_unavailable(exc: NotificationPersistenceError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    try:
        notifications = service.list_for_recipient(current_user.id)
    except NotificationPersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return [_to_read_model(notification) for notification in notifications]


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    """Emit a notification to ``recipient_id`` with the caller as sender."""

    try:
        notification = service.create(
            recipient_id=payload.recipient_id,
            sender_id=current_user.id,
            kind=payload.kind,
            content=payload.content,
            related_post_id=payload.related_post_id,
        )
    except NotificationValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NotificationPersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return _to_read_model(notification)


@router.get("/unread-count", response_model=UnreadCountResponse)
def get_unread_count(
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_active_user),
) -> UnreadCountResponse:
    try:
        count = service.get_unread_count(current_user.id)
    except NotificationPersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return UnreadCountResponse(count=count)


@router.patch("/read-all", response_model=MessageResponse)
def mark_all_notifications_read(
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    try:
        service.mark_all_read(current_user.id)
    except NotificationPersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return MessageResponse(message="All notifications marked as read")


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_active_user),
) -> NotificationRead:
    try:
        notification = service.mark_read(notification_id, current_user.id)
    except NotificationNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
        ) from exc
    except NotificationPersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return _to_read_model(notification)


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: int,
    service: NotificationService = Depends(get_notification_service),
    current_user: User = Depends(get_current_active_user),
) -> MessageResponse:
    try:
        service.delete(notification_id, current_user.id)
    except NotificationNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Notification not found"
        ) from exc
    except NotificationPersistenceError as exc:
        raise _storage_unavailable(exc) from exc
    return MessageResponse(message="Notification deleted successfully")


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> None:
    """Websocket endpoint that streams notification events to the user."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
        if not user.is_active:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
        pending = build_notification_service(session, dispatcher).list_pending(user.id)
    except HTTPException:
        await websocket.close(code=1008)
        return
    except NotificationPersistenceError:
        await websocket.close(code=1011)
        return
    finally:
        session.close()

    await notification_manager.connect(user.id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": [serialize_notification(n) for n in pending]}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except (KeyError, TypeError, ValueError):
                # Binary or malformed frames are ignored.
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
                continue

            if message_type == "ack":
                ids = message.get("ids", [])
                if isinstance(ids, list) and ids:
                    _acknowledge(user.id, ids, dispatcher)
                continue
    except WebSocketDisconnect:
        pass
    finally:
        notification_manager.disconnect(user.id, websocket)


def _acknowledge(user_id: int, ids: list[object], dispatcher: NotificationDispatcher) -> None:
    """Mark the acknowledged notifications read through the service."""

    session = SessionLocal()
    try:
        service = build_notification_service(session, dispatcher)
        for raw_id in ids:
            try:
                service.mark_read(int(raw_id), user_id)
            except (TypeError, ValueError, NotificationNotFoundError):
                logger.debug("Ignoring ack for notification %r from user %s", raw_id, user_id)
    finally:
        session.close()
