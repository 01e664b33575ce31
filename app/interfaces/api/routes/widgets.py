"""Endpoints consumed by the embeddable notification inbox."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Request,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from app.application.use_cases.widgets import (
    FeedPage,
    TemplatePreference,
    WidgetNotFoundError,
    WidgetRequestError,
    get_feed_count,
    get_notifications_feed,
    get_organization_data,
    get_subscriber_preference,
    initialize_session,
    log_usage,
    mark_all_messages_as,
    mark_message_as,
    remove_message,
    update_message_actions,
    update_subscriber_preference,
)
from app.application.use_cases.widgets.commands import (
    ChannelToggle,
    GetFeedCountCommand,
    GetNotificationsFeedCommand,
    GetOrganizationDataCommand,
    GetSubscriberPreferenceCommand,
    InitializeSessionCommand,
    LogUsageCommand,
    MarkAllAs,
    MarkAllMessagesAsCommand,
    MarkFlags,
    MarkMessageAsCommand,
    RemoveMessageCommand,
    UpdateMessageActionsCommand,
    UpdateSubscriberPreferenceCommand,
)
from app.domain.entities import ButtonType, Message, SubscriberSession
from app.infrastructure.analytics import AnalyticsService, get_analytics_service
from app.infrastructure.database import SessionLocal, get_db
from app.infrastructure.notifications import widget_connection_manager
from app.infrastructure.repositories import MessageRepository
from app.interfaces.api.dependencies import (
    get_subscriber_session,
    resolve_subscriber_session,
)
from app.interfaces.api.routes_helpers import (
    query_values,
    require_message_ids,
    resolve_count_flags,
    to_array,
)
from app.interfaces.api.schemas import (
    BrandingRead,
    CountResponse,
    FeedResponse,
    LogUsageRequest,
    LogUsageResponse,
    MarkAllRequest,
    MarkMessageAsRequest,
    MessageActionRequest,
    MessageRead,
    OrganizationResponse,
    PreferenceRead,
    PreferenceTemplateRead,
    SessionInitializeRequest,
    SessionInitializeResponse,
    SubscriberPreferenceResponse,
    SubscriberProfile,
    UpdateSubscriberPreferenceRequest,
)

router = APIRouter(prefix="/widgets", tags=["widgets"])


def _message_to_schema(message: Message) -> MessageRead:
    return MessageRead(
        id=message.id or "",
        template_id=message.template_id,
        feed_id=message.feed_id,
        subscriber_id=message.subscriber_id,
        channel=message.channel,
        content=message.content,
        payload=message.payload or {},
        cta=message.cta or {},
        seen=message.seen,
        read=message.read,
        last_seen_date=message.last_seen_date,
        last_read_date=message.last_read_date,
        created_at=message.created_at,
    )


def _preference_to_schema(preference: TemplatePreference) -> SubscriberPreferenceResponse:
    template = preference.template
    return SubscriberPreferenceResponse(
        template=PreferenceTemplateRead(
            id=template.id or "", name=template.name, critical=template.critical
        ),
        preference=PreferenceRead(enabled=preference.enabled, channels=preference.channels),
    )


def _http_error(exc: ValueError) -> HTTPException:
    if isinstance(exc, WidgetNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/session/initialize", response_model=SessionInitializeResponse)
def session_initialize(
    body: SessionInitializeRequest,
    db: Session = Depends(get_db),
) -> SessionInitializeResponse:
    """Identify the subscriber and return the widget token."""

    command = InitializeSessionCommand(
        subscriber_id=body.subscriber_id,
        application_identifier=body.application_identifier,
        email=body.email,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
        hmac_hash=body.hmac_hash,
    )
    try:
        result = initialize_session(db, command)
    except WidgetRequestError as exc:
        raise _http_error(exc) from exc

    profile = result.profile
    return SessionInitializeResponse(
        token=result.token,
        profile=SubscriberProfile(
            id=profile.id or "",
            first_name=profile.first_name,
            last_name=profile.last_name,
            phone=profile.phone,
        ),
    )


@router.get("/notifications/feed", response_model=FeedResponse)
def get_notifications_feed_route(
    request: Request,
    page: int = Query(0, ge=0),
    seen: bool | None = Query(None),
    read: bool | None = Query(None),
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> FeedResponse:
    """Return one page of the subscriber's feed."""

    command = GetNotificationsFeedCommand.from_session(
        subscriber_session,
        page=page,
        feed_id=to_array(query_values(request, "feedIdentifier")),
        seen=seen,
        read=read,
    )
    try:
        result: FeedPage = get_notifications_feed(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc

    return FeedResponse(
        data=[_message_to_schema(message) for message in result.data],
        total_count=result.total_count,
        page_size=result.page_size,
        page=result.page,
    )


def _count(db: Session, command: GetFeedCountCommand) -> CountResponse:
    try:
        return CountResponse(count=get_feed_count(db, command))
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc


@router.get("/notifications/unseen", response_model=CountResponse)
def get_unseen_count(
    request: Request,
    seen: bool | None = Query(None),
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> CountResponse:
    command = GetFeedCountCommand.from_session(
        subscriber_session,
        feed_id=to_array(query_values(request, "feedIdentifier")),
        seen=seen,
    )
    return _count(db, command)


@router.get("/notifications/unread", response_model=CountResponse)
def get_unread_count(
    request: Request,
    read: bool | None = Query(None),
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> CountResponse:
    command = GetFeedCountCommand.from_session(
        subscriber_session,
        feed_id=to_array(query_values(request, "feedIdentifier")),
        read=read,
    )
    return _count(db, command)


@router.get("/notifications/count", response_model=CountResponse)
def get_count(
    request: Request,
    seen: bool | None = Query(None),
    read: bool | None = Query(None),
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> CountResponse:
    """Count messages; without flags only seen messages are counted."""

    flags = resolve_count_flags(seen=seen, read=read)
    command = GetFeedCountCommand.from_session(
        subscriber_session,
        feed_id=to_array(query_values(request, "feedIdentifier")),
        seen=flags.seen,
        read=flags.read,
    )
    return _count(db, command)


def _mark(
    db: Session,
    subscriber_session: SubscriberSession,
    message_ids: Sequence[str],
    mark: MarkFlags,
) -> list[MessageRead]:
    command = MarkMessageAsCommand.from_session(
        subscriber_session, message_ids=list(message_ids), mark=mark
    )
    try:
        messages = mark_message_as(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc
    return [_message_to_schema(message) for message in messages]


@router.post("/messages/markAs", response_model=list[MessageRead])
def mark_messages_as(
    body: MarkMessageAsRequest,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> list[MessageRead]:
    """Mark one or many messages as seen and/or read."""

    message_ids = require_message_ids(body.message_id)
    return _mark(
        db,
        subscriber_session,
        message_ids,
        MarkFlags(seen=body.mark.seen, read=body.mark.read),
    )


def _mark_all(
    db: Session,
    subscriber_session: SubscriberSession,
    feed_id: str | list[str] | None,
    mark_as: MarkAllAs,
) -> int:
    command = MarkAllMessagesAsCommand.from_session(
        subscriber_session, mark_as=mark_as, feed_ids=to_array(feed_id)
    )
    try:
        return mark_all_messages_as(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc


@router.post("/messages/read", response_model=int)
def mark_all_unread_as_read(
    body: MarkAllRequest | None = None,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> int:
    """Mark every unread message as read; returns the affected count."""

    return _mark_all(db, subscriber_session, body.feed_id if body else None, MarkAllAs.READ)


@router.post("/messages/seen", response_model=int)
def mark_all_unseen_as_seen(
    body: MarkAllRequest | None = None,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> int:
    """Mark every unseen message as seen; returns the affected count."""

    return _mark_all(db, subscriber_session, body.feed_id if body else None, MarkAllAs.SEEN)


@router.post("/messages/{message_id}/seen", response_model=MessageRead, deprecated=True)
def mark_message_as_seen(
    message_id: str,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> MessageRead:
    """Deprecated, use ``/messages/markAs``."""

    message_ids = require_message_ids(message_id)
    updated = _mark(db, subscriber_session, message_ids, MarkFlags(seen=True))
    if not updated:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Message not found")
    return updated[0]


@router.post("/messages/{message_id}/read", response_model=list[MessageRead], deprecated=True)
def mark_message_as_read(
    message_id: str,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> list[MessageRead]:
    """Deprecated, use ``/messages/markAs``."""

    message_ids = require_message_ids(message_id)
    return _mark(db, subscriber_session, message_ids, MarkFlags(read=True))


@router.delete("/messages/{message_id}", response_model=MessageRead)
def remove_message_route(
    message_id: str,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> MessageRead:
    if not message_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="messageId is required"
        )

    command = RemoveMessageCommand.from_session(subscriber_session, message_id=message_id)
    try:
        removed = remove_message(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc
    return _message_to_schema(removed)


@router.post("/messages/{message_id}/actions/{type}", response_model=MessageRead)
def mark_action_as_done(
    message_id: str,
    type: ButtonType,
    body: MessageActionRequest,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> MessageRead:
    """Record the status and payload of a message button click."""

    command = UpdateMessageActionsCommand.from_session(
        subscriber_session,
        message_id=message_id,
        type=type,
        status=body.status,
        payload=body.payload,
    )
    try:
        updated = update_message_actions(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc
    return _message_to_schema(updated)


@router.get("/organization", response_model=OrganizationResponse)
def get_organization(
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> OrganizationResponse:
    command = GetOrganizationDataCommand.from_session(subscriber_session)
    try:
        organization = get_organization_data(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc

    branding = organization.branding
    return OrganizationResponse(
        id=organization.id or "",
        name=organization.name,
        branding=BrandingRead(
            logo=branding.logo,
            color=branding.color,
            font_color=branding.font_color,
            content_background=branding.content_background,
            font_family=branding.font_family,
            direction=branding.direction,
        ),
    )


@router.get("/preferences", response_model=list[SubscriberPreferenceResponse])
def get_preferences(
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> list[SubscriberPreferenceResponse]:
    command = GetSubscriberPreferenceCommand.from_session(subscriber_session)
    try:
        preferences = get_subscriber_preference(db, command)
    except WidgetNotFoundError as exc:
        raise _http_error(exc) from exc
    return [_preference_to_schema(preference) for preference in preferences]


@router.patch("/preferences/{template_id}", response_model=SubscriberPreferenceResponse)
def update_preference(
    template_id: str,
    body: UpdateSubscriberPreferenceRequest,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    db: Session = Depends(get_db),
) -> SubscriberPreferenceResponse:
    """Toggle a workflow or one of its channels for the subscriber."""

    channel = (
        ChannelToggle(type=body.channel.type, enabled=body.channel.enabled)
        if body.channel is not None
        else None
    )
    command = UpdateSubscriberPreferenceCommand.from_session(
        subscriber_session,
        template_id=template_id,
        channel=channel,
        enabled=body.enabled,
    )
    try:
        preference = update_subscriber_preference(db, command)
    except ValueError as exc:
        raise _http_error(exc) from exc
    return _preference_to_schema(preference)


@router.post("/usage/log", response_model=LogUsageResponse)
def log_usage_route(
    body: LogUsageRequest,
    subscriber_session: SubscriberSession = Depends(get_subscriber_session),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> LogUsageResponse:
    command = LogUsageCommand.from_session(
        subscriber_session, name=body.name, payload=body.payload
    )
    return LogUsageResponse(success=log_usage(analytics, command))


@router.websocket("/ws")
async def widget_websocket(websocket: WebSocket) -> None:
    """Stream unseen/unread count changes to the authenticated subscriber."""

    token = websocket.query_params.get("token")
    if not token:
        await websocket.close(code=1008)
        return

    session = SessionLocal()
    try:
        subscriber_session = resolve_subscriber_session(token, session)
        repository = MessageRepository(session)
        unseen = repository.count(
            environment_id=subscriber_session.environment_id,
            subscriber_id=subscriber_session.id,
            seen=False,
        )
        unread = repository.count(
            environment_id=subscriber_session.environment_id,
            subscriber_id=subscriber_session.id,
            read=False,
        )
    except HTTPException:
        await websocket.close(code=1008)
        return
    finally:
        session.close()

    subscriber_id = subscriber_session.id
    await widget_connection_manager.connect(subscriber_id, websocket)
    try:
        await websocket.send_json(
            {"type": "init", "data": {"unseenCount": unseen, "unreadCount": unread}}
        )
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
    except WebSocketDisconnect:
        widget_connection_manager.disconnect(subscriber_id, websocket)
    except Exception:
        widget_connection_manager.disconnect(subscriber_id, websocket)
        raise
