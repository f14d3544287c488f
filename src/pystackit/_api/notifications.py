"""Notification endpoints."""

from __future__ import annotations

from pystackit._api._common import decode_ack, decode_list, decode_model, token_of
from pystackit._transport import Transport
from pystackit.models._base import Ack
from pystackit.models.notification import Notification, NotificationStats, UnreadCount
from pystackit.models.requests import NotificationListRequest
from pystackit.session import Session


async def list_notifications(
    transport: Transport,
    session: Session,
    request: NotificationListRequest,
) -> list[Notification]:
    endpoint = "/notifications/"
    payload = await transport.request("GET", endpoint, token=token_of(session), params=request.to_params())
    return decode_list(Notification, payload, endpoint=endpoint)


async def fetch_stats(transport: Transport, session: Session) -> NotificationStats:
    endpoint = "/notifications/stats"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    return decode_model(NotificationStats, payload, endpoint=endpoint)


async def fetch_unread_count(transport: Transport, session: Session) -> UnreadCount:
    endpoint = "/notifications/unread-count"
    payload = await transport.request("GET", endpoint, token=token_of(session))
    if isinstance(payload, int):
        return UnreadCount(count=payload, raw={"count": payload})
    return decode_model(UnreadCount, payload, endpoint=endpoint)


async def mark_as_read(transport: Transport, session: Session, notification_id: int) -> Ack:
    endpoint = f"/notifications/{notification_id}/read"
    payload = await transport.request("PUT", endpoint, token=token_of(session))
    return decode_ack(payload, endpoint=endpoint)


async def mark_all_as_read(transport: Transport, session: Session) -> Ack:
    endpoint = "/notifications/mark-all-read"
    payload = await transport.request("PUT", endpoint, token=token_of(session))
    return decode_ack(payload, endpoint=endpoint)


async def delete_notification(transport: Transport, session: Session, notification_id: int) -> Ack:
    endpoint = f"/notifications/{notification_id}"
    payload = await transport.request("DELETE", endpoint, token=token_of(session))
    return decode_ack(payload, endpoint=endpoint)
