"""Tests for pushing unseen/unread counts to widget websockets."""

from __future__ import annotations

import asyncio

import anyio
from anyio import to_thread

from app.infrastructure.notifications import (
    UNREAD_COUNT_CHANGED,
    UNSEEN_COUNT_CHANGED,
    CountChangePublisher,
    WidgetConnectionManager,
)


class FakeWebSocket:
    def __init__(self) -> None:
        self.accepted = False
        self.sent: list[dict] = []

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        self.sent.append(message)


EXPECTED = [
    {"type": UNSEEN_COUNT_CHANGED, "data": {"unseenCount": 3}},
    {"type": UNREAD_COUNT_CHANGED, "data": {"unreadCount": 5}},
]


def test_dispatch_from_event_loop_schedules_both_events():
    manager = WidgetConnectionManager()
    publisher = CountChangePublisher(manager)
    websocket = FakeWebSocket()

    async def scenario() -> None:
        await manager.connect("subscriber", websocket)
        publisher.dispatch("subscriber", unseen_count=3, unread_count=5)
        for _ in range(3):
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert websocket.accepted
    assert websocket.sent == EXPECTED


def test_dispatch_from_worker_thread_uses_the_portal():
    manager = WidgetConnectionManager()
    publisher = CountChangePublisher(manager)
    websocket = FakeWebSocket()

    async def scenario() -> None:
        await manager.connect("subscriber", websocket)
        await to_thread.run_sync(
            lambda: publisher.dispatch("subscriber", unseen_count=3, unread_count=5)
        )

    anyio.run(scenario)

    assert websocket.sent == EXPECTED


def test_dispatch_without_connection_or_loop_is_a_no_op():
    manager = WidgetConnectionManager()
    publisher = CountChangePublisher(manager)
    websocket = FakeWebSocket()

    publisher.dispatch("subscriber", unseen_count=1, unread_count=1)

    asyncio.run(manager.connect("subscriber", websocket))
    # Connected but called from plain synchronous code: nothing to deliver on.
    publisher.dispatch("subscriber", unseen_count=1, unread_count=1)

    assert websocket.sent == []


def test_disconnect_forgets_subscriber():
    manager = WidgetConnectionManager()
    websocket = FakeWebSocket()

    asyncio.run(manager.connect("subscriber", websocket))
    assert manager.is_connected("subscriber")

    manager.disconnect("subscriber", websocket)
    manager.disconnect("subscriber", websocket)

    assert not manager.is_connected("subscriber")
