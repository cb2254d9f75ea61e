"""Tests for websocket connection management and event publishing."""

from __future__ import annotations

import asyncio

import anyio
from anyio import to_thread

from chattrix.infrastructure.notifications import (
    NotificationConnectionManager,
    RealtimeEventPublisher,
)


class FakeWebSocket:
    def __init__(self, *, broken: bool = False) -> None:
        self.accepted = False
        self.sent: list[dict] = []
        self.broken = broken

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self.broken:
            raise RuntimeError("connection closed")
        self.sent.append(message)


def test_every_session_of_a_user_receives_the_event():
    manager = NotificationConnectionManager()
    phone, laptop, other = FakeWebSocket(), FakeWebSocket(), FakeWebSocket()

    async def scenario():
        await manager.connect(1, phone)
        await manager.connect(1, laptop)
        await manager.connect(2, other)
        await manager.send_to_user(1, {"type": "notification:new", "data": {"id": 7}})

    asyncio.run(scenario())

    assert phone.accepted and laptop.accepted
    assert phone.sent == laptop.sent == [{"type": "notification:new", "data": {"id": 7}}]
    assert other.sent == []


def test_sending_to_offline_user_is_a_no_op():
    manager = NotificationConnectionManager()

    asyncio.run(manager.send_to_user(42, {"type": "notifications:allRead"}))

    assert manager.connection_count(42) == 0


def test_broken_connections_are_discarded():
    manager = NotificationConnectionManager()
    healthy, broken = FakeWebSocket(), FakeWebSocket(broken=True)

    async def scenario():
        await manager.connect(1, healthy)
        await manager.connect(1, broken)
        await manager.send_to_user(1, {"type": "ping"})

    asyncio.run(scenario())

    assert healthy.sent == [{"type": "ping"}]
    assert manager.connection_count(1) == 1


def test_disconnect_releases_the_user_channel():
    manager = NotificationConnectionManager()
    socket = FakeWebSocket()

    asyncio.run(manager.connect(5, socket))
    manager.disconnect(5, socket)
    manager.disconnect(5, socket)

    assert manager.connection_count(5) == 0


def test_publisher_frames_events_and_delivers_inside_the_loop():
    manager = NotificationConnectionManager()
    publisher = RealtimeEventPublisher(manager)
    socket = FakeWebSocket()
    payload = {"notificationId": 3, "unreadCount": 1}

    async def scenario():
        await manager.connect(9, socket)
        publisher.publish(9, "notification:read", payload)
        assert publisher.pending_count() == 1
        payload["unreadCount"] = 99
        for _ in range(5):
            await asyncio.sleep(0)

    asyncio.run(scenario())

    assert socket.sent == [
        {"type": "notification:read", "data": {"notificationId": 3, "unreadCount": 1}}
    ]
    assert publisher.pending_count() == 0


def test_publisher_without_event_loop_drops_the_event():
    manager = NotificationConnectionManager()
    publisher = RealtimeEventPublisher(manager)

    publisher.publish(9, "notifications:allRead", {"unreadCount": 0})
    publisher.publish(0, "notifications:allRead", {"unreadCount": 0})


class SlowWebSocket(FakeWebSocket):
    def __init__(self, release: asyncio.Event) -> None:
        super().__init__()
        self.release = release

    async def send_json(self, message: dict) -> None:
        await self.release.wait()
        await super().send_json(message)


def test_publisher_from_worker_thread_does_not_wait_for_slow_clients():
    manager = NotificationConnectionManager()
    publisher = RealtimeEventPublisher(manager)

    async def scenario():
        release = asyncio.Event()
        socket = SlowWebSocket(release)
        await manager.connect(4, socket)

        await to_thread.run_sync(publisher.publish, 4, "notification:new", {"id": 1})
        assert socket.sent == []
        assert publisher.pending_count() == 1

        release.set()
        for _ in range(10):
            await asyncio.sleep(0)
        return socket.sent

    sent = anyio.run(scenario)

    assert sent == [{"type": "notification:new", "data": {"id": 1}}]
    assert publisher.pending_count() == 0
