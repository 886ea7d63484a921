"""In-memory stand-ins for the remote stores."""

import asyncio

import pytest

from findroom import AuthState, EventStream, ToggleResult


class FakeRoomRepository:
    """Room store whose snapshots and toggle outcomes are driven by the test."""

    def __init__(self):
        self.streams: dict[str, list[EventStream]] = {}
        self.titles: dict[str, str] = {}
        self.failures: dict[str, Exception] = {}
        self.gates: dict[str, asyncio.Event] = {}
        self.toggle_calls: list[tuple[str, str]] = []

    def saved_rooms(self, uid):
        stream = EventStream()
        self.streams.setdefault(uid, []).append(stream)
        return stream

    def latest(self, uid) -> EventStream:
        return self.streams[uid][-1]

    async def toggle_saved(self, room_id, uid):
        self.toggle_calls.append((room_id, uid))
        gate = self.gates.get(room_id)
        if gate is not None:
            await gate.wait()
        if room_id in self.failures:
            raise self.failures[room_id]
        return ToggleResult(title=self.titles.get(room_id, room_id), saved=False)


class FakeUserRepository:
    """User store recording update calls; optionally blocks or fails them."""

    def __init__(self):
        self.calls: list[dict] = []
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None

    async def update_user_info(self, **fields):
        self.calls.append(fields)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error


async def settle(rounds: int = 5) -> None:
    """Let pending tasks and their done-callbacks run."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture
def auth():
    return AuthState()


@pytest.fixture
def rooms():
    return FakeRoomRepository()


@pytest.fixture
def users():
    return FakeUserRepository()
