"""Interfaces of the remote stores the Blocs talk to.

Adapters for a concrete backend implement these protocols. Failures are
reported by raising (or, for pushed snapshots, by failing the stream),
preferably with RemoteOperationError carrying the backend status code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Protocol

from findroom.models import RoomEntity
from findroom.stream import EventStream


@dataclass(frozen=True)
class ToggleResult:
    title: str
    saved: bool


class RoomRepository(Protocol):
    def saved_rooms(self, uid: str) -> EventStream[list[RoomEntity]]:
        """Live list of rooms saved by uid; a new snapshot on every change."""
        ...

    async def toggle_saved(self, room_id: str, uid: str) -> ToggleResult:
        """Flip the saved flag of room_id for uid."""
        ...


class UserRepository(Protocol):
    async def update_user_info(
        self,
        *,
        uid: str,
        full_name: str,
        address: str,
        phone_number: str,
        avatar: str | os.PathLike | None,
    ) -> None:
        """Write profile fields, uploading avatar first when given."""
        ...
