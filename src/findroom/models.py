"""Room records, their display projection, and Bloc output values."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from findroom.errors import UpdateUserInfoError


def to_datetime(value: Any) -> datetime:
    """Normalise a stored save timestamp.

    Accepts datetimes, epoch seconds, and SDK timestamp objects exposing
    to_datetime() or ToDatetime().
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value, tz=timezone.utc)
    for name in ("to_datetime", "ToDatetime"):
        convert = getattr(value, name, None)
        if callable(convert):
            return convert()
    raise TypeError(f"Unsupported timestamp value: {value!r}")


@dataclass(frozen=True)
class RoomEntity:
    """A room document as delivered by the remote room store."""

    id: str
    title: str
    price: float
    address: str = ""
    district_name: str = ""
    images: Sequence[str] = ()
    user_ids_saved: Mapping[str, datetime] = field(default_factory=dict)

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> RoomEntity:
        saved = data.get("user_ids_saved") or {}
        return cls(
            id=doc_id,
            title=data.get("title", ""),
            price=data.get("price", 0),
            address=data.get("address", ""),
            district_name=data.get("district_name", ""),
            images=tuple(data.get("images") or ()),
            user_ids_saved={uid: to_datetime(ts) for uid, ts in saved.items()},
        )


@dataclass(frozen=True)
class RoomItem:
    """What the saved-rooms list shows for one room."""

    id: str
    title: str
    price: str
    address: str
    district_name: str
    image: str | None
    saved_time: datetime


@dataclass(frozen=True)
class SavedListState:
    error: Any = None
    is_loading: bool = True
    room_items: tuple[RoomItem, ...] = ()


INITIAL_SAVED_LIST_STATE = SavedListState(error=None, is_loading=True, room_items=())


# --- Saved list messages ---


class SavedMessage:
    """Outcome of a remove-from-saved command."""


@dataclass(frozen=True)
class RemovedSaveRoomSuccess(SavedMessage):
    title: str


@dataclass(frozen=True)
class RemovedSaveRoomError(SavedMessage):
    error: Any


# --- Profile update messages ---


class UpdateUserInfoMessage:
    """Outcome of a profile submit."""


@dataclass(frozen=True)
class InvalidInformation(UpdateUserInfoMessage):
    pass


@dataclass(frozen=True)
class UpdateSuccess(UpdateUserInfoMessage):
    pass


@dataclass(frozen=True)
class UpdateFailure(UpdateUserInfoMessage):
    error: UpdateUserInfoError
