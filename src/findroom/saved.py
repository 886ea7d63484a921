"""SavedListBloc: the list of rooms the current user has saved.

State follows the login state. Every login change abandons the previous
room subscription and starts over for the new identity, so snapshots for a
previous user never reach the state. Remove commands read the login state
at the moment they are processed and run concurrently against the store.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable

from findroom.auth import AuthStateSource, LoggedIn, LoginState, NotLoggedIn
from findroom.bloc import Bloc
from findroom.config import PriceFormat
from findroom.errors import NotLoginError, UnknownLoginStateError
from findroom.models import (
    INITIAL_SAVED_LIST_STATE,
    RemovedSaveRoomError,
    RemovedSaveRoomSuccess,
    RoomEntity,
    RoomItem,
    SavedListState,
    SavedMessage,
    to_datetime,
)
from findroom.observable import Observable, call_on_scheduler
from findroom.reaction import reaction
from findroom.repositories import RoomRepository
from findroom.stream import EventStream

logger = logging.getLogger(__name__)


def to_room_items(
    entities: Iterable[RoomEntity],
    uid: str,
    price_format: PriceFormat,
) -> tuple[RoomItem, ...]:
    """Project store entities to list rows, keeping delivery order.

    Rooms without a save timestamp for uid are not saved by that user and
    are left out.
    """
    return tuple(
        RoomItem(
            id=entity.id,
            title=entity.title,
            price=price_format.format(entity.price),
            address=entity.address,
            district_name=entity.district_name,
            image=entity.images[0] if entity.images else None,
            saved_time=to_datetime(entity.user_ids_saved[uid]),
        )
        for entity in entities
        if uid in entity.user_ids_saved
    )


def _rejection(login_state: LoginState) -> SavedMessage:
    if isinstance(login_state, NotLoggedIn):
        return RemovedSaveRoomError(NotLoginError())
    return RemovedSaveRoomError(UnknownLoginStateError(f"Don't know login_state={login_state!r}"))


class SavedListBloc(Bloc):
    """Saved rooms of the logged-in user plus a remove-from-saved command.

    Outputs:
        state: Observable[SavedListState], seeded with the loading state.
        removed_message: EventStream[SavedMessage], one per command.
    """

    def __init__(
        self,
        *,
        auth: AuthStateSource,
        room_repository: RoomRepository,
        price_format: PriceFormat | None = None,
    ) -> None:
        super().__init__()
        self._auth = auth
        self._rooms = room_repository
        self._price_format = price_format or PriceFormat()
        self._state: Observable[SavedListState] = Observable(INITIAL_SAVED_LIST_STATE)
        self._cancel_rooms: Callable[[], None] | None = None

        commands: EventStream[str] = self._own(EventStream())
        self._remove_from_saved = commands
        requests = commands.map(lambda room_id: (room_id, auth.current_login_state()))
        rejected = requests.filter(lambda r: not isinstance(r[1], LoggedIn)).map(lambda r: _rejection(r[1]))
        performed = requests.filter(lambda r: isinstance(r[1], LoggedIn)).flat_map(
            lambda r: self._toggle(r[0], r[1].uid)
        )
        self._removed_message: EventStream[SavedMessage] = EventStream.merge(rejected, performed)

        self._own(self._cancel_room_subscription)
        self._own(reaction(auth.login_state.get, self._on_login_state, fire_immediately=True))

    @property
    def state(self) -> Observable[SavedListState]:
        return self._state

    @property
    def removed_message(self) -> EventStream[SavedMessage]:
        return self._removed_message

    def remove_from_saved(self, room_id: str) -> None:
        """Toggle the saved flag of room_id for the current user."""
        if self.disposed:
            return
        logger.debug("Remove from saved: %s", room_id)
        self._remove_from_saved.emit(room_id)

    def _on_login_state(self, login_state: LoginState) -> None:
        self._cancel_room_subscription()
        logger.debug("Login state is now %r", login_state)

        if isinstance(login_state, NotLoggedIn):
            self._state.set(replace(INITIAL_SAVED_LIST_STATE, error=NotLoginError(), is_loading=False))
        elif isinstance(login_state, LoggedIn):
            self._state.set(INITIAL_SAVED_LIST_STATE)
            self._subscribe_saved_rooms(login_state.uid)
        else:
            self._state.set(
                replace(
                    INITIAL_SAVED_LIST_STATE,
                    error=UnknownLoginStateError(f"Don't know login_state={login_state!r}"),
                    is_loading=False,
                )
            )

    def _subscribe_saved_rooms(self, uid: str) -> None:
        active = True
        projected = self._rooms.saved_rooms(uid).map(
            lambda entities: SavedListState(
                error=None,
                is_loading=False,
                room_items=to_room_items(entities, uid, self._price_format),
            )
        )

        def cancel() -> None:
            nonlocal active
            active = False
            projected.dispose()

        def deliver(state: SavedListState) -> None:
            # On the loop thread, so a login switch cannot interleave.
            if not active:
                return
            if state.error is not None:
                logger.warning("Saved rooms of %s failed: %s", uid, state.error)
                cancel()
                if self._cancel_rooms is cancel:
                    self._cancel_rooms = None
            self._state.set(state)

        states = projected.catch(lambda error: replace(INITIAL_SAVED_LIST_STATE, error=error, is_loading=False))
        states.subscribe(lambda state: call_on_scheduler(lambda: deliver(state)))
        self._cancel_rooms = cancel

    def _cancel_room_subscription(self) -> None:
        cancel, self._cancel_rooms = self._cancel_rooms, None
        if cancel is not None:
            cancel()

    async def _toggle(self, room_id: str, uid: str) -> SavedMessage:
        try:
            result = await self._rooms.toggle_saved(room_id, uid)
        except Exception as e:
            logger.warning("Toggling saved room %s failed: %s", room_id, e)
            return RemovedSaveRoomError(e)
        return RemovedSaveRoomSuccess(result.title)
