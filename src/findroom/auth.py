"""Login state and the auth state source the Blocs read it from."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Protocol, Union

from findroom.observable import Observable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotLoggedIn:
    pass


@dataclass(frozen=True)
class LoggedIn:
    uid: str


LoginState = Union[NotLoggedIn, LoggedIn]


class AuthStateSource(Protocol):
    """Where Blocs learn who is logged in.

    `login_state` pushes every change to its dependents;
    `current_login_state()` is a plain synchronous read.
    """

    @property
    def login_state(self) -> Observable[LoginState]: ...

    def current_login_state(self) -> LoginState: ...


class AuthState:
    """In-process auth state source backed by an Observable.

    Auth SDK listeners call sign_in()/sign_out(); writes from SDK threads are
    marshalled like any other Observable write.
    """

    def __init__(self, initial: LoginState | None = None) -> None:
        self._login_state: Observable[LoginState] = Observable(initial or NotLoggedIn())

    @property
    def login_state(self) -> Observable[LoginState]:
        return self._login_state

    def current_login_state(self) -> LoginState:
        return self._login_state.peek()

    def sign_in(self, uid: str) -> None:
        logger.debug("Signed in as %s", uid)
        self._login_state.set(LoggedIn(uid))

    def sign_out(self) -> None:
        logger.debug("Signed out")
        self._login_state.set(NotLoggedIn())
