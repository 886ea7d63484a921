"""UpdateUserInfoBloc: the edit-profile form.

Each field is an Observable seeded with "" and each field error a Computed
over it, so errors follow every keystroke. Validity of the whole form is
only evaluated when the user submits. Submissions are single-flight: a
submit arriving while an update call is running is dropped, not queued.
"""

from __future__ import annotations

import logging
import os
import re

from findroom.action import action
from findroom.auth import AuthStateSource, LoggedIn
from findroom.bloc import Bloc
from findroom.computed import Computed
from findroom.errors import NotLoginError, ValidationError, classify_update_error
from findroom.models import (
    InvalidInformation,
    UpdateFailure,
    UpdateSuccess,
    UpdateUserInfoMessage,
)
from findroom.observable import Observable
from findroom.repositories import UserRepository
from findroom.stream import EventStream

logger = logging.getLogger(__name__)

PHONE_NUMBER_RE = re.compile(r"[+]?[(]?[0-9]{1,4}[)]?(?:[-\s./0-9]|[(][0-9]+[)])*")

AvatarPath = str | os.PathLike


def validate_full_name(full_name: str | None) -> ValidationError | None:
    if full_name is None or len(full_name) < 3:
        return ValidationError.FULL_NAME_TOO_SHORT
    return None


def validate_address(address: str | None) -> ValidationError | None:
    if not address:
        return ValidationError.EMPTY_ADDRESS
    return None


def validate_phone_number(phone_number: str | None) -> ValidationError | None:
    if phone_number is None or PHONE_NUMBER_RE.fullmatch(phone_number) is None:
        return ValidationError.INVALID_PHONE_NUMBER
    return None


def same_path(a: AvatarPath | None, b: AvatarPath | None) -> bool:
    """Compare avatar selections by normalised file path."""
    return os.path.normpath(os.fspath(a or "")) == os.path.normpath(os.fspath(b or ""))


class UpdateUserInfoBloc(Bloc):
    """Profile form state, validation and submission for one user.

    Outputs:
        full_name_error, address_error, phone_number_error: Computed errors.
        avatar: Observable of the selected image path.
        is_loading: Observable[bool], True while an update call runs.
        message: EventStream[UpdateUserInfoMessage], one per handled submit.
    """

    def __init__(
        self,
        *,
        uid: str,
        user_repository: UserRepository,
        auth: AuthStateSource,
    ) -> None:
        login_state = auth.current_login_state()
        if not isinstance(login_state, LoggedIn) or login_state.uid != uid:
            raise NotLoginError(f"User is not logged in or invalid user id: {uid!r}")

        super().__init__()
        self._uid = uid
        self._users = user_repository

        self._full_name = Observable("")
        self._address = Observable("")
        self._phone_number = Observable("")
        self._avatar: Observable[AvatarPath | None] = Observable(None, equals=same_path)
        self._is_loading = Observable(False)

        self._full_name_error = self._own(Computed(lambda: validate_full_name(self._full_name.get())))
        self._address_error = self._own(Computed(lambda: validate_address(self._address.get())))
        self._phone_number_error = self._own(
            Computed(lambda: validate_phone_number(self._phone_number.get()))
        )
        self._is_valid = self._own(
            Computed(
                lambda: all(
                    error.get() is None
                    for error in (self._full_name_error, self._address_error, self._phone_number_error)
                )
            )
        )

        submits: EventStream[None] = self._own(EventStream())
        self._submit = submits
        checked = submits.map(lambda _: self._is_valid.get())
        invalid = checked.filter(lambda ok: not ok).map(lambda _: InvalidInformation())
        performed = checked.filter(bool).exhaust_map(lambda _: self._begin_update())
        self._message: EventStream[UpdateUserInfoMessage] = EventStream.merge(invalid, performed)
        self._message.subscribe(lambda message: logger.debug("message=%r", message))

    # --- Outputs ---

    @property
    def full_name_error(self) -> Computed[ValidationError | None]:
        return self._full_name_error

    @property
    def address_error(self) -> Computed[ValidationError | None]:
        return self._address_error

    @property
    def phone_number_error(self) -> Computed[ValidationError | None]:
        return self._phone_number_error

    @property
    def avatar(self) -> Observable[AvatarPath | None]:
        return self._avatar

    @property
    def is_loading(self) -> Observable[bool]:
        return self._is_loading

    @property
    def message(self) -> EventStream[UpdateUserInfoMessage]:
        return self._message

    # --- Inputs ---

    def full_name_changed(self, full_name: str) -> None:
        if not self.disposed:
            self._full_name.set(full_name)

    def address_changed(self, address: str) -> None:
        if not self.disposed:
            self._address.set(address)

    def phone_number_changed(self, phone_number: str) -> None:
        if not self.disposed:
            self._phone_number.set(phone_number)

    def avatar_changed(self, path: AvatarPath | None) -> None:
        if self.disposed:
            return
        logger.debug("file=%s", path)
        self._avatar.set(path)

    @action
    def prefill(self, *, full_name: str = "", address: str = "", phone_number: str = "") -> None:
        """Load the stored profile into the form in one update."""
        self.full_name_changed(full_name)
        self.address_changed(address)
        self.phone_number_changed(phone_number)

    def submit_changes(self) -> None:
        if not self.disposed:
            self._submit.emit(None)

    def _begin_update(self):
        # Values are taken together with the validity check, not when the call starts.
        fields = dict(
            full_name=self._full_name.peek(),
            address=self._address.peek(),
            phone_number=self._phone_number.peek(),
            avatar=self._avatar.peek(),
        )
        self._is_loading.set(True)
        return self._perform_update(**fields)

    async def _perform_update(
        self,
        *,
        full_name: str,
        address: str,
        phone_number: str,
        avatar: AvatarPath | None,
    ) -> UpdateUserInfoMessage:
        try:
            await self._users.update_user_info(
                uid=self._uid,
                full_name=full_name,
                address=address,
                phone_number=phone_number,
                avatar=avatar,
            )
        except Exception as e:
            logger.warning("Updating user info of %s failed: %s", self._uid, e)
            return UpdateFailure(classify_update_error(e))
        finally:
            if not self.disposed:
                self._is_loading.set(False)
        return UpdateSuccess()
