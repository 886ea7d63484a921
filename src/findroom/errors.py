"""Error taxonomy shared by the Blocs.

Exceptions here travel as values: Blocs catch remote failures at their
boundary and put them into state or message objects, so exceptions compare
by type and arguments to keep equal states equal.
"""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass


class FindRoomError(Exception):
    """Base class for errors raised or reported by findroom."""

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.args == other.args

    def __hash__(self) -> int:
        return hash((type(self), self.args))


class NotLoginError(FindRoomError):
    """The operation needs a logged-in user."""


class UnknownLoginStateError(FindRoomError):
    """The auth source reported a login state of an unknown variant."""


class ConfigError(FindRoomError):
    """A configuration value is missing or malformed."""


class RemoteOperationError(FindRoomError):
    """A remote store call failed.

    `code` carries the backend's status string (e.g. "unavailable",
    "permission-denied") when the adapter knows it.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message, code)
        self.message = message
        self.code = code

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}" if self.code else self.message


class ValidationError(enum.Enum):
    """Per-field validation failures of the profile form."""

    FULL_NAME_TOO_SHORT = "Full name must be at least 3 characters"
    EMPTY_ADDRESS = "Address must not be empty"
    INVALID_PHONE_NUMBER = "Invalid phone number"


class UpdateErrorKind(enum.Enum):
    NETWORK = "network"
    PERMISSION_DENIED = "permission_denied"
    NOT_FOUND = "not_found"
    INVALID_ARGUMENT = "invalid_argument"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class UpdateUserInfoError:
    """Classified failure of a profile update."""

    kind: UpdateErrorKind
    cause: BaseException | None = None


_CODE_KINDS = {
    "unavailable": UpdateErrorKind.NETWORK,
    "deadline-exceeded": UpdateErrorKind.NETWORK,
    "permission-denied": UpdateErrorKind.PERMISSION_DENIED,
    "unauthenticated": UpdateErrorKind.PERMISSION_DENIED,
    "not-found": UpdateErrorKind.NOT_FOUND,
    "invalid-argument": UpdateErrorKind.INVALID_ARGUMENT,
}

# Checked in order; subclasses before their bases.
_TYPE_KINDS: tuple[tuple[type[BaseException], UpdateErrorKind], ...] = (
    (PermissionError, UpdateErrorKind.PERMISSION_DENIED),
    (FileNotFoundError, UpdateErrorKind.NOT_FOUND),
    (ConnectionError, UpdateErrorKind.NETWORK),
    (TimeoutError, UpdateErrorKind.NETWORK),
    (asyncio.TimeoutError, UpdateErrorKind.NETWORK),
    (ValueError, UpdateErrorKind.INVALID_ARGUMENT),
)


def classify_update_error(error: BaseException) -> UpdateUserInfoError:
    """Map a failure of the profile update call onto an UpdateErrorKind."""
    if isinstance(error, RemoteOperationError):
        kind = _CODE_KINDS.get(error.code or "", UpdateErrorKind.UNKNOWN)
        return UpdateUserInfoError(kind, error)
    for exc_type, kind in _TYPE_KINDS:
        if isinstance(error, exc_type):
            return UpdateUserInfoError(kind, error)
    return UpdateUserInfoError(UpdateErrorKind.UNKNOWN, error)
