"""findroom: reactive state core of the FindRoom room-rental client."""

from importlib.metadata import version as _version

__version__ = _version("findroom")

from findroom._tracking import get_pending_count
from findroom.observable import Observable, set_scheduler
from findroom.computed import Computed, computed
from findroom.reaction import Reaction, autorun, reaction
from findroom.action import action, transaction
from findroom.stream import EventStream
from findroom.bloc import Bloc
from findroom.auth import AuthState, AuthStateSource, LoggedIn, LoginState, NotLoggedIn
from findroom.errors import (
    ConfigError,
    FindRoomError,
    NotLoginError,
    RemoteOperationError,
    UnknownLoginStateError,
    UpdateErrorKind,
    UpdateUserInfoError,
    ValidationError,
    classify_update_error,
)
from findroom.config import AppConfig, PriceFormat, configure_logging, load_config
from findroom.models import (
    INITIAL_SAVED_LIST_STATE,
    InvalidInformation,
    RemovedSaveRoomError,
    RemovedSaveRoomSuccess,
    RoomEntity,
    RoomItem,
    SavedListState,
    SavedMessage,
    UpdateFailure,
    UpdateSuccess,
    UpdateUserInfoMessage,
)
from findroom.repositories import RoomRepository, ToggleResult, UserRepository
from findroom.saved import SavedListBloc
from findroom.update_user_info import UpdateUserInfoBloc
# textual bridge is opt-in, not auto-imported

__all__ = [
    "Observable",
    "Computed",
    "computed",
    "Reaction",
    "autorun",
    "reaction",
    "action",
    "transaction",
    "get_pending_count",
    "set_scheduler",
    "EventStream",
    "Bloc",
    "AuthState",
    "AuthStateSource",
    "LoggedIn",
    "LoginState",
    "NotLoggedIn",
    "ConfigError",
    "FindRoomError",
    "NotLoginError",
    "RemoteOperationError",
    "UnknownLoginStateError",
    "UpdateErrorKind",
    "UpdateUserInfoError",
    "ValidationError",
    "classify_update_error",
    "AppConfig",
    "PriceFormat",
    "configure_logging",
    "load_config",
    "INITIAL_SAVED_LIST_STATE",
    "InvalidInformation",
    "RemovedSaveRoomError",
    "RemovedSaveRoomSuccess",
    "RoomEntity",
    "RoomItem",
    "SavedListState",
    "SavedMessage",
    "UpdateFailure",
    "UpdateSuccess",
    "UpdateUserInfoMessage",
    "RoomRepository",
    "ToggleResult",
    "UserRepository",
    "SavedListBloc",
    "UpdateUserInfoBloc",
]
