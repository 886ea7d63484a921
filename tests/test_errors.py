"""Tests for the error taxonomy and update-failure classification."""

import asyncio

import pytest

from findroom import (
    NotLoginError,
    RemoteOperationError,
    UnknownLoginStateError,
    UpdateErrorKind,
    classify_update_error,
)


class TestValueEquality:
    def test_same_type_and_args_are_equal(self):
        assert NotLoginError() == NotLoginError()
        assert hash(NotLoginError()) == hash(NotLoginError())
        assert UnknownLoginStateError("x") == UnknownLoginStateError("x")

    def test_different_args_or_types_differ(self):
        assert UnknownLoginStateError("x") != UnknownLoginStateError("y")
        assert NotLoginError() != UnknownLoginStateError()

    def test_remote_error_str(self):
        assert str(RemoteOperationError("quota", code="resource-exhausted")) == "[resource-exhausted] quota"
        assert str(RemoteOperationError("boom")) == "boom"


class TestClassifyUpdateError:
    @pytest.mark.parametrize(
        "code, kind",
        [
            ("unavailable", UpdateErrorKind.NETWORK),
            ("deadline-exceeded", UpdateErrorKind.NETWORK),
            ("permission-denied", UpdateErrorKind.PERMISSION_DENIED),
            ("unauthenticated", UpdateErrorKind.PERMISSION_DENIED),
            ("not-found", UpdateErrorKind.NOT_FOUND),
            ("invalid-argument", UpdateErrorKind.INVALID_ARGUMENT),
            ("internal", UpdateErrorKind.UNKNOWN),
            (None, UpdateErrorKind.UNKNOWN),
        ],
    )
    def test_remote_codes(self, code, kind):
        error = RemoteOperationError("failed", code=code)
        classified = classify_update_error(error)
        assert classified.kind is kind
        assert classified.cause is error

    @pytest.mark.parametrize(
        "error, kind",
        [
            (ConnectionResetError(), UpdateErrorKind.NETWORK),
            (TimeoutError(), UpdateErrorKind.NETWORK),
            (asyncio.TimeoutError(), UpdateErrorKind.NETWORK),
            (PermissionError(), UpdateErrorKind.PERMISSION_DENIED),
            (FileNotFoundError("avatar.jpg"), UpdateErrorKind.NOT_FOUND),
            (ValueError("bad"), UpdateErrorKind.INVALID_ARGUMENT),
            (RuntimeError("?"), UpdateErrorKind.UNKNOWN),
        ],
    )
    def test_builtin_exceptions(self, error, kind):
        assert classify_update_error(error).kind is kind
