"""Tests for batching Bloc inputs with @action and transaction()."""

import pytest

from findroom import (
    AuthState,
    Computed,
    LoggedIn,
    NotLoginError,
    SavedListBloc,
    UpdateUserInfoBloc,
    action,
    get_pending_count,
    reaction,
    transaction,
)


@pytest.fixture
def profile_bloc(users):
    return UpdateUserInfoBloc(uid="u1", user_repository=users, auth=AuthState(LoggedIn("u1")))


def _form_validity(bloc, runs):
    def form_valid():
        runs.append(1)
        return all(
            error.get() is None
            for error in (bloc.full_name_error, bloc.address_error, bloc.phone_number_error)
        )

    return Computed(form_valid)


class TestAction:
    def test_prefill_recomputes_validity_once(self, profile_bloc):
        runs = []
        valid = _form_validity(profile_bloc, runs)
        seen = []
        reaction(valid.get, seen.append, fire_immediately=True)
        runs.clear()

        profile_bloc.prefill(full_name="Alice", address="12 Nguyen Trai", phone_number="0901234567")

        assert runs == [1]
        assert seen == [False, True]

    def test_field_edits_outside_action_recompute_each_time(self, profile_bloc):
        runs = []
        valid = _form_validity(profile_bloc, runs)
        reaction(valid.get, lambda v: None)
        runs.clear()

        profile_bloc.full_name_changed("Alice")
        profile_bloc.address_changed("12 Nguyen Trai")
        profile_bloc.phone_number_changed("0901234567")

        assert len(runs) == 3

    def test_nested_in_outer_action(self, profile_bloc):
        seen = []
        reaction(lambda: (profile_bloc.full_name_error.get(), profile_bloc.avatar.get()), seen.append)

        @action
        def load_profile(profile):
            profile_bloc.prefill(full_name=profile["name"], address=profile["address"])
            profile_bloc.avatar_changed(profile["photo"])

        load_profile({"name": "Alice", "address": "12 Nguyen Trai", "photo": "/photos/me.jpg"})

        assert seen == [(None, "/photos/me.jpg")]

    def test_preserves_return_value(self, profile_bloc):
        @action
        def load_and_check(name):
            profile_bloc.prefill(full_name=name)
            return profile_bloc.full_name_error.get()

        assert load_and_check("Alice") is None


class TestTransaction:
    def test_account_switch_is_one_login_change(self, auth, rooms):
        auth.sign_in("u1")
        bloc = SavedListBloc(auth=auth, room_repository=rooms)
        states = []
        reaction(bloc.state.get, states.append)

        with transaction():
            auth.sign_out()
            auth.sign_in("u2")
            assert get_pending_count() == 1

        assert get_pending_count() == 0
        assert all(s.error != NotLoginError() for s in states)
        assert sorted(rooms.streams) == ["u1", "u2"]
        assert rooms.latest("u1")._subscribers == []

    def test_sign_out_and_back_keeps_subscription(self, auth, rooms):
        auth.sign_in("u1")
        SavedListBloc(auth=auth, room_repository=rooms)

        with transaction():
            auth.sign_out()
            with transaction():
                auth.sign_in("u1")

        assert len(rooms.streams["u1"]) == 1
