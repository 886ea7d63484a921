"""Tests for Reaction, autorun, and reaction."""

from findroom import AuthState, LoggedIn, NotLoggedIn, Observable, autorun, reaction


class TestAutorun:
    def test_runs_immediately(self):
        o = Observable(10)
        log = []
        autorun(lambda: log.append(o.get()))
        assert log == [10]

    def test_reruns_on_change(self):
        o = Observable(10)
        log = []
        autorun(lambda: log.append(o.get()))
        o.set(20)
        assert log == [10, 20]

    def test_dispose_stops(self):
        o = Observable(10)
        log = []
        r = autorun(lambda: log.append(o.get()))
        r.dispose()
        assert r.disposed
        o.set(20)
        assert log == [10]


class TestReaction:
    def test_no_initial_effect(self):
        o = Observable("a")
        effects = []
        reaction(lambda: o.get(), lambda v: effects.append(v))
        assert effects == []

    def test_fires_on_change(self):
        o = Observable("a")
        effects = []
        reaction(lambda: o.get(), lambda v: effects.append(v))
        o.set("b")
        assert effects == ["b"]

    def test_fire_immediately(self):
        auth = AuthState()
        seen = []
        reaction(auth.login_state.get, seen.append, fire_immediately=True)
        auth.sign_in("u1")
        assert seen == [NotLoggedIn(), LoggedIn("u1")]

    def test_dedup_effect(self):
        """Effect only fires when data_fn result actually changes."""
        o = Observable(1)
        effects = []
        reaction(
            lambda: "even" if o.get() % 2 == 0 else "odd",
            lambda v: effects.append(v),
        )
        o.set(3)
        assert effects == []
        o.set(4)
        assert effects == ["even"]

    def test_effect_reads_are_not_tracked(self):
        trigger = Observable(0)
        other = Observable("x")
        effects = []
        reaction(trigger.get, lambda v: effects.append((v, other.get())))
        other.set("y")
        assert effects == []
        trigger.set(1)
        assert effects == [(1, "y")]

    def test_dispose(self):
        o = Observable(1)
        effects = []
        r = reaction(lambda: o.get(), lambda v: effects.append(v))
        o.set(2)
        assert effects == [2]
        r.dispose()
        o.set(3)
        assert effects == [2]
