"""Tests for the Bloc base lifecycle."""

from findroom import Bloc, EventStream, Observable, reaction


class TestBloc:
    def test_dispose_releases_everything(self):
        bloc = Bloc()
        o = Observable(0)
        effects = []
        released = []
        r = bloc._own(reaction(o.get, effects.append))
        stream = bloc._own(EventStream())
        bloc._own(lambda: released.append(True))

        bloc.dispose()

        o.set(1)
        assert effects == []
        assert r.disposed
        assert stream.disposed
        assert released == [True]
        assert bloc.disposed

    def test_dispose_is_idempotent(self):
        bloc = Bloc()
        released = []
        bloc._own(lambda: released.append(True))
        bloc.dispose()
        bloc.dispose()
        assert released == [True]

    def test_releases_in_reverse_order(self):
        bloc = Bloc()
        order = []
        bloc._own(lambda: order.append("first"))
        bloc._own(lambda: order.append("second"))
        bloc.dispose()
        assert order == ["second", "first"]

    def test_context_manager(self):
        with Bloc() as bloc:
            assert not bloc.disposed
        assert bloc.disposed
