"""Textual bridge for Bloc outputs. Opt-in, requires textual.

Screens bind Bloc state (Observables, Computeds) with reaction() and Bloc
message streams with subscribe(). Both skip effects while the app is
paused or not running, swallow NoMatches from widget queries made during
screen transitions, and marshal effects triggered on foreign threads with
app.call_from_thread.
"""

import threading
from contextlib import contextmanager

from textual.css.query import NoMatches

from findroom.reaction import reaction as _reaction

# id(app) present <-> inside a pause() block for that app.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend bound effects while widgets are being replaced."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def _guard(app, effect_fn):
    main = threading.get_ident()

    def _safe(value):
        try:
            effect_fn(value)
        except NoMatches:
            pass

    def _guarded(value):
        if not is_safe(app):
            return
        if threading.get_ident() != main:
            app.call_from_thread(_safe, value)
        else:
            _safe(value)

    return _guarded


def reaction(app, data_fn, effect_fn, *, fire_immediately=False):
    """reaction() whose effect updates widgets of app.

    Usage:
        stx.reaction(app, bloc.state.get, render_saved_list, fire_immediately=True)
    """
    return _reaction(data_fn, _guard(app, effect_fn), fire_immediately=fire_immediately)


def subscribe(app, stream, effect_fn):
    """Subscribe effect_fn to a Bloc message stream. Returns the disposer.

    Usage:
        stx.subscribe(app, bloc.message, show_toast)
    """
    return stream.subscribe(_guard(app, effect_fn))
