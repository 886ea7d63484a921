"""Reactions: side effects triggered by observable state changes.

Unlike Computed (lazy), a Reaction re-runs eagerly whenever a tracked
dependency changes. Blocs use reactions to restart work when an upstream
value such as the login state moves on.

Two flavors:
- autorun(fn): runs fn immediately, re-runs when any observable it read changes.
- reaction(data_fn, effect_fn): tracks data_fn and calls effect_fn with the
  new value only when data_fn's result changes.
"""

from __future__ import annotations

from typing import Callable, TypeVar

from findroom._tracking import current_derivation, untrack

T = TypeVar("T")


class Reaction:
    """A reactive side effect that re-runs when its dependencies change."""

    __slots__ = ("_fn", "_dependencies", "_disposed")

    def __init__(self, fn: Callable[[], None]) -> None:
        self._fn = fn
        self._dependencies: set = set()
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _run(self) -> None:
        if self._disposed:
            return
        untrack(self)
        token = current_derivation.set(self)
        try:
            self._fn()
        finally:
            current_derivation.reset(token)

    def dispose(self) -> None:
        """Stop this reaction. Disconnects from all dependencies."""
        self._disposed = True
        untrack(self)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"Reaction({getattr(self._fn, '__name__', 'fn')}, {state})"


class _DataReaction:
    """reaction(data_fn, effect_fn) implementation.

    Only data_fn is tracked; effect_fn runs untracked, so state it writes
    does not loop back into this reaction.
    """

    __slots__ = ("_data_fn", "_effect_fn", "_dependencies", "_disposed", "_last_value", "_initialized")

    def __init__(self, data_fn: Callable, effect_fn: Callable) -> None:
        self._data_fn = data_fn
        self._effect_fn = effect_fn
        self._dependencies: set = set()
        self._disposed = False
        self._last_value = None
        self._initialized = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _evaluate(self):
        untrack(self)
        token = current_derivation.set(self)
        try:
            return self._data_fn()
        finally:
            current_derivation.reset(token)

    def _run(self) -> None:
        if self._disposed:
            return
        new_value = self._evaluate()
        if not self._initialized or new_value != self._last_value:
            self._last_value = new_value
            self._initialized = True
            self._effect_fn(new_value)

    def dispose(self) -> None:
        self._disposed = True
        untrack(self)

    def __repr__(self) -> str:
        state = "disposed" if self._disposed else "active"
        return f"_DataReaction({getattr(self._data_fn, '__name__', 'fn')}, {state})"


def autorun(fn: Callable[[], None]) -> Reaction:
    """Run fn immediately, then re-run whenever any observable it reads changes.

    Returns the Reaction (call .dispose() to stop).
    """
    r = Reaction(fn)
    r._run()
    return r


def reaction(
    data_fn: Callable[[], T],
    effect_fn: Callable[[T], None],
    *,
    fire_immediately: bool = False,
) -> _DataReaction:
    """Track data_fn's observables; call effect_fn when the result changes.

    Usage:
        auth = AuthState()
        seen = []
        r = reaction(auth.login_state.get, seen.append, fire_immediately=True)
        # seen == [NotLoggedIn()]

        auth.sign_in("u1")
        # seen == [NotLoggedIn(), LoggedIn(uid="u1")]

        r.dispose()
    """
    r = _DataReaction(data_fn, effect_fn)
    if fire_immediately:
        r._run()
    else:
        r._last_value = r._evaluate()
        r._initialized = True
    return r
