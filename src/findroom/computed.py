"""Computed values: derived Bloc state with automatic dependency tracking.

A Computed wraps a pure function of other observables. The result is cached
and only recomputed on the next read after a dependency changed, so a value
such as "all form fields valid" costs nothing until somebody asks for it.
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from findroom._tracking import current_derivation, schedule, track, untrack

T = TypeVar("T")

_UNSET = object()


class Computed(Generic[T]):
    """A derived value that auto-tracks dependencies and caches the result."""

    __slots__ = ("_fn", "_value", "_dirty", "_dependencies", "_observers")

    lazy = True

    def __init__(self, fn: Callable[[], T]) -> None:
        self._fn = fn
        self._value = _UNSET
        self._dirty = True
        self._dependencies: set = set()
        self._observers: set = set()

    def get(self) -> T:
        """Read the computed value. Recomputes if dirty."""
        track(self)
        if self._dirty:
            self._recompute()
        return self._value

    def _recompute(self) -> None:
        untrack(self)
        token = current_derivation.set(self)
        try:
            self._value = self._fn()
        finally:
            current_derivation.reset(token)
        self._dirty = False

    def _run(self) -> None:
        # Invalidate only; evaluation waits for the next get().
        if not self._dirty:
            self._dirty = True
            for observer in list(self._observers):
                schedule(observer)

    def dispose(self) -> None:
        """Disconnect from all dependencies. The computed becomes inert."""
        untrack(self)
        self._observers.clear()
        self._dirty = True
        self._value = _UNSET

    def __repr__(self) -> str:
        state = "dirty" if self._dirty else f"cached={self._value!r}"
        return f"Computed({getattr(self._fn, '__name__', 'fn')}, {state})"


def computed(fn: Callable[[], T]) -> Computed[T]:
    """Decorator/factory to create a Computed from a function.

    Usage:
        full_name = Observable("")

        @computed
        def full_name_error():
            return None if len(full_name.get()) >= 3 else ValidationError.FULL_NAME_TOO_SHORT
    """
    return Computed(fn)
