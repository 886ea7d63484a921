"""Observable values: single cells of Bloc state that know their readers.

Reading an Observable inside a Computed or Reaction registers the
dependency. Writing a different value schedules every dependent; writing an
equal value is a no-op, which gives every Bloc output `distinct` semantics
for free.

Thread safety: call set_scheduler() once from the event-loop thread. After
that, set() from any other thread (remote SDK callbacks, worker pools) is
marshalled onto the loop; set() on the loop thread stays synchronous.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from findroom._tracking import schedule, track

T = TypeVar("T")

_scheduler = None
_scheduler_thread = None


def set_scheduler(scheduler) -> None:
    """Route cross-thread Observable writes through scheduler.

    Call once from the event-loop thread:
        findroom.set_scheduler(asyncio.get_running_loop().call_soon_threadsafe)
    """
    global _scheduler, _scheduler_thread
    _scheduler = scheduler
    _scheduler_thread = threading.current_thread()


def call_on_scheduler(fn: Callable[[], None]) -> None:
    """Run fn on the scheduler thread: now if already there, else via the scheduler."""
    if _scheduler is not None and threading.current_thread() != _scheduler_thread:
        _scheduler(fn)
    else:
        fn()


def _default_equals(old, new) -> bool:
    return old is new or old == new


class Observable(Generic[T]):
    """A single observable value with automatic dependency tracking."""

    __slots__ = ("_value", "_observers", "_equals")

    def __init__(self, value: T, *, equals: Callable[[T, T], bool] | None = None) -> None:
        self._value = value
        self._observers: set = set()
        self._equals = equals or _default_equals

    def get(self) -> T:
        """Read the value. If inside a derivation, registers the dependency."""
        track(self)
        return self._value

    def peek(self) -> T:
        """Read the value without registering a dependency."""
        return self._value

    def set(self, value: T) -> None:
        """Write a new value. Auto-marshals from foreign threads."""
        call_on_scheduler(lambda: self._set_direct(value))

    def _set_direct(self, value: T) -> None:
        if self._equals(self._value, value):
            return
        self._value = value
        for observer in list(self._observers):
            schedule(observer)

    def __repr__(self) -> str:
        return f"Observable({self._value!r})"
