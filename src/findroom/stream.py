"""Push-based event stream with operator chaining.

Streams carry one-shot events (commands, result messages, remote snapshots)
where Observable carries current state. Emit values, fail with an error,
subscribe, and compose with operators. Each operator returns a new child
stream; dispose() tears down the child and everything below it.

The async operators (flat_map, exhaust_map) run the awaitable returned by
their mapping function as an asyncio task on the running loop and re-enter
the stream when it completes. Results of tasks still running when the child
is disposed are discarded; the tasks are left to finish.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")

Disposer = Callable[[], None]
ErrorHandler = Callable[[BaseException], None]

logger = logging.getLogger(__name__)


class EventStream(Generic[T]):
    """Push-based event stream with an error channel and operator chaining."""

    def __init__(self) -> None:
        self._subscribers: list[tuple[Callable[[T], None], ErrorHandler | None]] = []
        self._children: list[EventStream] = []
        self._disposed = False
        self._parent_disposers: list[Disposer] = []
        self._tasks: set[asyncio.Task] = set()

    @property
    def disposed(self) -> bool:
        return self._disposed

    def emit(self, value: T) -> None:
        """Push a value to all subscribers."""
        if self._disposed:
            return
        for on_value, _ in list(self._subscribers):
            on_value(value)

    def fail(self, error: BaseException) -> None:
        """Push an error to all subscribers.

        A subscriber registered without on_error gets the error raised back
        to the caller of fail().
        """
        if self._disposed:
            return
        for _, on_error in list(self._subscribers):
            if on_error is None:
                raise error
            on_error(error)

    def subscribe(
        self,
        on_value: Callable[[T], None],
        on_error: ErrorHandler | None = None,
    ) -> Disposer:
        """Register callbacks. Returns a function that removes them."""
        entry = (on_value, on_error)
        self._subscribers.append(entry)

        def _unsubscribe() -> None:
            try:
                self._subscribers.remove(entry)
            except ValueError:
                pass  # already removed

        return _unsubscribe

    # --- Synchronous operators ---

    def map(self, fn: Callable[[T], U]) -> EventStream[U]:
        """Transform events through fn. An exception raised by fn fails the child."""
        child: EventStream[U] = self._child()

        def _on_value(value: T) -> None:
            try:
                mapped = fn(value)
            except Exception as e:
                child.fail(e)
                return
            child.emit(mapped)

        child._parent_disposers.append(self.subscribe(_on_value, child.fail))
        return child

    def filter(self, fn: Callable[[T], bool]) -> EventStream[T]:
        """Only pass events where fn returns True."""
        child: EventStream[T] = self._child()
        child._parent_disposers.append(
            self.subscribe(lambda v: child.emit(v) if fn(v) else None, child.fail)
        )
        return child

    def catch(self, fn: Callable[[BaseException], T]) -> EventStream[T]:
        """Turn errors into values with fn."""
        child: EventStream[T] = self._child()
        child._parent_disposers.append(self.subscribe(child.emit, lambda e: child.emit(fn(e))))
        return child

    @staticmethod
    def merge(*streams: EventStream[T]) -> EventStream[T]:
        """Interleave events of several streams in arrival order."""
        child: EventStream[T] = EventStream()
        for stream in streams:
            child._parent_disposers.append(stream._track_child(child))
            child._parent_disposers.append(stream.subscribe(child.emit, child.fail))
        return child

    # --- Async operators ---

    def flat_map(self, fn: Callable[[T], Awaitable[U]]) -> EventStream[U]:
        """Start fn(value) for every event; emit results as they complete.

        Calls run concurrently and independently. Requires a running
        asyncio event loop when events arrive.
        """
        child: EventStream[U] = self._child()
        child._parent_disposers.append(self.subscribe(lambda v: child._start(fn(v)), child.fail))
        return child

    def exhaust_map(self, fn: Callable[[T], Awaitable[U]]) -> EventStream[U]:
        """Like flat_map, but drop events while a previous call is in flight."""
        child: EventStream[U] = self._child()

        def _on_value(value: T) -> None:
            if child._tasks:
                logger.debug("Dropping %r, previous call still running", value)
                return
            child._start(fn(value))

        child._parent_disposers.append(self.subscribe(_on_value, child.fail))
        return child

    def _start(self, awaitable: Awaitable) -> asyncio.Task:
        task = asyncio.ensure_future(awaitable, loop=asyncio.get_running_loop())
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if self._disposed or task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self.fail(error)
        else:
            self.emit(task.result())

    # --- Lifecycle ---

    def dispose(self) -> None:
        """Tear down this stream and all downstream children."""
        self._disposed = True
        self._subscribers.clear()
        for child in list(self._children):
            child.dispose()
        self._children.clear()
        for remove in self._parent_disposers:
            remove()
        self._parent_disposers.clear()

    def _child(self) -> EventStream:
        child: EventStream = EventStream()
        child._parent_disposers.append(self._track_child(child))
        return child

    def _track_child(self, child: EventStream) -> Disposer:
        """Register child for dispose propagation. Returns a disposer that removes it."""
        self._children.append(child)

        def _remove() -> None:
            try:
                self._children.remove(child)
            except ValueError:
                pass

        return _remove
