"""Actions and transactions: batched state mutations.

Wrapping mutations in an @action or `with transaction()` defers dependent
re-evaluation until the outermost scope exits, so observers of a Bloc see
each update atomically.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Callable, ParamSpec, TypeVar

from findroom._tracking import begin_batch, end_batch

P = ParamSpec("P")
R = TypeVar("R")


def action(fn: Callable[P, R]) -> Callable[P, R]:
    """Decorator: batch all observable mutations inside fn.

    Usage:
        @action
        def finish_submit(message):
            is_loading.set(False)
            last_message.set(message)
            # reactions see both changes at once
    """

    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        begin_batch()
        try:
            return fn(*args, **kwargs)
        finally:
            end_batch()

    return wrapper


@contextmanager
def transaction():
    """Context manager form of @action."""
    begin_batch()
    try:
        yield
    finally:
        end_batch()
