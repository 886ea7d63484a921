"""Dependency tracking for the reactive core.

A context variable names the derivation (computed value or reaction) that is
currently being evaluated. Observable reads made while it is set register
that derivation as a dependent.

Batching: mutations made inside an @action or `with transaction()` collect
the derivations they invalidate and run them once when the outermost batch
exits, so a Bloc's dependents never observe a half-applied update.
"""

from __future__ import annotations

import contextvars
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from findroom.computed import Computed
    from findroom.reaction import Reaction

    Derivation = Computed | Reaction

current_derivation: contextvars.ContextVar[Derivation | None] = contextvars.ContextVar(
    "current_derivation", default=None
)

_batch_depth: int = 0

# Insertion-ordered so flushes run derivations in the order they were invalidated.
_pending: dict[Derivation, None] = {}


def begin_batch() -> None:
    """Enter a batching scope. Scopes nest."""
    global _batch_depth
    _batch_depth += 1


def end_batch() -> None:
    """Leave a batching scope, flushing pending derivations at the outermost one."""
    global _batch_depth
    _batch_depth -= 1
    if _batch_depth == 0:
        _flush_pending()


def schedule(derivation: Derivation) -> None:
    """Run a derivation now, or defer it until the current batch ends."""
    if _batch_depth > 0:
        _pending[derivation] = None
    else:
        derivation._run()


def track(source) -> None:
    """Register the running derivation, if any, as a dependent of source."""
    derivation = current_derivation.get()
    if derivation is not None:
        source._observers.add(derivation)
        derivation._dependencies.add(source)


def untrack(derivation: Derivation) -> None:
    """Drop every dependency edge of a derivation."""
    for dep in derivation._dependencies:
        dep._observers.discard(derivation)
    derivation._dependencies.clear()


def _flush_pending() -> None:
    global _batch_depth
    while _pending:
        # Invalidate every pending computed before any reaction runs, so no
        # reaction reads a cache that is about to go stale.
        _batch_depth += 1
        try:
            while lazy := [d for d in _pending if getattr(d, "lazy", False)]:
                for derivation in lazy:
                    del _pending[derivation]
                    derivation._run()
        finally:
            _batch_depth -= 1
        batch = list(_pending)
        _pending.clear()
        for derivation in batch:
            derivation._run()


def get_pending_count() -> int:
    """Number of derivations waiting for the current batch to end."""
    return len(_pending)
