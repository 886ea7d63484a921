"""Bloc base class: ownership and teardown of reactive resources.

A Bloc registers every reaction, stream and disposer callable it creates
with _own(). dispose() releases them all, after which commands are no-ops
and no output changes.
"""

from __future__ import annotations

import logging
from typing import TypeVar

D = TypeVar("D")

logger = logging.getLogger(__name__)


class Bloc:
    """Base class for reactive state containers."""

    def __init__(self) -> None:
        self._disposables: list = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def _own(self, disposable: D) -> D:
        """Take ownership of a disposable (has .dispose()) or a disposer callable."""
        self._disposables.append(disposable)
        return disposable

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        while self._disposables:
            d = self._disposables.pop()
            release = getattr(d, "dispose", d)
            release()
        logger.debug("%s disposed", type(self).__name__)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()
