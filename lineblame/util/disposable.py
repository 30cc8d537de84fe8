"""
Idempotent release handle.
"""

from typing import Any, Callable, Optional


class Disposable:
    """Wraps a release callback so it runs at most once."""

    def __init__(self, call_on_dispose: Optional[Callable[[], Any]] = None):
        self._call_on_dispose = call_on_dispose
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return

        self._disposed = True
        callback, self._call_on_dispose = self._call_on_dispose, None
        if callback is not None:
            callback()
