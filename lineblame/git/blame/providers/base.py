"""
Abstract blame source interface.

A blame source produces the BlameInfo of exactly one file and owns
whatever is needed to do so. The cache owns every live source.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Callable, Optional

from ..models import BlameInfo


class BlameSource(ABC):
    """
    Memoized producer of blame data for one file.

    Implementations only provide ``_find_blame_info``; memoization,
    invalidation and disposal live here.

    Implementations include:
    - GitFileBlameSource (git blame through GitPython)
    - EmptyBlameSource (files that are not on disk)
    """

    def __init__(self, file_name: str, on_dispose: Optional[Callable[[], None]] = None):
        """
        Args:
            file_name: Absolute path of the file
            on_dispose: Called once when the source is disposed
        """
        self.file_name = file_name
        self._on_dispose = on_dispose
        self._blame_task: Optional[asyncio.Future] = None
        self._disposed = False

    @abstractmethod
    async def _find_blame_info(self) -> BlameInfo:
        """
        Retrieve blame data.

        Must not raise for retrieval failures; return an empty BlameInfo
        instead.
        """
        pass

    async def blame(self) -> BlameInfo:
        """
        Get the blame data of the file.

        The first call starts the retrieval; later calls share its
        result. The task is stored before the first suspension point so
        two concurrent first calls never retrieve twice.
        """
        if self._blame_task is None:
            self._blame_task = asyncio.ensure_future(self._find_blame_info())

        # Shielded so a cancelled caller does not cancel the shared task
        return await asyncio.shield(self._blame_task)

    @property
    def is_cached(self) -> bool:
        return self._blame_task is not None

    def invalidate(self) -> None:
        """Forget the memoized result; the next blame() retrieves again."""
        self._blame_task = None

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Release the source. Safe to call more than once."""
        if self._disposed:
            return

        self._disposed = True
        self._blame_task = None

        callback, self._on_dispose = self._on_dispose, None
        if callback is not None:
            callback()
