"""
Abstract blame source store interface.

A store owns the live blame sources, at most one per file.
"""

from abc import ABC, abstractmethod

from ..providers.base import BlameSource


class SourceStore(ABC):
    """
    Abstract interface for owning per-file blame sources.

    Implementations include:
    - BlameCache (in-memory, one process)
    """

    @abstractmethod
    def get_or_create(self, file_name: str) -> BlameSource:
        """
        Get the live source for a file, creating it on first use.

        Args:
            file_name: Path to the file

        Returns:
            The same BlameSource for every call until it is disposed
        """
        pass

    @abstractmethod
    def dispose(self, file_name: str) -> None:
        """Dispose and forget the source for a file, if any."""
        pass

    @abstractmethod
    def dispose_all(self) -> None:
        """Dispose every live source."""
        pass

    @abstractmethod
    def invalidate(self, file_name: str) -> None:
        """Drop the memoized blame of a file while keeping its source."""
        pass
