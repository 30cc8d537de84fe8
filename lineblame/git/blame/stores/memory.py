"""
In-memory blame cache.

This module provides the per-file cache of blame sources used by the
line resolver.
"""

import os
from typing import Callable, Dict, List, Optional

from .base import SourceStore
from ..providers.base import BlameSource
from ..providers.factory import SourceFactory, create_blame_source


class BlameCache(SourceStore):
    """
    In-memory implementation of SourceStore.

    Keys are absolute file paths. Creating an entry never starts a
    retrieval; that happens on the source's first blame() call.
    """

    def __init__(self, source_factory: Optional[SourceFactory] = None):
        """
        Args:
            source_factory: Builds a source from (file_name, on_dispose)
        """
        self._source_factory = source_factory or create_blame_source
        self._files: Dict[str, BlameSource] = {}

    @staticmethod
    def _key(file_name: str) -> str:
        return os.path.abspath(file_name)

    def get_or_create(self, file_name: str) -> BlameSource:
        key = self._key(file_name)

        source = self._files.get(key)
        if source is None:
            holder: List[BlameSource] = []
            source = self._source_factory(key, self._generate_dispose_function(key, holder))
            holder.append(source)
            self._files[key] = source

        return source

    def _generate_dispose_function(self, key: str, holder: List[BlameSource]) -> Callable[[], None]:
        def remove() -> None:
            # Only forget the entry if it is still the source being disposed
            if holder and self._files.get(key) is holder[0]:
                del self._files[key]

        return remove

    def dispose(self, file_name: str) -> None:
        source = self._files.pop(self._key(file_name), None)
        if source is not None:
            source.dispose()

    def dispose_all(self) -> None:
        sources = list(self._files.values())
        self._files.clear()

        for source in sources:
            source.dispose()

    def invalidate(self, file_name: str) -> None:
        source = self._files.get(self._key(file_name))
        if source is not None:
            source.invalidate()

    def __contains__(self, file_name: str) -> bool:
        return self._key(file_name) in self._files

    def __len__(self) -> int:
        return len(self._files)

    def get_statistics(self) -> Dict:
        """Get cache statistics."""
        return {
            "cached_files": len(self._files),
            "blamed_files": sum(1 for s in self._files.values() if s.is_cached),
            "files": sorted(self._files)
        }
