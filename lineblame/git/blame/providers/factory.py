"""
Blame source factory.

Returns a git-backed source for files that exist on disk and an empty
source for everything else (untitled buffers, deleted files).
"""

import os
from typing import Callable, Optional

from .base import BlameSource
from .local_git import EmptyBlameSource, GitFileBlameSource
from lineblame.config import PropertyStore
from lineblame.util.error_handler import ErrorHandler


# Signature the cache uses to build sources: (file_name, on_dispose) -> source
SourceFactory = Callable[[str, Callable[[], None]], BlameSource]


def create_blame_source(
    file_name: str,
    on_dispose: Optional[Callable[[], None]] = None,
    properties: Optional[PropertyStore] = None,
    error_handler: Optional[ErrorHandler] = None
) -> BlameSource:
    """
    Create the blame source for a file.

    Args:
        file_name: Absolute path of the file
        on_dispose: Called once when the source is disposed
        properties: Live configuration
        error_handler: Output channel for retrieval failures

    Returns:
        A BlameSource implementation.
    """
    if os.path.isfile(file_name):
        return GitFileBlameSource(file_name, on_dispose, properties, error_handler)

    return EmptyBlameSource(file_name, on_dispose)
