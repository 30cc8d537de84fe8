"""
Local git blame source using GitPython.

Blames the working tree copy of a file, so lines with uncommitted
changes come back attributed to the all-zero hash.
"""

import asyncio
import os
from typing import Callable, List, Optional

from .base import BlameSource
from .incremental import parse_incremental
from ..models import BlameInfo, blank_blame_info
from lineblame.config import Properties, PropertyStore
from lineblame.util.error_handler import ErrorHandler


class GitFileBlameSource(BlameSource):
    """
    Blame source for a file on disk.

    Features:
    - Work tree lookup through parent directories
    - ``git blame --incremental`` run off the event loop
    - Every failure degrades to an empty BlameInfo
    """

    def __init__(
        self,
        file_name: str,
        on_dispose: Optional[Callable[[], None]] = None,
        properties: Optional[PropertyStore] = None,
        error_handler: Optional[ErrorHandler] = None
    ):
        super().__init__(file_name, on_dispose)
        self._properties = properties or PropertyStore()
        self._error_handler = error_handler or ErrorHandler()
        self.fetch_count = 0

    async def _find_blame_info(self) -> BlameInfo:
        self.fetch_count += 1
        return await asyncio.to_thread(self._run_blame)

    def _blame_args(self, relative_path: str) -> List[str]:
        args = ["--incremental"]
        if self._properties.get(Properties.IGNORE_WHITESPACE):
            args.append("-w")
        args.extend(["--", relative_path])
        return args

    def _run_blame(self) -> BlameInfo:
        """Blocking part of the retrieval; runs in a worker thread."""
        try:
            import git
        except ImportError as e:
            self._error_handler.log_error(e)
            return blank_blame_info()

        directory = os.path.dirname(self.file_name)

        try:
            repo = git.Repo(directory, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError):
            self._error_handler.log_info(
                f'File "{self.file_name}" is not a descendant of a git repository'
            )
            return blank_blame_info()

        try:
            if repo.bare or not repo.working_tree_dir:
                return blank_blame_info()

            relative_path = os.path.relpath(
                os.path.realpath(self.file_name),
                os.path.realpath(repo.working_tree_dir)
            )
            output = repo.git.blame(*self._blame_args(relative_path))

        except git.exc.CommandError as e:
            # Untracked file, git missing, ...
            self._error_handler.log_error(e)
            return blank_blame_info()

        finally:
            repo.close()

        info = parse_incremental(output)
        self._error_handler.log_info(
            f'Blamed "{self.file_name}": {len(info.lines)} lines, {len(info.commits)} commits'
        )
        return info


class EmptyBlameSource(BlameSource):
    """Blame source for buffers without a file on disk."""

    async def _find_blame_info(self) -> BlameInfo:
        return blank_blame_info()
