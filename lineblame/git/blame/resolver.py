"""
Line to commit resolution.
"""

from .models import CommitInfo, blank_commit_info
from .stores.base import SourceStore


class LineResolver:
    """Finds the commit that last changed a line of a file."""

    def __init__(self, cache: SourceStore):
        self.cache = cache

    async def resolve(self, file_name: str, line_number: int) -> CommitInfo:
        """
        Resolve an editor line to its commit.

        Args:
            file_name: Path to the file
            line_number: 0-based editor line

        Returns:
            The attributed CommitInfo, or a fresh blank commit
        """
        # git numbers lines from 1, editors from 0
        commit_line_number = line_number + 1
        blame_info = await self.cache.get_or_create(file_name).blame()

        commit_hash = blame_info.lines.get(commit_line_number)
        if commit_hash is not None and commit_hash in blame_info.commits:
            return blame_info.commits[commit_hash]

        return blank_commit_info()
