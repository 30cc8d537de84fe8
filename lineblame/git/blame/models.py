"""
Data models for line blame.

This module defines the value types produced by a blame source and
consumed by the resolvers: per-commit metadata and the per-file
line-to-commit mapping.
"""

from dataclasses import dataclass, field
from typing import Dict, Any


# The hash git reports for lines that are not committed yet.
HASH_NO_COMMIT = "0000000000000000000000000000000000000000"


@dataclass(frozen=True)
class CommitAuthor:
    """Identity and time of an author or committer."""
    name: str = ""
    mail: str = ""
    timestamp: int = 0
    tz: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "mail": self.mail,
            "timestamp": self.timestamp,
            "tz": self.tz
        }


@dataclass(frozen=True)
class CommitInfo:
    """
    Metadata of the commit that last changed a line.

    A commit with ``generated`` set is the blank sentinel: the line is
    uncommitted, untracked or could not be blamed at all.
    """
    hash: str
    author: CommitAuthor = field(default_factory=CommitAuthor)
    committer: CommitAuthor = field(default_factory=CommitAuthor)
    summary: str = ""
    filename: str = ""
    generated: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hash": self.hash,
            "author": self.author.to_dict(),
            "committer": self.committer.to_dict(),
            "summary": self.summary,
            "filename": self.filename,
            "generated": self.generated
        }


@dataclass
class BlameInfo:
    """
    Blame result for a whole file.

    ``lines`` maps 1-based line numbers to commit hashes, ``commits``
    maps those hashes to their metadata.
    """
    commits: Dict[str, CommitInfo] = field(default_factory=dict)
    lines: Dict[int, str] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            "commits": {h: c.to_dict() for h, c in self.commits.items()},
            "lines": {str(n): h for n, h in self.lines.items()}
        }


def blank_blame_info() -> BlameInfo:
    return BlameInfo()


def blank_commit_info() -> CommitInfo:
    """Return a fresh sentinel commit."""
    return CommitInfo(hash=HASH_NO_COMMIT, generated=True)


def is_blank_commit(commit: CommitInfo) -> bool:
    return commit.hash == HASH_NO_COMMIT


def internal_hash(commit_hash: str, length: int) -> str:
    """Truncate a hash for display."""
    return commit_hash[:length]
