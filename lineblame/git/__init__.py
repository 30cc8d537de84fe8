"""
Git module - line blame resolution and caching.
"""

from .blame import (
    # Models
    HASH_NO_COMMIT,
    CommitAuthor,
    CommitInfo,
    BlameInfo,
    blank_commit_info,
    is_blank_commit,

    # Providers
    BlameSource,
    GitFileBlameSource,
    EmptyBlameSource,
    create_blame_source,

    # Stores
    BlameCache,

    # Resolution
    LineResolver,
    UrlResolver,
    UrlStatus,
    default_web_path,

    # Disposal
    DisposalCoordinator,
)

__all__ = [
    "HASH_NO_COMMIT",
    "CommitAuthor",
    "CommitInfo",
    "BlameInfo",
    "blank_commit_info",
    "is_blank_commit",
    "BlameSource",
    "GitFileBlameSource",
    "EmptyBlameSource",
    "create_blame_source",
    "BlameCache",
    "LineResolver",
    "UrlResolver",
    "UrlStatus",
    "default_web_path",
    "DisposalCoordinator",
]
