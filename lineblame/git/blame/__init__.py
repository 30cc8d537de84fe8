"""
Line blame module: which commit last changed the line under the cursor.

This module provides:
- Per-file blame sources backed by git, memoized per file
- An in-memory cache owning one source per file
- Line to commit resolution (editor lines are 0-based, git's 1-based)
- Commit URL resolution from a configured template

The control loop that keeps the status bar current lives in
``lineblame.git.blame.orchestrator``.

Usage:
    from lineblame.git.blame import BlameCache, LineResolver

    cache = BlameCache()
    resolver = LineResolver(cache)

    commit = await resolver.resolve("/path/to/repo/src/main.py", 41)
    print(commit.author.name, commit.summary)

    cache.dispose_all()
"""

# Models
from .models import (
    HASH_NO_COMMIT,
    CommitAuthor,
    CommitInfo,
    BlameInfo,
    blank_blame_info,
    blank_commit_info,
    is_blank_commit,
    internal_hash
)

# Providers
from .providers import (
    BlameSource,
    GitFileBlameSource,
    EmptyBlameSource,
    create_blame_source,
    parse_incremental
)

# Stores
from .stores import SourceStore, BlameCache

# Resolution
from .resolver import LineResolver
from .urls import UrlResolver, UrlResolution, UrlStatus, default_web_path, is_web_uri
from .tokens import parse_tokens, normalize_commit_info_tokens, to_time_ago

# Disposal
from .disposal import Disposable, DisposalCoordinator

__all__ = [
    # Models
    'HASH_NO_COMMIT',
    'CommitAuthor',
    'CommitInfo',
    'BlameInfo',
    'blank_blame_info',
    'blank_commit_info',
    'is_blank_commit',
    'internal_hash',

    # Providers
    'BlameSource',
    'GitFileBlameSource',
    'EmptyBlameSource',
    'create_blame_source',
    'parse_incremental',

    # Stores
    'SourceStore',
    'BlameCache',

    # Resolution
    'LineResolver',
    'UrlResolver',
    'UrlResolution',
    'UrlStatus',
    'default_web_path',
    'is_web_uri',
    'parse_tokens',
    'normalize_commit_info_tokens',
    'to_time_ago',

    # Disposal
    'Disposable',
    'DisposalCoordinator'
]
