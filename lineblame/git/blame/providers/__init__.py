"""
Providers package for line blame.

This package contains the abstract blame source and its git-backed
and empty implementations.
"""

from .base import BlameSource
from .local_git import GitFileBlameSource, EmptyBlameSource
from .factory import create_blame_source, SourceFactory
from .incremental import parse_incremental

__all__ = [
    'BlameSource',
    'GitFileBlameSource',
    'EmptyBlameSource',
    'create_blame_source',
    'SourceFactory',
    'parse_incremental'
]
