"""
Stores package for line blame.

This package contains the abstract source store and the in-memory
blame cache.
"""

from .base import SourceStore
from .memory import BlameCache

__all__ = ['SourceStore', 'BlameCache']
