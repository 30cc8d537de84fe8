"""
Utilities shared across line blame: error reporting and disposables.
"""

from .disposable import Disposable
from .error_handler import ErrorHandler

__all__ = ["Disposable", "ErrorHandler"]
