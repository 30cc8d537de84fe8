"""
View module - status bar model and user-facing messages.
"""

from .status_bar import StatusBarView
from .messages import ActionableMessageItem, Message, MessagePresenter

__all__ = [
    "StatusBarView",
    "ActionableMessageItem",
    "Message",
    "MessagePresenter",
]
