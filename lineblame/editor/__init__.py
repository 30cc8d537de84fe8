"""
Editor module - active editor state and editor events.
"""

from .state import TextEditor, EditorState
from .events import EventEmitter, EditorEvents

__all__ = [
    "TextEditor",
    "EditorState",
    "EventEmitter",
    "EditorEvents",
]
