"""
Active editor state.

Mirrors what the editor reports: which file is focused and where the
cursor is. The orchestrator snapshots this before resolving and
compares against it afterwards.
"""

from dataclasses import dataclass, replace
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class TextEditor:
    """A focused editor: document plus 0-based cursor line."""
    file_name: str
    line: int = 0
    scheme: str = "file"
    is_untitled: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "file_name": self.file_name,
            "line": self.line,
            "scheme": self.scheme,
            "is_untitled": self.is_untitled
        }


class EditorState:
    """Holder of the currently active editor."""

    def __init__(self, active_editor: Optional[TextEditor] = None):
        self.active_editor = active_editor

    @property
    def active_file_name(self) -> Optional[str]:
        return self.active_editor.file_name if self.active_editor else None

    @property
    def active_line(self) -> Optional[int]:
        return self.active_editor.line if self.active_editor else None

    def is_active_editor_valid(self) -> bool:
        """Only saved documents on the local file system can be blamed."""
        editor = self.active_editor
        return (
            editor is not None
            and bool(editor.file_name)
            and editor.scheme == "file"
            and not editor.is_untitled
        )

    def set_active(self, editor: Optional[TextEditor]) -> None:
        self.active_editor = editor

    def move(self, line: int) -> None:
        """Move the cursor of the active editor."""
        if self.active_editor is None:
            raise ValueError("No active editor")
        self.active_editor = replace(self.active_editor, line=line)
