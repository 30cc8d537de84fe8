"""
Status bar model.

Holds the text the editor shows for the focused line. The HTTP bridge
returns it to the editor plugin, which paints it.
"""

import time
from typing import Dict, Any, Optional

from lineblame.config import Properties, PropertyStore
from lineblame.git.blame.models import CommitInfo, is_blank_commit
from lineblame.git.blame.tokens import normalize_commit_info_tokens, parse_tokens


class StatusBarView:
    """Status indicator for the commit of the focused line."""

    def __init__(self, properties: PropertyStore):
        self.properties = properties
        self.text = ""
        self.tooltip = ""
        self.commit_hash: Optional[str] = None
        self.updated_at: Optional[float] = None
        self._disposed = False

    @property
    def visible(self) -> bool:
        return bool(self.text)

    def update(self, commit: CommitInfo, now: Optional[float] = None) -> None:
        if self._disposed:
            return

        if is_blank_commit(commit):
            self.clear()
            return

        tokens = normalize_commit_info_tokens(
            commit,
            self.properties.get(Properties.INTERNAL_HASH_LENGTH),
            now
        )
        self.text = parse_tokens(self.properties.get(Properties.STATUS_BAR_MESSAGE_FORMAT), tokens)
        self.tooltip = parse_tokens("${commit.hash_short}: ${commit.summary}", tokens)
        self.commit_hash = commit.hash
        self.updated_at = time.time()

    def clear(self) -> None:
        if self._disposed:
            return

        self.text = ""
        self.tooltip = ""
        self.commit_hash = None
        self.updated_at = time.time()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "tooltip": self.tooltip,
            "visible": self.visible,
            "commit_hash": self.commit_hash
        }

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self.clear()
        self._disposed = True
