"""
User-facing messages.

Messages and opened URLs are collected in an outbox the HTTP bridge
hands back to the editor plugin.
"""

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


class ActionableMessageItem:
    """A button attached to an information message."""

    def __init__(self, title: str, url: Optional[str] = None):
        self.title = title
        self.url = url
        self._action: Callable[[], Any] = lambda: None

    def set_action(self, action: Callable[[], Any]) -> None:
        self._action = action

    def take_action(self) -> Any:
        return self._action()

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "url": self.url}


@dataclass
class Message:
    level: str  # "info" or "error"
    text: str
    actions: List[ActionableMessageItem] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "text": self.text,
            "actions": [a.to_dict() for a in self.actions]
        }


# Picks the button the user pressed, or None when the message was dismissed
Selector = Callable[[str, List[ActionableMessageItem]], Any]


class MessagePresenter:
    """
    Shows messages and opens URLs.

    Without a selector every information message counts as dismissed;
    the plugin acts on the returned actions itself.
    """

    def __init__(self, selector: Optional[Selector] = None):
        self._selector = selector
        self.messages: List[Message] = []
        self.opened_urls: List[str] = []

    async def show_information_message(
        self,
        text: str,
        items: Optional[List[ActionableMessageItem]] = None
    ) -> Optional[ActionableMessageItem]:
        items = list(items or [])
        self.messages.append(Message("info", text, items))

        if self._selector is None:
            return None

        chosen = self._selector(text, items)
        if inspect.isawaitable(chosen):
            chosen = await chosen
        return chosen

    def show_error_message(self, text: str) -> None:
        self.messages.append(Message("error", text))

    def open_url(self, url: str) -> None:
        self.opened_urls.append(url)

    def drain(self) -> Dict[str, Any]:
        """Return and clear everything shown since the last drain."""
        result = {
            "messages": [m.to_dict() for m in self.messages],
            "opened_urls": list(self.opened_urls)
        }
        self.messages.clear()
        self.opened_urls.clear()
        return result
