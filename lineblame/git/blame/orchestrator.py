"""
Blame orchestrator - keeps the status bar in step with the cursor.

Every editor trigger (focus change, selection change, save) starts one
resolution cycle:

    snapshot (file, line) -> resolve -> compare with current (file, line)

Only a cycle whose snapshot still matches the editor when it completes
touches the status bar. Cycles are not queued or cancelled; a stale
result is simply dropped.
"""

import asyncio
from typing import List, Optional, Tuple

from lineblame.config import Properties, PropertyStore
from lineblame.editor.events import EditorEvents
from lineblame.editor.state import EditorState
from lineblame.util.disposable import Disposable
from lineblame.view.messages import ActionableMessageItem, MessagePresenter
from lineblame.view.status_bar import StatusBarView

from .models import CommitInfo, blank_commit_info
from .resolver import LineResolver
from .stores.base import SourceStore
from .tokens import normalize_commit_info_tokens, parse_tokens
from .urls import UrlResolver, UrlStatus


TITLE_VIEW_ONLINE = "View"

MESSAGE_CANNOT_BLAME = "The current file and line can not be blamed."
MESSAGE_MISSING_COMMIT_URL = "Missing commit_url configuration value."
MESSAGE_MALFORMED_COMMIT_URL = "Malformed URL in commit_url. Must be a valid web url."


class BlameOrchestrator:
    """
    Main control loop for line blame.

    Usage:
        orchestrator = BlameOrchestrator(cache, editor, events, status_bar, presenter, properties)
        orchestrator.start()

        # Editor moved; resolve and apply if still current
        applied = await orchestrator.on_text_editor_move()
    """

    def __init__(
        self,
        cache: SourceStore,
        editor: EditorState,
        events: EditorEvents,
        status_bar: StatusBarView,
        presenter: MessagePresenter,
        properties: PropertyStore,
        line_resolver: Optional[LineResolver] = None,
        url_resolver: Optional[UrlResolver] = None
    ):
        self.cache = cache
        self.editor = editor
        self.events = events
        self.status_bar = status_bar
        self.presenter = presenter
        self.properties = properties
        self.line_resolver = line_resolver or LineResolver(cache)
        self.url_resolver = url_resolver or UrlResolver(properties)

        self._listeners: List[Disposable] = []
        self.initial_cycle: Optional[asyncio.Task] = None
        self._disposed = False

    def start(self) -> Optional[asyncio.Task]:
        """
        Register the editor listeners and blame the focused line once.

        Returns:
            The initial resolution cycle, or None when called outside a
            running event loop or more than once
        """
        if self._listeners or self._disposed:
            return None

        def on_move(*_args):
            return self.on_text_editor_move()

        def on_close(file_name: str) -> None:
            self.cache.dispose(file_name)

        def on_file_changed(file_name: str) -> None:
            self.cache.invalidate(file_name)

        self._listeners = [
            self.events.active_editor_changed.subscribe(on_move),
            self.events.selection_changed.subscribe(on_move),
            self.events.file_changed.subscribe(on_file_changed),
            self.events.document_saved.subscribe(on_move),
            self.events.document_closed.subscribe(on_close),
        ]

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            return None

        self.initial_cycle = loop.create_task(self.on_text_editor_move())
        return self.initial_cycle

    def _current_position(self) -> Tuple[Optional[str], Optional[int]]:
        return self.editor.active_file_name, self.editor.active_line

    async def on_text_editor_move(self) -> bool:
        """
        Run one resolution cycle.

        Returns:
            True if the result was applied, False if it went stale or
            the orchestrator was disposed meanwhile
        """
        before = self._current_position()
        commit = await self.get_current_line_info()

        # Only update if we haven't moved since we started blaming
        if self._disposed or before != self._current_position():
            return False

        self.update_view(commit)
        return True

    async def get_current_line_info(self) -> CommitInfo:
        if not self.editor.is_active_editor_valid():
            return blank_commit_info()

        return await self.line_resolver.resolve(
            self.editor.active_file_name,
            self.editor.active_line
        )

    async def get_commit_info(self) -> CommitInfo:
        """Current line's commit; tells the user when it has none."""
        commit = await self.get_current_line_info()

        if commit.generated:
            self.presenter.show_error_message(MESSAGE_CANNOT_BLAME)

        return commit

    async def show_message(self) -> None:
        """Show the info message for the current line, with a "View" button if possible."""
        commit = await self.get_commit_info()
        tokens = normalize_commit_info_tokens(
            commit,
            self.properties.get(Properties.INTERNAL_HASH_LENGTH)
        )
        message = parse_tokens(self.properties.get(Properties.INFO_MESSAGE_FORMAT), tokens)
        extra_actions = self.generate_message_actions(commit)

        self.update_view(commit)

        actioned_item = await self.presenter.show_information_message(message, extra_actions)

        if actioned_item:
            actioned_item.take_action()

    async def blame_link(self) -> Optional[str]:
        """
        Open the current line's commit online.

        Returns:
            The opened URL, or None if nothing was opened
        """
        commit = await self.get_commit_info()
        if commit.generated:
            return None

        resolution = self.url_resolver.resolve(commit)

        if resolution.status == UrlStatus.OK:
            self.presenter.open_url(resolution.url)
            return resolution.url

        if resolution.status == UrlStatus.MALFORMED:
            self.presenter.show_error_message(MESSAGE_MALFORMED_COMMIT_URL)
        else:
            self.presenter.show_error_message(MESSAGE_MISSING_COMMIT_URL)

        return None

    def generate_message_actions(self, commit: CommitInfo) -> List[ActionableMessageItem]:
        resolution = self.url_resolver.resolve(commit)
        extra_actions: List[ActionableMessageItem] = []

        if resolution.status == UrlStatus.OK:
            url = resolution.url
            view_online = ActionableMessageItem(TITLE_VIEW_ONLINE, url=url)
            view_online.set_action(lambda: self.presenter.open_url(url))
            extra_actions.append(view_online)

        elif resolution.status == UrlStatus.MALFORMED:
            self.presenter.show_error_message(MESSAGE_MALFORMED_COMMIT_URL)

        return extra_actions

    def update_view(self, commit: CommitInfo) -> None:
        if commit.generated:
            self.status_bar.clear()
        else:
            self.status_bar.update(commit)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        """Unregister every listener. Safe to call more than once."""
        if self._disposed:
            return

        self._disposed = True
        listeners, self._listeners = self._listeners, []
        for listener in listeners:
            listener.dispose()
