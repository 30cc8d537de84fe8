"""
Composition root for line blame.

Builds every long-lived dependency once, wires them into the
orchestrator and registers them for release on shutdown.

Usage:
    from lineblame.extension import activate

    extension = activate(config=BlameConfig.from_env())
    extension.editor.set_active(TextEditor("/repo/src/main.py", line=41))
    await asyncio.gather(*extension.events.active_editor_changed.fire())
    print(extension.status_bar.text)

    extension.deactivate()
"""

from dataclasses import dataclass
from functools import partial
from typing import Optional

from lineblame.config import BlameConfig, PropertyStore
from lineblame.editor import EditorEvents, EditorState
from lineblame.git.blame.disposal import DisposalCoordinator
from lineblame.git.blame.orchestrator import BlameOrchestrator
from lineblame.git.blame.providers import SourceFactory, create_blame_source
from lineblame.git.blame.stores import BlameCache
from lineblame.util.disposable import Disposable
from lineblame.util.error_handler import ErrorHandler
from lineblame.view import MessagePresenter, StatusBarView


@dataclass
class BlameExtension:
    """Everything one running instance owns."""
    editor: EditorState
    events: EditorEvents
    properties: PropertyStore
    error_handler: ErrorHandler
    status_bar: StatusBarView
    presenter: MessagePresenter
    cache: BlameCache
    orchestrator: BlameOrchestrator
    disposables: DisposalCoordinator

    @property
    def active(self) -> bool:
        return not self.disposables.disposed

    def deactivate(self) -> None:
        """Release every owned resource. Safe to call more than once."""
        if self.disposables.disposed:
            return
        print("[Shutdown] Releasing blame resources")
        self.disposables.dispose()


def activate(
    editor: Optional[EditorState] = None,
    events: Optional[EditorEvents] = None,
    config: Optional[BlameConfig] = None,
    presenter: Optional[MessagePresenter] = None,
    source_factory: Optional[SourceFactory] = None
) -> BlameExtension:
    """
    Factory function to create a BlameExtension with default components.

    Args:
        editor: Active editor state (a fresh one if omitted)
        events: Editor events (a fresh set if omitted)
        config: Configuration values (defaults if omitted)
        presenter: Message presenter (records into an outbox if omitted)
        source_factory: Builds blame sources from (file_name, on_dispose)

    Returns:
        Started BlameExtension
    """
    editor = editor or EditorState()
    events = events or EditorEvents()
    properties = PropertyStore(config)
    error_handler = ErrorHandler()
    status_bar = StatusBarView(properties)
    presenter = presenter or MessagePresenter()

    cache = BlameCache(
        source_factory or partial(
            create_blame_source,
            properties=properties,
            error_handler=error_handler
        )
    )

    orchestrator = BlameOrchestrator(
        cache=cache,
        editor=editor,
        events=events,
        status_bar=status_bar,
        presenter=presenter,
        properties=properties
    )
    orchestrator.start()

    disposables = DisposalCoordinator()
    disposables.add(
        Disposable(cache.dispose_all),
        orchestrator,
        status_bar,
        error_handler,
        properties
    )

    return BlameExtension(
        editor=editor,
        events=events,
        properties=properties,
        error_handler=error_handler,
        status_bar=status_bar,
        presenter=presenter,
        cache=cache,
        orchestrator=orchestrator,
        disposables=disposables
    )

