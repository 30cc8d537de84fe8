"""
Tests for scoped resource release and the composition root.
"""

import asyncio
import unittest

from lineblame.config import BlameConfig
from lineblame.editor import EditorState, TextEditor
from lineblame.extension import activate
from lineblame.git.blame.disposal import DisposalCoordinator
from lineblame.git.blame.models import BlameInfo, CommitInfo
from lineblame.git.blame.providers.base import BlameSource
from lineblame.util.disposable import Disposable
from lineblame.util.error_handler import ErrorHandler


class Resource:
    def __init__(self, name, log, fail=False):
        self.name = name
        self.log = log
        self.fail = fail

    def dispose(self) -> None:
        self.log.append(self.name)
        if self.fail:
            raise RuntimeError(f"{self.name} refused")


class FixedSource(BlameSource):
    async def _find_blame_info(self) -> BlameInfo:
        return BlameInfo(
            commits={"abc": CommitInfo(hash="abc", summary="Initial import")},
            lines={1: "abc"}
        )


class DisposableTests(unittest.TestCase):
    def test_callback_runs_once(self) -> None:
        calls = []
        disposable = Disposable(lambda: calls.append(1))

        disposable.dispose()
        disposable.dispose()

        self.assertEqual(calls, [1])
        self.assertTrue(disposable.disposed)

    def test_without_callback(self) -> None:
        disposable = Disposable()
        disposable.dispose()
        self.assertTrue(disposable.disposed)


class DisposalCoordinatorTests(unittest.TestCase):
    def test_release_in_registration_order_once(self) -> None:
        log = []
        coordinator = DisposalCoordinator()
        coordinator.add(Resource("cache", log), Resource("view", log))

        coordinator.dispose()
        coordinator.dispose()

        self.assertEqual(log, ["cache", "view"])
        self.assertTrue(coordinator.disposed)
        self.assertEqual(len(coordinator), 0)

    def test_failing_resource_does_not_stop_the_rest(self) -> None:
        log = []
        coordinator = DisposalCoordinator()
        coordinator.add(Resource("a", log, fail=True), Resource("b", log))

        errors = coordinator.dispose()

        self.assertEqual(log, ["a", "b"])
        self.assertEqual(len(errors), 1)
        self.assertIsInstance(errors[0], RuntimeError)

    def test_add_after_dispose_raises(self) -> None:
        coordinator = DisposalCoordinator()
        coordinator.dispose()

        with self.assertRaises(RuntimeError):
            coordinator.add(Resource("late", []))


class ErrorHandlerTests(unittest.TestCase):
    def test_lines_are_bounded(self) -> None:
        handler = ErrorHandler(max_lines=3)
        for i in range(5):
            handler.log_info(f"message {i}")

        self.assertEqual(len(handler.lines), 3)
        self.assertTrue(handler.lines[-1].endswith("message 4"))

    def test_log_error_names_the_exception(self) -> None:
        handler = ErrorHandler()
        handler.log_error(ValueError("bad value"))
        self.assertIn("ValueError: bad value", handler.lines[0])

    def test_dispose_clears_output(self) -> None:
        handler = ErrorHandler()
        handler.log_info("hello")

        handler.dispose()
        handler.log_info("after")

        self.assertEqual(handler.lines, [])
        self.assertTrue(handler.disposed)


class ExtensionLifecycleTests(unittest.IsolatedAsyncioTestCase):
    async def test_activate_wires_events_to_status_bar(self) -> None:
        extension = activate(config=BlameConfig(), source_factory=FixedSource)
        self.addCleanup(extension.deactivate)

        extension.editor.set_active(TextEditor("/repo/README.md", line=0))
        results = await asyncio.gather(*extension.events.active_editor_changed.fire())

        self.assertEqual(results, [True])
        self.assertTrue(extension.status_bar.visible)
        self.assertEqual(extension.status_bar.commit_hash, "abc")

    async def test_activate_blames_already_focused_editor(self) -> None:
        extension = activate(
            editor=EditorState(TextEditor("/repo/README.md", line=0)),
            source_factory=FixedSource
        )
        self.addCleanup(extension.deactivate)

        self.assertTrue(await extension.orchestrator.initial_cycle)
        self.assertTrue(extension.status_bar.visible)
        self.assertEqual(extension.status_bar.commit_hash, "abc")

    async def test_deactivate_releases_everything_once(self) -> None:
        extension = activate(source_factory=FixedSource)
        source = extension.cache.get_or_create("/repo/README.md")

        extension.deactivate()
        extension.deactivate()

        self.assertFalse(extension.active)
        self.assertTrue(source.disposed)
        self.assertEqual(len(extension.cache), 0)
        self.assertTrue(extension.orchestrator.disposed)
        self.assertTrue(extension.status_bar.disposed)
        self.assertTrue(extension.error_handler.disposed)
        self.assertTrue(extension.properties.disposed)
        self.assertEqual(extension.events.listener_count(), 0)


if __name__ == "__main__":
    unittest.main()
