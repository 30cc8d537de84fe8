"""
Tests for the git-backed blame source against throwaway repositories.

Skipped when the git executable is not available.
"""

import os
import shutil
import tempfile
import unittest

from lineblame.config import BlameConfig, PropertyStore
from lineblame.git.blame.models import HASH_NO_COMMIT
from lineblame.git.blame.providers.factory import create_blame_source
from lineblame.git.blame.providers.local_git import EmptyBlameSource, GitFileBlameSource
from lineblame.git.blame.resolver import LineResolver
from lineblame.git.blame.stores.memory import BlameCache
from lineblame.util.error_handler import ErrorHandler


@unittest.skipUnless(shutil.which("git"), "git executable not available")
class GitFileBlameSourceTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        import git

        self.root = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, self.root, True)

        self.repo = git.Repo.init(self.root)
        self.addCleanup(self.repo.close)

        self.file_name = os.path.join(self.root, "parser.py")
        self.write("def parse():\n    return None\n")

        author = git.Actor("Sarah Chen", "sarah@example.com")
        self.repo.index.add(["parser.py"])
        self.commit = self.repo.index.commit("Add parser", author=author, committer=author)

        self.error_handler = ErrorHandler()

    def write(self, text: str) -> None:
        with open(self.file_name, "w") as f:
            f.write(text)

    def source(self, file_name=None) -> GitFileBlameSource:
        return GitFileBlameSource(
            file_name or self.file_name,
            properties=PropertyStore(BlameConfig()),
            error_handler=self.error_handler
        )

    async def test_blames_committed_lines(self) -> None:
        info = await self.source().blame()

        self.assertEqual(info.lines, {1: self.commit.hexsha, 2: self.commit.hexsha})
        commit = info.commits[self.commit.hexsha]
        self.assertEqual(commit.author.name, "Sarah Chen")
        self.assertEqual(commit.author.mail, "sarah@example.com")
        self.assertEqual(commit.summary, "Add parser")
        self.assertEqual(commit.filename, "parser.py")
        self.assertFalse(commit.generated)

    async def test_invalidate_picks_up_uncommitted_edit(self) -> None:
        source = self.source()
        await source.blame()

        self.write("def parse():\n    return []\n")
        self.assertEqual((await source.blame()).lines[2], self.commit.hexsha)

        source.invalidate()
        info = await source.blame()

        self.assertEqual(info.lines[2], HASH_NO_COMMIT)
        self.assertTrue(info.commits[HASH_NO_COMMIT].generated)
        self.assertEqual(source.fetch_count, 2)

    async def test_file_in_subdirectory(self) -> None:
        import git

        os.makedirs(os.path.join(self.root, "pkg"))
        nested = os.path.join(self.root, "pkg", "util.py")
        with open(nested, "w") as f:
            f.write("VALUE = 1\n")

        author = git.Actor("Mike Ross", "mike@example.com")
        self.repo.index.add([os.path.join("pkg", "util.py")])
        commit = self.repo.index.commit("Add util", author=author, committer=author)

        info = await self.source(nested).blame()
        self.assertEqual(info.lines, {1: commit.hexsha})

    async def test_untracked_file_is_empty(self) -> None:
        untracked = os.path.join(self.root, "scratch.py")
        with open(untracked, "w") as f:
            f.write("x = 1\n")

        info = await self.source(untracked).blame()

        self.assertTrue(info.is_empty)
        self.assertTrue(self.error_handler.lines)

    async def test_file_outside_repository_is_empty(self) -> None:
        outside = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, outside, True)
        file_name = os.path.join(outside, "notes.txt")
        with open(file_name, "w") as f:
            f.write("hello\n")

        info = await self.source(file_name).blame()

        self.assertTrue(info.is_empty)

    async def test_resolver_end_to_end(self) -> None:
        cache = BlameCache()
        self.addCleanup(cache.dispose_all)

        commit = await LineResolver(cache).resolve(self.file_name, 0)

        self.assertEqual(commit.hash, self.commit.hexsha)


class CreateBlameSourceTests(unittest.TestCase):
    def test_missing_file_gets_empty_source(self) -> None:
        source = create_blame_source("/definitely/not/here.py")
        self.assertIsInstance(source, EmptyBlameSource)

    def test_existing_file_gets_git_source(self) -> None:
        handle = tempfile.NamedTemporaryFile(delete=False)
        handle.close()
        self.addCleanup(os.remove, handle.name)

        self.assertIsInstance(create_blame_source(handle.name), GitFileBlameSource)


if __name__ == "__main__":
    unittest.main()
