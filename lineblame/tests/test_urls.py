import unittest

from lineblame.config import BlameConfig, PropertyStore
from lineblame.git.blame.models import CommitInfo, blank_commit_info
from lineblame.git.blame.urls import UrlResolver, UrlStatus, default_web_path, is_web_uri


class DefaultWebPathTests(unittest.TestCase):
    def test_ssh_remote(self) -> None:
        self.assertEqual(
            default_web_path("git@github.com:user/repo.git", "deadbeef"),
            "https://github.com/user/repo/commit/deadbeef"
        )

    def test_https_remote(self) -> None:
        self.assertEqual(
            default_web_path("https://gitlab.com/group/sub/repo.git", "deadbeef"),
            "https://gitlab.com/group/sub/repo/commit/deadbeef"
        )

    def test_unmatched_remote_is_unchanged(self) -> None:
        self.assertEqual(
            default_web_path("ssh://example.com/repo", "deadbeef"),
            "ssh://example.com/repo"
        )


class IsWebUriTests(unittest.TestCase):
    def test_valid(self) -> None:
        self.assertTrue(is_web_uri("https://github.com/user/repo/commit/abc"))
        self.assertTrue(is_web_uri("http://localhost:8080/c/abc"))

    def test_invalid(self) -> None:
        self.assertFalse(is_web_uri("not a url"))
        self.assertFalse(is_web_uri("ftp://example.com/abc"))
        self.assertFalse(is_web_uri("https://"))
        self.assertFalse(is_web_uri(""))


class UrlResolverTests(unittest.TestCase):
    COMMIT = CommitInfo(hash="deadbeef", summary="Fix parser")

    def resolver(self, commit_url) -> UrlResolver:
        return UrlResolver(PropertyStore(BlameConfig(commit_url=commit_url)))

    def test_template_substitution(self) -> None:
        resolution = self.resolver("https://github.com/user/repo/commit/${hash}").resolve(self.COMMIT)

        self.assertEqual(resolution.status, UrlStatus.OK)
        self.assertEqual(resolution.url, "https://github.com/user/repo/commit/deadbeef")

    def test_malformed_template(self) -> None:
        resolution = self.resolver("not a url").resolve(self.COMMIT)

        self.assertIsNone(resolution.url)
        self.assertEqual(resolution.status, UrlStatus.MALFORMED)

    def test_missing_template(self) -> None:
        for template in (None, ""):
            resolution = self.resolver(template).resolve(self.COMMIT)
            self.assertIsNone(resolution.url)
            self.assertEqual(resolution.status, UrlStatus.MISSING_CONFIGURATION)

    def test_blank_commit(self) -> None:
        resolution = self.resolver("https://github.com/user/repo/commit/${hash}").resolve(blank_commit_info())

        self.assertIsNone(resolution.url)
        self.assertEqual(resolution.status, UrlStatus.MISSING_CONFIGURATION)

    def test_to_dict(self) -> None:
        resolution = self.resolver("not a url").resolve(self.COMMIT)
        self.assertEqual(resolution.to_dict(), {"url": None, "status": "malformed"})


if __name__ == "__main__":
    unittest.main()
