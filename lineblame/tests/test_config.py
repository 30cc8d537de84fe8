import os
import tempfile
import unittest
from unittest.mock import patch

from lineblame.config import BlameConfig, Properties, PropertyStore


class FromEnvTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            config = BlameConfig.from_env(load_dotenv=False)

        self.assertIsNone(config.commit_url)
        self.assertEqual(config.info_message_format, "${commit.summary}")
        self.assertEqual(config.internal_hash_length, 8)
        self.assertFalse(config.ignore_whitespace)

    def test_environment_values(self) -> None:
        env = {
            "GITBLAME_COMMIT_URL": "https://github.com/me/repo/commit/${hash}",
            "GITBLAME_INTERNAL_HASH_LENGTH": "12",
            "GITBLAME_IGNORE_WHITESPACE": "true",
            "GITBLAME_STATUS_BAR_MESSAGE_FORMAT": "${author.name}",
        }
        with patch.dict(os.environ, env, clear=True):
            config = BlameConfig.from_env(load_dotenv=False)

        self.assertEqual(config.commit_url, "https://github.com/me/repo/commit/${hash}")
        self.assertEqual(config.internal_hash_length, 12)
        self.assertTrue(config.ignore_whitespace)
        self.assertEqual(config.status_bar_message_format, "${author.name}")

    def test_bad_integer_is_ignored(self) -> None:
        with patch.dict(os.environ, {"GITBLAME_INTERNAL_HASH_LENGTH": "many"}, clear=True):
            config = BlameConfig.from_env(load_dotenv=False)

        self.assertEqual(config.internal_hash_length, 8)


class FromYamlTests(unittest.TestCase):
    def write(self, text: str) -> str:
        handle = tempfile.NamedTemporaryFile("w", suffix=".yaml", delete=False)
        with handle:
            handle.write(text)
        self.addCleanup(os.remove, handle.name)
        return handle.name

    def test_overrides_base(self) -> None:
        path = self.write("commit_url: https://git.example.com/c/${hash}\nunknown_key: 1\n")
        base = BlameConfig(internal_hash_length=10)

        config = BlameConfig.from_yaml(path, base=base)

        self.assertEqual(config.commit_url, "https://git.example.com/c/${hash}")
        self.assertEqual(config.internal_hash_length, 10)

    def test_empty_file(self) -> None:
        self.assertEqual(BlameConfig.from_yaml(self.write("")), BlameConfig())

    def test_non_mapping_raises(self) -> None:
        with self.assertRaises(ValueError):
            BlameConfig.from_yaml(self.write("- a\n- b\n"))

    def test_wrong_value_types_raise(self) -> None:
        for text in (
            "internal_hash_length: abc\n",
            "internal_hash_length: 0\n",
            "ignore_whitespace: sometimes\n",
            "status_bar_message_format: 12\n",
            "info_message_format: null\n",
        ):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    BlameConfig.from_yaml(self.write(text))

    def test_commit_url_may_be_null(self) -> None:
        config = BlameConfig.from_yaml(
            self.write("commit_url: null\n"),
            base=BlameConfig(commit_url="https://example.com/${hash}")
        )
        self.assertIsNone(config.commit_url)


class PropertyStoreTests(unittest.TestCase):
    def test_get_and_update(self) -> None:
        store = PropertyStore()

        store.update(commit_url="https://example.com/${hash}")

        self.assertEqual(store.get(Properties.COMMIT_URL), "https://example.com/${hash}")
        self.assertEqual(store.config.to_dict()["commit_url"], "https://example.com/${hash}")

    def test_unknown_name_raises(self) -> None:
        store = PropertyStore()

        with self.assertRaises(ValueError):
            store.update(colour="blue")

        self.assertIsNone(store.get(Properties.COMMIT_URL))

    def test_wrong_type_raises_and_keeps_config(self) -> None:
        store = PropertyStore()

        with self.assertRaises(ValueError):
            store.update(commit_url="https://example.com/${hash}", internal_hash_length="abc")

        self.assertIsNone(store.get(Properties.COMMIT_URL))
        self.assertEqual(store.get(Properties.INTERNAL_HASH_LENGTH), 8)

    def test_negative_hash_length_from_env_is_ignored(self) -> None:
        with patch.dict(os.environ, {"GITBLAME_INTERNAL_HASH_LENGTH": "-3"}, clear=True):
            config = BlameConfig.from_env(load_dotenv=False)

        self.assertEqual(config.internal_hash_length, 8)


if __name__ == "__main__":
    unittest.main()
