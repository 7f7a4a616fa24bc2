"""
Unit tests for key <-> object path translation.
"""

import pytest

from objectfs.storage.paths import PathTranslator


KEYS = ["file.txt", "a/b.txt", "deeply/nested/dir/file.bin", "with space.txt", "ünïcode.md"]


class TestWithoutDirectory:
    """Keys map onto paths unchanged."""

    @pytest.mark.parametrize("key", KEYS)
    def test_path_is_key(self, key):
        translator = PathTranslator()

        assert translator.compute_path(key) == key
        assert translator.compute_key(translator.compute_path(key)) == key


class TestWithDirectory:
    """Keys live under the virtual directory."""

    @pytest.mark.parametrize("key", KEYS)
    def test_path_is_prefixed(self, key):
        translator = PathTranslator("uploads")

        assert translator.compute_path(key) == f"uploads/{key}"
        assert translator.compute_key(translator.compute_path(key)) == key

    def test_upload_scenario(self):
        """A listed path under the directory maps back to the original key."""
        translator = PathTranslator("uploads")

        assert translator.compute_path("a/b.txt") == "uploads/a/b.txt"
        assert translator.compute_key("uploads/a/b.txt") == "a/b.txt"

    def test_trailing_slash_is_removed(self):
        """A trailing slash on the directory must not be doubled."""
        translator = PathTranslator("uploads/")

        assert translator.directory == "uploads"
        assert translator.compute_path("a.txt") == "uploads/a.txt"

    def test_nested_directory(self):
        translator = PathTranslator("tenant/42/files")

        assert translator.compute_path("x.pdf") == "tenant/42/files/x.pdf"
        assert translator.compute_key("tenant/42/files/x.pdf") == "x.pdf"

    def test_compute_key_truncates_by_length_only(self):
        """Paths outside the directory are cut by the directory length."""
        translator = PathTranslator("uploads")

        assert translator.compute_key("archive/old.txt") == "old.txt"
        assert translator.compute_key("abcdefg/hij") == "hij"
