"""Unit tests for storage key validation and resolution."""

import pytest

from file_storage.exceptions import InvalidKeyError
from file_storage.keys import StorageKeyResolver, validate_key


@pytest.mark.unit
class TestValidateKey:
    """Tests for validate_key."""

    @pytest.mark.parametrize("key", ["a.txt", "a/b/c.txt", "reports/2024/q3.pdf", "a/./b.txt", "..hidden", "x..y"])
    def test_valid_keys_are_returned_unchanged(self, key):
        """Test relative keys pass through."""
        assert validate_key(key) == key

    @pytest.mark.parametrize(
        ("key", "reason"),
        [
            ("", "empty"),
            ("   ", "empty"),
            ("/etc/passwd", "relative"),
            ("\\\\server\\share\\file", "relative"),
            ("C:\\Windows\\win.ini", "relative"),
            ("../secret", "parent"),
            ("a/../../secret", "parent"),
            ("a\\..\\..\\secret", "parent"),
            ("bad\x00name", "NUL"),
        ],
    )
    def test_invalid_keys(self, key, reason):
        """Test rejected keys carry the reason."""
        with pytest.raises(InvalidKeyError) as exc_info:
            validate_key(key)

        assert reason in exc_info.value.reason
        assert exc_info.value.key == key

    def test_non_string_key(self):
        """Test that non-string keys are rejected."""
        with pytest.raises(InvalidKeyError, match="string"):
            validate_key(42)


@pytest.mark.unit
class TestStorageKeyResolver:
    """Tests for StorageKeyResolver."""

    def test_resolve_joins_under_base(self, tmp_path):
        """Test key is joined onto the base directory."""
        resolver = StorageKeyResolver(tmp_path)

        assert resolver.resolve("a/b.txt") == tmp_path / "a" / "b.txt"

    def test_base_is_made_absolute(self, tmp_path, monkeypatch):
        """Test relative base paths are anchored at cwd."""
        monkeypatch.chdir(tmp_path)

        resolver = StorageKeyResolver("store")

        assert resolver.base == tmp_path / "store"

    @pytest.mark.parametrize("key", [".", "./", "a/.."])
    def test_key_naming_base_itself_is_rejected(self, tmp_path, key):
        """Test keys that point at the root directory."""
        resolver = StorageKeyResolver(tmp_path)

        with pytest.raises(InvalidKeyError):
            resolver.resolve(key)

    def test_symlink_escape_is_rejected(self, tmp_path):
        """Test links leading outside the base directory."""
        base = tmp_path / "store"
        outside = tmp_path / "outside"
        base.mkdir()
        outside.mkdir()
        (base / "link").symlink_to(outside, target_is_directory=True)
        resolver = StorageKeyResolver(base)

        with pytest.raises(InvalidKeyError, match="outside"):
            resolver.resolve("link/file.txt")

    def test_symlink_inside_base_is_allowed(self, tmp_path):
        """Test links that stay within the base directory."""
        base = tmp_path / "store"
        (base / "real").mkdir(parents=True)
        (base / "alias").symlink_to(base / "real", target_is_directory=True)
        resolver = StorageKeyResolver(base)

        assert resolver.resolve("alias/file.txt") == base / "alias" / "file.txt"
