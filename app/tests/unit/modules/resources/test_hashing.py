"""Unit tests for modules.resources.hashing."""

import hashlib

import pytest

from modules.resources.hashing import source_string_hash


@pytest.mark.unit
class TestSourceStringHash:
    """Test suite for source_string_hash."""

    def test_hash_is_md5_of_key_and_colon(self):
        """The digest is taken over key + ':' (empty context)."""
        expected = hashlib.md5(b"app.title:").hexdigest()
        assert source_string_hash("app.title") == expected

    def test_hash_format(self):
        """Hashes are 32 lowercase hex characters."""
        value = source_string_hash("any.key")
        assert len(value) == 32
        assert value == value.lower()
        int(value, 16)

    def test_empty_key(self):
        """An empty key hashes the single colon."""
        assert source_string_hash("") == hashlib.md5(b":").hexdigest()

    def test_non_ascii_key_is_utf8_encoded(self):
        """Keys are encoded as UTF-8 before hashing."""
        expected = hashlib.md5("käyttäjä:".encode("utf-8")).hexdigest()
        assert source_string_hash("käyttäjä") == expected

    def test_deterministic(self):
        """The same key always gives the same hash."""
        assert source_string_hash("a") == source_string_hash("a")
        assert source_string_hash("a") != source_string_hash("b")
