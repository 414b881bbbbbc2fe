"""Unit tests for modules.resources.locales.

Tests cover:
- to_provider_code() region and Latin script tags
- to_provider_code() on paths and non-locale names
- from_provider_code() reverse mapping
- Round trip of every valid tag
"""

import pytest

from modules.resources.locales import from_provider_code, is_locale_tag, to_provider_code


@pytest.mark.unit
class TestToProviderCode:
    """Test suite for local tag to provider code mapping."""

    @pytest.mark.parametrize(
        "tag,expected",
        [
            ("fi-FI", "fi_FI"),
            ("en-US", "en_US"),
            ("pt-BR", "pt_BR"),
            ("sr-latn", "sr@latin"),
        ],
    )
    def test_maps_locale_tags(self, tag, expected):
        """Region tags use an underscore, Latin script tags use @latin."""
        assert to_provider_code(tag) == expected

    def test_accepts_directory_path(self):
        """Only the trailing tag of a path is inspected."""
        assert to_provider_code("strings/translations/fi-FI") == "fi_FI"

    @pytest.mark.parametrize("name", ["images", "fi", "fi-fi", "FI-FI", "fi-FI-x", ""])
    def test_returns_none_for_non_locale(self, name):
        """Names that are not xx-YY or xx-latn yield None."""
        assert to_provider_code(name) is None


@pytest.mark.unit
class TestFromProviderCode:
    """Test suite for provider code to local tag mapping."""

    def test_maps_region_code(self):
        """Underscore becomes a hyphen."""
        assert from_provider_code("fi_FI") == "fi-FI"

    def test_maps_latin_code(self):
        """@latin becomes -latn."""
        assert from_provider_code("sr@latin") == "sr-latn"

    def test_code_without_region_unchanged(self):
        """A bare language code has nothing to replace."""
        assert from_provider_code("fi") == "fi"

    @pytest.mark.parametrize("tag", ["fi-FI", "sv-SE", "zh-CN", "sr-latn", "bs-latn"])
    def test_round_trip(self, tag):
        """Mapping a valid tag there and back gives the same tag."""
        assert from_provider_code(to_provider_code(tag)) == tag


@pytest.mark.unit
class TestIsLocaleTag:
    """Test suite for is_locale_tag."""

    def test_locale_tag(self):
        """A bare xx-YY name is a locale tag."""
        assert is_locale_tag("fi-FI")

    def test_path_is_not_a_tag(self):
        """Unlike to_provider_code, the whole name must match."""
        assert not is_locale_tag("strings/fi-FI")
