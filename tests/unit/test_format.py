"""Tests for report glyph presets."""

import dataclasses

import pytest

from stperf.errors import ConfigurationError, ErrorCategory
from stperf.format import (
    COMPATIBLE,
    FORMATS,
    STREAMLINED,
    FormattingOptions,
    get_format,
)


class TestFormats:
    """Tests for FormattingOptions presets."""

    def test_streamlined_glyphs(self):
        """Test the default preset uses the box-drawing glyphs."""
        assert STREAMLINED.starting_branch == "╶"
        assert STREAMLINED.continuing_branch == "│"
        assert STREAMLINED.branching_branch == "├"
        assert STREAMLINED.turning_branch == "└"
        assert STREAMLINED.ending_branch == "───╼"
        assert STREAMLINED.turning_ending_branch == "──┬╼"

    def test_compatible_is_ascii(self):
        """Test the compatible preset only uses ASCII."""
        for value in dataclasses.astuple(COMPATIBLE):
            assert value.isascii()

    def test_presets_registered(self):
        """Test every preset is reachable by name."""
        assert set(FORMATS) == {
            "streamlined",
            "streamlined_rounded",
            "compatible",
            "doubled",
            "debugging",
        }

    def test_tails_share_width(self):
        """Test leaf and parent tails line names up at the same column."""
        for options in FORMATS.values():
            assert len(options.ending_branch) == len(options.turning_ending_branch)

    def test_frozen(self):
        """Test presets cannot be modified in place."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            STREAMLINED.starting_branch = "x"

    def test_custom_options(self):
        """Test callers can define their own glyph set."""
        custom = FormattingOptions("*", ":", "+", "`", "--", "-+")
        assert custom.turning_branch == "`"


class TestGetFormat:
    """Tests for get_format()."""

    def test_lookup(self):
        """Test names resolve case-insensitively."""
        assert get_format("compatible") is COMPATIBLE
        assert get_format(" Streamlined ") is STREAMLINED

    def test_unknown(self):
        """Test unknown names raise a configuration error."""
        with pytest.raises(ConfigurationError) as exc_info:
            get_format("fancy")

        assert exc_info.value.category == ErrorCategory.CONFIGURATION
        assert "streamlined" in exc_info.value.suggestion
