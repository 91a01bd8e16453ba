"""Tests for hex color parsing."""

import logging

import numpy as np
import pytest

from filmmod.shared import FALLBACK_LIGHT_LEAK_COLOR, parse_hex_color, to_hex


class TestParseHexColor:
    """Test parse_hex_color."""

    def test_with_hash(self):
        """Test #RRGGBB input."""
        assert parse_hex_color("#FF0000") == (1.0, 0.0, 0.0)

    def test_without_hash(self):
        """Test RRGGBB input."""
        assert parse_hex_color("00ff00") == (0.0, 1.0, 0.0)

    def test_surrounding_whitespace(self):
        """Test whitespace is stripped."""
        assert parse_hex_color("  #0000FF ") == (0.0, 0.0, 1.0)

    def test_mid_values(self):
        """Test channel scaling."""
        r, g, b = parse_hex_color("#FF8000")
        assert r == 1.0
        assert g == pytest.approx(128 / 255)
        assert b == 0.0

    @pytest.mark.parametrize(
        "value", ["", "#", "#FFF", "#FFAA0", "#FFAA001", "orange", "#GG0000", None, 0xFFAA00]
    )
    def test_invalid_falls_back(self, value):
        """Test malformed input resolves to the fixed fallback."""
        assert parse_hex_color(value) == FALLBACK_LIGHT_LEAK_COLOR

    def test_fallback_is_orange(self):
        """Test the fallback is pure orange, distinct from the starter recipe color."""
        assert FALLBACK_LIGHT_LEAK_COLOR == (1.0, 0.5, 0.0)
        assert to_hex(FALLBACK_LIGHT_LEAK_COLOR) == "#FF8000"
        assert parse_hex_color("#FFAA00") != FALLBACK_LIGHT_LEAK_COLOR

    def test_invalid_logs_warning(self, caplog):
        """Test the fallback is reported."""
        with caplog.at_level(logging.WARNING, logger="filmmod.shared.color"):
            parse_hex_color("not-a-color")
        assert "Invalid hex color" in caplog.text

    def test_custom_fallback(self):
        """Test an explicit fallback color."""
        assert parse_hex_color("bad", fallback=(0.1, 0.2, 0.3)) == (0.1, 0.2, 0.3)


class TestToHex:
    """Test to_hex and round trips."""

    def test_format(self):
        """Test uppercase #RRGGBB output."""
        assert to_hex((1.0, 0.5, 0.0)) == "#FF8000"

    def test_clamps(self):
        """Test out-of-range channels clamp."""
        assert to_hex((2.0, -1.0, 0.0)) == "#FF0000"

    def test_round_trip(self):
        """Test parse(to_hex(c)) == c for 8-bit colors."""
        rng = np.random.default_rng(42)
        for r, g, b in rng.integers(0, 256, size=(200, 3)):
            color = (r / 255.0, g / 255.0, b / 255.0)
            assert parse_hex_color(to_hex(color)) == color

    def test_hex_round_trip(self):
        """Test to_hex(parse(h)) == h for valid strings."""
        for h in ("#000000", "#FFFFFF", "#4A90E2", "#FFD700"):
            assert to_hex(parse_hex_color(h)) == h
