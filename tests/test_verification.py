"""Tests for the ImageVerifier measurement helpers."""

import numpy as np
import pytest

from filmmod.verification import ImageVerifier


@pytest.fixture
def gray_pixels():
    """Random 8-bit gray image (R == G == B) with random alpha."""
    rng = np.random.default_rng(42)
    values = rng.integers(0, 256, size=(60, 80), dtype=np.uint8)
    pixels = np.empty((60, 80, 4), dtype=np.uint8)
    pixels[..., :3] = values[..., None]
    pixels[..., 3] = rng.integers(0, 256, size=(60, 80), dtype=np.uint8)
    return pixels


class TestChromaVariance:
    """Test chroma_variance()."""

    def test_uint8_gray_is_exactly_zero(self, gray_pixels):
        """Test 8-bit gray pixels measure exactly 0, whatever their level."""
        assert ImageVerifier.chroma_variance(gray_pixels) == 0.0

    def test_float_gray_is_exactly_zero(self, gray_pixels):
        """Test float gray pixels measure exactly 0."""
        image = gray_pixels.astype(np.float32) / np.float32(255.0)
        assert ImageVerifier.chroma_variance(image) == 0.0

    def test_single_colored_pixel_detected(self, gray_pixels):
        """Test one off-gray pixel makes the measure positive."""
        gray_pixels[5, 7, 0] ^= 1
        assert ImageVerifier.chroma_variance(gray_pixels) > 0.0

    def test_scale_matches_float(self):
        """Test uint8 and float inputs use the same [0, 1] scale."""
        pixels = np.array([[[255, 0, 0, 255]]], dtype=np.uint8)
        expected = float(np.var([1.0, 0.0, 0.0]))
        assert ImageVerifier.chroma_variance(pixels) == pytest.approx(expected)
        assert ImageVerifier.chroma_variance(pixels / 255.0) == pytest.approx(expected)


class TestChangedRegion:
    """Test changed_region()."""

    def test_identical(self, gray_pixels):
        """Test identical buffers report no region."""
        assert ImageVerifier.changed_region(gray_pixels, gray_pixels.copy()) is None

    def test_bounding_box(self, gray_pixels):
        """Test the box is exclusive at bottom and right."""
        after = gray_pixels.copy()
        after[10, 20, 3] ^= 0xFF
        after[14, 30, 1] ^= 0xFF
        assert ImageVerifier.changed_region(gray_pixels, after) == (10, 15, 20, 31)
