"""Tests for vignette, light leak, fade and halation."""

import logging

import numpy as np
import pytest

from filmmod.optics import (
    apply_fade,
    apply_halation,
    apply_light_leak,
    apply_vignette,
    gaussian_blur,
    gaussian_weights,
    light_leak_alpha,
    vignette_mask,
)
from filmmod.verification import ImageVerifier


@pytest.fixture
def sample_image():
    rng = np.random.default_rng(42)
    return rng.random((40, 56, 4), dtype=np.float32)


def solid(value, height=64, width=64):
    image = np.full((height, width, 4), value, dtype=np.float32)
    image[..., 3] = 1.0
    return image


class TestSkipping:
    """Test every optical effect skips at or below 0.05."""

    @pytest.mark.parametrize(
        "effect",
        [
            apply_vignette,
            apply_fade,
            apply_halation,
            lambda image, amount: apply_light_leak(image, amount, "#FFAA00"),
        ],
    )
    @pytest.mark.parametrize("amount", [0.0, 0.05, -0.5])
    def test_skip(self, sample_image, effect, amount):
        """Test inactive effects return the input buffer."""
        assert effect(sample_image, amount) is sample_image


class TestVignette:
    """Test the radial falloff."""

    def test_centre_untouched(self):
        """Test the centre inside the radius keeps its value."""
        out = apply_vignette(solid(0.6), 1.0)
        np.testing.assert_array_equal(out[28:36, 28:36], solid(0.6)[28:36, 28:36])

    def test_corners_darker(self):
        """Test the corners are darkened."""
        out = apply_vignette(solid(0.6), 0.5)
        assert out[0, 0, 0] < 0.6
        assert out[-1, -1, 0] < 0.6

    @pytest.mark.parametrize("size", [1, 2, 3])
    def test_tiny_image_corners_darkened(self, size):
        """Test corner pixels of very small images still reach full falloff."""
        image = solid(0.6, size, size)
        weak = apply_vignette(image, 0.3)[0, 0, 0]
        strong = apply_vignette(image, 1.0)[0, 0, 0]
        assert strong < weak < 0.6
        assert strong == pytest.approx(0.6 * 0.15, abs=1e-5)

    def test_monotonic_in_amount(self):
        """Test more vignette always darkens the edges more."""
        image = solid(0.6)
        darkening = [
            ImageVerifier.edge_darkening(apply_vignette(image, amount))
            for amount in np.linspace(0.1, 1.0, 10)
        ]
        assert all(b > a for a, b in zip(darkening, darkening[1:]))
        assert darkening[0] > 0.0

    def test_mask_bounds(self):
        """Test the factor stays within [1 - 0.85 * amount, 1]."""
        mask = vignette_mask(30, 50, 1.0)
        assert mask.shape == (30, 50)
        assert mask.max() == 1.0
        assert mask.min() >= 0.15 - 1e-6

    def test_alpha_preserved(self, sample_image):
        """Test alpha passes through."""
        out = apply_vignette(sample_image, 0.7)
        np.testing.assert_array_equal(out[..., 3], sample_image[..., 3])


class TestLightLeak:
    """Test the corner glow."""

    def test_never_darkens(self, sample_image):
        """Test the screen blend only brightens."""
        out = apply_light_leak(sample_image, 1.0, "#FF6B35")
        assert np.all(out[..., :3] >= sample_image[..., :3] - 1e-6)

    def test_anchored_lower_right(self):
        """Test the glow peaks near 75% / 75% of the frame."""
        alpha = light_leak_alpha(100, 100, 0.8)
        assert alpha[75, 75] == pytest.approx(0.8, abs=1e-3)
        assert alpha[75, 75] > alpha[10, 10]
        assert alpha[75, 75] > alpha[99, 0]

    def test_color_applied(self):
        """Test a pure red leak only raises the red channel."""
        out = apply_light_leak(solid(0.0, 40, 40), 0.6, "#FF0000")
        assert out[30, 30, 0] > 0.5
        np.testing.assert_array_equal(out[..., 1:3], 0.0)

    def test_malformed_color_falls_back(self, caplog):
        """Test a bad hex string uses the orange fallback instead of failing."""
        with caplog.at_level(logging.WARNING):
            out = apply_light_leak(solid(0.0, 40, 40), 0.5, "not-a-color")

        np.testing.assert_allclose(out[30, 30, :3], [0.5, 0.25, 0.0], atol=2e-3)
        assert "Invalid hex color" in caplog.text

    def test_intensity_scales(self):
        """Test stronger leaks are brighter."""
        weak = apply_light_leak(solid(0.2), 0.2, "#FFFFFF")
        strong = apply_light_leak(solid(0.2), 0.9, "#FFFFFF")
        assert strong[48, 48, 0] > weak[48, 48, 0]


class TestFade:
    """Test black lift and desaturation."""

    def test_black_lift_bounded(self):
        """Test full fade lifts black above 0 but well below mid-gray."""
        out = apply_fade(solid(0.0), 1.0)
        lum = ImageVerifier.min_luminance(out)
        assert 0.0 < lum < 0.3
        np.testing.assert_allclose(out[..., :3], 0.15, atol=1e-6)

    def test_white_rolloff(self):
        """Test full fade pulls white slightly down."""
        out = apply_fade(solid(1.0), 1.0)
        np.testing.assert_allclose(out[..., :3], 0.95, atol=1e-6)

    def test_never_inverts(self):
        """Test tone order is preserved on a gray ramp."""
        ramp = np.zeros((1, 256, 4), dtype=np.float32)
        ramp[..., :3] = np.linspace(0.0, 1.0, 256, dtype=np.float32)[None, :, None]
        ramp[..., 3] = 1.0
        out = apply_fade(ramp, 1.0)
        assert np.all(np.diff(out[0, :, 0]) > 0)

    def test_desaturates(self, sample_image):
        """Test fade reduces chroma."""
        out = apply_fade(sample_image, 0.8)
        assert ImageVerifier.chroma_variance(out) < ImageVerifier.chroma_variance(sample_image)


class TestHalation:
    """Test the highlight glow."""

    @pytest.fixture
    def bright_spot(self):
        image = solid(0.1)
        image[28:36, 28:36, :3] = 1.0
        return image

    def test_no_highlights_passthrough(self):
        """Test images without bright tones are returned as-is."""
        image = solid(0.4)
        assert apply_halation(image, 0.8) is image

    def test_glow_spreads(self, bright_spot):
        """Test pixels next to a highlight get brighter."""
        out = apply_halation(bright_spot, 0.8)
        assert out[26, 32, 0] > bright_spot[26, 32, 0]
        assert out[32, 20, 0] > bright_spot[32, 20, 0]

    def test_glow_is_warm(self, bright_spot):
        """Test the glow favors red over blue."""
        out = apply_halation(bright_spot, 0.8)
        delta = out[26, 32, :3] - bright_spot[26, 32, :3]
        assert delta[0] > delta[2]

    def test_contribution_bounded(self, bright_spot):
        """Test the added light never exceeds amount * 0.35."""
        amount = 1.0
        out = apply_halation(bright_spot, amount)
        assert (out[..., :3] - bright_spot[..., :3]).max() <= amount * 0.35 + 1e-6

    def test_alpha_preserved(self, bright_spot):
        """Test alpha passes through."""
        out = apply_halation(bright_spot, 0.5)
        np.testing.assert_array_equal(out[..., 3], bright_spot[..., 3])


class TestGaussianBlur:
    """Test the blur kernel."""

    def test_weights(self):
        """Test normalized symmetric weights truncated at 3 sigma."""
        weights = gaussian_weights(2.0)
        assert weights.shape == (13,)
        assert weights.sum() == pytest.approx(1.0, abs=1e-6)
        np.testing.assert_allclose(weights, weights[::-1])
        assert weights.argmax() == 6

    def test_constant_field(self):
        """Test blur keeps a constant field constant, even with a kernel wider than the image."""
        field = np.full((8, 6, 3), 0.4, dtype=np.float32)
        np.testing.assert_allclose(gaussian_blur(field, 1.5), 0.4, atol=1e-5)
        np.testing.assert_allclose(gaussian_blur(field, 20.0), 0.4, atol=1e-5)

    def test_preserves_mass(self):
        """Test a centred impulse keeps its total energy."""
        field = np.zeros((41, 41, 1), dtype=np.float32)
        field[20, 20, 0] = 1.0
        out = gaussian_blur(field, 3.0)
        assert out.sum() == pytest.approx(1.0, abs=1e-4)
        assert out[20, 20, 0] == out.max()
