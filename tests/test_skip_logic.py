"""Tests for skip logic correctness across the pipeline.

Verifies that:
1. Stages skip when their parameter is at or below the activation threshold
2. A skipped stage leaves the output bit-identical to omitting it
3. Stages apply when their parameter crosses the threshold
"""

import numpy as np
import pytest

from filmmod import FilterParameters, Pipeline
from filmmod.config import ColorCurve

INTENSITY_FIELDS = [
    "grain_intensity",
    "vignette",
    "light_leak_intensity",
    "fade_amount",
    "halation",
    "digital_noise",
]

TONAL_NEUTRALS = {
    "exposure": 0.0,
    "contrast": 1.0,
    "saturation": 1.0,
    "highlights": 0.0,
    "shadows": 0.0,
    "temperature": 0.0,
    "tint": 0.0,
}


@pytest.fixture
def sample_pixels():
    """Create a random opaque 8-bit image with bright and dark areas."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(48, 64, 4), dtype=np.uint8)
    pixels[..., 3] = 255
    pixels[10:20, 10:20, :3] = 255
    return pixels


@pytest.fixture
def pipeline():
    return Pipeline()


class TestNeutralSkipping:
    """Test neutral and near-neutral recipes are the identity."""

    def test_neutral_no_change(self, pipeline, sample_pixels):
        """Test FilterParameters() renders the source unchanged."""
        out = pipeline.render(sample_pixels, FilterParameters(), seed=0)
        np.testing.assert_array_equal(out, sample_pixels)

    def test_no_stage_active_for_neutral(self, pipeline):
        """Test no stage is scheduled for the neutral recipe."""
        assert pipeline.active_stages(FilterParameters()) == []

    def test_below_threshold_no_change(self, pipeline, sample_pixels):
        """Test every parameter just inside its dead zone renders unchanged."""
        params = FilterParameters(
            **{field: 0.05 for field in INTENSITY_FIELDS},
            **{field: neutral + 0.009 for field, neutral in TONAL_NEUTRALS.items()},
        )
        assert pipeline.active_stages(params) == []
        out = pipeline.render(sample_pixels, params, seed=0)
        np.testing.assert_array_equal(out, sample_pixels)

    def test_inert_fields_no_change(self, pipeline, sample_pixels):
        """Test grain_size and sharpness drive no stage on their own."""
        params = FilterParameters(grain_size=1.0, sharpness=2.0, light_leak_color="#123456")
        out = pipeline.render(sample_pixels, params, seed=0)
        np.testing.assert_array_equal(out, sample_pixels)


class TestSkipEqualsOmission:
    """Test a skipped stage is indistinguishable from an omitted one."""

    @pytest.fixture
    def busy_params(self):
        """Recipe with several active stages, including both random ones."""
        return FilterParameters(
            grain_intensity=0.4,
            grain_size=0.5,
            digital_noise=0.3,
            contrast=1.2,
            vignette=0.3,
            color_curve=ColorCurve.WARM_VINTAGE,
        )

    @pytest.mark.parametrize("field", INTENSITY_FIELDS)
    @pytest.mark.parametrize("value", [0.01, 0.03, 0.05])
    def test_intensity_dead_zone(self, pipeline, sample_pixels, busy_params, field, value):
        """Test values up to 0.05 render exactly like 0."""
        omitted = pipeline.render(sample_pixels, busy_params.with_changes(**{field: 0.0}), seed=9)
        skipped = pipeline.render(sample_pixels, busy_params.with_changes(**{field: value}), seed=9)
        np.testing.assert_array_equal(skipped, omitted)

    @pytest.mark.parametrize("field,neutral", list(TONAL_NEUTRALS.items()))
    def test_tonal_dead_zone(self, pipeline, sample_pixels, field, neutral):
        """Test tonal values within 0.01 of neutral render exactly like neutral."""
        base = FilterParameters(vignette=0.5, fade_amount=0.2)
        omitted = pipeline.render(sample_pixels, base, seed=3)
        nudged = base.with_changes(**{field: neutral - 0.005})
        skipped = pipeline.render(sample_pixels, nudged, seed=3)
        np.testing.assert_array_equal(skipped, omitted)

    def test_negative_intensity_skipped(self, pipeline, sample_pixels):
        """Test out-of-range negative intensities clamp to 0 and skip."""
        params = FilterParameters(vignette=-0.7, grain_intensity=-1.0)
        out = pipeline.render(sample_pixels, params, seed=0)
        np.testing.assert_array_equal(out, sample_pixels)


class TestActivation:
    """Test stages run once their parameter crosses the threshold."""

    @pytest.mark.parametrize(
        "field,stage",
        [
            ("grain_intensity", "grain"),
            ("vignette", "vignette"),
            ("light_leak_intensity", "light_leak"),
            ("fade_amount", "fade"),
            ("halation", "halation"),
            ("digital_noise", "digital_noise"),
        ],
    )
    def test_intensity_activates(self, pipeline, sample_pixels, field, stage):
        """Test 0.06 schedules and changes the image."""
        params = FilterParameters(**{field: 0.06, "light_leak_color": "#FFAA00"})
        assert pipeline.active_stages(params) == [stage]

        out = pipeline.render(sample_pixels, params.with_changes(**{field: 0.8}), seed=0)
        assert not np.array_equal(out, sample_pixels)

    @pytest.mark.parametrize("field,neutral", list(TONAL_NEUTRALS.items()))
    def test_tonal_activates(self, pipeline, sample_pixels, field, neutral):
        """Test a tonal move of 0.01 schedules color_adjust."""
        params = FilterParameters(**{field: neutral + 0.01})
        assert pipeline.active_stages(params) == ["color_adjust"]

    def test_curve_activates(self, pipeline):
        """Test any non-neutral curve schedules color_curve."""
        params = FilterParameters(color_curve="sepia")
        assert pipeline.active_stages(params) == ["color_curve"]

    def test_date_stamp_activates(self, pipeline):
        """Test an enabled date stamp schedules the overlay."""
        params = FilterParameters(date_stamp_enabled=True)
        assert pipeline.active_stages(params) == ["overlay"]
