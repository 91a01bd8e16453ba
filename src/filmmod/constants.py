"""Calibrated constants shared by the stylization stages.

Values here define the look of every effect. Changing one changes the
rendered output of every preset, so they are kept in one place.
"""

from __future__ import annotations

# =============================================================================
# Skip thresholds
# =============================================================================

# Intensity-style parameters at or below this value leave their stage out
STAGE_SKIP_THRESHOLD = 0.05

# Centred tonal parameters within this distance of neutral are skipped
ADJUST_EPSILON = 0.01

# =============================================================================
# Luminance weights (Rec. 601)
# =============================================================================

LUMA_R = 0.299
LUMA_G = 0.587
LUMA_B = 0.114

# =============================================================================
# Color adjustment
# =============================================================================

NEUTRAL_KELVIN = 6500.0
KELVIN_PER_TEMPERATURE = 2000.0  # temperature=+-1 shifts +-2000K
TINT_STRENGTH = 0.15  # green/magenta gain swing at tint=+-1
SHADOW_LIFT_STRENGTH = 0.35
HIGHLIGHT_PIVOT = 0.5  # luminance where the highlight mask starts
SHADOW_PIVOT = 0.5  # luminance where the shadow mask ends

# =============================================================================
# Texture
# =============================================================================

GRAIN_MAX_CELL = 5.0  # grain_size=1 -> 5px noise cells
GRAIN_OVERLAY_MIX = 0.6  # overlay blend weight at grain_intensity=1
DIGITAL_NOISE_SCALE = 0.5  # digital noise is half as strong as grain
DIGITAL_NOISE_SIZE = 0.3
DIGITAL_NOISE_AMPLITUDE = 0.25

# =============================================================================
# Optical effects
# =============================================================================

VIGNETTE_RADIUS = 0.5  # fraction of the half-diagonal left untouched
VIGNETTE_MAX_DARKEN = 0.85

LIGHT_LEAK_ANCHOR = (0.75, 0.75)  # (x, y) as fractions of width/height
LIGHT_LEAK_INNER_RADIUS = 0.25  # fractions of the image width
LIGHT_LEAK_OUTER_RADIUS = 1.2

FADE_BLACK_LIFT = 0.15
FADE_WHITE_ROLLOFF = 0.05
FADE_DESATURATION = 0.2

HALATION_THRESHOLD = 0.7
HALATION_BLUR_RADIUS = 20.0  # gaussian sigma in px at halation=1
HALATION_MAX_CONTRIBUTION = 0.35
HALATION_TINT = (1.0, 0.55, 0.4)  # warm red glow of emulsion scatter

# =============================================================================
# Date stamp
# =============================================================================

DATE_STAMP_FORMAT = "%Y.%m.%d"
DATE_STAMP_INSET = 20
DATE_STAMP_LARGE_SIZE = 24
DATE_STAMP_SMALL_SIZE = 18
MONOSPACE_FONTS = (
    "Courier New.ttf",
    "cour.ttf",
    "DejaVuSansMono.ttf",
    "LiberationMono-Regular.ttf",
)
