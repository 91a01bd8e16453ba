"""Type aliases for filmmod.

Provides unified type hints for pixel buffers and image sources.
"""

from os import PathLike

import numpy as np
from numpy.typing import NDArray
from PIL import Image

# Working buffer: float32 [H, W, 4] RGBA in [0, 1]
ImageRGBA = NDArray[np.float32]

# float32 scalar field [H, W] or per-channel field [H, W, C]
Field = NDArray[np.float32]

# Normalized RGB triple
RGB = tuple[float, float, float]

# Anything decode_image() accepts
ImageSource = bytes | str | PathLike | Image.Image | np.ndarray
