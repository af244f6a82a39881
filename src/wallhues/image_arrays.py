"""Read image files into arrays of rgb pixels.

Large images are not resized. Instead, pixels are stepped over so that roughly
`max_pixels` pixels are read. Every pixel that is read is an actual image color, so
small areas of bright color are not blurred away before extraction.

:author: Shay Hill
:created: 2026-10-06
"""

import logging
from pathlib import Path
from typing import Annotated, TypeAlias

import numpy as np
import numpy.typing as npt
from PIL import Image

from wallhues import defaults

_RgbPixels: TypeAlias = Annotated[npt.NDArray[np.uint8], (-1, 3)]


def get_image_pixels(
    filename: Path | str, *, max_pixels: int = defaults.MAX_PIXELS
) -> _RgbPixels:
    """Get rgb pixel values from an image file.

    :param filename: path to an image. Transparency is discarded.
    :param max_pixels: if the image has more pixels than this, step over pixels to
        read about this many
    :return: array with shape (-1, 3) of uint8 values in row-major order
    :raise ValueError: if max_pixels < 1
    :raise OSError: if the image cannot be opened or decoded
    """
    if max_pixels < 1:
        msg = f"max_pixels must be at least 1, not {max_pixels}"
        raise ValueError(msg)
    logging.info(f"opening {filename}")
    with Image.open(filename) as image:
        pixels = np.array(image.convert("RGB"), dtype=np.uint8).reshape(-1, 3)

    if len(pixels) > max_pixels:
        step = len(pixels) // max_pixels
        pixels = pixels[::step]
    logging.info(f"read {len(pixels)} pixels from {filename}")
    return pixels
