"""Extract a named palette from pixels or from an image file.

:author: Shay Hill
:created: 2026-10-06
"""

import logging
from pathlib import Path

from wallhues import defaults
from wallhues.anchors import AnchorTable
from wallhues.buckets import Pixels, accumulate
from wallhues.image_arrays import get_image_pixels
from wallhues.palette import Palette, finish


def extract_palette(
    pixels: Pixels,
    *,
    table: AnchorTable | None = None,
    chunk_size: int = defaults.CHUNK_SIZE,
    max_workers: int | None = defaults.MAX_WORKERS,
) -> Palette:
    """Extract a palette from a sequence of rgb pixels.

    :param pixels: an iterable of (r, g, b) tuples or an array with shape (..., 3)
    :param table: anchor table. Defaults to the shared default table.
    :param chunk_size: number of pixels each worker reduces at a time
    :param max_workers: number of worker threads. None to use the cpu count.
    :return: a Palette with a color for every slot. If pixels is empty, every
        slot will have its default color.
    """
    buckets = accumulate(
        pixels, table=table, chunk_size=chunk_size, max_workers=max_workers
    )
    return finish(buckets, table)


def extract_palette_from_image(
    filename: Path | str,
    *,
    max_pixels: int = defaults.MAX_PIXELS,
    table: AnchorTable | None = None,
    chunk_size: int = defaults.CHUNK_SIZE,
    max_workers: int | None = defaults.MAX_WORKERS,
) -> Palette:
    """Extract a palette from an image file.

    :param filename: path to an image
    :param max_pixels: step over pixels in larger images to read about this many
    :param table: anchor table. Defaults to the shared default table.
    :param chunk_size: number of pixels each worker reduces at a time
    :param max_workers: number of worker threads. None to use the cpu count.
    :return: a Palette with a color for every slot
    """
    pixels = get_image_pixels(filename, max_pixels=max_pixels)
    logging.info(f"making colors for {filename}")
    palette = extract_palette(
        pixels, table=table, chunk_size=chunk_size, max_workers=max_workers
    )
    logging.info(f"palette generated for {filename}")
    return palette
