"""Import functions into the package namespace.

:author: Shay Hill
:created: 2026-10-02
"""

from wallhues.anchors import (
    AnchorTable,
    ColorClass,
    ColorSlot,
    get_anchor_table,
    new_anchor_table,
)
from wallhues.assignment import nearest_slot
from wallhues.buckets import Bucket, accumulate, merge_bucket_maps
from wallhues.color_space import hex_to_perceptual, to_device, to_hex, to_perceptual
from wallhues.image_arrays import get_image_pixels
from wallhues.main import extract_palette, extract_palette_from_image
from wallhues.palette import Palette, finish

__all__ = [
    "AnchorTable",
    "Bucket",
    "ColorClass",
    "ColorSlot",
    "Palette",
    "accumulate",
    "extract_palette",
    "extract_palette_from_image",
    "finish",
    "get_anchor_table",
    "get_image_pixels",
    "hex_to_perceptual",
    "merge_bucket_maps",
    "nearest_slot",
    "new_anchor_table",
    "to_device",
    "to_hex",
    "to_perceptual",
]
