"""Convert between device rgb, CIELAB, and cylindrical LCh.

Device colors are sRGB-encoded bytes. Perceptual colors are CIELAB under a D65
reference white, where Euclidean distance approximates perceived color difference.
LCh is Lab in polar form (lightness, chroma, hue in degrees) and is only used to
place anchor colors around the hue circle.

:author: Shay Hill
:created: 2026-10-02
"""

import math
import re
from typing import Annotated, TypeAlias

import numpy as np
from basic_colormath import (
    float_tuple_to_8bit_int_tuple,
    hex_to_rgb,
    lab_to_rgb,
    rgb_to_hex,
    rgb_to_lab,
    rgbs_to_lab,
)
from numpy import typing as npt

Rgb: TypeAlias = Annotated[tuple[int, int, int], "3 ints [0, 255]"]
Lab: TypeAlias = Annotated[tuple[float, float, float], "L [0, 100], a, b"]
Lch: TypeAlias = Annotated[tuple[float, float, float], "L [0, 100], C >= 0, h [0, 360)"]

_LabArray: TypeAlias = Annotated[npt.NDArray[np.float64], "(n, 3)"]

_MAX_8BIT = 255

_HEX_PATTERN = re.compile(r"#[0-9a-fA-F]{6}")


def _check_byte(value: int) -> int:
    """Raise a ValueError if value is not an 8-bit channel value."""
    if not 0 <= value <= _MAX_8BIT:
        msg = f"rgb channel values must be in [0, 255], not {value}"
        raise ValueError(msg)
    return value


def to_perceptual(r: int, g: int, b: int) -> Lab:
    """Convert an sRGB byte triple to a Lab color.

    :param r: red channel [0, 255]
    :param g: green channel [0, 255]
    :param b: blue channel [0, 255]
    :return: (L, a, b) with L in [0, 100]
    :raise ValueError: if any channel is outside [0, 255]
    """
    rgb = tuple(_check_byte(x) for x in (r, g, b))
    lum, aaa, bbb = rgb_to_lab(rgb)
    return float(lum), float(aaa), float(bbb)


def to_device(lab: Lab) -> Rgb:
    """Convert a Lab color to an sRGB byte triple.

    :param lab: (L, a, b)
    :return: (r, g, b) each in [0, 255]

    Colors outside the sRGB gamut are clipped channel by channel. For any color
    that came from `to_perceptual`, this reconstructs the original bytes to within
    rounding.
    """
    clipped = np.clip(lab_to_rgb(lab), 0, _MAX_8BIT)
    r, g, b = float_tuple_to_8bit_int_tuple(tuple(float(x) for x in clipped))
    return r, g, b


def rgbs_to_perceptual(rgbs: npt.ArrayLike) -> _LabArray:
    """Convert an array of sRGB byte triples to Lab.

    :param rgbs: array-like with shape (n, 3) of values in [0, 255]
    :return: array with shape (n, 3) of (L, a, b) values
    """
    rgbs_ = np.asarray(rgbs, dtype=np.float64).reshape(-1, 3)
    if not len(rgbs_):
        return np.empty((0, 3), dtype=np.float64)
    return np.asarray(rgbs_to_lab(rgbs_), dtype=np.float64).reshape(-1, 3)


def lch_to_lab(lightness: float, chroma: float, hue: float) -> Lab:
    """Convert cylindrical LCh to Lab.

    :param lightness: L [0, 100]
    :param chroma: distance from the neutral axis
    :param hue: angle in degrees
    :return: (L, a, b)
    """
    radians = math.radians(hue)
    return lightness, chroma * math.cos(radians), chroma * math.sin(radians)


def lab_to_lch(lab: Lab) -> Lch:
    """Convert Lab to cylindrical LCh. Hue is 0 for achromatic colors."""
    lightness, aaa, bbb = lab
    hue = math.degrees(math.atan2(bbb, aaa)) % 360
    return lightness, math.hypot(aaa, bbb), hue


def to_hex(lab: Lab) -> str:
    """Render a Lab color as a lowercase '#rrggbb' string."""
    return rgb_to_hex(to_device(lab))


def hex_to_perceptual(hex_: str) -> Lab:
    """Parse a '#rrggbb' string into a Lab color.

    :param hex_: color string in the form '#rrggbb'
    :return: (L, a, b)
    :raise ValueError: if hex_ is not in the form '#rrggbb'
    """
    if not _HEX_PATTERN.fullmatch(hex_):
        msg = f"colors need to be in the form of #rrggbb, not {hex_}"
        raise ValueError(msg)
    r, g, b = (int(x) for x in hex_to_rgb(hex_))
    return to_perceptual(r, g, b)
