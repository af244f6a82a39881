"""The fixed catalog of named palette slots and their default colors.

Every palette has the same 24 slots:

* 8 shades, an achromatic ramp from near black to near white
* 8 bright hues, evenly spaced around the hue circle
* 8 dark hues, the same hues at a lower lightness and chroma

Each slot has a color class (shade, bright, or dark) and a default Lab color. Both
are fixed when the table is built. The default table is built once and shared. Build
a custom table with `new_anchor_table` and pass it to the extraction functions to
try other anchor positions.

:author: Shay Hill
:created: 2026-10-02
"""

from __future__ import annotations

import dataclasses
import enum
import functools as ft
from collections.abc import Iterable, Sequence
from typing import Annotated, TypeAlias

import numpy as np
from numpy import typing as npt

from wallhues import defaults
from wallhues.color_space import Lab, lch_to_lab

_LabArray: TypeAlias = Annotated[npt.NDArray[np.float64], "(n, 3)"]


class ColorClass(enum.Enum):
    """Groups of slots. Empty slots only borrow colors from their own class."""

    SHADE = "shade"
    BRIGHT = "bright"
    DARK = "dark"


@dataclasses.dataclass(frozen=True)
class ColorSlot:
    """One named position in the palette.

    name: unique slot name, e.g. "shade_3" or "bright_red"
    color_class: the class this slot belongs to
    index: position of this slot in AnchorTable.slots
    """

    name: str
    color_class: ColorClass
    index: int

    def __str__(self) -> str:
        return self.name


def _new_labs_array(labs: Iterable[Lab]) -> _LabArray:
    """Create a read-only (n, 3) array of Lab values."""
    array = np.array(list(labs), dtype=np.float64).reshape(-1, 3)
    array.flags.writeable = False
    return array


@dataclasses.dataclass(frozen=True, eq=False)
class AnchorTable:
    """Slots, their classes, and their default colors.

    slots: every slot in palette order
    labs: (n, 3) read-only array of default Lab colors, one row per slot
    """

    slots: tuple[ColorSlot, ...]
    labs: _LabArray

    def __post_init__(self) -> None:
        """Check that slot indices match their positions."""
        if len(self.slots) != len(self.labs):
            msg = f"{len(self.slots)} slots but {len(self.labs)} default colors"
            raise ValueError(msg)
        for i, slot in enumerate(self.slots):
            if slot.index != i:
                msg = f"slot {slot.name} has index {slot.index} at position {i}"
                raise ValueError(msg)
        if len({s.name for s in self.slots}) != len(self.slots):
            msg = "slot names must be unique"
            raise ValueError(msg)

    @ft.cached_property
    def _by_name(self) -> dict[str, ColorSlot]:
        return {s.name: s for s in self.slots}

    def all_slots(self) -> tuple[ColorSlot, ...]:
        """Return every slot in palette order."""
        return self.slots

    def slot(self, name: str) -> ColorSlot:
        """Look up a slot by name.

        :raise KeyError: if no slot has that name
        """
        return self._by_name[name]

    def default_color(self, slot: ColorSlot) -> Lab:
        """Return the default Lab color of a slot."""
        lum, aaa, bbb = (float(x) for x in self.labs[slot.index])
        return lum, aaa, bbb

    def color_class(self, slot: ColorSlot) -> ColorClass:
        """Return the color class of a slot."""
        return slot.color_class

    def slots_in_class(self, color_class: ColorClass | None) -> tuple[ColorSlot, ...]:
        """Return the slots in a color class, in palette order. None for all slots."""
        if color_class is None:
            return self.slots
        return tuple(s for s in self.slots if s.color_class is color_class)


def _get_shade_lightnesses(
    count: int, min_lightness: float, max_lightness: float
) -> list[float]:
    """Space `count` lightness values evenly from min to max, inclusive."""
    if count == 1:
        return [(min_lightness + max_lightness) / 2]
    return [float(x) for x in np.linspace(min_lightness, max_lightness, count)]


def new_anchor_table(
    *,
    shade_count: int = defaults.SHADE_COUNT,
    shade_lightness: tuple[float, float] = (
        defaults.SHADE_MIN_LIGHTNESS,
        defaults.SHADE_MAX_LIGHTNESS,
    ),
    hue_names: Sequence[str] = defaults.HUE_NAMES,
    hue_offset: float = defaults.HUE_OFFSET,
    bright_lc: tuple[float, float] = (
        defaults.BRIGHT_LIGHTNESS,
        defaults.BRIGHT_CHROMA,
    ),
    dark_lc: tuple[float, float] = (defaults.DARK_LIGHTNESS, defaults.DARK_CHROMA),
) -> AnchorTable:
    """Build a table of slots and default colors.

    :param shade_count: number of achromatic slots
    :param shade_lightness: (darkest, lightest) shade lightness
    :param hue_names: one name per hue. Hues are 360 / len(hue_names) degrees apart.
    :param hue_offset: LCh hue angle of the first hue
    :param bright_lc: (lightness, chroma) of the bright hue slots
    :param dark_lc: (lightness, chroma) of the dark hue slots
    :return: an immutable AnchorTable with shades, then bright hues, then dark hues
    :raise ValueError: if there are no slots at all

    Shades are named shade_0 (darkest) to shade_{n-1}. Hues are named
    bright_{hue_name} and dark_{hue_name}.
    """
    names_and_classes: list[tuple[str, ColorClass]] = []
    labs: list[Lab] = []

    lightnesses = _get_shade_lightnesses(shade_count, *shade_lightness)
    for i, lightness in enumerate(lightnesses):
        names_and_classes.append((f"shade_{i}", ColorClass.SHADE))
        labs.append((lightness, 0.0, 0.0))

    step = 360 / len(hue_names) if hue_names else 0
    hues = [(hue_offset + step * i) % 360 for i in range(len(hue_names))]
    for color_class, (lightness, chroma) in (
        (ColorClass.BRIGHT, bright_lc),
        (ColorClass.DARK, dark_lc),
    ):
        for name, hue in zip(hue_names, hues):
            names_and_classes.append((f"{color_class.value}_{name}", color_class))
            labs.append(lch_to_lab(lightness, chroma, hue))

    if not names_and_classes:
        msg = "an anchor table needs at least one slot"
        raise ValueError(msg)

    slots = tuple(
        ColorSlot(name, color_class, i)
        for i, (name, color_class) in enumerate(names_and_classes)
    )
    return AnchorTable(slots, _new_labs_array(labs))


@ft.cache
def get_anchor_table() -> AnchorTable:
    """Return the default anchor table. Built on first call, shared afterward."""
    return new_anchor_table()
