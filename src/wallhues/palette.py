"""Turn accumulated buckets into a finished palette.

Every slot that received pixels gets the mean Lab color of those pixels. Every slot
that did not is backfilled:

1. from the populated slot of the same color class whose mean is nearest to the
   empty slot's default color
2. or, if no slot in that class was populated, from the slot's default color

The result always has a color for every slot in the anchor table.

:author: Shay Hill
:created: 2026-10-05
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType

import numpy as np

from wallhues.anchors import AnchorTable, ColorSlot, get_anchor_table
from wallhues.assignment import nearest_index
from wallhues.buckets import Bucket
from wallhues.color_space import Lab, Rgb, to_device, to_hex


class Palette(Mapping[ColorSlot, Lab]):
    """An immutable map of every slot in an anchor table to a Lab color."""

    def __init__(
        self,
        colors: Mapping[ColorSlot, Lab],
        table: AnchorTable | None = None,
        populated: frozenset[ColorSlot] = frozenset(),
    ) -> None:
        """Initialize a Palette.

        :param colors: a Lab color for every slot in table
        :param table: anchor table. Defaults to the shared default table.
        :param populated: slots whose colors are pixel means, not backfills
        :raise ValueError: if any slot in table is missing from colors
        """
        self._table = table or get_anchor_table()
        missing = [s.name for s in self._table.slots if s not in colors]
        if missing:
            msg = f"palette is missing colors for {missing}"
            raise ValueError(msg)
        self._colors = MappingProxyType({s: colors[s] for s in self._table.slots})
        self._populated = populated

    @property
    def table(self) -> AnchorTable:
        """The anchor table this palette covers."""
        return self._table

    @property
    def populated(self) -> frozenset[ColorSlot]:
        """Slots whose colors are pixel means, not backfills."""
        return self._populated

    def __getitem__(self, key: ColorSlot | str) -> Lab:
        """Get a color by slot or by slot name."""
        if isinstance(key, str):
            key = self.table.slot(key)
        return self._colors[key]

    def __iter__(self) -> Iterator[ColorSlot]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def rgb(self, key: ColorSlot | str) -> Rgb:
        """Get the color of a slot as an rgb byte triple."""
        return to_device(self[key])

    def hex(self, key: ColorSlot | str) -> str:
        """Get the color of a slot as a '#rrggbb' string."""
        return to_hex(self[key])

    @property
    def hex_colors(self) -> dict[str, str]:
        """Get a '#rrggbb' string for every slot, keyed by slot name in order."""
        return {s.name: to_hex(c) for s, c in self._colors.items()}

    def describe(self) -> str:
        """Return one 'name: #rrggbb' line per slot."""
        hex_colors = self.hex_colors
        width = max(len(n) for n in hex_colors) + 1
        return "\n".join(f"{n + ':':<{width}} {h}" for n, h in hex_colors.items())


def _backfill(
    slot: ColorSlot, means: Mapping[ColorSlot, Lab], table: AnchorTable
) -> Lab:
    """Find a color for a slot that received no pixels.

    :param slot: the empty slot
    :param means: mean colors of populated slots
    :param table: anchor table
    :return: the mean color of the same-class populated slot nearest to the
        default color of slot. The default color of slot if no slot in that class
        is populated.
    """
    default = table.default_color(slot)
    donors = [s for s in table.slots_in_class(slot.color_class) if s in means]
    nearest = nearest_index(default, np.array([means[s] for s in donors]))
    if nearest is None:
        return default
    return means[donors[nearest]]


def finish(
    buckets: Mapping[ColorSlot, Bucket], table: AnchorTable | None = None
) -> Palette:
    """Average populated buckets and backfill empty slots.

    :param buckets: slot -> Bucket. Missing slots are treated as empty buckets.
    :param table: anchor table. Defaults to the shared default table.
    :return: a Palette with a color for every slot in table
    """
    table = table or get_anchor_table()
    means = {
        s: buckets[s].mean for s in table.slots if s in buckets and buckets[s].count
    }
    colors = {
        s: means[s] if s in means else _backfill(s, means, table) for s in table.slots
    }
    logging.info(
        f"finished palette with {len(means)} populated "
        + f"and {len(table.slots) - len(means)} backfilled slots"
    )
    return Palette(colors, table, frozenset(means))
