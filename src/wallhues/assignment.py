"""Assign Lab colors to the nearest anchor slot.

Distance is squared Euclidean distance in Lab. Squaring does not change the order of
candidates, so there is no need to take a root.

NaN distances are treated as infinite. A NaN never beats a finite distance, and a
color with NaN channels still returns the first candidate slot from `nearest_slot`
rather than nothing. Ties go to the slot that comes first in palette order.

:author: Shay Hill
:created: 2026-10-03
"""

from typing import Annotated, TypeAlias

import numpy as np
from numpy import typing as npt

from wallhues.anchors import AnchorTable, ColorClass, ColorSlot, get_anchor_table
from wallhues.color_space import Lab

_LabArray: TypeAlias = Annotated[npt.NDArray[np.float64], "(n, 3)"]
_Indices: TypeAlias = Annotated[npt.NDArray[np.intp], "(n,)"]

# returned by nearest_slot_indices for colors that cannot be assigned
UNASSIGNED = -1


def get_sqeuclidean_matrix(
    labs_a: _LabArray, labs_b: _LabArray
) -> npt.NDArray[np.float64]:
    """Get the squared distance between every color in a and every color in b.

    :param labs_a: (m, 3) array of Lab colors
    :param labs_b: (n, 3) array of Lab colors
    :return: (m, n) array of squared distances. NaN where either color has a NaN.
    """
    deltas = labs_a[:, np.newaxis, :] - labs_b[np.newaxis, :, :]
    return np.sum(deltas * deltas, axis=2)


def nearest_index(color: Lab, labs: _LabArray) -> int | None:
    """Find the row of labs nearest to color.

    :param color: (L, a, b)
    :param labs: (n, 3) array of Lab colors
    :return: index of the nearest row (the first of any ties) or None if labs is
        empty
    """
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    if not len(labs):
        return None
    dists = get_sqeuclidean_matrix(np.array([color], dtype=np.float64), labs)[0]
    dists = np.where(np.isnan(dists), np.inf, dists)
    return int(np.argmin(dists))


def _candidate_indices(table: AnchorTable, color_class: ColorClass | None) -> _Indices:
    return np.array(
        [s.index for s in table.slots_in_class(color_class)], dtype=np.intp
    )


def nearest_slot(
    color: Lab,
    color_class: ColorClass | None = None,
    table: AnchorTable | None = None,
) -> ColorSlot | None:
    """Find the slot whose default color is nearest to a Lab color.

    :param color: (L, a, b)
    :param color_class: optionally consider only slots in this class
    :param table: anchor table. Defaults to the shared default table.
    :return: the nearest slot or None if no slot is in color_class
    """
    table = table or get_anchor_table()
    candidates = _candidate_indices(table, color_class)
    nearest = nearest_index(color, table.labs[candidates])
    if nearest is None:
        return None
    return table.slots[int(candidates[nearest])]


def nearest_slot_indices(
    labs: _LabArray,
    table: AnchorTable | None = None,
    color_class: ColorClass | None = None,
) -> _Indices:
    """Find the nearest slot index for each color in an array.

    :param labs: (n, 3) array of Lab colors
    :param table: anchor table. Defaults to the shared default table.
    :param color_class: optionally consider only slots in this class
    :return: (n,) array of slot indices into table.slots. UNASSIGNED (-1) for
        colors with non-finite channels and for every color if no slot is in
        color_class.

    This is the vectorized counterpart of `nearest_slot` used when accumulating
    pixels. It differs in one way: colors with NaN or infinite channels are not
    assigned to any slot.
    """
    table = table or get_anchor_table()
    labs = np.asarray(labs, dtype=np.float64).reshape(-1, 3)
    indices = np.full(len(labs), UNASSIGNED, dtype=np.intp)
    candidates = _candidate_indices(table, color_class)
    if not len(candidates) or not len(labs):
        return indices
    finite = np.all(np.isfinite(labs), axis=1)
    dists = get_sqeuclidean_matrix(labs[finite], table.labs[candidates])
    indices[finite] = candidates[np.argmin(dists, axis=1)]
    return indices
