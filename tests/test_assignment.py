"""Test nearest-slot assignment.

:author: Shay Hill
:created: 2026-10-08
"""

import math

import numpy as np
import pytest

from wallhues.anchors import AnchorTable, ColorClass, new_anchor_table
from wallhues.assignment import (
    UNASSIGNED,
    get_sqeuclidean_matrix,
    nearest_index,
    nearest_slot,
    nearest_slot_indices,
)
from wallhues.color_space import rgbs_to_perceptual, to_perceptual

_NAN = (math.nan, math.nan, math.nan)


@pytest.fixture
def twin_shades() -> AnchorTable:
    """Return a table with two identical shades and nothing else."""
    return new_anchor_table(shade_count=2, shade_lightness=(50, 50), hue_names=())


@pytest.fixture
def shades_only() -> AnchorTable:
    """Return a table with shades at L=40 and L=60 and no hues."""
    return new_anchor_table(shade_count=2, shade_lightness=(40, 60), hue_names=())


class TestSqeuclideanMatrix:
    def test_shape_and_values(self) -> None:
        """Return an (m, n) matrix of squared distances."""
        labs_a = np.array([[0, 0, 0], [1, 2, 2]], dtype=float)
        labs_b = np.array([[0, 0, 0], [0, 3, 4], [1, 2, 2]], dtype=float)
        result = get_sqeuclidean_matrix(labs_a, labs_b)
        np.testing.assert_array_equal(result, [[0, 25, 9], [9, 6, 0]])


class TestNearestSlot:
    def test_each_default(self, table: AnchorTable) -> None:
        """Every default color is nearest its own slot."""
        for slot in table.all_slots():
            assert nearest_slot(table.default_color(slot), table=table) == slot

    def test_mid_gray(self, table: AnchorTable) -> None:
        """Mid gray (L~54) goes to the L=56 shade."""
        assert nearest_slot(to_perceptual(128, 128, 128)) == table.slot("shade_4")

    def test_pure_red(self, table: AnchorTable) -> None:
        """Pure red goes to bright red."""
        assert nearest_slot(to_perceptual(255, 0, 0)) == table.slot("bright_red")

    def test_class_filter(self, table: AnchorTable) -> None:
        """Only consider slots in the given class."""
        gray = to_perceptual(128, 128, 128)
        slot = nearest_slot(gray, ColorClass.DARK, table)
        assert slot is not None
        assert slot.color_class is ColorClass.DARK

    def test_empty_class(self, shades_only: AnchorTable) -> None:
        """Return None if no slot is in the class."""
        assert nearest_slot((50, 0, 0), ColorClass.BRIGHT, shades_only) is None

    def test_tie_goes_to_first(self, twin_shades: AnchorTable) -> None:
        """Identical anchors tie. The first in palette order wins."""
        assert nearest_slot((50, 10, 10), table=twin_shades) == twin_shades.slots[0]

    def test_equidistant(self, shades_only: AnchorTable) -> None:
        """A color midway between two anchors goes to the first."""
        assert nearest_slot((50, 0, 0), table=shades_only) == shades_only.slots[0]

    def test_nan_color(self, table: AnchorTable) -> None:
        """A NaN color does not break the comparison. The first candidate wins."""
        assert nearest_slot(_NAN, table=table) == table.slots[0]
        bright = nearest_slot(_NAN, ColorClass.BRIGHT, table)
        assert bright == table.slot("bright_red")

    def test_deterministic(self, table: AnchorTable) -> None:
        """Repeated calls return the same slot."""
        lab = to_perceptual(90, 140, 200)
        assert len({nearest_slot(lab, table=table) for _ in range(10)}) == 1


class TestNearestIndex:
    def test_empty(self) -> None:
        """Return None for no candidates."""
        assert nearest_index((50, 0, 0), np.empty((0, 3))) is None

    def test_nan_candidate_excluded(self) -> None:
        """A NaN candidate never beats a finite one."""
        labs = np.array([_NAN, (90, 0, 0)])
        assert nearest_index((10, 0, 0), labs) == 1


class TestNearestSlotIndices:
    def test_matches_nearest_slot(
        self, table: AnchorTable, random_pixels: np.ndarray
    ) -> None:
        """The vectorized assignment agrees with the scalar assignment."""
        labs = rgbs_to_perceptual(random_pixels[:200])
        indices = nearest_slot_indices(labs, table)
        for lab, index in zip(labs, indices):
            slot = nearest_slot(tuple(lab), table=table)
            assert slot is not None
            assert slot.index == index

    def test_non_finite_unassigned(self, table: AnchorTable) -> None:
        """Colors with NaN or infinite channels are not assigned."""
        labs = np.array([[53, 0, 0], _NAN, [50, np.inf, 0]], dtype=float)
        indices = nearest_slot_indices(labs, table)
        assert indices[0] == table.slot("shade_4").index
        assert indices[1] == UNASSIGNED
        assert indices[2] == UNASSIGNED

    def test_empty_class(self, shades_only: AnchorTable) -> None:
        """Nothing is assigned if no slot is in the class."""
        labs = np.array([[50, 0, 0]], dtype=float)
        indices = nearest_slot_indices(labs, shades_only, ColorClass.DARK)
        assert indices.tolist() == [UNASSIGNED]

    def test_class_filter(self, table: AnchorTable) -> None:
        """Assign only to slots in the given class."""
        labs = rgbs_to_perceptual([[128, 128, 128], [255, 0, 0]])
        indices = nearest_slot_indices(labs, table, ColorClass.DARK)
        assert all(table.slots[i].color_class is ColorClass.DARK for i in indices)

    def test_empty_input(self, table: AnchorTable) -> None:
        """Return an empty array for no colors."""
        assert nearest_slot_indices(np.empty((0, 3)), table).shape == (0,)

    def test_tie_goes_to_first(self, twin_shades: AnchorTable) -> None:
        """Identical anchors tie. The first in palette order wins."""
        labs = np.array([[10, 0, 0], [90, 5, 5]], dtype=float)
        assert nearest_slot_indices(labs, twin_shades).tolist() == [0, 0]
