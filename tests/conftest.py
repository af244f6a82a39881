"""See full diffs in pytest. Share pixel fixtures.

:author: Shay Hill
:created: 2026-10-07
"""

from typing import Any

import numpy as np
import pytest
from numpy import typing as npt

from wallhues.anchors import AnchorTable, get_anchor_table


def pytest_assertrepr_compare(
    config: Any, op: str, left: str, right: str
) -> list[str] | None:
    """See full error diffs"""
    del config
    if op in ("==", "!="):
        return [f"{left} {op} {right}"]
    return None


@pytest.fixture
def table() -> AnchorTable:
    """Return the default anchor table."""
    return get_anchor_table()


@pytest.fixture
def random_pixels() -> npt.NDArray[np.uint8]:
    """Return the same 5000 random rgb pixels every time."""
    rng = np.random.default_rng(seed=8)
    return rng.integers(0, 256, size=(5000, 3), dtype=np.uint8)
