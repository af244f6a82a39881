"""Accumulate pixels into per-slot sums and counts.

Pixels are split into contiguous chunks. Each chunk is reduced on a worker thread
into a private map of slot -> Bucket, then the partial maps are merged pairwise. A
merge only ever adds sums and counts, so chunk size and merge order do not change
the per-slot means (beyond floating-point rounding). Partial maps are merged in
chunk order, so the same input always produces the same sums.

numpy does the heavy lifting and releases the GIL while it does, so threads are
enough to keep multiple cores busy.

:author: Shay Hill
:created: 2026-10-04
"""

from __future__ import annotations

import dataclasses
import functools as ft
import itertools as it
import logging
import os
from collections import deque
from collections.abc import Iterable, Iterator, Mapping
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Annotated, TypeAlias

import numpy as np
from numpy import typing as npt

from wallhues import defaults
from wallhues.anchors import AnchorTable, ColorSlot, get_anchor_table
from wallhues.assignment import UNASSIGNED, nearest_slot_indices
from wallhues.color_space import Lab, Rgb, rgbs_to_perceptual

_RgbArray: TypeAlias = Annotated[npt.NDArray[np.uint8], "(n, 3)"]

Pixels: TypeAlias = Iterable[Rgb] | npt.NDArray[np.integer]

# chunks submitted per worker before waiting on the oldest result
_CHUNKS_PER_WORKER = 2


@dataclasses.dataclass(frozen=True)
class Bucket:
    """Running sum of Lab values and the number of pixels summed.

    total: (sum of L, sum of a, sum of b)
    count: number of pixels in the sums
    """

    total: tuple[float, float, float]
    count: int

    def __add__(self, other: Bucket) -> Bucket:
        """Combine two buckets for the same slot."""
        lum, aaa, bbb = (x + y for x, y in zip(self.total, other.total))
        return Bucket((lum, aaa, bbb), self.count + other.count)

    @property
    def mean(self) -> Lab:
        """Get the average Lab color of the pixels in this bucket.

        :raise ValueError: if the bucket is empty
        """
        if self.count == 0:
            msg = "cannot take the mean of an empty bucket"
            raise ValueError(msg)
        lum, aaa, bbb = (x / self.count for x in self.total)
        return lum, aaa, bbb


BucketMap: TypeAlias = dict[ColorSlot, Bucket]


def merge_bucket_maps(
    buckets_a: Mapping[ColorSlot, Bucket], buckets_b: Mapping[ColorSlot, Bucket]
) -> BucketMap:
    """Merge two partial results into a new map. Neither argument is changed."""
    merged = dict(buckets_a)
    for slot, bucket in buckets_b.items():
        merged[slot] = merged[slot] + bucket if slot in merged else bucket
    return merged


def _to_rgb_array(pixels: npt.ArrayLike) -> _RgbArray:
    """Check pixel values and return them as an (n, 3) uint8 array.

    :raise ValueError: if pixels do not have 3 channels or hold values that are not
        integers in [0, 255]
    """
    array = np.asarray(pixels)
    if array.size == 0:
        return np.empty((0, 3), dtype=np.uint8)
    if array.shape[-1] != 3:
        msg = f"pixels must have 3 channels (r, g, b), not shape {array.shape}"
        raise ValueError(msg)
    if array.dtype != np.uint8:
        if not np.issubdtype(array.dtype, np.integer):
            msg = f"pixel values must be integers, not {array.dtype}"
            raise ValueError(msg)
        if array.min() < 0 or array.max() > 255:
            msg = "pixel values must be in [0, 255]"
            raise ValueError(msg)
    return array.astype(np.uint8).reshape(-1, 3)


def _iter_chunks(pixels: Pixels, chunk_size: int) -> Iterator[_RgbArray]:
    """Split pixels into contiguous (n, 3) arrays of at most chunk_size pixels.

    An iterator of pixels is consumed exactly once.
    """
    if isinstance(pixels, np.ndarray):
        rgbs = _to_rgb_array(pixels)
        for beg in range(0, len(rgbs), chunk_size):
            yield rgbs[beg : beg + chunk_size]
        return
    iterator = iter(pixels)
    while chunk := list(it.islice(iterator, chunk_size)):
        array = np.asarray(chunk)
        if array.ndim != 2:
            msg = f"each pixel must be an (r, g, b) sequence, not shape {array.shape}"
            raise ValueError(msg)
        yield _to_rgb_array(array)


def accumulate_chunk(
    pixels: npt.ArrayLike, table: AnchorTable | None = None
) -> BucketMap:
    """Sum the Lab values of a block of pixels by nearest slot.

    :param pixels: (n, 3) array-like of rgb values [0, 255]
    :param table: anchor table. Defaults to the shared default table.
    :return: a new map of slot -> Bucket with an entry only for slots that
        received at least one pixel

    Each unique color is converted and assigned once, then weighted by the number of
    times it appears.
    """
    table = table or get_anchor_table()
    rgbs = _to_rgb_array(pixels)
    if not len(rgbs):
        return {}

    colors, counts = np.unique(rgbs, axis=0, return_counts=True)
    labs = rgbs_to_perceptual(colors)
    indices = nearest_slot_indices(labs, table)

    assigned = indices != UNASSIGNED
    indices = indices[assigned]
    weights = counts[assigned].astype(np.float64)
    labs = labs[assigned]

    num_slots = len(table.slots)
    slot_counts = np.bincount(indices, weights=weights, minlength=num_slots)
    slot_sums = [
        np.bincount(indices, weights=labs[:, i] * weights, minlength=num_slots)
        for i in range(3)
    ]

    buckets: BucketMap = {}
    for i in np.flatnonzero(slot_counts):
        lum, aaa, bbb = (float(s[i]) for s in slot_sums)
        buckets[table.slots[i]] = Bucket((lum, aaa, bbb), int(slot_counts[i]))
    return buckets


def accumulate(
    pixels: Pixels,
    *,
    table: AnchorTable | None = None,
    chunk_size: int = defaults.CHUNK_SIZE,
    max_workers: int | None = defaults.MAX_WORKERS,
) -> BucketMap:
    """Sum the Lab values of every pixel by nearest slot.

    :param pixels: an iterable of (r, g, b) tuples or an array with shape (..., 3).
        An iterator will be consumed.
    :param table: anchor table. Defaults to the shared default table.
    :param chunk_size: number of pixels each worker reduces at a time
    :param max_workers: number of worker threads. None to use the cpu count.
    :return: a map of slot -> Bucket with an entry only for slots that received at
        least one pixel. Empty for empty input.
    :raise ValueError: if chunk_size < 1 or pixel values are not rgb bytes

    At most `_CHUNKS_PER_WORKER * max_workers` chunks are read ahead of the oldest
    unfinished chunk, so a long iterator is never held in memory all at once.
    """
    if chunk_size < 1:
        msg = f"chunk_size must be at least 1, not {chunk_size}"
        raise ValueError(msg)
    if max_workers is None:
        max_workers = os.cpu_count() or 1
    table = table or get_anchor_table()
    accumulate_chunk_ = ft.partial(accumulate_chunk, table=table)

    buckets: BucketMap = {}
    num_chunks = 0
    pending: deque[Future[BucketMap]] = deque()
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        for chunk in _iter_chunks(pixels, chunk_size):
            if len(pending) >= _CHUNKS_PER_WORKER * max_workers:
                buckets = merge_bucket_maps(buckets, pending.popleft().result())
            pending.append(executor.submit(accumulate_chunk_, chunk))
            num_chunks += 1
        for future in pending:
            buckets = merge_bucket_maps(buckets, future.result())

    num_pixels = sum(b.count for b in buckets.values())
    logging.info(
        f"accumulated {num_pixels} pixels in {num_chunks} chunks "
        + f"into {len(buckets)} of {len(table.slots)} slots"
    )
    return buckets
