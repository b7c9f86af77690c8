"""Geometry utilities for grid packing."""

from __future__ import annotations

import math

from packing_optimizer.models import Dimensions, Grid, Orientation, Rotation


# (l, w, h) as indices into the raw (L, W, H) dims, with the rotation a renderer
# applies to the un-rotated unit mesh to obtain that orientation.
ORIENTATION_TABLE: tuple[tuple[tuple[int, int, int], Rotation], ...] = (
    ((0, 1, 2), Rotation(x=0, y=0, z=0)),
    ((0, 2, 1), Rotation(x=90, y=0, z=0)),
    ((1, 0, 2), Rotation(x=0, y=90, z=0)),
    ((1, 2, 0), Rotation(x=90, y=90, z=0)),
    ((2, 0, 1), Rotation(x=0, y=0, z=90)),
    ((2, 1, 0), Rotation(x=0, y=90, z=90)),
)


def orientations_6(dims: Dimensions) -> list[Orientation]:
    """
    Return the 6 axis-aligned orientations of a unit, in table order.

    Duplicates are kept (a cube yields 6 identical entries) so the
    enumeration order, which is the tie-break, never depends on the input.
    """
    raw = dims.as_tuple()
    return [
        Orientation(index=i, length=raw[a], width=raw[b], height=raw[c], rotation=rotation)
        for i, ((a, b, c), rotation) in enumerate(ORIENTATION_TABLE)
    ]


def fit_count(extent: float, size: float) -> int:
    """How many units of `size` fit along `extent`. Non-positive sizes fit zero times."""
    if size <= 0 or extent <= 0:
        return 0
    return max(0, math.floor(float(extent) / float(size)))


def grid_for(container: Dimensions, length: float, width: float, height: float) -> Grid:
    return Grid(
        nx=fit_count(container.length, length),
        ny=fit_count(container.height, height),
        nz=fit_count(container.width, width),
    )


def percent(part: float, whole: float) -> float:
    return 0.0 if whole == 0 else (part / whole) * 100.0
