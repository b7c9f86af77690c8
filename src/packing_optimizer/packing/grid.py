# src/packing_optimizer/packing/grid.py

from __future__ import annotations

import logging
from functools import reduce
from typing import Callable, Optional

from packing_optimizer.geometry import grid_for, orientations_6, percent
from packing_optimizer.models import Dimensions, Grid, Orientation, PackingResult, Position

logger = logging.getLogger(__name__)

Candidate = tuple[Orientation, Grid]


def grid_positions(orientation: Orientation, grid: Grid) -> list[Position]:
    """
    One position per grid cell: x outer, y (vertical) middle, z inner.
    Cells are orientation-sized with no gap between neighbours.
    """
    return [
        Position(
            x=i * orientation.length,
            y=j * orientation.height,
            z=k * orientation.width,
            rotation=orientation.rotation,
        )
        for i in range(grid.nx)
        for j in range(grid.ny)
        for k in range(grid.nz)
    ]


def candidates(item_dims: Dimensions, container_dims: Dimensions) -> list[Candidate]:
    """Grid counts for every orientation, in table order."""
    return [
        (o, grid_for(container_dims, o.length, o.width, o.height))
        for o in orientations_6(item_dims)
    ]


def _best(
    item_weight: float, container_max_weight: float
) -> Callable[[Optional[Candidate], Candidate], Optional[Candidate]]:
    def step(best: Optional[Candidate], candidate: Candidate) -> Optional[Candidate]:
        _, grid = candidate
        if grid.total * item_weight > container_max_weight:
            return best
        best_total = best[1].total if best is not None else 0
        # strictly greater: first seen wins ties
        return candidate if grid.total > best_total else best

    return step


def pack(
    item_dims: Dimensions,
    item_weight: float,
    container_dims: Dimensions,
    container_max_weight: float,
) -> PackingResult:
    """
    Pack identical units into one container on a uniform grid.

    - Tries all 6 axis-aligned orientations
    - Rejects orientations whose full grid exceeds the weight cap
    - Keeps the orientation with the most units (first one on ties)
    - Utilization uses un-rotated volumes
    Never raises for zero or degenerate dimensions; the result is simply empty.
    """
    item_weight = float(item_weight)
    container_max_weight = float(container_max_weight)

    best = reduce(
        _best(item_weight, container_max_weight),
        candidates(item_dims, container_dims),
        None,
    )

    if best is None:
        logger.debug("pack: no orientation fits item=%s container=%s", item_dims, container_dims)
        return PackingResult()

    orientation, grid = best
    max_units = grid.total
    total_weight = max_units * item_weight

    result = PackingResult(
        max_units=max_units,
        total_weight=total_weight,
        space_utilization=percent(max_units * item_dims.volume, container_dims.volume),
        weight_utilization=percent(total_weight, container_max_weight),
        positions=grid_positions(orientation, grid),
        orientation=orientation,
        grid=grid,
    )
    logger.debug(
        "pack: max_units=%d orientation=%d grid=%dx%dx%d",
        max_units, orientation.index, grid.nx, grid.ny, grid.nz,
    )
    return result
