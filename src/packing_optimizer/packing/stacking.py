# src/packing_optimizer/packing/stacking.py

from __future__ import annotations

import logging
import math

from packing_optimizer.containers import ContainerType, get_container_spec
from packing_optimizer.geometry import grid_for, percent
from packing_optimizer.models import Arrangement, Dimensions, Grid, Position, StackingResult
from packing_optimizer.packing.chain import weight_capped

logger = logging.getLogger(__name__)


def _span(count: int, per_step: int, limit: int) -> int:
    if per_step <= 0:
        return 0
    return min(limit, math.ceil(count / per_step))


def layered_positions(unit_dims: Dimensions, grid: Grid, count: int) -> list[Position]:
    """Fill layer by layer (y outer, x middle, z inner), stopping after `count` units."""
    positions: list[Position] = []
    for j in range(grid.ny):
        for i in range(grid.nx):
            for k in range(grid.nz):
                if len(positions) >= count:
                    return positions
                positions.append(
                    Position(
                        x=i * unit_dims.length,
                        y=j * unit_dims.height,
                        z=k * unit_dims.width,
                    )
                )
    return positions


def pack_upright(
    unit_dims: Dimensions,
    unit_weight: float,
    container_dims: Dimensions,
    container_max_weight: float,
) -> StackingResult:
    """
    Stack identical units without rotating them.

    When the full grid is too heavy the count drops to what the weight limit
    allows, and the grid is filled from the bottom layer up.
    """
    unit_weight = float(unit_weight)
    container_max_weight = float(container_max_weight)

    grid = grid_for(container_dims, unit_dims.length, unit_dims.width, unit_dims.height)
    count = grid.total
    if count * unit_weight > container_max_weight:
        count = weight_capped(count, unit_weight, container_max_weight)

    total_weight = count * unit_weight
    layers = _span(count, grid.nx * grid.nz, grid.ny)

    result = StackingResult(
        max_units=count,
        total_weight=total_weight,
        space_utilization=percent(count * unit_dims.volume, container_dims.volume),
        weight_utilization=percent(total_weight, container_max_weight),
        positions=layered_positions(unit_dims, grid, count),
        grid=grid,
        layers=layers,
        arrangement=Arrangement(
            rows=_span(count, grid.ny * grid.nz, grid.nx),
            columns=_span(count, grid.nx * grid.ny, grid.nz),
            layers=layers,
        ),
    )
    logger.debug("pack_upright: count=%d layers=%d", count, layers)
    return result


def pack_cartons_on_pallet(
    carton_dims: Dimensions,
    carton_weight: float,
    pallet_dims: Dimensions,
    pallet_max_weight: float,
) -> StackingResult:
    return pack_upright(carton_dims, carton_weight, pallet_dims, pallet_max_weight)


def pack_pallets_in_container(
    pallet_dims: Dimensions,
    pallet_weight: float,
    container_type: str | ContainerType,
) -> StackingResult:
    """Upright pallets in a standard container, capped by its max payload."""
    spec = get_container_spec(container_type)
    return pack_upright(pallet_dims, pallet_weight, spec.internal, spec.max_weight)
