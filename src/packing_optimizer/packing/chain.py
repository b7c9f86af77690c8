# src/packing_optimizer/packing/chain.py

from __future__ import annotations

import logging
import math

from packing_optimizer.containers import CONTAINER_SPECS, ContainerType
from packing_optimizer.geometry import grid_for
from packing_optimizer.models import ChainResult, Dimensions
from packing_optimizer.packing.grid import pack

logger = logging.getLogger(__name__)


def upright_count(unit_dims: Dimensions, container_dims: Dimensions) -> int:
    """Grid count with the unit kept in its given (upright) orientation."""
    return grid_for(container_dims, unit_dims.length, unit_dims.width, unit_dims.height).total


def weight_capped(count: int, unit_weight: float, max_weight: float) -> int:
    """Cap `count` by how many units of `unit_weight` the weight limit allows."""
    if unit_weight <= 0:
        return count
    return max(0, min(count, math.floor(max_weight / unit_weight)))


def pack_chain(
    item_dims: Dimensions,
    carton_dims: Dimensions,
    pallet_dims: Dimensions,
    item_weight: float,
    carton_max_weight: float,
    pallet_max_weight: float,
    carton_tare_weight: float = 0.0,
) -> ChainResult:
    """
    Capacities of the whole unit -> carton -> pallet -> container chain.

    - Items in carton: full orientation search, weight-capped.
    - Cartons on pallet: upright cartons only, capped by the pallet weight limit
      using the loaded carton weight (contents plus `carton_tare_weight`).
    - Pallets in 20ft/40ft: upright pallets, geometry only. Use
      `pack_pallets_in_container` for a weight-aware count.
    """
    max_items_in_carton = pack(item_dims, item_weight, carton_dims, carton_max_weight).max_units

    carton_total_weight = max_items_in_carton * float(item_weight) + float(carton_tare_weight)
    max_packs_in_pallet = weight_capped(
        upright_count(carton_dims, pallet_dims),
        carton_total_weight,
        float(pallet_max_weight),
    )

    result = ChainResult(
        max_items_in_carton=max_items_in_carton,
        max_packs_in_pallet=max_packs_in_pallet,
        max_pallets_in_20ft=upright_count(pallet_dims, CONTAINER_SPECS[ContainerType.FT20].internal),
        max_pallets_in_40ft=upright_count(pallet_dims, CONTAINER_SPECS[ContainerType.FT40].internal),
    )
    logger.debug("pack_chain: %s", result.model_dump())
    return result
