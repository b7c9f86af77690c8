"""Combination selection: choose quantities of several products for one container."""

from __future__ import annotations

import logging
import math
from typing import Any, Sequence

from ortools.sat.python import cp_model

from packing_optimizer.geometry import percent
from packing_optimizer.models import CombinationResult, Product

logger = logging.getLogger(__name__)

# CP-SAT works on integers: volumes and weights are scaled by this factor
SCALE = 1000


def select_combination(
    products: Sequence[Product],
    container_volume: float,
    max_weight: float,
) -> list[CombinationResult]:
    """
    Greedy mixed-product allocator under a joint volume + weight budget.

    Steps:
    1) Sort products by efficiency = 1 / (volume * unit_weight), highest first
    2) Seed: one unit of every product that still fits the remaining budget
    3) Fill: sweep the seeded products in the same order, adding one unit of
       each that still fits, until a whole sweep adds nothing
    4) Return only products with quantity >= 1

    A product that does not fit at seed time is never reconsidered, even if a
    different seed order would have left room for it.

    Args:
        products: Product types (not modified)
        container_volume: Volume budget
        max_weight: Weight budget

    Returns:
        One CombinationResult per admitted product, in efficiency order
    """
    ranked = sorted(products, key=lambda p: p.efficiency, reverse=True)

    remaining_volume = float(container_volume)
    remaining_weight = float(max_weight)
    quantities: list[tuple[Product, int]] = []

    def fits(product: Product) -> bool:
        return product.volume <= remaining_volume and product.unit_weight <= remaining_weight

    for product in ranked:
        if fits(product):
            quantities.append((product, 1))
            remaining_volume -= product.volume
            remaining_weight -= product.unit_weight

    # A product consuming neither volume nor weight would fit forever
    fillable = [i for i, (p, _) in enumerate(quantities) if p.volume > 0 or p.unit_weight > 0]

    improved = True
    while improved:
        improved = False
        for i in fillable:
            product, quantity = quantities[i]
            if fits(product):
                quantities[i] = (product, quantity + 1)
                remaining_volume -= product.volume
                remaining_weight -= product.unit_weight
                improved = True

    results = [
        CombinationResult(
            product=product,
            quantity=quantity,
            total_weight=quantity * product.unit_weight,
            total_volume=quantity * product.volume,
        )
        for product, quantity in quantities
        if quantity > 0
    ]
    logger.debug(
        "select_combination: %s",
        {r.product.name: r.quantity for r in results},
    )
    return results


def select_combination_exact(
    products: Sequence[Product],
    container_volume: float,
    max_weight: float,
    time_limit_sec: float = 5.0,
) -> list[CombinationResult]:
    """
    Bounded knapsack with OR-Tools CP-SAT, maximizing used volume.

    Product usage is rounded up and the budget rounded down when scaling to
    integers, so a solution never exceeds the real budget.
    """
    budget_volume = math.floor(float(container_volume) * SCALE + 1e-9)
    budget_weight = math.floor(float(max_weight) * SCALE + 1e-9)
    if not products or budget_volume < 0 or budget_weight < 0:
        return []

    model = cp_model.CpModel()

    # Decision variables: x[i] = units of product i
    x: dict[int, Any] = {}
    volumes: dict[int, int] = {}
    weights: dict[int, int] = {}
    for i, product in enumerate(products):
        volumes[i] = max(0, math.ceil(float(product.volume) * SCALE - 1e-9))
        weights[i] = max(0, math.ceil(float(product.unit_weight) * SCALE - 1e-9))
        if volumes[i] == 0 and weights[i] == 0:
            upper = 1
        else:
            upper = min(
                budget_volume // volumes[i] if volumes[i] > 0 else budget_weight // weights[i],
                budget_weight // weights[i] if weights[i] > 0 else budget_volume // volumes[i],
            )
        x[i] = model.NewIntVar(0, upper, f"x_{i}")

    model.Add(sum(x[i] * volumes[i] for i in x) <= budget_volume)
    model.Add(sum(x[i] * weights[i] for i in x) <= budget_weight)
    model.Maximize(sum(x[i] * volumes[i] for i in x))

    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = float(time_limit_sec)
    solver.parameters.num_workers = 1
    status = solver.Solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        raise RuntimeError(f"Solver failed with status {solver.StatusName(status)}")

    results: list[CombinationResult] = []
    for i, product in enumerate(products):
        quantity = int(solver.Value(x[i]))
        if quantity > 0:
            results.append(
                CombinationResult(
                    product=product,
                    quantity=quantity,
                    total_weight=quantity * product.unit_weight,
                    total_volume=quantity * product.volume,
                )
            )
    logger.debug(
        "select_combination_exact: status=%s %s",
        solver.StatusName(status),
        {r.product.name: r.quantity for r in results},
    )
    return results


def combination_summary(
    results: Sequence[CombinationResult],
    container_volume: float,
    max_weight: float,
) -> dict[str, Any]:
    used_volume = sum(r.total_volume for r in results)
    used_weight = sum(r.total_weight for r in results)
    return {
        "total_units": sum(r.quantity for r in results),
        "used_volume": used_volume,
        "used_weight": used_weight,
        "remaining_volume": float(container_volume) - used_volume,
        "remaining_weight": float(max_weight) - used_weight,
        "space_utilization": percent(used_volume, float(container_volume)),
        "weight_utilization": percent(used_weight, float(max_weight)),
    }
