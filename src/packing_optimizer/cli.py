from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Optional

from packing_optimizer.combination import (
    combination_summary,
    select_combination,
    select_combination_exact,
)
from packing_optimizer.config import SOLVERS, configure_logging, get_settings
from packing_optimizer.models import Dimensions, Product
from packing_optimizer.packing.chain import pack_chain
from packing_optimizer.packing.grid import pack
from packing_optimizer.packing.stacking import pack_cartons_on_pallet, pack_pallets_in_container
from packing_optimizer.units import parse_dimensions, parse_weight

logger = logging.getLogger(__name__)

MODES = ["carton", "chain", "pallet", "container", "combination"]


def load_dimensions(data: dict[str, Any], key: str) -> Dimensions:
    """Dimensions from a {length, width, height} object or "LxWxH" text."""
    value = data.get(key)
    if value is None:
        raise ValueError(f"Input must include '{key}'")
    if isinstance(value, str):
        return parse_dimensions(value)
    return Dimensions(**value)


def load_products(data: dict[str, Any]) -> list[Product]:
    products = []
    for p in data.get("products", []):
        name = p.get("name", p.get("product_name", "UNKNOWN"))
        unit_weight = parse_weight(p.get("unit_weight", 0.0))
        if "volume" in p:
            products.append(Product(name=name, unit_weight=unit_weight, volume=float(p["volume"])))
        else:
            products.append(Product.from_dimensions(name, load_dimensions(p, "dimensions"), unit_weight))
    return products


def run(mode: str, data: dict[str, Any], solver: Optional[str] = None) -> dict[str, Any]:
    """Run one calculation on already-loaded input and return a JSON-ready plan."""
    if mode == "carton":
        result = pack(
            load_dimensions(data, "unit_dimensions"),
            parse_weight(data.get("unit_weight", 0.0)),
            load_dimensions(data, "container_dimensions"),
            parse_weight(data.get("container_max_weight", 0.0)),
        )
        return result.model_dump(mode="json")

    if mode == "chain":
        result = pack_chain(
            load_dimensions(data, "item_dimensions"),
            load_dimensions(data, "carton_dimensions"),
            load_dimensions(data, "pallet_dimensions"),
            parse_weight(data.get("item_weight", 0.0)),
            parse_weight(data.get("carton_max_weight", 0.0)),
            parse_weight(data.get("pallet_max_weight", 0.0)),
            carton_tare_weight=parse_weight(data.get("carton_tare_weight", 0.0)),
        )
        return result.model_dump()

    if mode == "pallet":
        result = pack_cartons_on_pallet(
            load_dimensions(data, "carton_dimensions"),
            parse_weight(data.get("carton_weight", 0.0)),
            load_dimensions(data, "pallet_dimensions"),
            parse_weight(data.get("pallet_max_weight", 0.0)),
        )
        return result.model_dump(mode="json")

    if mode == "container":
        result = pack_pallets_in_container(
            load_dimensions(data, "pallet_dimensions"),
            parse_weight(data.get("pallet_weight", 0.0)),
            str(data.get("container_type", "20ft")),
        )
        return result.model_dump(mode="json")

    if mode == "combination":
        settings = get_settings()
        products = load_products(data)
        if "container_volume" in data:
            container_volume = float(data["container_volume"])
        else:
            container_volume = load_dimensions(data, "container_dimensions").volume
        max_weight = parse_weight(data.get("max_weight", 0.0))

        solver = (solver or settings.combination_solver).lower()
        if solver not in SOLVERS:
            raise ValueError(f"Unknown solver '{solver}'. Valid: {list(SOLVERS)}")
        if solver == "cp-sat":
            results = select_combination_exact(
                products, container_volume, max_weight, time_limit_sec=settings.solver_time_limit
            )
        else:
            results = select_combination(products, container_volume, max_weight)
        return {
            "combination": [r.model_dump(mode="json") for r in results],
            "summary": combination_summary(results, container_volume, max_weight),
            "solver": solver,
        }

    raise ValueError(f"Unknown mode '{mode}'. Valid: {MODES}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Packing Optimizer CLI")
    parser.add_argument("--input", required=True, help="Input JSON file")
    parser.add_argument("--output", required=True, help="Output plan JSON file")
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="carton",
        help="carton = grid pack with orientation search, chain = unit/carton/pallet/container capacities, "
        "pallet = upright cartons on a pallet, container = upright pallets in 20ft/40ft, "
        "combination = product quantities for one container",
    )
    parser.add_argument(
        "--solver",
        choices=list(SOLVERS),
        help="Combination solver (default from PACKING_COMBINATION_SOLVER)",
    )

    args = parser.parse_args(argv)
    configure_logging(get_settings())

    data = json.loads(Path(args.input).read_text(encoding="utf-8"))
    plan = run(args.mode, data, solver=args.solver)
    write_plan(plan, args.output)

    if "max_units" in plan:
        print(
            f"mode={args.mode} max_units={plan['max_units']} "
            f"space={plan['space_utilization']:.1f}% weight={plan['weight_utilization']:.1f}%"
        )
    elif "summary" in plan:
        print(json.dumps(plan["summary"], indent=2, sort_keys=True))
    else:
        print(json.dumps(plan, sort_keys=True))


def write_plan(plan: dict, path: str = "plan.json") -> None:
    """
    Write a plan dictionary to a JSON file.

    Creates parent folders if needed, writes JSON with indent=2 and sort_keys=True,
    and overwrites the file on every run.
    """
    output_path = Path(path).resolve()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug(f"write_plan: writing to {output_path}")
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(plan, f, indent=2, sort_keys=True)


if __name__ == "__main__":
    main()
