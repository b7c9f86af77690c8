"""FastAPI endpoints for the packing optimizer."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

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

settings = get_settings()
configure_logging(settings)

PACKING_TYPES = ("carton", "pallet", "container")

# Spreadsheet header aliases for /api/process-products rows
ROW_FIELDS: dict[str, tuple[str, ...]] = {
    "unit_dimensions": ("unit_dimensions", "tileDimensions", "tile_dimensions", "Tile dimensions"),
    "carton_dimensions": (
        "carton_dimensions",
        "masterCartonDimensions",
        "master_carton_dimensions",
        "Master carton dimensions",
    ),
    "pallet_dimensions": ("pallet_dimensions", "palletDimensions", "pallet dimensions", "Pallet dimensions"),
    "unit_weight": ("unit_weight", "tileWeight", "tile_weight", "tile weight", "Tile weight"),
    "carton_max_weight": (
        "carton_max_weight",
        "masterCartonWeight",
        "master_carton_weight",
        "master carton weight",
        "Master carton weight",
    ),
    "pallet_max_weight": ("pallet_max_weight", "palletWeight", "pallet_weight", "pallet weight", "Pallet weight"),
    "carton_tare_weight": ("carton_tare_weight", "cartonTareWeight"),
}

app = FastAPI(
    title="Packing Optimizer API",
    description="Unit, carton, pallet and container packing calculations",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


def to_dimensions(value: Any) -> Optional[Dimensions]:
    """
    Dimensions from a {length, width, height} dict or "LxWxH" text.

    Returns None when the value is missing or any extent is not positive.
    """
    if value is None:
        return None
    if isinstance(value, str):
        dims = parse_dimensions(value)
    elif isinstance(value, dict):
        if not all(k in value for k in ("length", "width", "height")):
            return None
        dims = Dimensions(
            length=parse_weight(value["length"]),
            width=parse_weight(value["width"]),
            height=parse_weight(value["height"]),
        )
    else:
        return None
    if min(dims.as_tuple()) <= 0:
        return None
    return dims


def require_dimensions(request: dict[str, Any], *keys: str) -> list[Dimensions]:
    dims = [to_dimensions(request.get(k)) for k in keys]
    if any(d is None for d in dims):
        raise HTTPException(status_code=400, detail="Missing required dimensions")
    return dims


def require_positive(request: dict[str, Any], *keys: str) -> list[float]:
    values = [parse_weight(request.get(k)) for k in keys]
    if any(v <= 0 for v in values):
        raise HTTPException(status_code=400, detail=f"Weight limits must be positive: {', '.join(keys)}")
    return values


def row_value(row: dict[str, Any], field: str) -> Any:
    """First non-empty value among the field's aliases."""
    for key in ROW_FIELDS[field]:
        if row.get(key) not in (None, ""):
            return row[key]
    return None


def to_product(raw: Any) -> Product:
    """Build a Product from a request entry; raises ValueError for unusable entries."""
    if not isinstance(raw, dict):
        raise ValueError("product must be an object")
    name = raw.get("name", raw.get("product_name"))
    if not name:
        raise ValueError("product name is required")
    unit_weight = parse_weight(raw.get("unit_weight"))
    dims = to_dimensions(raw) or to_dimensions(raw.get("dimensions"))
    if dims is not None:
        product = Product.from_dimensions(str(name), dims, unit_weight)
    else:
        product = Product(name=str(name), unit_weight=unit_weight, volume=parse_weight(raw.get("volume")))
    # Zero volume or weight would give infinite efficiency
    if product.volume <= 0 or product.unit_weight <= 0:
        raise ValueError(f"product '{name}' needs positive volume and unit_weight")
    return product


@app.get("/api/health")
async def health() -> dict[str, Any]:
    """Health check endpoint."""
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


@app.post("/api/calculate-packing")
async def calculate_packing(request: dict[str, Any]) -> dict[str, Any]:
    """
    Pack identical units into one carton, pallet or container.

    Input (request body):
        {
            "packing_type": "carton",
            "unit_dimensions": {"length": 10, "width": 10, "height": 10},
            "unit_weight": 1,
            "container_dimensions": {"length": 100, "width": 100, "height": 100},
            "container_max_weight": 10000
        }
    """
    try:
        unit_dims, container_dims = require_dimensions(request, "unit_dimensions", "container_dimensions")

        packing_type = request.get("packing_type")
        if packing_type not in PACKING_TYPES:
            raise HTTPException(status_code=400, detail="Invalid packing type")

        (container_max_weight,) = require_positive(request, "container_max_weight")
        unit_weight = parse_weight(request.get("unit_weight"))

        result = pack(unit_dims, unit_weight, container_dims, container_max_weight)

        logger.info(
            f"calculate-packing type={packing_type} max_units={result.max_units} "
            f"space={result.space_utilization:.1f}% weight={result.weight_utilization:.1f}%"
        )
        return result.model_dump(mode="json")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /api/calculate-packing: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)[:300])


@app.post("/api/calculate-chain")
async def calculate_chain(request: dict[str, Any]) -> dict[str, Any]:
    """Capacities of the unit -> carton -> pallet -> 20ft/40ft chain."""
    try:
        item_dims, carton_dims, pallet_dims = require_dimensions(
            request, "item_dimensions", "carton_dimensions", "pallet_dimensions"
        )
        carton_max_weight, pallet_max_weight = require_positive(
            request, "carton_max_weight", "pallet_max_weight"
        )

        result = pack_chain(
            item_dims,
            carton_dims,
            pallet_dims,
            parse_weight(request.get("item_weight")),
            carton_max_weight,
            pallet_max_weight,
            carton_tare_weight=parse_weight(request.get("carton_tare_weight")),
        )
        logger.info(f"calculate-chain {result.model_dump()}")
        return result.model_dump()

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /api/calculate-chain: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)[:300])


@app.post("/api/process-products")
async def process_products(request: dict[str, Any]) -> list[dict[str, Any]]:
    """
    Run the chain calculation for imported product rows.

    Input (request body):
        {
            "category": "tiles",
            "data": [
                {"Product name": "A", "Tile dimensions": "60x60x1", "tile weight": 2,
                 "Master carton dimensions": "61x61x10", "master carton weight": 25,
                 "pallet dimensions": "120x100x150", "pallet weight": 1000}
            ]
        }

    Rows come back unchanged plus the four chain capacities. Dimension text
    that cannot be read counts as zero, so that row's capacities are zero.
    """
    data = request.get("data")
    if not isinstance(data, list):
        raise HTTPException(status_code=400, detail="Invalid data format")

    try:
        processed = []
        for row in data:
            if not isinstance(row, dict):
                raise HTTPException(status_code=400, detail="Invalid data format")
            result = pack_chain(
                parse_dimensions(row_value(row, "unit_dimensions")),
                parse_dimensions(row_value(row, "carton_dimensions")),
                parse_dimensions(row_value(row, "pallet_dimensions")),
                parse_weight(row_value(row, "unit_weight")),
                parse_weight(row_value(row, "carton_max_weight")),
                parse_weight(row_value(row, "pallet_max_weight")),
                carton_tare_weight=parse_weight(row_value(row, "carton_tare_weight")),
            )
            processed.append({**row, **result.model_dump()})

        logger.info(f"process-products category={request.get('category')} rows={len(processed)}")
        return processed

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /api/process-products: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)[:300])


@app.post("/api/pack-pallet")
async def pack_pallet(request: dict[str, Any]) -> dict[str, Any]:
    """Upright cartons on one pallet, layer by layer."""
    try:
        carton_dims, pallet_dims = require_dimensions(request, "carton_dimensions", "pallet_dimensions")
        (pallet_max_weight,) = require_positive(request, "pallet_max_weight")

        result = pack_cartons_on_pallet(
            carton_dims,
            parse_weight(request.get("carton_weight")),
            pallet_dims,
            pallet_max_weight,
        )
        logger.info(f"pack-pallet max_units={result.max_units} layers={result.layers}")
        return result.model_dump(mode="json")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /api/pack-pallet: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)[:300])


@app.post("/api/pack-container")
async def pack_container(request: dict[str, Any]) -> dict[str, Any]:
    """Upright pallets in a standard 20ft or 40ft container."""
    try:
        (pallet_dims,) = require_dimensions(request, "pallet_dimensions")
        try:
            result = pack_pallets_in_container(
                pallet_dims,
                parse_weight(request.get("pallet_weight")),
                str(request.get("container_type", "20ft")),
            )
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))

        logger.info(f"pack-container max_units={result.max_units} arrangement={result.arrangement.model_dump()}")
        return result.model_dump(mode="json")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /api/pack-container: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)[:300])


@app.post("/api/optimal-combination")
async def optimal_combination(request: dict[str, Any]) -> dict[str, Any]:
    """
    Choose quantities of several products for one master carton.

    Input (request body):
        {
            "products": [{"name": "A", "length": 10, "width": 5, "height": 2, "unit_weight": 0.5}],
            "master_carton_dims": {"length": 60, "width": 40, "height": 40},
            "max_weight": 25,
            "solver": "greedy"
        }

    Returns:
        {"combination": [...], "summary": {...}, "solver": "greedy"}
    """
    products_raw = request.get("products")
    carton_dims = to_dimensions(request.get("master_carton_dims"))
    max_weight = parse_weight(request.get("max_weight"))
    if not isinstance(products_raw, list) or carton_dims is None or max_weight <= 0:
        raise HTTPException(status_code=400, detail="Invalid input data")

    solver = str(request.get("solver") or settings.combination_solver).lower()
    if solver not in SOLVERS:
        raise HTTPException(status_code=400, detail=f"Unknown solver '{solver}'. Valid: {list(SOLVERS)}")

    try:
        try:
            products = [to_product(p) for p in products_raw]
        except (ValueError, ValidationError) as e:
            raise HTTPException(status_code=400, detail=f"Invalid input data: {e}")

        container_volume = carton_dims.volume
        if solver == "cp-sat":
            results = select_combination_exact(
                products, container_volume, max_weight, time_limit_sec=settings.solver_time_limit
            )
        else:
            results = select_combination(products, container_volume, max_weight)

        summary = combination_summary(results, container_volume, max_weight)
        logger.info(
            f"optimal-combination solver={solver} units={summary['total_units']} "
            f"space={summary['space_utilization']:.1f}%"
        )
        return {
            "combination": [r.model_dump(mode="json") for r in results],
            "summary": summary,
            "solver": solver,
        }

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"ERROR in /api/optimal-combination: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)[:300])
