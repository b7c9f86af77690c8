from __future__ import annotations

from packing_optimizer.models import Dimensions
from packing_optimizer.packing.chain import pack_chain, upright_count, weight_capped

ITEM = Dimensions(length=10, width=10, height=10)
CARTON = Dimensions(length=30, width=30, height=30)
PALLET = Dimensions(length=120, width=100, height=150)


def test_pallets_in_standard_containers() -> None:
    """120x100x150 pallet: 4*2*1 in a 20ft, 10*2*1 in a 40ft."""
    result = pack_chain(ITEM, CARTON, PALLET, 1, 100, 1000)

    assert result.max_pallets_in_20ft == 8
    assert result.max_pallets_in_40ft == 20


def test_full_chain() -> None:
    """27 items per carton; 60 cartons fit but 1000 / 27 caps the pallet at 37."""
    result = pack_chain(ITEM, CARTON, PALLET, 1, 100, 1000)

    assert result.max_items_in_carton == 27
    assert result.max_packs_in_pallet == 37


def test_carton_tare_weight_counts_toward_pallet_limit() -> None:
    result = pack_chain(ITEM, CARTON, PALLET, 1, 100, 1000, carton_tare_weight=3)

    assert result.max_items_in_carton == 27
    assert result.max_packs_in_pallet == 33


def test_carton_max_weight_is_not_tare() -> None:
    """Raising the carton limit does not make loaded cartons heavier."""
    light = pack_chain(ITEM, CARTON, PALLET, 1, 100, 1000)
    heavy_limit = pack_chain(ITEM, CARTON, PALLET, 1, 5000, 1000)

    assert light.max_packs_in_pallet == heavy_limit.max_packs_in_pallet


def test_weightless_items_leave_pallet_geometric() -> None:
    result = pack_chain(ITEM, CARTON, PALLET, 0, 100, 1000)

    assert result.max_packs_in_pallet == 60


def test_carton_weight_limit_limits_items() -> None:
    result = pack_chain(ITEM, CARTON, PALLET, 1, 20, 1000)

    # 27 exceeds 20 in every orientation of a cube
    assert result.max_items_in_carton == 0
    assert result.max_packs_in_pallet == 60


def test_container_stage_ignores_weight() -> None:
    light = pack_chain(ITEM, CARTON, PALLET, 1, 100, 1000)
    heavy = pack_chain(ITEM, CARTON, PALLET, 1000, 1_000_000, 1)

    assert light.max_pallets_in_20ft == heavy.max_pallets_in_20ft == 8


def test_degenerate_dimensions() -> None:
    zero = Dimensions()
    result = pack_chain(zero, zero, zero, 1, 100, 1000)

    assert result.max_items_in_carton == 0
    assert result.max_packs_in_pallet == 0
    assert result.max_pallets_in_20ft == 0
    assert result.max_pallets_in_40ft == 0


def test_upright_count_does_not_rotate() -> None:
    # 60 long only fits rotated, which upright_count never does
    assert upright_count(Dimensions(length=60, width=10, height=10), Dimensions(length=20, width=60, height=10)) == 0


def test_weight_capped() -> None:
    assert weight_capped(60, 27, 1000) == 37
    assert weight_capped(10, 27, 1000) == 10
    assert weight_capped(60, 0, 1000) == 60
    assert weight_capped(60, 27, -5) == 0
