"""Tests for the greedy and CP-SAT combination selectors."""

from __future__ import annotations

import math

import pytest

from packing_optimizer.combination import (
    combination_summary,
    select_combination,
    select_combination_exact,
)
from packing_optimizer.models import Dimensions, Product


def quantities(results) -> dict[str, int]:
    return {r.product.name: r.quantity for r in results}


def test_small_product_fills_budget() -> None:
    """A is seeded and refilled; B (volume 100) never fits the 15 left after A."""
    a = Product(name="A", volume=10, unit_weight=1)
    b = Product(name="B", volume=100, unit_weight=1)

    results = select_combination([a, b], 25, 5)

    assert quantities(results) == {"A": 2}
    assert results[0].total_volume == 20
    assert results[0].total_weight == 2


def test_round_robin_fill() -> None:
    """Each sweep adds at most one unit per product, in efficiency order."""
    a = Product(name="A", volume=10, unit_weight=1)
    b = Product(name="B", volume=20, unit_weight=2)

    results = select_combination([b, a], 100, 100)

    assert [r.product.name for r in results] == ["A", "B"]
    assert quantities(results) == {"A": 4, "B": 3}
    assert sum(r.total_volume for r in results) == 100


def test_weight_bound() -> None:
    heavy = Product(name="H", volume=1, unit_weight=3)

    assert quantities(select_combination([heavy], 100, 10)) == {"H": 3}


def test_seed_exclusion_is_kept() -> None:
    """B does not fit after A is seeded and is never reconsidered."""
    a = Product(name="A", volume=6, unit_weight=1)
    b = Product(name="B", volume=10, unit_weight=1)

    assert quantities(select_combination([a, b], 15, 10)) == {"A": 2}


def test_does_not_mutate_input() -> None:
    products = [Product(name="B", volume=100, unit_weight=1), Product(name="A", volume=10, unit_weight=1)]
    snapshot = list(products)

    select_combination(products, 25, 5)

    assert products == snapshot


def test_deterministic() -> None:
    products = [
        Product(name="A", volume=7, unit_weight=2),
        Product(name="B", volume=3, unit_weight=5),
        Product(name="C", volume=11, unit_weight=1),
    ]

    assert select_combination(products, 100, 40) == select_combination(products, 100, 40)


def test_nothing_fits() -> None:
    assert select_combination([Product(name="A", volume=10, unit_weight=1)], 5, 5) == []
    assert select_combination([], 100, 100) == []


def test_weightless_volumeless_product_terminates() -> None:
    ghost = Product(name="Z", volume=0, unit_weight=0)
    a = Product(name="A", volume=10, unit_weight=1)

    results = select_combination([a, ghost], 25, 5)

    assert math.isinf(ghost.efficiency)
    assert quantities(results) == {"Z": 1, "A": 2}
    assert results[0].product.name == "Z"


def test_efficiency() -> None:
    assert Product(name="A", volume=10, unit_weight=2).efficiency == pytest.approx(0.05)


def test_product_from_dimensions() -> None:
    product = Product.from_dimensions("A", Dimensions(length=2, width=3, height=4), 1.5)

    assert product.volume == 24
    assert product.length == 2


def test_exact_beats_greedy() -> None:
    """Greedy takes A + B (16); the exact solver finds 2 x B (20)."""
    a = Product(name="A", volume=6, unit_weight=1)
    b = Product(name="B", volume=10, unit_weight=1)

    assert quantities(select_combination([a, b], 20, 10)) == {"A": 1, "B": 1}
    assert quantities(select_combination_exact([a, b], 20, 10)) == {"B": 2}


def test_exact_respects_weight() -> None:
    heavy = Product(name="H", volume=1, unit_weight=3)

    results = select_combination_exact([heavy], 100, 10)

    assert quantities(results) == {"H": 3}
    assert results[0].total_weight == 9


def test_exact_small_example() -> None:
    a = Product(name="A", volume=10, unit_weight=1)
    b = Product(name="B", volume=100, unit_weight=1)

    assert quantities(select_combination_exact([a, b], 25, 5)) == {"A": 2}


def test_exact_empty() -> None:
    assert select_combination_exact([], 100, 100) == []


def test_combination_summary() -> None:
    a = Product(name="A", volume=10, unit_weight=1)
    results = select_combination([a], 25, 5)

    summary = combination_summary(results, 25, 5)

    assert summary["total_units"] == 2
    assert summary["used_volume"] == 20
    assert summary["remaining_weight"] == 3
    assert summary["space_utilization"] == pytest.approx(80.0)
    assert summary["weight_utilization"] == pytest.approx(40.0)
