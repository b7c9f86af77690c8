import pytest

from packing_optimizer.models import Dimensions
from packing_optimizer.units import parse_dimensions, parse_float, parse_weight


def test_parse_dimensions_compact():
    assert parse_dimensions("10x20x30") == Dimensions(length=10, width=20, height=30)


def test_parse_dimensions_with_spaces_and_unit():
    assert parse_dimensions("60 x 40 x 1.2 cm") == Dimensions(length=60, width=40, height=1.2)


def test_parse_dimensions_uses_first_three_numbers():
    assert parse_dimensions("10*20*30*40") == Dimensions(length=10, width=20, height=30)


@pytest.mark.parametrize("text", [None, "", "abc", "10x20"])
def test_parse_dimensions_unreadable_is_zero(text):
    assert parse_dimensions(text) == Dimensions()


def test_parse_float_accepts_comma():
    assert parse_float("12,5") == 12.5


def test_parse_float_rejects_empty():
    with pytest.raises(ValueError):
        parse_float("")


def test_parse_weight():
    assert parse_weight(3) == 3.0
    assert parse_weight(" 2,5 ") == 2.5
    assert parse_weight("heavy") == 0.0
    assert parse_weight(None) == 0.0
    assert parse_weight(True) == 0.0


def test_parse_weight_with_unit_suffix():
    assert parse_weight("2 kg") == 2.0
    assert parse_weight("2,5kg") == 2.5
    assert parse_weight("approx. 12.5 kg net") == 12.5
    assert parse_weight("kg") == 0.0
