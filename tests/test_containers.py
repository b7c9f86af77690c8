from __future__ import annotations

import pytest

from packing_optimizer.containers import CONTAINER_SPECS, ContainerType, get_container_spec
from packing_optimizer.models import Dimensions


def test_archetype_dimensions() -> None:
    assert CONTAINER_SPECS[ContainerType.FT20].internal == Dimensions(length=589, width=235, height=239)
    assert CONTAINER_SPECS[ContainerType.FT40].internal == Dimensions(length=1203, width=235, height=239)
    assert CONTAINER_SPECS[ContainerType.FT20].max_weight == 28200
    assert CONTAINER_SPECS[ContainerType.FT40].max_weight == 26700


@pytest.mark.parametrize("name", ["20ft", "20", " 20FT ", ContainerType.FT20])
def test_get_container_spec_accepts_aliases(name) -> None:
    assert get_container_spec(name).name == "20ft"


def test_get_container_spec_unknown() -> None:
    with pytest.raises(ValueError, match="Unknown container type"):
        get_container_spec("45ft")
