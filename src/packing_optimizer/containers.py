# src/packing_optimizer/containers.py
from __future__ import annotations

from enum import Enum

from packing_optimizer.models import ContainerSpec, Dimensions


class ContainerType(str, Enum):
    FT20 = "20ft"
    FT40 = "40ft"


# Internal usable dims (cm) and max payload (kg).
CONTAINER_SPECS: dict[ContainerType, ContainerSpec] = {
    ContainerType.FT20: ContainerSpec(
        name="20ft",
        internal=Dimensions(length=589, width=235, height=239),
        max_weight=28200,
    ),
    ContainerType.FT40: ContainerSpec(
        name="40ft",
        internal=Dimensions(length=1203, width=235, height=239),
        max_weight=26700,
    ),
}


def get_container_spec(preset: str | ContainerType) -> ContainerSpec:
    if isinstance(preset, ContainerType):
        return CONTAINER_SPECS[preset]
    key = str(preset).strip().lower()
    if key and not key.endswith("ft"):
        key = f"{key}ft"
    for container_type, spec in CONTAINER_SPECS.items():
        if container_type.value == key:
            return spec
    valid = sorted(t.value for t in CONTAINER_SPECS)
    raise ValueError(f"Unknown container type '{preset}'. Valid: {valid}")
