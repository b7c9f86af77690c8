from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Dimensions(BaseModel):
    """Length, width and height in any consistent linear unit."""

    model_config = ConfigDict(frozen=True)

    length: float = Field(default=0.0, description="Extent along the container length axis")
    width: float = Field(default=0.0, description="Extent along the container width axis")
    height: float = Field(default=0.0, description="Vertical extent")

    @property
    def volume(self) -> float:
        return float(self.length) * float(self.width) * float(self.height)

    def as_tuple(self) -> tuple[float, float, float]:
        return float(self.length), float(self.width), float(self.height)


class Rotation(BaseModel):
    """Rotation of a placed unit in degrees (multiples of 90). Rendering only."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    z: int = 0


class Orientation(BaseModel):
    """Item dims as laid onto the container's (length, width, height) axes."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0, le=5, description="Position in the orientation table")
    length: float
    width: float
    height: float
    rotation: Rotation


class Grid(BaseModel):
    """Per-axis unit counts: nx along length, ny vertical, nz along width."""

    nx: int = Field(ge=0)
    ny: int = Field(ge=0)
    nz: int = Field(ge=0)

    @property
    def total(self) -> int:
        return self.nx * self.ny * self.nz


class Position(BaseModel):
    """Corner offset of one placed unit; y is the vertical axis."""

    x: float
    y: float
    z: float
    rotation: Rotation = Field(default_factory=Rotation)


class PackingResult(BaseModel):
    """Result of packing identical units into one container."""

    max_units: int = Field(default=0, ge=0)
    total_weight: float = 0.0
    space_utilization: float = 0.0
    weight_utilization: float = 0.0
    positions: list[Position] = Field(default_factory=list)
    orientation: Optional[Orientation] = None
    grid: Optional[Grid] = None


class Arrangement(BaseModel):
    rows: int = 0
    columns: int = 0
    layers: int = 0


class StackingResult(PackingResult):
    """Fixed-orientation packing result with layer information."""

    layers: int = 0
    arrangement: Arrangement = Field(default_factory=Arrangement)


class ChainResult(BaseModel):
    """Capacities of every stage of the unit -> carton -> pallet -> container chain."""

    max_items_in_carton: int = Field(default=0, ge=0)
    max_packs_in_pallet: int = Field(default=0, ge=0)
    max_pallets_in_20ft: int = Field(default=0, ge=0)
    max_pallets_in_40ft: int = Field(default=0, ge=0)


class Product(BaseModel):
    """One product type offered to the combination selector."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Product name")
    unit_weight: float = Field(description="Weight of one unit")
    volume: float = Field(description="Volume of one unit")
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None

    @classmethod
    def from_dimensions(cls, name: str, dims: Dimensions, unit_weight: float) -> "Product":
        return cls(
            name=name,
            unit_weight=unit_weight,
            volume=dims.volume,
            length=dims.length,
            width=dims.width,
            height=dims.height,
        )

    @computed_field
    @property
    def efficiency(self) -> float:
        footprint = float(self.volume) * float(self.unit_weight)
        return math.inf if footprint == 0 else 1.0 / footprint


class CombinationResult(BaseModel):
    product: Product
    quantity: int = Field(ge=1)
    total_weight: float
    total_volume: float


class ContainerSpec(BaseModel):
    """A named standard shipping container."""

    model_config = ConfigDict(frozen=True)

    name: str
    internal: Dimensions
    max_weight: float = Field(gt=0, description="Maximum payload in kg")
