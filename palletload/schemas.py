from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from palletload.model.entities import PalletStandard, RotationMode


def to_camel(string: str) -> str:
    """Helper function to convert snake_case to camelCase"""
    parts = string.split("_")
    return parts[0] + "".join(word.capitalize() for word in parts[1:])


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ----Request-----
class BoxTypeInput(CamelModel):
    id: str
    length: float = Field(gt=0)
    width: float = Field(gt=0)
    height: float = Field(gt=0)
    weight: float
    # zero or negative quantities are simply nothing to place
    quantity: int
    can_rotate: RotationMode = RotationMode.layered
    color: Optional[str] = None


class PalletLoadRequest(CamelModel):
    pallet_standard: PalletStandard = PalletStandard.eur
    custom_length: Optional[float] = None
    custom_width: Optional[float] = None
    # 0 or missing falls back to the defaults
    max_stack_height: Optional[float] = None
    max_payload: Optional[float] = None
    boxes: list[BoxTypeInput] = Field(default_factory=list)


# ----Response-----
class Position(BaseModel):
    x: float
    y: float
    z: float


class Dimensions(BaseModel):
    l: float
    w: float
    h: float


class PlacedBoxResponse(CamelModel):
    box_type_id: str
    position: Position
    dimensions: Dimensions
    rotation_id: int
    color: str
    weight: float


class UnplacedResponse(CamelModel):
    box_type_id: str
    count: int


class UtilizationResponse(CamelModel):
    volume_percent: float = 0.0
    weight_percent: float = 0.0
    floor_percent: float = 0.0


class CenterOfGravityResponse(CamelModel):
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    is_balanced: bool = True


class MetricsResponse(CamelModel):
    total_weight: float = 0.0
    total_boxes: int = 0
    total_layers: int = 0
    max_height: float = 0.0
    wasted_volume: float = 0.0


class PalletDimensions(CamelModel):
    length: float = 0.0
    width: float = 0.0
    height: float = 0.0


class PalletLoadResult(CamelModel):
    placed: list[PlacedBoxResponse] = Field(default_factory=list)
    unplaced: list[UnplacedResponse] = Field(default_factory=list)
    utilization: UtilizationResponse = Field(default_factory=UtilizationResponse)
    center_of_gravity: CenterOfGravityResponse = Field(default_factory=CenterOfGravityResponse)
    metrics: MetricsResponse = Field(default_factory=MetricsResponse)
    pallet_dimensions: PalletDimensions = Field(default_factory=PalletDimensions)
    warnings: list[str] = Field(default_factory=list)
