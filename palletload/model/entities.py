from __future__ import annotations

import enum
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import List, Optional, Tuple


class RotationMode(str, enum.Enum):
    fixed = "fixed"
    layered = "layered"
    full = "full"


class PalletStandard(str, enum.Enum):
    eur = "eur"
    us = "us"
    cn = "cn"
    jp = "jp"
    custom = "custom"


@dataclass(frozen=True)
class PalletSpec:
    name: str
    length: float
    width: float


PALLET_SPECS = MappingProxyType(
    {
        PalletStandard.eur: PalletSpec("EUR/EPAL (European)", 1200.0, 800.0),
        PalletStandard.us: PalletSpec("GMA (North American)", 1219.0, 1016.0),  # 48 x 40 in
        PalletStandard.cn: PalletSpec("CN (Chinese Standard)", 1100.0, 1100.0),
        PalletStandard.jp: PalletSpec("JIS (Japanese Standard)", 1100.0, 1100.0),
    }
)

CUSTOM_PALLET_NAME = "Custom"
DEFAULT_CUSTOM_LENGTH = 1200.0  # mm
DEFAULT_CUSTOM_WIDTH = 800.0  # mm

DEFAULT_MAX_STACK_HEIGHT = 1500.0  # mm
DEFAULT_MAX_PAYLOAD = 1200.0  # kg

MIN_SUPPORT_RATIO = 0.8
COLLISION_TOLERANCE = 0.1  # mm
SUPPORT_TOLERANCE = 1.0  # mm

MAX_BOX_TYPES = 5
NEAR_CAPACITY_RATIO = 0.9
BALANCE_TOLERANCE_RATIO = 0.25

DEFAULT_BOX_COLORS = (
    "#3b82f6",  # blue
    "#10b981",  # green
    "#f59e0b",  # amber
    "#ef4444",  # red
    "#8b5cf6",  # violet
)

# Axis permutations of (l, w, h); the index is the rotation id.
ROTATION_PATTERNS = ((0, 1, 2), (0, 2, 1), (1, 0, 2), (1, 2, 0), (2, 0, 1), (2, 1, 0))


def getRotDim(
    length: float, width: float, height: float, rotation: int
) -> Tuple[float, float, float]:
    dimensions = length, width, height
    pattern = (
        ROTATION_PATTERNS[rotation]
        if 0 <= rotation < len(ROTATION_PATTERNS)
        else (0, 1, 2)
    )
    return dimensions[pattern[0]], dimensions[pattern[1]], dimensions[pattern[2]]


def get_pallet_spec(
    standard: PalletStandard | str,
    custom_length: Optional[float] = None,
    custom_width: Optional[float] = None,
) -> PalletSpec:
    """Resolve the pallet footprint for a named standard or custom dimensions."""
    standard = PalletStandard(standard)
    if standard == PalletStandard.custom:
        return PalletSpec(
            name=CUSTOM_PALLET_NAME,
            length=custom_length if custom_length is not None else DEFAULT_CUSTOM_LENGTH,
            width=custom_width if custom_width is not None else DEFAULT_CUSTOM_WIDTH,
        )
    return PALLET_SPECS[standard]


@dataclass(frozen=True)
class BoxType:
    id: str
    length: float
    width: float
    height: float
    weight: float
    quantity: int
    rotation: RotationMode = RotationMode.layered
    color: Optional[str] = None

    @property
    def volume(self) -> float:
        return self.length * self.width * self.height


@dataclass(frozen=True)
class Orientation:
    l: float
    w: float
    h: float
    rotation_id: int

    @property
    def dims(self) -> Tuple[float, float, float]:
        return (self.l, self.w, self.h)


@lru_cache(maxsize=256)
def _orientations_cached(
    length: float, width: float, height: float, rotation: RotationMode
) -> Tuple[Orientation, ...]:
    if rotation == RotationMode.fixed:
        return (Orientation(length, width, height, 0),)

    if rotation == RotationMode.layered:
        # height stays vertical, only the footprint turns
        if length != width:
            return (
                Orientation(length, width, height, 0),
                Orientation(width, length, height, 1),
            )
        return (Orientation(length, width, height, 0),)

    seen = set()
    orientations: List[Orientation] = []
    for rid in range(len(ROTATION_PATTERNS)):
        dims = getRotDim(length, width, height, rid)
        if dims in seen:
            continue
        seen.add(dims)
        orientations.append(Orientation(*dims, rotation_id=rid))
    return tuple(orientations)


def get_orientations(box: BoxType) -> List[Orientation]:
    """Return the distinct orientations allowed by the box's rotation mode.

    The order is part of the packing contract: the first orientation that
    finds a position wins.
    """
    return list(
        _orientations_cached(box.length, box.width, box.height, RotationMode(box.rotation))
    )


@dataclass(frozen=True)
class Pallet:
    name: str
    length: float
    width: float
    max_height: float = DEFAULT_MAX_STACK_HEIGHT
    max_payload: float = DEFAULT_MAX_PAYLOAD

    @property
    def floor_area(self) -> float:
        return self.length * self.width

    @property
    def volume(self) -> float:
        return self.length * self.width * self.max_height

    @property
    def bounds(self) -> Tuple[float, float, float]:
        return (self.length, self.width, self.max_height)


@dataclass(frozen=True)
class PlacedBox:
    box_type_id: str
    x: float
    y: float
    z: float
    l: float
    w: float
    h: float
    rotation_id: int
    weight: float
    color: str

    @property
    def position(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.z)

    @property
    def dims(self) -> Tuple[float, float, float]:
        return (self.l, self.w, self.h)

    @property
    def top(self) -> float:
        return self.z + self.h

    @property
    def volume(self) -> float:
        return self.l * self.w * self.h

    @property
    def footprint_area(self) -> float:
        return self.l * self.w

    @property
    def center(self) -> Tuple[float, float, float]:
        return (self.x + self.l / 2, self.y + self.w / 2, self.z + self.h / 2)

    @property
    def bounds(self) -> Tuple[float, float, float, float, float, float]:
        return (
            self.x,
            self.y,
            self.z,
            self.x + self.l,
            self.y + self.w,
            self.z + self.h,
        )


@dataclass
class BoxCandidate:
    """A box type together with the quantity still waiting to be placed."""

    box_type: BoxType
    remaining: int = field(init=False)

    def __post_init__(self) -> None:
        self.remaining = self.box_type.quantity


def default_color(index: int) -> str:
    return DEFAULT_BOX_COLORS[index % len(DEFAULT_BOX_COLORS)]
