"""Utilization, layering and load-balance figures for a finished placement."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .entities import BALANCE_TOLERANCE_RATIO, Pallet, PlacedBox


@dataclass(frozen=True)
class Utilization:
    volume_percent: float
    weight_percent: float
    floor_percent: float


@dataclass(frozen=True)
class CenterOfGravity:
    x: float
    y: float
    z: float
    is_balanced: bool


@dataclass(frozen=True)
class LoadMetrics:
    total_weight: float
    total_boxes: int
    total_layers: int
    max_height: float
    wasted_volume: float


def _percent(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


def floor_coverage(placed: Sequence[PlacedBox]) -> float:
    """Summed footprint of the boxes standing on the pallet floor.

    Footprints are added per box, overlapping ground boxes are counted twice.
    """
    return sum(box.footprint_area for box in placed if box.z == 0)


def compute_utilization(placed: Sequence[PlacedBox], pallet: Pallet) -> Utilization:
    placed_volume = sum(box.volume for box in placed)
    placed_weight = sum(box.weight for box in placed)
    return Utilization(
        volume_percent=_percent(placed_volume, pallet.volume),
        weight_percent=_percent(placed_weight, pallet.max_payload),
        floor_percent=_percent(floor_coverage(placed), pallet.floor_area),
    )


def compute_load_metrics(
    placed: Sequence[PlacedBox], pallet: Pallet, total_weight: float | None = None
) -> LoadMetrics:
    if total_weight is None:
        total_weight = sum(box.weight for box in placed)
    placed_volume = sum(box.volume for box in placed)
    return LoadMetrics(
        total_weight=total_weight,
        total_boxes=len(placed),
        total_layers=len({box.z for box in placed}),
        max_height=max((box.top for box in placed), default=0.0),
        wasted_volume=pallet.volume - placed_volume,
    )


def compute_center_of_gravity(placed: Sequence[PlacedBox], pallet: Pallet) -> CenterOfGravity:
    """Mass-weighted centroid of the load and whether it sits in the central half."""
    if not placed:
        return CenterOfGravity(
            x=pallet.length / 2, y=pallet.width / 2, z=0.0, is_balanced=True
        )

    weighted_x = 0.0
    weighted_y = 0.0
    weighted_z = 0.0
    total_weight = 0.0
    for box in placed:
        cx, cy, cz = box.center
        weighted_x += cx * box.weight
        weighted_y += cy * box.weight
        weighted_z += cz * box.weight
        total_weight += box.weight

    if total_weight <= 0:
        # Fall back to the arithmetic mean if weights are missing
        count = len(placed)
        cg_x = sum(box.center[0] for box in placed) / count
        cg_y = sum(box.center[1] for box in placed) / count
        cg_z = sum(box.center[2] for box in placed) / count
    else:
        cg_x = weighted_x / total_weight
        cg_y = weighted_y / total_weight
        cg_z = weighted_z / total_weight

    is_balanced = (
        abs(cg_x - pallet.length / 2) <= pallet.length * BALANCE_TOLERANCE_RATIO
        and abs(cg_y - pallet.width / 2) <= pallet.width * BALANCE_TOLERANCE_RATIO
    )
    return CenterOfGravity(x=cg_x, y=cg_y, z=cg_z, is_balanced=is_balanced)
