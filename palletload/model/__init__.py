"""
Packing model: entities, geometry kernels and the packers built on them.

- entities: constant tables, box types, orientations, placed boxes
- geometry: numba collision / support / candidate kernels
- blf_packer: BottomLeftFill position search
- pallet_packer: PalletPacker, the First-Fit-Decreasing driver
- metrics: utilization, layering and center of gravity
"""

from __future__ import annotations

from .entities import (
    PALLET_SPECS,
    BoxType,
    Orientation,
    Pallet,
    PalletSpec,
    PalletStandard,
    PlacedBox,
    RotationMode,
    get_orientations,
    get_pallet_spec,
)
from .geometry import (
    check_collision,
    check_collision_numba,
    generate_candidate_positions,
    placed_boxes_to_array,
    support_ratio,
    support_ratio_numba,
)
from .blf_packer import BottomLeftFill
from .pallet_packer import PackingOutcome, PalletPacker, UnplacedCount
from .metrics import (
    CenterOfGravity,
    LoadMetrics,
    Utilization,
    compute_center_of_gravity,
    compute_load_metrics,
    compute_utilization,
)

__all__ = [
    # Entities
    "PALLET_SPECS",
    "BoxType",
    "Orientation",
    "Pallet",
    "PalletSpec",
    "PalletStandard",
    "PlacedBox",
    "RotationMode",
    "get_orientations",
    "get_pallet_spec",
    # Geometry
    "check_collision",
    "check_collision_numba",
    "generate_candidate_positions",
    "placed_boxes_to_array",
    "support_ratio",
    "support_ratio_numba",
    # Packers
    "BottomLeftFill",
    "PalletPacker",
    "PackingOutcome",
    "UnplacedCount",
    # Metrics
    "CenterOfGravity",
    "LoadMetrics",
    "Utilization",
    "compute_center_of_gravity",
    "compute_load_metrics",
    "compute_utilization",
]
