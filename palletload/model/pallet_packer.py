from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from palletload import config
from palletload.logger import logger

from .entities import (
    BoxCandidate,
    BoxType,
    Pallet,
    PlacedBox,
    get_orientations,
)
from .geometry import placed_boxes_to_array
from .blf_packer import BottomLeftFill


STOP_EXHAUSTED = "exhausted"
STOP_PLACEMENT_BUDGET = "placement_budget"
STOP_TIME_BUDGET = "time_budget"


@dataclass
class UnplacedCount:
    box_type_id: str
    count: int


@dataclass
class PackingOutcome:
    placed: List[PlacedBox] = field(default_factory=list)
    unplaced: List[UnplacedCount] = field(default_factory=list)
    total_weight: float = 0.0
    stop_reason: str = STOP_EXHAUSTED

    @property
    def unplaced_total(self) -> int:
        return sum(entry.count for entry in self.unplaced)


class PalletPacker:
    """First-Fit-Decreasing driver around the Bottom-Left-Fill search.

    Box types are visited largest volume first. After every successful
    placement the scan restarts from the largest type, and packing ends
    once a full scan places nothing.
    """

    def __init__(
        self,
        pallet: Pallet,
        max_placements: Optional[int] = None,
        time_limit: Optional[float] = None,
    ) -> None:
        self.pallet = pallet
        self.blf = BottomLeftFill(pallet)
        self.max_placements = max_placements
        self.time_limit = time_limit
        self.placed: List[PlacedBox] = []
        self.total_weight = 0.0

    @staticmethod
    def _sort_candidates(box_types: Sequence[BoxType]) -> List[BoxCandidate]:
        # sorted() is stable, equal volumes keep input order
        return [
            BoxCandidate(box_type)
            for box_type in sorted(box_types, key=lambda b: -b.volume)
        ]

    def _budget_exhausted(self, started: float) -> Optional[str]:
        if self.max_placements is not None and len(self.placed) >= self.max_placements:
            return STOP_PLACEMENT_BUDGET
        if self.time_limit is not None and time.monotonic() - started >= self.time_limit:
            return STOP_TIME_BUDGET
        return None

    def _try_place(
        self, candidate: BoxCandidate, placed_items_data: np.ndarray
    ) -> Optional[PlacedBox]:
        box_type = candidate.box_type
        for orientation in get_orientations(box_type):
            position = self.blf.find_position(orientation, placed_items_data)
            if position is None:
                continue
            x, y, z = position
            return PlacedBox(
                box_type_id=box_type.id,
                x=x,
                y=y,
                z=z,
                l=orientation.l,
                w=orientation.w,
                h=orientation.h,
                rotation_id=orientation.rotation_id,
                weight=box_type.weight,
                color=box_type.color,
            )
        return None

    def _commit_placement(self, candidate: BoxCandidate, box: PlacedBox) -> None:
        self.placed.append(box)
        self.total_weight += box.weight
        candidate.remaining -= 1

        if config.DEBUG_FLOW:
            logger.debug(
                f"placed {box.box_type_id} #{len(self.placed)} at "
                f"({box.x}, {box.y}, {box.z}) rot={box.rotation_id}"
            )

    def pack(self, box_types: Sequence[BoxType]) -> PackingOutcome:
        self.placed = []
        self.total_weight = 0.0
        candidates = self._sort_candidates(box_types)
        started = time.monotonic()
        stop_reason = STOP_EXHAUSTED

        progress = True
        while progress:
            progress = False

            if not any(c.remaining > 0 for c in candidates):
                break

            stop = self._budget_exhausted(started)
            if stop is not None:
                stop_reason = stop
                logger.warning(
                    f"packing stopped early ({stop}) after {len(self.placed)} boxes"
                )
                break

            placed_items_data = placed_boxes_to_array(self.placed)
            for candidate in candidates:
                if candidate.remaining <= 0:
                    continue
                if self.total_weight + candidate.box_type.weight > self.pallet.max_payload:
                    continue

                box = self._try_place(candidate, placed_items_data)
                if box is None:
                    continue

                self._commit_placement(candidate, box)
                progress = True
                # the new box changes the candidate landscape, rescan from the largest type
                break

        unplaced = [
            UnplacedCount(box_type_id=c.box_type.id, count=c.remaining)
            for c in candidates
            if c.remaining > 0
        ]
        return PackingOutcome(
            placed=list(self.placed),
            unplaced=unplaced,
            total_weight=self.total_weight,
            stop_reason=stop_reason,
        )
