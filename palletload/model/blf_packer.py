from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .entities import (
    COLLISION_TOLERANCE,
    Orientation,
    Pallet,
)
from .geometry import (
    check_bounds_within_pallet,
    check_collision_numba,
    generate_candidate_positions,
    is_stable,
)


class BottomLeftFill:
    """Bottom-Left Fill position search for a single pallet."""

    def __init__(self, pallet: Pallet):
        self.pallet = pallet
        self.epsilon = COLLISION_TOLERANCE

    def find_position(
        self,
        orientation: Orientation,
        placed_items_data: np.ndarray,
    ) -> Optional[Tuple[float, float, float]]:
        """
        Returns the first valid (x, y, z) for the orientation, or None.

        Candidates are tried in BLF order; each one is rejected if it leaves
        the pallet envelope, collides with a placed box or lacks support.
        """
        item_dims = np.array(orientation.dims, dtype=np.float64)
        xmax, ymax, zmax = self.pallet.bounds

        possible_positions = generate_candidate_positions(placed_items_data)

        for i in range(possible_positions.shape[0]):
            item_pos = possible_positions[i]
            x, y, z = float(item_pos[0]), float(item_pos[1]), float(item_pos[2])

            if not check_bounds_within_pallet(
                x, y, z, orientation.l, orientation.w, orientation.h, xmax, ymax, zmax
            ):
                continue

            if check_collision_numba(item_pos, item_dims, placed_items_data, self.epsilon):
                continue

            if not is_stable(item_pos, item_dims, placed_items_data):
                continue

            return x, y, z

        return None
