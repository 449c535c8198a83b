from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import numba

from .entities import (
    COLLISION_TOLERANCE,
    MIN_SUPPORT_RATIO,
    SUPPORT_TOLERANCE,
    PlacedBox,
)


def placed_boxes_to_array(placed: Sequence[PlacedBox]) -> np.ndarray:
    """Pack placed boxes into rows of [x, y, z, l, w, h] for the numba kernels."""
    data = np.zeros((len(placed), 6), dtype=np.float64)
    for i, box in enumerate(placed):
        data[i, 0:3] = (box.x, box.y, box.z)
        data[i, 3:6] = (box.l, box.w, box.h)
    return data


@numba.njit(cache=True)
def check_bounds_within_pallet(x: float, y: float, z: float,
                               dx: float, dy: float, dz: float,
                               xmax: float, ymax: float, zmax: float) -> bool:
    """Check if a box at (x,y,z) with dimensions (dx,dy,dz) fits the pallet envelope."""
    if x < 0.0 or y < 0.0 or z < 0.0:
        return False
    if x + dx > xmax:
        return False
    if y + dy > ymax:
        return False
    if z + dz > zmax:
        return False
    return True


@numba.njit(cache=True)
def check_collision_numba(
    item_pos: np.ndarray,
    item_dims: np.ndarray,
    placed_items_data: np.ndarray,
    epsilon: float,
) -> bool:
    """Checks for collisions between a new box and already placed boxes.

    Boxes sharing a face are not colliding: every axis has to overlap by
    more than epsilon.
    """
    x1, y1, z1 = item_pos[0], item_pos[1], item_pos[2]
    l1, w1, h1 = item_dims[0], item_dims[1], item_dims[2]

    for i in range(placed_items_data.shape[0]):
        x2, y2, z2 = placed_items_data[i, 0], placed_items_data[i, 1], placed_items_data[i, 2]
        l2, w2, h2 = placed_items_data[i, 3], placed_items_data[i, 4], placed_items_data[i, 5]
        if (
            x1 < x2 + l2 - epsilon
            and x1 + l1 > x2 + epsilon
            and y1 < y2 + w2 - epsilon
            and y1 + w1 > y2 + epsilon
            and z1 < z2 + h2 - epsilon
            and z1 + h1 > z2 + epsilon
        ):
            return True
    return False


@numba.njit(cache=True)
def support_ratio_numba(
    item_pos: np.ndarray,
    item_dims: np.ndarray,
    placed_items_data: np.ndarray,
    tolerance: float,
) -> float:
    """Fraction of the box base resting on top faces of boxes right below it.

    A box on the pallet floor is fully supported.
    """
    x, y, z = item_pos[0], item_pos[1], item_pos[2]
    dx, dy = item_dims[0], item_dims[1]

    if z == 0.0:
        return 1.0

    total_support_area = 0.0
    for i in range(placed_items_data.shape[0]):
        px, py, pz = placed_items_data[i, 0], placed_items_data[i, 1], placed_items_data[i, 2]
        pdx, pdy, pdz = placed_items_data[i, 3], placed_items_data[i, 4], placed_items_data[i, 5]

        # supporter must touch the candidate's bottom plane
        if abs((pz + pdz) - z) > tolerance:
            continue

        overlap_x = max(0.0, min(x + dx, px + pdx) - max(x, px))
        overlap_y = max(0.0, min(y + dy, py + pdy) - max(y, py))
        total_support_area += overlap_x * overlap_y

    return total_support_area / (dx * dy)


@numba.njit(cache=True)
def _generate_positions_numba(placed_items_data: np.ndarray) -> np.ndarray:
    """Origin plus the right, far and top corner points of every placed box."""
    positions = np.empty((1 + placed_items_data.shape[0] * 3, 3), dtype=np.float64)
    positions[0, 0] = 0.0
    positions[0, 1] = 0.0
    positions[0, 2] = 0.0
    count = 1

    for i in range(placed_items_data.shape[0]):
        px, py, pz = placed_items_data[i, 0], placed_items_data[i, 1], placed_items_data[i, 2]
        pdx, pdy, pdz = placed_items_data[i, 3], placed_items_data[i, 4], placed_items_data[i, 5]

        # Extreme point: right of box
        positions[count, 0] = px + pdx
        positions[count, 1] = py
        positions[count, 2] = pz
        count += 1

        # Extreme point: behind box
        positions[count, 0] = px
        positions[count, 1] = py + pdy
        positions[count, 2] = pz
        count += 1

        # Extreme point: on top of box
        positions[count, 0] = px
        positions[count, 1] = py
        positions[count, 2] = pz + pdz
        count += 1

    return positions


def generate_candidate_positions(placed_items_data: np.ndarray) -> np.ndarray:
    """
    Generates, sorts and de-duplicates candidate placement positions.

    Positions are ordered bottom first, then left, then front:
    z ASC, x ASC, y ASC. The sort is stable and equal neighbours are
    collapsed on exact coordinates, so the order is reproducible.
    """
    positions = _generate_positions_numba(placed_items_data)

    # lexsort sorts by last key first: (y, x, z) -> z ASC, x ASC, y ASC
    sort_idx = np.lexsort((positions[:, 1], positions[:, 0], positions[:, 2]))
    ordered = positions[sort_idx]

    keep = np.ones(ordered.shape[0], dtype=np.bool_)
    keep[1:] = np.any(ordered[1:] != ordered[:-1], axis=1)
    return ordered[keep]


def check_collision(a: PlacedBox, b: PlacedBox, epsilon: float = COLLISION_TOLERANCE) -> bool:
    """AABB overlap test for two placed boxes."""
    return bool(
        check_collision_numba(
            np.array(a.position, dtype=np.float64),
            np.array(a.dims, dtype=np.float64),
            placed_boxes_to_array([b]),
            epsilon,
        )
    )


def support_ratio(box: PlacedBox, placed: Iterable[PlacedBox]) -> float:
    """Support ratio of `box` against the other boxes in `placed`."""
    others = [p for p in placed if p is not box]
    return float(
        support_ratio_numba(
            np.array(box.position, dtype=np.float64),
            np.array(box.dims, dtype=np.float64),
            placed_boxes_to_array(others),
            SUPPORT_TOLERANCE,
        )
    )


def is_stable(
    item_pos: np.ndarray,
    item_dims: np.ndarray,
    placed_items_data: np.ndarray,
    min_support_ratio: float = MIN_SUPPORT_RATIO,
) -> bool:
    """True when the base is supported by at least min_support_ratio of its area."""
    return support_ratio_numba(item_pos, item_dims, placed_items_data, SUPPORT_TOLERANCE) >= min_support_ratio
