"""3D pallet loading: Bottom-Left-Fill placement with First-Fit-Decreasing selection."""

from .calculator import calculate_pallet_load
from .schemas import BoxTypeInput, PalletLoadRequest, PalletLoadResult

__all__ = [
    "calculate_pallet_load",
    "BoxTypeInput",
    "PalletLoadRequest",
    "PalletLoadResult",
]
