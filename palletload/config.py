import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()  # pick up a local .env when present


def _optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return int(raw)


def _optional_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return float(raw)


LOG_LEVEL = os.getenv("PALLETLOAD_LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("PALLETLOAD_LOG_FILE")

# Packing budgets, unbounded when unset
MAX_PLACEMENTS = _optional_int("PALLETLOAD_MAX_PLACEMENTS")
TIME_LIMIT_SECONDS = _optional_float("PALLETLOAD_TIME_LIMIT_SECONDS")

DEBUG_FLOW = os.environ.get("PALLETLOAD_DEBUG_FLOW", "0") == "1"
