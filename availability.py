# availability.py
from __future__ import annotations

from enum import Enum
from typing import List

from config import (
    HIGH_AVAILABILITY_MIN,
    MODERATE_AVAILABILITY_MIN,
    TIER_COLORS,
    TIER_HEX,
    TIER_LABELS,
)


class Tier(Enum):
    HIGH = "HIGH"
    MODERATE = "MODERATE"
    LIMITED = "LIMITED"

    @property
    def label(self) -> str:
        return TIER_LABELS[self.value]

    @property
    def color(self) -> List[int]:
        return list(TIER_COLORS[self.value])

    @property
    def hex(self) -> str:
        return TIER_HEX[self.value]


def classify(available: int) -> Tier:
    """Map a free-bed count to its availability tier."""
    if isinstance(available, bool) or not isinstance(available, int):
        raise TypeError(f"bed count must be an int, got {type(available).__name__}")
    if available < 0:
        raise ValueError(f"bed count cannot be negative: {available}")
    if available >= HIGH_AVAILABILITY_MIN:
        return Tier.HIGH
    if available >= MODERATE_AVAILABILITY_MIN:
        return Tier.MODERATE
    return Tier.LIMITED
