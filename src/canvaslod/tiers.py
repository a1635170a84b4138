"""
Tiers: The five discrete detail levels an element can render at.

Tiers are ordered from most detail to least detail:

    ULTRA_CLOSE > CLOSE > MID > FAR > ULTRA_FAR

The only arithmetic defined on the ordering is saturating demotion:
move N steps toward ULTRA_FAR, stopping at ULTRA_FAR.
"""

from __future__ import annotations

from enum import Enum


class Tier(Enum):
    """Discrete level-of-detail tier."""

    ULTRA_CLOSE = "ultra-close"
    CLOSE = "close"
    MID = "mid"
    FAR = "far"
    ULTRA_FAR = "ultra-far"

    @property
    def index(self) -> int:
        """Position in TIER_ORDER (0 = most detail)."""
        return TIER_ORDER.index(self)

    @property
    def rank(self) -> int:
        """Detail rank (0 = ULTRA_FAR, 4 = ULTRA_CLOSE)."""
        return len(TIER_ORDER) - 1 - self.index

    @classmethod
    def from_index(cls, index: int) -> "Tier":
        return TIER_ORDER[index]

    @classmethod
    def from_rank(cls, rank: int) -> "Tier":
        return TIER_ORDER[len(TIER_ORDER) - 1 - rank]


# Most detail -> least detail
TIER_ORDER: tuple = (
    Tier.ULTRA_CLOSE,
    Tier.CLOSE,
    Tier.MID,
    Tier.FAR,
    Tier.ULTRA_FAR,
)

LEAST_DETAIL = TIER_ORDER[-1]
MOST_DETAIL = TIER_ORDER[0]


def demote(tier: Tier, steps: int) -> Tier:
    """
    Move a tier `steps` levels toward ULTRA_FAR, saturating at ULTRA_FAR.

    Args:
        tier: Starting tier.
        steps: Non-negative number of levels to drop.

    Returns:
        The demoted tier.
    """
    if steps < 0:
        raise ValueError(f"demotion steps must be non-negative, got {steps}")
    index = min(tier.index + steps, len(TIER_ORDER) - 1)
    return TIER_ORDER[index]
