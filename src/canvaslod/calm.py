"""
Calm: User-chosen demotion of every element for a reduced-distraction mode.

The calm level is a stepped preference 0..3. Its offset is the number of
tiers every element is demoted by, applied with the same saturating step
as depth of field. Because both modifiers add steps on the same ordered
scale and clamp at ULTRA_FAR, they compose in either order.

    level 0: normal
    level 1: one tier calmer
    level 2: two tiers calmer, animations suppressed
    level 3: three tiers calmer, text-only
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass

from canvaslod.tiers import Tier, demote


CALM_LEVEL_MIN = 0
CALM_LEVEL_MAX = 3

SUPPRESS_ANIMATIONS_LEVEL = 2
TEXT_ONLY_LEVEL = 3


def apply_calm_offset(base_tier: Tier, offset: int) -> Tier:
    """
    Demote a tier by a calm offset.

    Args:
        base_tier: Tier before calm demotion.
        offset: Non-negative number of tiers to drop. 0 is the identity.

    Returns:
        The demoted tier, saturating at ULTRA_FAR.

    Raises:
        ValueError: offset is negative or not a whole number.
    """
    return demote(base_tier, check_calm_offset(offset))


def check_calm_offset(offset) -> int:
    """
    Validate a calm offset and return it as an int.

    Integral floats (2.0) are accepted; fractional, non-finite, boolean,
    non-numeric and negative values are rejected.
    """
    if isinstance(offset, bool) or not isinstance(offset, numbers.Real):
        raise ValueError(f"calm offset must be a whole number, got {offset!r}")
    if not isinstance(offset, numbers.Integral) and not float(offset).is_integer():
        raise ValueError(f"calm offset must be a whole number, got {offset!r}")
    if offset < 0:
        raise ValueError(f"calm offset must be non-negative, got {offset!r}")
    return int(offset)


def calm_offset(level: int) -> int:
    """Tier offset for a calm level."""
    return max(CALM_LEVEL_MIN, min(CALM_LEVEL_MAX, level))


def should_suppress_animations(level: int) -> bool:
    return level >= SUPPRESS_ANIMATIONS_LEVEL


def is_text_only(level: int) -> bool:
    return level >= TEXT_ONLY_LEVEL


@dataclass
class CalmMode:
    """
    Stepped calm preference.

    Levels are clamped to [0, 3] on every change.
    """

    level: int = CALM_LEVEL_MIN

    def __post_init__(self) -> None:
        self.level = calm_offset(self.level)

    def set_level(self, level: int) -> int:
        self.level = calm_offset(level)
        return self.level

    def increment(self) -> int:
        return self.set_level(self.level + 1)

    def decrement(self) -> int:
        return self.set_level(self.level - 1)

    @property
    def offset(self) -> int:
        return calm_offset(self.level)

    @property
    def suppress_animations(self) -> bool:
        return should_suppress_animations(self.level)

    @property
    def text_only(self) -> bool:
        return is_text_only(self.level)

    def apply(self, tier: Tier) -> Tier:
        return apply_calm_offset(tier, self.offset)
