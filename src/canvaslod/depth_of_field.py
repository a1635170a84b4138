"""
Depth of Field: Demote detail by graph distance from the focus element.

Ring mapping:
    ring 0 (focus)      no change
    ring 1 (1-hop)      1 tier lower
    ring 2 (2-hop)      2 tiers lower
    ring 3 (3+ hops)    forced to ULTRA_FAR
    DISCONNECTED (-1)   forced to ULTRA_FAR

Depth of field can only reduce detail, never increase it. Whole-number
floats count as their integer ring. Ring values outside the table degrade
to DISCONNECTED instead of raising.
"""

from __future__ import annotations

import logging
import numbers
from dataclasses import dataclass
from typing import Optional

from canvaslod.tiers import Tier, demote


logger = logging.getLogger(__name__)

DISCONNECTED = -1
MAX_RING = 3

RING_DEMOTION = {
    0: 0,
    1: 1,
    2: 2,
    3: 4,
}
DISCONNECTED_DEMOTION = 4

RING_CSS_CLASS = {
    0: "dof-ring-0",
    1: "dof-ring-1",
    2: "dof-ring-2",
    3: "dof-ring-3",
}
DISCONNECTED_CSS_CLASS = "dof-out-of-scope"


def _is_known_ring(ring) -> bool:
    # bool is an int subclass but never a ring; whole floats (2.0) are rings
    if isinstance(ring, bool) or not isinstance(ring, numbers.Real):
        return False
    if not isinstance(ring, numbers.Integral) and not float(ring).is_integer():
        return False
    return int(ring) in RING_DEMOTION


def ring_demotion(ring) -> int:
    """Number of tiers a ring demotes by."""
    if _is_known_ring(ring):
        return RING_DEMOTION[int(ring)]
    if ring != DISCONNECTED:
        logger.debug("unknown ring %r, treating as disconnected", ring)
    return DISCONNECTED_DEMOTION


def apply_depth_of_field(base_tier: Tier, ring) -> Tier:
    """
    Demote a tier by the element's ring distance from focus.

    Args:
        base_tier: Tier before depth of field.
        ring: 0..3 or DISCONNECTED. Anything else counts as DISCONNECTED.

    Returns:
        The demoted tier, saturating at ULTRA_FAR.
    """
    return demote(base_tier, ring_demotion(ring))


def dof_css_class(ring) -> str:
    """CSS class for a ring; unknown rings get the out-of-scope class."""
    if _is_known_ring(ring):
        return RING_CSS_CLASS[int(ring)]
    return DISCONNECTED_CSS_CLASS


@dataclass
class DepthOfFieldResult:
    css_class: str
    effective_tier: Tier


@dataclass
class DepthOfField:
    """
    Depth-of-field switch for the canvas.

    When disabled, or when no element has focus, tiers pass through
    unchanged and no CSS class is applied.
    """

    enabled: bool = False
    focus_id: Optional[str] = None

    @property
    def active(self) -> bool:
        return self.enabled and bool(self.focus_id)

    def focus(self, element_id: Optional[str]) -> None:
        self.focus_id = element_id

    def resolve(self, tier: Tier, ring=DISCONNECTED) -> DepthOfFieldResult:
        if not self.active:
            return DepthOfFieldResult(css_class="", effective_tier=tier)
        return DepthOfFieldResult(
            css_class=dof_css_class(ring),
            effective_tier=apply_depth_of_field(tier, ring),
        )
