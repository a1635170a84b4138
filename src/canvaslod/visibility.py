"""
Visibility: Tier -> fixed record of render flags.

Nine flags only switch on as detail increases. The lede (summary blurb)
is the exception: it shows at MID only, and disappears at CLOSE and
ULTRA_CLOSE once full content takes its place.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional

from canvaslod.tiers import Tier


@dataclass(frozen=True)
class VisibilityFlags:
    """
    Render decisions for one element.

    tier is the camera's raw tier; effective_tier is the tier the flags
    were derived from after any demotion.
    """

    show_content: bool
    show_title: bool
    show_badges: bool
    show_lede: bool
    show_cluster_summary: bool
    show_embedded_content: bool
    show_expanded_toolbar: bool
    show_interactive_controls: bool
    show_footer: bool
    show_header: bool

    tier: Tier
    effective_tier: Tier

    def to_dict(self) -> dict:
        d = asdict(self)
        d["tier"] = self.tier.value
        d["effective_tier"] = self.effective_tier.value
        return d


FLAG_NAMES = (
    "show_content",
    "show_title",
    "show_badges",
    "show_lede",
    "show_cluster_summary",
    "show_embedded_content",
    "show_expanded_toolbar",
    "show_interactive_controls",
    "show_footer",
    "show_header",
)


def _flags(*on: str) -> dict:
    return {name: name in on for name in FLAG_NAMES}


# Keyed by every Tier; a new tier must be added here
VISIBILITY_TABLE = {
    Tier.ULTRA_FAR: _flags("show_cluster_summary"),
    Tier.FAR: _flags("show_header", "show_title", "show_badges"),
    Tier.MID: _flags(
        "show_header", "show_title", "show_badges", "show_lede", "show_footer"
    ),
    Tier.CLOSE: _flags(
        "show_header",
        "show_title",
        "show_badges",
        "show_footer",
        "show_content",
        "show_embedded_content",
        "show_interactive_controls",
    ),
    Tier.ULTRA_CLOSE: _flags(
        "show_header",
        "show_title",
        "show_badges",
        "show_footer",
        "show_content",
        "show_embedded_content",
        "show_interactive_controls",
        "show_expanded_toolbar",
    ),
}


def resolve_visibility(
    effective_tier: Tier,
    tier: Optional[Tier] = None,
) -> VisibilityFlags:
    """
    Expand a tier into visibility flags.

    Args:
        effective_tier: Tier after depth-of-field / calm demotion. The flags
            are derived from this.
        tier: The camera's raw tier. Defaults to effective_tier when no
            modifier was applied.

    Returns:
        VisibilityFlags with all ten flags set.
    """
    flags = VISIBILITY_TABLE[effective_tier]
    return VisibilityFlags(
        tier=tier if tier is not None else effective_tier,
        effective_tier=effective_tier,
        **flags,
    )
