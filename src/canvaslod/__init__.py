"""
canvaslod: Adaptive level-of-detail decisions for a zoomable canvas.

Each canvas element picks one of five detail tiers from the camera zoom,
with hysteresis so it does not flicker near a boundary. The tier can then
be demoted by distance from the focused element and by a calm preference,
and expanded into render flags.

Modules:
    tiers: Tier enum, ordering, saturating demotion
    config: Thresholds, hysteresis bands, load threshold
    zoom: Zoom + previous tier -> tier (scalar, per-element tracker, batch)
    depth_of_field: Ring distance demotion
    calm: Calm offset demotion and stepped calm mode
    visibility: Tier -> render flags
    load_gate: Cognitive-load overlay indicator
    engine: Per-element composition of the above
"""

__version__ = "0.1.0"

from canvaslod.tiers import Tier, TIER_ORDER, demote
from canvaslod.config import LODConfig, DEFAULT_CONFIG, THRESHOLDS, HYSTERESIS, HYSTERESIS_WIDE
from canvaslod.zoom import (
    InvalidZoomError,
    TierResolver,
    TierTracker,
    classify_zoom,
    resolve_tier,
    resolve_tiers,
)
from canvaslod.depth_of_field import DISCONNECTED, DepthOfField, apply_depth_of_field, dof_css_class
from canvaslod.calm import CalmMode, apply_calm_offset
from canvaslod.visibility import VisibilityFlags, resolve_visibility
from canvaslod.load_gate import LoadGateResult, resolve_load_gate
from canvaslod.engine import LODDecision, LODEngine

__all__ = [
    # Tiers
    "Tier",
    "TIER_ORDER",
    "demote",
    # Config
    "LODConfig",
    "DEFAULT_CONFIG",
    "THRESHOLDS",
    "HYSTERESIS",
    "HYSTERESIS_WIDE",
    # Zoom
    "InvalidZoomError",
    "TierResolver",
    "TierTracker",
    "classify_zoom",
    "resolve_tier",
    "resolve_tiers",
    # Modifiers
    "DISCONNECTED",
    "DepthOfField",
    "apply_depth_of_field",
    "dof_css_class",
    "CalmMode",
    "apply_calm_offset",
    # Outputs
    "VisibilityFlags",
    "resolve_visibility",
    "LoadGateResult",
    "resolve_load_gate",
    # Engine
    "LODDecision",
    "LODEngine",
]
