"""
Engine: Per-element composition of the LOD components.

For each element and sample:

    1. TierTracker.update(zoom)                -> base tier
    2. depth of field (ring), calm (offset)    -> effective tier
    3. resolve_visibility(effective, base)     -> render flags
    4. resolve_load_gate(effective, load)      -> overlay indicator

Depth of field is applied first, then calm. Both are saturating step
demotions, so the order does not change the result.

All inputs are validated before any tracker or counter changes, so a
rejected sample leaves every element exactly as it was.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np

from canvaslod.calm import apply_calm_offset, check_calm_offset
from canvaslod.config import DEFAULT_CONFIG, LODConfig
from canvaslod.depth_of_field import apply_depth_of_field
from canvaslod.load_gate import LoadGateResult, check_load, resolve_load_gate
from canvaslod.tiers import TIER_ORDER, Tier
from canvaslod.visibility import VisibilityFlags, resolve_visibility
from canvaslod.zoom import TierTracker, check_zoom


@dataclass(frozen=True)
class LODDecision:
    """Everything the renderer needs for one element on one sample."""

    base_tier: Tier
    effective_tier: Tier
    flags: VisibilityFlags
    load_gate: LoadGateResult

    def to_dict(self) -> dict:
        return {
            "base_tier": self.base_tier.value,
            "effective_tier": self.effective_tier.value,
            "flags": self.flags.to_dict(),
            "load_indicator": self.load_gate.is_visible,
            "load_reason": self.load_gate.reason,
        }


@dataclass
class LODEngine:
    """
    Runs the LOD pipeline for canvas elements.

    The engine holds configuration and counters only. Each element's
    previous tier lives on its own TierTracker, passed in by the caller.
    """

    config: LODConfig = field(default_factory=lambda: DEFAULT_CONFIG)

    evaluations: int = 0
    tier_counts: Counter = field(default_factory=Counter)

    def effective_tier(self, base_tier: Tier, ring=0, calm_offset: int = 0) -> Tier:
        """Apply depth of field then calm to a base tier."""
        return apply_calm_offset(apply_depth_of_field(base_tier, ring), calm_offset)

    def evaluate(
        self,
        tracker: TierTracker,
        zoom: float,
        ring=0,
        calm_offset: int = 0,
        load: float = 0.0,
    ) -> LODDecision:
        """
        Resolve one element for one zoom sample.

        Args:
            tracker: The element's tier state. Updated in place.
            zoom: Current camera zoom.
            ring: Ring distance from focus (0 when depth of field is off).
            calm_offset: Calm demotion in tiers.
            load: Cognitive load in [0, 1].

        Returns:
            LODDecision for the element.

        Raises:
            InvalidZoomError: zoom is not finite and > 0.
            ValueError: calm_offset is negative or fractional, or load is NaN.
        """
        calm_offset = check_calm_offset(calm_offset)
        load = check_load(load)

        # Last step that can raise; it validates zoom before storing anything
        base = tracker.update(zoom, self.config)
        effective = self.effective_tier(base, ring, calm_offset)

        self.evaluations += 1
        self.tier_counts[effective] += 1

        return LODDecision(
            base_tier=base,
            effective_tier=effective,
            flags=resolve_visibility(effective, base),
            load_gate=resolve_load_gate(effective, load, self.config),
        )

    def evaluate_many(
        self,
        trackers: Sequence[TierTracker],
        zoom: float,
        rings: Optional[Sequence] = None,
        calm_offset: int = 0,
        load: float = 0.0,
    ) -> list:
        """
        Resolve a set of independent elements against the same camera zoom.

        Args:
            trackers: One tracker per element.
            zoom: Current camera zoom, shared by all elements.
            rings: Ring per element, or None for all-focus (ring 0).
            calm_offset: Calm demotion applied to every element.
            load: Cognitive load shared by all elements.

        Returns:
            List of LODDecision, in tracker order.

        Raises:
            ValueError: ring count differs from tracker count, or a shared
                input is invalid. No tracker is updated in that case.
        """
        if rings is None:
            rings = [0] * len(trackers)
        if len(rings) != len(trackers):
            raise ValueError(
                f"got {len(rings)} rings for {len(trackers)} elements"
            )
        check_zoom(zoom)
        calm_offset = check_calm_offset(calm_offset)
        load = check_load(load)
        return [
            self.evaluate(tracker, zoom, ring, calm_offset, load)
            for tracker, ring in zip(trackers, rings)
        ]

    def reset(self) -> None:
        self.evaluations = 0
        self.tier_counts.clear()

    def get_diagnostics(self) -> dict:
        """Get diagnostic information about engine activity."""
        counts = np.array([self.tier_counts.get(t, 0) for t in TIER_ORDER], dtype=float)
        total = counts.sum()
        shares = counts / total if total > 0 else np.zeros_like(counts)
        return {
            "evaluations": self.evaluations,
            "tier_counts": {t.value: int(c) for t, c in zip(TIER_ORDER, counts)},
            "tier_shares": {t.value: float(s) for t, s in zip(TIER_ORDER, shares)},
            "thresholds": list(self.config.thresholds),
            "bands": list(self.config.bands),
        }
