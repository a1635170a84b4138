"""
Load Gate: Visibility of the cognitive-load overlay indicator.

Independent of the visibility flags. Rules:

    ULTRA_FAR          always visible
    FAR, MID           visible iff load > threshold (strict, default 0.7)
    CLOSE, ULTRA_CLOSE never visible

The reason string is for diagnostics only; nothing should branch on it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from canvaslod.config import DEFAULT_CONFIG, LODConfig
from canvaslod.tiers import Tier


@dataclass(frozen=True)
class LoadGateResult:
    is_visible: bool
    reason: str


_ALWAYS = "always"
_THRESHOLD = "threshold"
_NEVER = "never"

GATE_RULES = {
    Tier.ULTRA_FAR: _ALWAYS,
    Tier.FAR: _THRESHOLD,
    Tier.MID: _THRESHOLD,
    Tier.CLOSE: _NEVER,
    Tier.ULTRA_CLOSE: _NEVER,
}


def resolve_load_gate(
    tier: Tier,
    load: float,
    config: LODConfig = DEFAULT_CONFIG,
) -> LoadGateResult:
    """
    Decide whether the load indicator shows.

    Args:
        tier: The element's effective tier.
        load: Cognitive load, normalised to [0, 1]. Out-of-range values
            are clamped.
        config: Supplies the load threshold.

    Returns:
        LoadGateResult with the decision and a diagnostic reason.

    Raises:
        ValueError: load is NaN.
    """
    load = check_load(load)

    rule = GATE_RULES[tier]
    if rule == _ALWAYS:
        return LoadGateResult(True, f"{tier.value}: indicator always shown")
    if rule == _NEVER:
        return LoadGateResult(False, f"{tier.value}: indicator hidden at this detail")

    threshold = config.load_threshold
    if load > threshold:
        return LoadGateResult(True, f"{tier.value}: load {load:.2f} > {threshold:.2f}")
    return LoadGateResult(False, f"{tier.value}: load {load:.2f} <= {threshold:.2f}")


def check_load(load) -> float:
    """
    Validate a cognitive load and clamp it to [0, 1].

    Raises:
        ValueError: load is not a number, or is NaN.
    """
    try:
        value = float(load)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"cognitive load must be a number, got {load!r}") from exc
    if math.isnan(value):
        raise ValueError("cognitive load must not be NaN")
    return max(0.0, min(1.0, value))
