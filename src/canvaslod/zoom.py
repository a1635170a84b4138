"""
Zoom: Continuous zoom + previous tier -> next tier, with hysteresis.

Resolution is a five-state machine keyed on the previous tier. From the
current state every boundary is tested, not just the adjacent one, so a
single call can jump several tiers:

    toward more detail:  crossing boundary i needs  zoom > threshold_i + band_i
    toward less detail:  crossing boundary i needs  zoom < threshold_i - band_i

A zoom value inside a band leaves the tier unchanged. That dead zone is
what keeps an element from flickering while the camera hovers on a
boundary.

The resolver owns no state. Each element's caller keeps its previous tier
(see TierTracker) and feeds its zoom samples in temporal order.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from canvaslod.config import DEFAULT_CONFIG, LODConfig
from canvaslod.tiers import TIER_ORDER, Tier


logger = logging.getLogger(__name__)

# Tier given to an element that has just become visible
DEFAULT_TIER = Tier.CLOSE


class InvalidZoomError(ValueError):
    """Zoom is not a finite, strictly positive number."""


def check_zoom(zoom: float) -> float:
    """Return zoom as a float, or raise InvalidZoomError."""
    try:
        value = float(zoom)
    except (TypeError, ValueError) as exc:
        raise InvalidZoomError(f"zoom must be a number, got {zoom!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidZoomError(f"zoom must be finite and > 0, got {zoom!r}")
    return value


# =============================================================================
# Scalar resolution
# =============================================================================

def resolve_tier(
    zoom: float,
    previous_tier: Tier,
    config: LODConfig = DEFAULT_CONFIG,
) -> Tier:
    """
    Resolve the next tier for one element.

    Args:
        zoom: Current camera zoom (finite, > 0).
        previous_tier: The element's last resolved tier.
        config: Thresholds and hysteresis bands.

    Returns:
        The new tier. Equal to previous_tier when no boundary is crossed
        by more than its band.

    Raises:
        InvalidZoomError: zoom is non-numeric, non-finite, or <= 0.
    """
    zoom = check_zoom(zoom)
    current = previous_tier.rank
    target = current

    # Boundary i separates rank i (below) from rank i + 1 (above)
    up_edges = config.up_edges
    for boundary in range(current, len(up_edges)):
        if zoom > up_edges[boundary]:
            target = boundary + 1

    if target == current:
        down_edges = config.down_edges
        for boundary in reversed(range(current)):
            if zoom < down_edges[boundary]:
                target = boundary

    return Tier.from_rank(target)


def classify_zoom(zoom: float, config: LODConfig = DEFAULT_CONFIG) -> Tier:
    """
    Plain thresholding with no hysteresis.

    Used to seed an element with no history: zoom >= threshold_i places
    the element above boundary i.
    """
    zoom = check_zoom(zoom)
    rank = sum(1 for t in config.thresholds if zoom >= t)
    return Tier.from_rank(rank)


class TierResolver:
    """
    Tier resolution bound to one configuration.
    """

    def __init__(self, config: Optional[LODConfig] = None) -> None:
        self.config = config if config is not None else DEFAULT_CONFIG

    def resolve(self, zoom: float, previous_tier: Tier) -> Tier:
        return resolve_tier(zoom, previous_tier, self.config)

    def classify(self, zoom: float) -> Tier:
        return classify_zoom(zoom, self.config)

    def resolve_many(self, zooms, previous_indices) -> np.ndarray:
        return resolve_tiers(zooms, previous_indices, self.config)


# =============================================================================
# Per-element caller state
# =============================================================================

@dataclass
class TierTracker:
    """
    Remembered tier for a single canvas element.

    Created when the element becomes visible, updated on each zoom sample
    the host takes, discarded when the element leaves the canvas. One
    tracker per element; trackers are never shared.
    """

    tier: Tier = DEFAULT_TIER
    transitions: int = 0
    samples: int = 0

    @classmethod
    def from_zoom(cls, zoom: float, config: LODConfig = DEFAULT_CONFIG) -> "TierTracker":
        """Seed a tracker from the zoom at which the element appeared."""
        return cls(tier=classify_zoom(zoom, config))

    def update(self, zoom: float, config: LODConfig = DEFAULT_CONFIG) -> Tier:
        """
        Feed the next zoom sample and store the resolved tier.

        Samples must arrive in the order they were taken; the resolver
        cannot detect skipped history.
        """
        new_tier = resolve_tier(zoom, self.tier, config)
        self.samples += 1
        if new_tier is not self.tier:
            logger.debug(
                "tier %s -> %s at zoom=%.4f", self.tier.value, new_tier.value, zoom
            )
            self.transitions += 1
            self.tier = new_tier
        return new_tier

    def reset(self, tier: Tier = DEFAULT_TIER) -> None:
        self.tier = tier
        self.transitions = 0
        self.samples = 0


# =============================================================================
# Batch resolution
# =============================================================================

def resolve_tiers(
    zooms,
    previous_indices,
    config: LODConfig = DEFAULT_CONFIG,
) -> np.ndarray:
    """
    Resolve many independent elements at once.

    Element-wise identical to resolve_tier. Tiers are passed and returned
    as indices into TIER_ORDER (0 = ULTRA_CLOSE, 4 = ULTRA_FAR).

    Args:
        zooms: Array-like of zoom values, one per element.
        previous_indices: Array-like of previous tier indices, same shape.
        config: Thresholds and hysteresis bands.

    Returns:
        Integer array of new tier indices.

    Raises:
        InvalidZoomError: any zoom is non-finite or <= 0.
        ValueError: shapes differ, or an index is out of range or not a
            whole number.
    """
    zooms = np.asarray(zooms, dtype=float)
    previous_indices = _check_indices(previous_indices)

    if zooms.shape != previous_indices.shape:
        raise ValueError(
            f"shape mismatch: zooms {zooms.shape} vs previous {previous_indices.shape}"
        )
    if not np.all(np.isfinite(zooms) & (zooms > 0.0)):
        raise InvalidZoomError("all zooms must be finite and > 0")
    last = len(TIER_ORDER) - 1
    if np.any((previous_indices < 0) | (previous_indices > last)):
        raise ValueError(f"tier indices must be in [0, {last}]")

    current = last - previous_indices
    z = zooms[..., np.newaxis]

    # Edges are increasing, so the count of edges passed is the reachable rank
    up_rank = np.sum(z > np.asarray(config.up_edges), axis=-1)
    down_rank = np.sum(z >= np.asarray(config.down_edges), axis=-1)

    new_rank = np.where(
        up_rank > current,
        up_rank,
        np.where(down_rank < current, down_rank, current),
    )
    return last - new_rank


def _check_indices(previous_indices) -> np.ndarray:
    raw = np.asarray(previous_indices)
    if np.issubdtype(raw.dtype, np.integer):
        return raw.astype(int)
    if (
        np.issubdtype(raw.dtype, np.floating)
        and np.all(np.isfinite(raw))
        and np.all(raw == np.round(raw))
    ):
        return raw.astype(int)
    raise ValueError(f"tier indices must be whole numbers, got dtype {raw.dtype}")
