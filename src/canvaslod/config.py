"""
Config: Zoom thresholds, hysteresis bands, and load gate threshold.

Four boundaries split the continuous zoom axis into five tiers:

    0.15  ULTRA_FAR | FAR
    0.30  FAR       | MID
    0.55  MID       | CLOSE
    1.00  CLOSE     | ULTRA_CLOSE

Each boundary carries a dead zone of ±band. The top boundary is wider
because users linger at 100% zoom.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field


THRESHOLDS = {
    "ULTRA_FAR_FAR": 0.15,
    "FAR_MID": 0.30,
    "MID_CLOSE": 0.55,
    "CLOSE_ULTRA_CLOSE": 1.0,
}

HYSTERESIS = 0.02
HYSTERESIS_WIDE = 0.03

# Load above which the overlay indicator shows at FAR/MID
LOAD_GATE_THRESHOLD = 0.7


@dataclass(frozen=True)
class LODConfig:
    """
    Boundary configuration for tier resolution.

    thresholds[i] separates detail rank i from rank i + 1, where rank 0 is
    ULTRA_FAR and rank 4 is ULTRA_CLOSE. bands[i] is the half-width of the
    dead zone around thresholds[i].
    """

    thresholds: tuple = field(default_factory=lambda: tuple(THRESHOLDS.values()))
    bands: tuple = (HYSTERESIS, HYSTERESIS, HYSTERESIS, HYSTERESIS_WIDE)
    load_threshold: float = LOAD_GATE_THRESHOLD

    def __post_init__(self) -> None:
        object.__setattr__(self, "thresholds", tuple(float(t) for t in self.thresholds))
        object.__setattr__(self, "bands", tuple(float(b) for b in self.bands))

        if len(self.thresholds) != 4:
            raise ValueError(f"expected 4 thresholds, got {len(self.thresholds)}")
        if len(self.bands) != len(self.thresholds):
            raise ValueError(
                f"expected {len(self.thresholds)} bands, got {len(self.bands)}"
            )
        if not all(math.isfinite(t) and t > 0 for t in self.thresholds):
            raise ValueError(f"thresholds must be finite and positive: {self.thresholds}")
        if any(b < 0 or not math.isfinite(b) for b in self.bands):
            raise ValueError(f"bands must be finite and non-negative: {self.bands}")

        for i in range(1, len(self.thresholds)):
            lower_edge = self.thresholds[i - 1] + self.bands[i - 1]
            upper_edge = self.thresholds[i] - self.bands[i]
            if lower_edge >= upper_edge:
                raise ValueError(
                    f"boundaries {i - 1} and {i} overlap: "
                    f"{lower_edge:.3f} >= {upper_edge:.3f}"
                )

        if not 0.0 <= self.load_threshold <= 1.0:
            raise ValueError(f"load_threshold must be in [0, 1], got {self.load_threshold}")

    @property
    def up_edges(self) -> tuple:
        """Zoom that must be exceeded to cross each boundary toward more detail."""
        return tuple(t + b for t, b in zip(self.thresholds, self.bands))

    @property
    def down_edges(self) -> tuple:
        """Zoom that must be undercut to cross each boundary toward less detail."""
        return tuple(t - b for t, b in zip(self.thresholds, self.bands))

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for settings storage."""
        return {
            "thresholds": list(self.thresholds),
            "bands": list(self.bands),
            "load_threshold": self.load_threshold,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LODConfig":
        """Build a config from a settings dictionary, defaulting missing keys."""
        defaults = cls()
        return cls(
            thresholds=tuple(data.get("thresholds", defaults.thresholds)),
            bands=tuple(data.get("bands", defaults.bands)),
            load_threshold=float(data.get("load_threshold", defaults.load_threshold)),
        )


DEFAULT_CONFIG = LODConfig()
