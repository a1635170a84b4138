"""
Tests for the LOD engine.

Tests cover:
- Single-element evaluation through the whole pipeline
- Camera tier vs effective tier in the flags
- Evaluating many independent elements
- Rejected samples leave trackers and counters untouched
- Diagnostics
"""

import math

import pytest

from canvaslod.depth_of_field import DISCONNECTED
from canvaslod.engine import LODEngine
from canvaslod.tiers import Tier
from canvaslod.zoom import InvalidZoomError, TierTracker


class TestEvaluate:
    """One element, one sample."""

    def test_plain_zoom(self):
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.ULTRA_FAR)

        decision = engine.evaluate(tracker, 2.0)

        assert decision.base_tier == Tier.ULTRA_CLOSE
        assert decision.effective_tier == Tier.ULTRA_CLOSE
        assert decision.flags.show_expanded_toolbar
        assert decision.flags.tier == decision.flags.effective_tier == Tier.ULTRA_CLOSE
        assert not decision.load_gate.is_visible

    def test_ring_demotes_flags_but_not_tracker(self):
        """The tracker stores the camera tier, not the demoted one."""
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.CLOSE)

        decision = engine.evaluate(tracker, 2.0, ring=1)

        assert tracker.tier == Tier.ULTRA_CLOSE
        assert decision.effective_tier == Tier.CLOSE
        assert decision.flags.tier == Tier.ULTRA_CLOSE
        assert decision.flags.effective_tier == Tier.CLOSE
        assert not decision.flags.show_expanded_toolbar
        assert decision.flags.show_content

    def test_ring_and_calm_sum(self):
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.ULTRA_CLOSE)

        decision = engine.evaluate(tracker, 2.0, ring=1, calm_offset=1)

        assert decision.effective_tier == Tier.MID
        assert decision.flags.show_lede

    def test_load_gate_uses_effective_tier(self):
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.ULTRA_CLOSE)

        decision = engine.evaluate(tracker, 2.0, ring=DISCONNECTED, load=0.0)

        assert decision.effective_tier == Tier.ULTRA_FAR
        assert decision.load_gate.is_visible
        assert decision.flags.show_cluster_summary

    def test_hysteresis_carried_across_calls(self):
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.MID)

        tiers = [engine.evaluate(tracker, z).base_tier for z in [0.31, 0.29, 0.31, 0.29]]

        assert tiers == [Tier.MID] * 4

    def test_to_dict(self):
        engine = LODEngine()
        d = engine.evaluate(TierTracker(), 0.4, load=0.9).to_dict()

        assert d["base_tier"] == "mid"
        assert d["effective_tier"] == "mid"
        assert d["load_indicator"] is True
        assert d["flags"]["show_lede"] is True


class TestEvaluateMany:
    """Independent elements sharing one camera."""

    def test_rings_per_element(self):
        engine = LODEngine()
        trackers = [TierTracker(), TierTracker(), TierTracker()]

        decisions = engine.evaluate_many(trackers, 0.4, rings=[0, 2, DISCONNECTED], load=0.8)

        assert [d.base_tier for d in decisions] == [Tier.MID] * 3
        assert [d.effective_tier for d in decisions] == [Tier.MID, Tier.ULTRA_FAR, Tier.ULTRA_FAR]
        assert all(d.load_gate.is_visible for d in decisions)

    def test_default_rings_are_focus(self):
        engine = LODEngine()
        decisions = engine.evaluate_many([TierTracker(), TierTracker()], 2.0)

        assert [d.effective_tier for d in decisions] == [Tier.ULTRA_CLOSE] * 2

    def test_ring_count_mismatch(self):
        engine = LODEngine()

        with pytest.raises(ValueError):
            engine.evaluate_many([TierTracker()], 0.4, rings=[0, 1])


class TestDiagnostics:
    """Counters and histogram."""

    def test_counts(self):
        engine = LODEngine()
        trackers = [TierTracker(), TierTracker(), TierTracker()]
        engine.evaluate_many(trackers, 0.4, rings=[0, 2, DISCONNECTED])

        diag = engine.get_diagnostics()

        assert diag["evaluations"] == 3
        assert diag["tier_counts"]["mid"] == 1
        assert diag["tier_counts"]["ultra-far"] == 2
        assert diag["tier_shares"]["ultra-far"] == pytest.approx(2 / 3)
        assert sum(diag["tier_shares"].values()) == pytest.approx(1.0)
        assert len(diag["thresholds"]) == 4

    def test_empty(self):
        diag = LODEngine().get_diagnostics()

        assert diag["evaluations"] == 0
        assert all(s == 0.0 for s in diag["tier_shares"].values())

    def test_reset(self):
        engine = LODEngine()
        engine.evaluate(TierTracker(), 0.4)
        engine.reset()

        assert engine.evaluations == 0
        assert engine.get_diagnostics()["tier_counts"]["mid"] == 0


class TestRejectedSamples:
    """Invalid input raises before any element state changes."""

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            ({"zoom": math.nan}, InvalidZoomError),
            ({"zoom": 0.0}, InvalidZoomError),
            ({"zoom": 2.0, "load": math.nan}, ValueError),
            ({"zoom": 2.0, "calm_offset": -1}, ValueError),
            ({"zoom": 2.0, "calm_offset": 1.5}, ValueError),
        ],
    )
    def test_evaluate_leaves_state_untouched(self, kwargs, error):
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.ULTRA_FAR)

        with pytest.raises(error):
            engine.evaluate(tracker, **kwargs)

        assert tracker.tier == Tier.ULTRA_FAR
        assert tracker.samples == 0
        assert tracker.transitions == 0
        assert engine.evaluations == 0
        assert sum(engine.tier_counts.values()) == 0

    @pytest.mark.parametrize(
        "kwargs, error",
        [
            ({"zoom": -1.0}, InvalidZoomError),
            ({"zoom": 2.0, "load": math.nan}, ValueError),
            ({"zoom": 2.0, "calm_offset": -1}, ValueError),
        ],
    )
    def test_evaluate_many_updates_no_element(self, kwargs, error):
        """Elements never end up out of step with each other."""
        engine = LODEngine()
        trackers = [TierTracker(tier=Tier.ULTRA_FAR), TierTracker(tier=Tier.ULTRA_FAR)]

        with pytest.raises(error):
            engine.evaluate_many(trackers, **kwargs)

        assert [t.tier for t in trackers] == [Tier.ULTRA_FAR, Tier.ULTRA_FAR]
        assert [t.samples for t in trackers] == [0, 0]
        assert engine.evaluations == 0

    def test_whole_float_calm_offset_accepted(self):
        engine = LODEngine()
        decision = engine.evaluate(TierTracker(tier=Tier.ULTRA_CLOSE), 2.0, calm_offset=2.0)

        assert decision.effective_tier == Tier.MID

    def test_valid_sample_after_rejection(self):
        engine = LODEngine()
        tracker = TierTracker(tier=Tier.ULTRA_FAR)

        with pytest.raises(ValueError):
            engine.evaluate(tracker, 2.0, load=math.nan)
        decision = engine.evaluate(tracker, 2.0, load=0.0)

        assert decision.base_tier == Tier.ULTRA_CLOSE
        assert tracker.samples == 1
        assert engine.evaluations == 1
