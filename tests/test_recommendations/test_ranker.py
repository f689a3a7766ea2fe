"""
Tests for drep_scoring/recommendations/ranker.py.

What we test
------------
floor_points():  floors, but snaps float noise first.
cap_gain():      floored, never negative, per-recommendation cap, pillar
                 weight ceiling.
rank_recommendations(): gain desc, priority tiebreak, stable otherwise.
easiest_win():   largest weighted headroom among non-strong pillars.
"""

from __future__ import annotations

from drep_scoring.config import ScoringConfig
from drep_scoring.models.score import PillarScores, Recommendation
from drep_scoring.recommendations.ranker import (
    cap_gain,
    easiest_win,
    floor_points,
    rank_recommendations,
)
from drep_scoring.taxonomy.governance_taxonomy import Pillar, Priority


def _rec(title: str, gain: int, priority: Priority = Priority.MEDIUM) -> Recommendation:
    return Recommendation(
        pillar=Pillar.RATIONALE,
        priority=priority,
        title=title,
        description="",
        potential_gain=gain,
    )


def _pillars(p: int, r: int, rel: int, f: int) -> PillarScores:
    return PillarScores(participation=p, rationale=r, reliability=rel, profile=f)


class TestFloorPoints:
    def test_floors(self):
        assert floor_points(2.7) == 2

    def test_snaps_float_noise(self):
        assert floor_points(20.9999999999) == 21

    def test_zero(self):
        assert floor_points(0.0) == 0


class TestCapGain:
    def test_sub_point_gain_is_zero(self):
        assert cap_gain(0.4, Pillar.PROFILE) == 0
        assert cap_gain(0.0, Pillar.PROFILE) == 0

    def test_never_negative(self):
        assert cap_gain(-3.5, Pillar.RATIONALE) == 0

    def test_pillar_ceiling(self):
        assert cap_gain(20.0, Pillar.PROFILE) == 15
        assert cap_gain(50.0, Pillar.RATIONALE) == 35

    def test_explicit_cap(self):
        assert cap_gain(12.0, Pillar.PARTICIPATION, cap=10) == 10
        assert cap_gain(7.9, Pillar.PARTICIPATION, cap=10) == 7

    def test_custom_weights(self):
        config = ScoringConfig(
            pillar_weights={
                "participation": 0.25, "rationale": 0.25, "reliability": 0.25, "profile": 0.25,
            }
        )
        assert cap_gain(40.0, Pillar.RATIONALE, config=config) == 25


class TestRankRecommendations:
    def test_gain_descending(self):
        ranked = rank_recommendations([_rec("a", 2), _rec("b", 9), _rec("c", 5)])
        assert [r.title for r in ranked] == ["b", "c", "a"]

    def test_priority_breaks_ties(self):
        ranked = rank_recommendations([
            _rec("low", 6, Priority.LOW),
            _rec("medium", 6, Priority.MEDIUM),
            _rec("high", 6, Priority.HIGH),
        ])
        assert [r.title for r in ranked] == ["high", "medium", "low"]

    def test_stable_for_full_ties(self):
        ranked = rank_recommendations([_rec("first", 3), _rec("second", 3)])
        assert [r.title for r in ranked] == ["first", "second"]

    def test_empty(self):
        assert rank_recommendations([]) == []


class TestEasiestWin:
    def test_largest_weighted_headroom(self):
        assert easiest_win(_pillars(70, 0, 56, 0)) == Pillar.RATIONALE

    def test_skips_strong_pillars(self):
        assert easiest_win(_pillars(40, 90, 85, 80)) == Pillar.PARTICIPATION

    def test_all_strong_is_none(self):
        assert easiest_win(_pillars(100, 95, 80, 90)) is None

    def test_tie_goes_to_first_pillar(self):
        config = ScoringConfig(
            pillar_weights={
                "participation": 0.25, "rationale": 0.25, "reliability": 0.25, "profile": 0.25,
            }
        )
        assert easiest_win(_pillars(60, 90, 90, 60), config) == Pillar.PARTICIPATION
