"""
Tests for drep_scoring/scoring/rationale.py.

What we test
------------
has_qualifying_rationale():
  - 49 stripped characters never count; 50 do.
  - Whitespace padding does not count toward the length.
  - Recorded rationale_length is used when there is no text.
  - An unresolved anchor counts only when trust_unresolved_url is enabled.
rationale_curve():
  - Default curve points; concave (curve(x) >= x).
compute_rationale():
  - InfoAction votes enter neither numerator nor denominator.
  - Importance weighting (critical 3 / important 2 / standard 1).
  - Zero binding votes -> 0.
  - assume_rationale simulates explained votes.
"""

from __future__ import annotations

import pytest

from drep_scoring.config import ScoringConfig
from drep_scoring.models.vote import VoteRecord
from drep_scoring.scoring.rationale import (
    compute_rationale,
    has_qualifying_rationale,
    missing_rationale_votes,
    rationale_curve,
)

GOOD = "x" * 60


def _vote(
    tx: str = "aa",
    ptype: str | None = "ParameterChange",
    text: str | None = None,
    length: int | None = None,
    url: str | None = None,
    has_rationale: bool = False,
) -> VoteRecord:
    return VoteRecord(
        proposal_tx_hash=tx,
        proposal_index=0,
        vote="Yes",
        epoch=100,
        proposal_type=ptype,
        rationale_text=text,
        rationale_length=length,
        rationale_url=url,
        has_rationale=has_rationale,
    )


class TestHasQualifyingRationale:
    def test_49_chars_does_not_count(self):
        assert not has_qualifying_rationale(_vote(text="a" * 49))

    def test_50_chars_counts(self):
        assert has_qualifying_rationale(_vote(text="a" * 50))

    def test_whitespace_stripped(self):
        assert not has_qualifying_rationale(_vote(text="   " + "a" * 49 + "\n\n  "))

    def test_short_text_not_rescued_by_url(self):
        assert not has_qualifying_rationale(_vote(text="short", url="https://r.io/1.json"))

    def test_recorded_length(self):
        assert has_qualifying_rationale(_vote(length=50))
        assert not has_qualifying_rationale(_vote(length=49))

    def test_unresolved_url_trusted_by_default(self):
        assert has_qualifying_rationale(_vote(url="ipfs://bafy..."))

    def test_anchor_flag_trusted_by_default(self):
        assert has_qualifying_rationale(_vote(has_rationale=True))

    def test_unresolved_url_not_trusted_when_disabled(self):
        config = ScoringConfig(rationale={"trust_unresolved_url": False})
        assert not has_qualifying_rationale(_vote(url="ipfs://bafy..."), config)

    def test_nothing_attached(self):
        assert not has_qualifying_rationale(_vote())


class TestRationaleCurve:
    @pytest.mark.parametrize(
        "rate, expected",
        [(0, 0), (10, 15), (20, 30), (40, 50), (60, 70), (80, 85), (100, 100)],
    )
    def test_default_points(self, rate, expected):
        assert rationale_curve(rate) == pytest.approx(expected)

    def test_forgiving(self):
        for rate in range(0, 101):
            assert rationale_curve(rate) >= rate

    def test_custom_curve(self):
        config = ScoringConfig(rationale={"curve_points": [(0, 0), (100, 100)]})
        assert rationale_curve(37, config) == pytest.approx(37)


class TestComputeRationale:
    def test_no_votes(self):
        result = compute_rationale([])
        assert result.score == 0
        assert result.binding_votes == 0

    def test_info_action_excluded(self):
        votes = [
            _vote("a", ptype="InfoAction"),
            _vote("b", ptype="ParameterChange", text=GOOD),
        ]
        result = compute_rationale(votes)
        assert result.binding_votes == 1
        assert result.weighted_rate == pytest.approx(100.0)
        assert result.score == 100

    def test_only_info_actions_scores_zero(self):
        result = compute_rationale([_vote("a", ptype="InfoAction", text=GOOD)])
        assert result.binding_votes == 0
        assert result.score == 0

    def test_importance_weighting(self):
        votes = [
            _vote("a", ptype="HardForkInitiation", text=GOOD),  # 3, explained
            _vote("b", ptype="ParameterChange"),                 # 2
            _vote("c", ptype="TreasuryWithdrawals"),             # 1 (no amount)
        ]
        result = compute_rationale(votes)
        assert result.weighted_rate == pytest.approx(50.0)
        # curve(50) = 30 + (50 - 20) * 40/40 = 60
        assert result.score == 60
        assert result.critical_missing == 0
        assert result.missing_rationale == 2

    def test_critical_missing_counted(self):
        votes = [_vote("a", ptype="NoConfidence"), _vote("b", ptype="NewConstitution")]
        assert compute_rationale(votes).critical_missing == 2

    def test_assume_rationale(self):
        votes = [_vote("a", ptype="NoConfidence"), _vote("b", ptype="ParameterChange")]
        result = compute_rationale(votes, assume_rationale={"a#0"})
        assert result.weighted_rate == pytest.approx(60.0)
        assert result.score == 70

    def test_twenty_percent_curves_to_thirty(self):
        votes = [_vote("a", text=GOOD, ptype=None)] + [
            _vote(f"b{i}", ptype=None) for i in range(4)
        ]
        result = compute_rationale(votes)
        assert result.weighted_rate == pytest.approx(20.0)
        assert result.score == 30


class TestMissingRationaleVotes:
    def test_critical_only(self):
        votes = [
            _vote("a", ptype="NoConfidence"),
            _vote("b", ptype="ParameterChange"),
            _vote("c", ptype="InfoAction"),
        ]
        assert [v.proposal_tx_hash for v in missing_rationale_votes(votes)] == ["a", "b"]
        critical = missing_rationale_votes(votes, critical_only=True)
        assert [v.proposal_tx_hash for v in critical] == ["a"]
