"""Tests for scoring contracts — half-up rounding, clamping, interpolation, input checks."""

from __future__ import annotations

import math

import pytest

from drep_scoring.models.vote import VoteRecord
from drep_scoring.scoring.contracts import (
    ScoringInputError,
    check_current_epoch,
    check_eligible_proposals,
    check_vote_epochs,
    clamp,
    interpolate,
    round_half_up,
    to_percentage,
)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        "value, expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (12.5, 13), (12.4999, 12), (0.0, 0), (99.5, 100)],
    )
    def test_halves_round_up(self, value, expected):
        assert round_half_up(value) == expected

    def test_differs_from_builtin_round(self):
        assert round(2.5) == 2
        assert round_half_up(2.5) == 3

    def test_weighted_sum_float_noise(self):
        # 30 * 0.35 is not exactly representable
        assert round_half_up(30 * 0.35) == 11


class TestToPercentage:
    def test_clamps_high(self):
        assert to_percentage(140.2) == 100

    def test_clamps_low(self):
        assert to_percentage(-3.0) == 0

    def test_nan_is_zero(self):
        assert to_percentage(math.nan) == 0

    def test_returns_int(self):
        assert isinstance(to_percentage(42.6), int)
        assert to_percentage(42.6) == 43

    def test_clamp(self):
        assert clamp(5, 0, 3) == 3
        assert clamp(-5) == 0.0


class TestInterpolate:
    POINTS = [(0, 0), (20, 30), (60, 70), (100, 100)]

    def test_on_breakpoints(self):
        assert interpolate(self.POINTS, 20) == pytest.approx(30)
        assert interpolate(self.POINTS, 60) == pytest.approx(70)

    def test_between_breakpoints(self):
        assert interpolate(self.POINTS, 40) == pytest.approx(50)
        assert interpolate(self.POINTS, 80) == pytest.approx(85)

    def test_outside_range_is_flat(self):
        assert interpolate(self.POINTS, -10) == 0
        assert interpolate(self.POINTS, 150) == 100


class TestInputChecks:
    def test_negative_eligible_raises(self):
        with pytest.raises(ScoringInputError, match="eligible_proposals"):
            check_eligible_proposals(-1)

    def test_zero_eligible_ok(self):
        check_eligible_proposals(0)

    def test_negative_epoch_raises(self):
        with pytest.raises(ScoringInputError):
            check_current_epoch(-1)

    def test_future_vote_raises(self):
        vote = VoteRecord(proposal_tx_hash="aa", proposal_index=0, vote="Yes", epoch=11)
        with pytest.raises(ScoringInputError, match="after current epoch 10"):
            check_vote_epochs([vote], 10)

    def test_vote_in_current_epoch_ok(self):
        vote = VoteRecord(proposal_tx_hash="aa", proposal_index=0, vote="Yes", epoch=10)
        check_vote_epochs([vote], 10)

    def test_is_value_error(self):
        assert issubclass(ScoringInputError, ValueError)
