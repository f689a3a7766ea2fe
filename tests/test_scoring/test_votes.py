"""Tests for vote helpers — re-vote collapsing and direction distribution."""

from __future__ import annotations

import pytest

from drep_scoring.models.vote import VoteRecord
from drep_scoring.scoring.votes import dominant_share, effective_votes, vote_distribution
from drep_scoring.taxonomy.governance_taxonomy import VoteChoice


def _vote(tx: str, choice: str = "Yes", epoch: int = 100, index: int = 0) -> VoteRecord:
    return VoteRecord(proposal_tx_hash=tx, proposal_index=index, vote=choice, epoch=epoch)


class TestEffectiveVotes:
    def test_distinct_votes_unchanged(self):
        votes = [_vote("a"), _vote("b"), _vote("c")]
        assert effective_votes(votes) == votes

    def test_later_epoch_wins(self):
        votes = [_vote("a", "No", epoch=102), _vote("a", "Yes", epoch=100)]
        result = effective_votes(votes)
        assert len(result) == 1
        assert result[0].vote == VoteChoice.NO

    def test_same_epoch_later_position_wins(self):
        votes = [_vote("a", "Yes"), _vote("a", "Abstain")]
        assert effective_votes(votes)[0].vote == VoteChoice.ABSTAIN

    def test_index_distinguishes_proposals(self):
        votes = [_vote("a", index=0), _vote("a", index=1)]
        assert len(effective_votes(votes)) == 2

    def test_first_seen_order_kept(self):
        votes = [_vote("a"), _vote("b"), _vote("a", "No", epoch=101)]
        assert [v.proposal_tx_hash for v in effective_votes(votes)] == ["a", "b"]

    def test_empty(self):
        assert effective_votes([]) == []


class TestDistribution:
    def test_all_choices_present(self):
        dist = vote_distribution([_vote("a")])
        assert dist == {VoteChoice.YES: 1, VoteChoice.NO: 0, VoteChoice.ABSTAIN: 0}

    def test_dominant_share(self):
        votes = [_vote("a"), _vote("b"), _vote("c", "No"), _vote("d", "Abstain")]
        assert dominant_share(votes) == pytest.approx(0.5)

    def test_dominant_share_empty(self):
        assert dominant_share([]) == 0.0
