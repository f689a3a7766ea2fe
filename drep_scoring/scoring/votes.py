"""
Vote-sequence helpers.

A DRep may vote on the same governance action more than once; the ledger
keeps only the latest ballot.  ``effective_votes()`` applies that rule so
every pillar sees one vote per proposal.
"""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from drep_scoring.models.vote import VoteRecord
from drep_scoring.taxonomy.governance_taxonomy import VoteChoice


def effective_votes(votes: Sequence[VoteRecord]) -> list[VoteRecord]:
    """Return one vote per proposal, keeping the latest.

    The latest vote is the one with the highest epoch; on equal epochs the
    one appearing later in ``votes`` wins.  Output keeps the order in which
    each proposal was first seen.
    """
    latest: dict[str, VoteRecord] = {}
    for vote in votes:
        key = vote.proposal_key
        existing = latest.get(key)
        if existing is None or vote.epoch >= existing.epoch:
            latest[key] = vote
    return list(latest.values())


def vote_distribution(votes: Sequence[VoteRecord]) -> dict[VoteChoice, int]:
    """Count of votes per choice; every choice is present (possibly 0)."""
    counts = Counter(vote.vote for vote in votes)
    return {choice: counts.get(choice, 0) for choice in VoteChoice}


def dominant_share(votes: Sequence[VoteRecord]) -> float:
    """Fraction of votes cast in the most common direction (0.0 if none)."""
    if not votes:
        return 0.0
    counts = vote_distribution(votes)
    return max(counts.values()) / len(votes)
