"""
Reliability pillar: is this DRep consistently present?

Four sub-scores, each 0–100, weighted by ``ScoringConfig.reliability_weights``:

    streak   (35%) : most recent unbroken run of relevant epochs with a vote,
                     min(streak / 10, 1) * 100
    recency  (30%) : relevant epochs elapsed since the last vote,
                     100 * 0.5 ** (elapsed / 4)
    gap      (20%) : longest run of relevant epochs without a vote between the
                     first vote and now, max(0, 1 - gap / 12) * 100
    tenure   (15%) : epochs since the first vote on a log curve,
                     min(1, ln(1 + tenure) / ln(1 + 36)) * 100

Relevant epochs
---------------
Only epochs that had something to vote on can break a streak.  When the
caller supplies ``proposal_epochs`` those are the relevant epochs (plus every
epoch with a vote); otherwise every epoch from the first vote onwards is
relevant.  The current epoch is still in progress, so it only counts once the
DRep has voted in it.
"""

from __future__ import annotations

import math
from typing import AbstractSet, Optional, Sequence

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import ReliabilityBreakdown
from drep_scoring.models.vote import VoteRecord
from drep_scoring.scoring.contracts import check_vote_epochs, to_percentage

_NO_VOTES_HINT = "No votes cast yet"


def relevant_epochs(
    voted_epochs: AbstractSet[int],
    current_epoch: int,
    proposal_epochs: Optional[AbstractSet[int]] = None,
) -> list[int]:
    """Sorted relevant epochs from the first vote up to ``current_epoch``."""
    if not voted_epochs:
        return []
    first = min(voted_epochs)
    epochs = {
        epoch
        for epoch in range(first, current_epoch + 1)
        if proposal_epochs is None or epoch in proposal_epochs
    }
    epochs |= set(voted_epochs)
    if current_epoch not in voted_epochs:
        epochs.discard(current_epoch)
    return sorted(epochs)


def active_streak(epochs: Sequence[int], voted_epochs: AbstractSet[int]) -> int:
    """Length of the unbroken voting run ending at the latest relevant epoch."""
    streak = 0
    for epoch in reversed(epochs):
        if epoch not in voted_epochs:
            break
        streak += 1
    return streak


def longest_gap(epochs: Sequence[int], voted_epochs: AbstractSet[int]) -> int:
    """Longest run of consecutive relevant epochs without a vote."""
    longest = current = 0
    for epoch in epochs:
        if epoch in voted_epochs:
            current = 0
        else:
            current += 1
            longest = max(longest, current)
    return longest


def reliability_hint(streak: int, recency: Optional[int]) -> str:
    """Short human-readable summary of the voting record."""
    if recency is None:
        return _NO_VOTES_HINT
    if recency > 5:
        return f"Last voted {recency} epoch{'s' if recency != 1 else ''} ago"
    if streak >= 3:
        return f"{streak}-epoch active streak"
    if recency == 0:
        return "Voted in the latest epoch"
    return f"Last voted {recency} epoch{'s' if recency != 1 else ''} ago"


def compute_reliability(
    votes: Sequence[VoteRecord],
    current_epoch: int,
    proposal_epochs: Optional[AbstractSet[int]] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ReliabilityBreakdown:
    """Compute the Reliability pillar.

    Args:
        votes:           Votes (epochs are what matter here).
        current_epoch:   Epoch treated as "now".
        proposal_epochs: Epochs with at least one eligible proposal, or
                         ``None`` to treat every epoch as relevant.
        config:          Scoring configuration.

    Returns:
        ReliabilityBreakdown with the weighted pillar value in ``score``.

    Raises:
        ScoringInputError: If ``current_epoch`` is negative or any vote is
            later than it.
    """
    check_vote_epochs(votes, current_epoch)

    voted = {vote.epoch for vote in votes}
    if not voted:
        return ReliabilityBreakdown(
            streak=0,
            recency=None,
            longest_gap=0,
            tenure=0,
            streak_score=0.0,
            recency_score=0.0,
            gap_score=0.0,
            tenure_score=0.0,
            score=0,
            hint=_NO_VOTES_HINT,
        )

    params = config.reliability
    weights = config.reliability_weights
    epochs = relevant_epochs(voted, current_epoch, proposal_epochs)

    streak = active_streak(epochs, voted)
    last_vote = max(voted)
    recency = sum(1 for epoch in epochs if epoch > last_vote)
    gap = longest_gap(epochs, voted)
    tenure = current_epoch - min(voted)

    streak_score = min(streak / params.streak_cap_epochs, 1.0) * 100.0
    recency_score = 100.0 * 0.5 ** (recency / params.recency_half_life_epochs)
    gap_score = max(0.0, 1.0 - gap / params.gap_ceiling_epochs) * 100.0
    tenure_score = (
        min(1.0, math.log1p(tenure) / math.log1p(params.tenure_cap_epochs)) * 100.0
    )

    total = (
        streak_score    * weights.streak
        + recency_score * weights.recency
        + gap_score     * weights.gap
        + tenure_score  * weights.tenure
    )

    return ReliabilityBreakdown(
        streak=streak,
        recency=recency,
        longest_gap=gap,
        tenure=tenure,
        streak_score=round(streak_score, 2),
        recency_score=round(recency_score, 2),
        gap_score=round(gap_score, 2),
        tenure_score=round(tenure_score, 2),
        score=to_percentage(total),
        hint=reliability_hint(streak, recency),
    )
