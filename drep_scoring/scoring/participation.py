"""
Effective Participation pillar.

    raw_rate  = distinct proposals voted / eligible proposals  (percent, <= 100)
    share     = fraction of votes in the most common direction
    modifier  = Deliberation Modifier(share)
    effective = round_half_up(raw_rate * modifier)

Deliberation Modifier (default breakpoints, linear in between)::

    share <= 0.85  ->  1.00
    share  = 0.90  ->  0.85
    share >= 0.95  ->  0.70

A DRep who votes on everything but always the same way is rubber-stamping;
the modifier caps such a record at 70.  Zero votes leave the modifier at 1.00.
"""

from __future__ import annotations

from typing import Sequence

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import ParticipationBreakdown
from drep_scoring.models.vote import VoteRecord
from drep_scoring.scoring.contracts import (
    check_eligible_proposals,
    interpolate,
    to_percentage,
)
from drep_scoring.scoring.votes import dominant_share, effective_votes


def deliberation_modifier(
    share: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Multiplier for a dominant-direction ``share`` in [0, 1]."""
    return interpolate(config.deliberation.breakpoints, share)


def raw_participation_rate(votes_cast: int, eligible_proposals: int) -> float:
    """Participation percentage, capped at 100; 0 when nothing was eligible."""
    check_eligible_proposals(eligible_proposals)
    if eligible_proposals == 0:
        return 0.0
    return min(100.0, votes_cast / eligible_proposals * 100.0)


def compute_participation(
    votes: Sequence[VoteRecord],
    eligible_proposals: int,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ParticipationBreakdown:
    """Compute the Effective Participation pillar.

    Args:
        votes:              Votes in chain order; re-votes are collapsed.
        eligible_proposals: Proposals open to vote in the observed window.
        config:             Scoring configuration.

    Returns:
        ParticipationBreakdown with the pillar value in ``score``.

    Raises:
        ScoringInputError: If ``eligible_proposals`` is negative.
    """
    check_eligible_proposals(eligible_proposals)
    distinct = effective_votes(votes)
    votes_cast = len(distinct)

    raw_rate = raw_participation_rate(votes_cast, eligible_proposals)
    share = dominant_share(distinct)
    modifier = deliberation_modifier(share, config) if distinct else 1.0

    return ParticipationBreakdown(
        votes_cast=votes_cast,
        eligible_proposals=eligible_proposals,
        raw_rate=raw_rate,
        dominant_share=share,
        deliberation_modifier=modifier,
        score=to_percentage(raw_rate * modifier),
    )
