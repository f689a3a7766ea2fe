"""
Rationale Quality pillar.

    weighted_rate = sum(w_i * has_i) / sum(w_i) * 100
    score         = curve(weighted_rate)

``w_i`` is the importance weight of the proposal (critical 3, important 2,
standard 1).  InfoAction votes are exempt and appear in neither sum.

A vote *has rationale* when:
  - its resolved text, whitespace-stripped, is at least ``min_length`` (50)
    characters; otherwise
  - with no text, a recorded ``rationale_length`` of at least ``min_length``;
    otherwise
  - with neither, an attached rationale anchor (``rationale_url`` or
    ``has_rationale``) when ``trust_unresolved_url`` is enabled.

The curve is the piecewise-linear ``RationaleConfig.curve_points``; with the
defaults (0,0) (20,30) (60,70) (100,100) a DRep who explains a fifth of their
weighted votes already scores 30.
"""

from __future__ import annotations

from typing import AbstractSet, Sequence

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import RationaleBreakdown
from drep_scoring.models.vote import VoteRecord
from drep_scoring.scoring.classifier import classify_vote
from drep_scoring.scoring.contracts import clamp, interpolate, to_percentage
from drep_scoring.scoring.votes import effective_votes


def has_qualifying_rationale(
    vote: VoteRecord,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> bool:
    """Return ``True`` if ``vote`` carries a rationale that counts."""
    min_length = config.rationale.min_length
    if vote.rationale_text is not None:
        return len(vote.rationale_text.strip()) >= min_length
    if vote.rationale_length is not None:
        return vote.rationale_length >= min_length
    if vote.has_rationale or vote.rationale_url:
        return config.rationale.trust_unresolved_url
    return False


def rationale_curve(
    weighted_rate: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> float:
    """Map a weighted rate (0–100) through the forgiving curve."""
    return interpolate(config.rationale.curve_points, clamp(weighted_rate))


def binding_votes(
    votes: Sequence[VoteRecord],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[VoteRecord]:
    """Distinct votes that enter rationale accounting (non-exempt)."""
    return [v for v in effective_votes(votes) if not classify_vote(v, config).exempt]


def missing_rationale_votes(
    votes: Sequence[VoteRecord],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    critical_only: bool = False,
) -> list[VoteRecord]:
    """Binding votes without a qualifying rationale, in vote order."""
    missing = []
    for vote in binding_votes(votes, config):
        if has_qualifying_rationale(vote, config):
            continue
        if critical_only and not classify_vote(vote, config).is_critical:
            continue
        missing.append(vote)
    return missing


def compute_rationale(
    votes: Sequence[VoteRecord],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    assume_rationale: AbstractSet[str] = frozenset(),
) -> RationaleBreakdown:
    """Compute the Rationale Quality pillar.

    Args:
        votes:            Votes in chain order; re-votes are collapsed.
        config:           Scoring configuration.
        assume_rationale: Proposal keys to treat as explained.  Used by the
                          recommendation generator to simulate gains.

    Returns:
        RationaleBreakdown with the curved pillar value in ``score``.
    """
    total_weight = 0
    explained_weight = 0
    with_rationale = 0
    critical_missing = 0

    counted = binding_votes(votes, config)
    for vote in counted:
        importance = classify_vote(vote, config)
        total_weight += importance.weight
        if vote.proposal_key in assume_rationale or has_qualifying_rationale(vote, config):
            explained_weight += importance.weight
            with_rationale += 1
        elif importance.is_critical:
            critical_missing += 1

    weighted_rate = explained_weight / total_weight * 100.0 if total_weight else 0.0

    return RationaleBreakdown(
        binding_votes=len(counted),
        with_rationale=with_rationale,
        missing_rationale=len(counted) - with_rationale,
        critical_missing=critical_missing,
        weighted_rate=weighted_rate,
        score=to_percentage(rationale_curve(weighted_rate, config)),
    )
