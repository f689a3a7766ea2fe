"""
Scoring engine: one ``DRepScoringInput`` in, one ``DRepScoreResult`` out.

Flow
----
1. Contract checks (eligible count, current epoch, vote epochs).
2. Collapse re-votes to one effective vote per proposal.
3. Four pillars, computed independently.  Participation and rationale use the
   effective votes; reliability uses every ballot, superseded ones included.
4. Composite score.
5. Recommendations (ranked) and, when a previous snapshot is supplied, the
   score delta.

The engine is a pure function of its input and ``ScoringConfig``: it does
no I/O and never reads the clock.  ``score_many()`` scores each DRep
independently, in input order.
"""

from __future__ import annotations

import logging
from typing import Iterable

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import DRepScoreResult, DRepScoringInput, PillarScores
from drep_scoring.recommendations.generator import generate_recommendations
from drep_scoring.scoring.composite import compute_composite, compute_score_delta
from drep_scoring.scoring.contracts import check_eligible_proposals, check_vote_epochs
from drep_scoring.scoring.participation import compute_participation
from drep_scoring.scoring.profile import compute_profile
from drep_scoring.scoring.rationale import compute_rationale
from drep_scoring.scoring.reliability import compute_reliability
from drep_scoring.scoring.votes import effective_votes

logger = logging.getLogger(__name__)


def score_drep(
    scoring_input: DRepScoringInput,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> DRepScoreResult:
    """Score one DRep.

    Args:
        scoring_input: Votes, eligible count, profile and current epoch.
        config:        Scoring configuration (defaults to the product weights).

    Returns:
        Complete, frozen ``DRepScoreResult``.

    Raises:
        ScoringInputError: On a negative eligible count or current epoch, or
            a vote later than the current epoch.
    """
    check_eligible_proposals(scoring_input.eligible_proposals)
    check_vote_epochs(scoring_input.votes, scoring_input.current_epoch)

    votes = effective_votes(scoring_input.votes)

    participation = compute_participation(votes, scoring_input.eligible_proposals, config)
    rationale = compute_rationale(votes, config)
    reliability = compute_reliability(
        scoring_input.votes,
        scoring_input.current_epoch,
        scoring_input.proposal_epochs,
        config,
    )
    profile = compute_profile(scoring_input.profile, scoring_input.broken_uris, config)

    pillars = PillarScores(
        participation=participation.score,
        rationale=rationale.score,
        reliability=reliability.score,
        profile=profile.score,
    )
    score = compute_composite(pillars, config)

    recommendations = generate_recommendations(
        pillars, participation, rationale, reliability, profile, votes, config
    )

    result = DRepScoreResult(
        drep_id=scoring_input.drep_id,
        current_epoch=scoring_input.current_epoch,
        scoring_version=config.version,
        score=score,
        pillars=pillars,
        participation=participation,
        rationale=rationale,
        reliability=reliability,
        profile=profile,
        recommendations=tuple(recommendations),
    )

    if scoring_input.previous is not None:
        delta = compute_score_delta(scoring_input.previous, result.to_snapshot(), config)
        result = result.model_copy(update={"delta": delta})

    logger.debug(
        "Scored %s at epoch %d: %d (P=%d R=%d L=%d F=%d, %d recommendations)",
        scoring_input.drep_id,
        scoring_input.current_epoch,
        score,
        pillars.participation,
        pillars.rationale,
        pillars.reliability,
        pillars.profile,
        len(recommendations),
        extra={
            "drep_id": scoring_input.drep_id,
            "score": score,
            "scoring_version": config.version,
        },
    )
    return result


def score_many(
    inputs: Iterable[DRepScoringInput],
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[DRepScoreResult]:
    """Score several DReps independently, preserving input order."""
    results = [score_drep(scoring_input, config) for scoring_input in inputs]
    logger.info("Scored %d DRep(s) with scoring version %s", len(results), config.version)
    return results
