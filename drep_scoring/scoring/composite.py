"""
Composite aggregator.

    score = round_half_up(P * 0.30 + R * 0.35 + L * 0.20 + F * 0.15)

P, R, L, F are the Participation, Rationale, Reliability and Profile pillar
values; weights come from ``ScoringConfig.pillar_weights``.  The result is an
integer clamped to [0, 100].

Also here:
  pillar_status()       strong (>= 80) / needs-work (>= 50) / low
  compute_score_delta() per-pillar and composite change against a snapshot
"""

from __future__ import annotations

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import PillarScores, ScoreDelta, ScoreSnapshot
from drep_scoring.scoring.contracts import to_percentage
from drep_scoring.taxonomy.governance_taxonomy import Pillar, PillarStatus

_STRONG_AT = 80
_NEEDS_WORK_AT = 50


def compute_composite(
    pillars: PillarScores,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    """Weighted composite score in [0, 100]."""
    weights = config.pillar_weights
    total = sum(
        pillars.value_of(pillar) * weights.for_pillar(pillar) for pillar in Pillar
    )
    return to_percentage(total)


def pillar_status(value: int) -> PillarStatus:
    """Traffic-light status of a pillar (or composite) value."""
    if value >= _STRONG_AT:
        return PillarStatus.STRONG
    if value >= _NEEDS_WORK_AT:
        return PillarStatus.NEEDS_WORK
    return PillarStatus.LOW


def compute_score_delta(
    previous: ScoreSnapshot,
    current: ScoreSnapshot,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ScoreDelta:
    """Difference ``current - previous`` for the composite and each pillar.

    A snapshot without a ``scoring_version`` predates versioning and is taken
    to share the current version.

    Args:
        previous: Caller-supplied earlier snapshot.
        current:  Snapshot of the result just computed.
        config:   Scoring configuration (``significant_delta`` threshold).

    Returns:
        ScoreDelta; ``comparable`` is ``False`` across scoring versions.
    """
    comparable = (
        previous.scoring_version is None
        or current.scoring_version is None
        or previous.scoring_version == current.scoring_version
    )
    score_delta = current.score - previous.score
    return ScoreDelta(
        score=score_delta,
        participation=current.pillars.participation - previous.pillars.participation,
        rationale=current.pillars.rationale - previous.pillars.rationale,
        reliability=current.pillars.reliability - previous.pillars.reliability,
        profile=current.pillars.profile - previous.pillars.profile,
        comparable=comparable,
        significant=abs(score_delta) >= config.significant_delta,
    )
