"""
Scoring input and output models.

Input
-----
``DRepScoringInput`` bundles everything the engine needs for one DRep: the
vote sequence, the eligible-proposal count, the profile, the caller-supplied
current epoch and (optionally) the relevant epochs, known-broken link URIs
and the previous ``ScoreSnapshot`` to diff against.

Output
------
``DRepScoreResult`` is the stable output contract consumed by persistence,
presentation and notification layers:

    score            int 0–100
    pillars          PillarScores (four ints 0–100)
    participation    ParticipationBreakdown
    rationale        RationaleBreakdown
    reliability      ReliabilityBreakdown
    profile          ProfileBreakdown
    recommendations  tuple[Recommendation, ...]  (ranked)
    delta            ScoreDelta | None

All models are frozen; a result is recreated on every invocation and never
mutated afterwards.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from drep_scoring.models.profile import ProfileMetadata
from drep_scoring.models.vote import VoteRecord
from drep_scoring.taxonomy.governance_taxonomy import Pillar, Priority


def _validate_percentage(v: int) -> int:
    if not 0 <= v <= 100:
        raise ValueError(f"Pillar and composite scores must be in [0, 100], got {v}.")
    return v


class PillarScores(BaseModel):
    """The four pillar percentages (integers in [0, 100])."""

    model_config = ConfigDict(frozen=True)

    participation: int
    rationale: int
    reliability: int
    profile: int

    @field_validator("participation", "rationale", "reliability", "profile")
    @classmethod
    def validate_range(cls, v: int) -> int:
        return _validate_percentage(v)

    def value_of(self, pillar: str) -> int:
        """Return the score of ``pillar`` (a ``Pillar`` value)."""
        return int(getattr(self, str(pillar)))


class ParticipationBreakdown(BaseModel):
    """Effective Participation details.

    Attributes:
        votes_cast: Distinct proposals voted on.
        eligible_proposals: Proposals open to vote in the window.
        raw_rate: Participation percentage before the modifier (0–100).
        dominant_share: Fraction of votes in the most common direction (0–1).
        deliberation_modifier: Multiplier applied to ``raw_rate`` (0.70–1.00).
        score: Effective participation pillar value.
    """

    model_config = ConfigDict(frozen=True)

    votes_cast: int
    eligible_proposals: int
    raw_rate: float
    dominant_share: float
    deliberation_modifier: float
    score: int


class RationaleBreakdown(BaseModel):
    """Rationale Quality details.

    Attributes:
        binding_votes: Votes counted (exempt types excluded).
        with_rationale: Binding votes carrying a qualifying rationale.
        missing_rationale: Binding votes without one.
        critical_missing: Of those, votes on critical proposals.
        weighted_rate: Importance-weighted rationale rate, before the curve.
        score: Curved pillar value.
    """

    model_config = ConfigDict(frozen=True)

    binding_votes: int
    with_rationale: int
    missing_rationale: int
    critical_missing: int
    weighted_rate: float
    score: int


class ReliabilityBreakdown(BaseModel):
    """Reliability raw measures (epochs) and weighted sub-scores (0–100)."""

    model_config = ConfigDict(frozen=True)

    streak: int
    recency: Optional[int]
    longest_gap: int
    tenure: int
    streak_score: float
    recency_score: float
    gap_score: float
    tenure_score: float
    score: int
    hint: str


class ProfileBreakdown(BaseModel):
    """Profile Completeness details.

    Attributes:
        present_fields: Checklist fields that earned points.
        missing_fields: Checklist fields that did not.
        valid_references: De-duplicated reference URIs that passed validation.
        invalid_references: Declared URIs that failed validation.
        score: Pillar value.
    """

    model_config = ConfigDict(frozen=True)

    present_fields: tuple[str, ...]
    missing_fields: tuple[str, ...]
    valid_references: tuple[str, ...]
    invalid_references: tuple[str, ...]
    score: int


class Recommendation(BaseModel):
    """An improvement action with a conservative point-gain estimate."""

    model_config = ConfigDict(frozen=True)

    pillar: Pillar
    priority: Priority
    title: str
    description: str
    potential_gain: int = Field(ge=0)


class ScoreSnapshot(BaseModel):
    """A previously published score, supplied by the caller for diffing."""

    model_config = ConfigDict(frozen=True)

    score: int
    pillars: PillarScores
    scoring_version: Optional[str] = None
    epoch: Optional[int] = None

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        return _validate_percentage(v)


class ScoreDelta(BaseModel):
    """Change between a previous snapshot and the current result.

    ``comparable`` is ``False`` when the snapshot was produced under a
    different scoring version; the numeric deltas are still reported.
    """

    model_config = ConfigDict(frozen=True)

    score: int
    participation: int
    rationale: int
    reliability: int
    profile: int
    comparable: bool
    significant: bool


class DRepScoringInput(BaseModel):
    """Immutable input snapshot for one DRep.

    Attributes:
        drep_id: DRep identifier (bech32 ``drep1...`` or hex).
        votes: Votes in chain order.
        eligible_proposals: Proposals open to vote in the observed window.
        current_epoch: Epoch treated as "now"; never read from a clock.
        profile: Declared metadata, or ``None``.
        proposal_epochs: Epochs with at least one eligible proposal; ``None``
            treats every epoch as relevant.
        broken_uris: Reference URIs known to be dead (from a link checker).
        previous: Previous snapshot to diff against, or ``None``.
    """

    model_config = ConfigDict(frozen=True)

    drep_id: str
    votes: tuple[VoteRecord, ...] = ()
    eligible_proposals: int = 0
    current_epoch: int
    profile: Optional[ProfileMetadata] = None
    proposal_epochs: Optional[frozenset[int]] = None
    broken_uris: frozenset[str] = frozenset()
    previous: Optional[ScoreSnapshot] = None


class DRepScoreResult(BaseModel):
    """Complete scoring output for one DRep."""

    model_config = ConfigDict(frozen=True)

    drep_id: str
    current_epoch: int
    scoring_version: str
    score: int
    pillars: PillarScores
    participation: ParticipationBreakdown
    rationale: RationaleBreakdown
    reliability: ReliabilityBreakdown
    profile: ProfileBreakdown
    recommendations: tuple[Recommendation, ...] = ()
    delta: Optional[ScoreDelta] = None

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: int) -> int:
        return _validate_percentage(v)

    def to_snapshot(self) -> ScoreSnapshot:
        """Return the ``ScoreSnapshot`` a storage layer would persist."""
        return ScoreSnapshot(
            score=self.score,
            pillars=self.pillars,
            scoring_version=self.scoring_version,
            epoch=self.current_epoch,
        )
