"""
Recommendation generator: rules per pillar below its threshold, plus a
link-repair rule whenever a profile reference is invalid.

Rules (thresholds and caps from ``ScoringConfig.recommendations``)
------------------------------------------------------------------
Profile < 100
    "Complete your DRep profile" — missing checklist fields, their points
    (capped at the remaining headroom) x profile weight.
    Priority high below 50, else medium.

Any invalid profile reference
    "Fix your profile links" — names every invalid link.  With no valid link
    left: social-reference points x profile weight, high priority.  With a
    valid link left: gain 0, medium priority.

Rationale < 60
    a) "Explain your votes on critical proposals" — binding critical votes
       without rationale; gain = simulated rationale pillar gain x weight,
       capped at 8.  Always high priority.
    b) "Publish rationales for your votes" — the remaining backlog; same
       simulation, capped at 6.  High below 30, else medium.

Participation < 80
    a) "Vote on more proposals" — when eligible proposals remain unvoted;
       gain = min(raw headroom x modifier, points to threshold) x weight,
       capped at 10.  High below 50, else medium.
    b) "Diversify your voting pattern" — when the Deliberation Modifier is
       below 1.0; gain = (published raw rate - pillar value) x weight.
       Low priority.

Reliability < 70
    "Vote every epoch" — floor(streak sub-score headroom x streak sub-weight)
    x reliability weight, capped at 6.  High below 50, else medium.

Gains weight a whole-point pillar delta and go through ``ranker.cap_gain()``;
output is ranked by ``ranker.rank_recommendations()``.
"""

from __future__ import annotations

from typing import Sequence

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import (
    ParticipationBreakdown,
    PillarScores,
    ProfileBreakdown,
    RationaleBreakdown,
    Recommendation,
    ReliabilityBreakdown,
)
from drep_scoring.models.vote import VoteRecord
from drep_scoring.recommendations.ranker import (
    cap_gain,
    floor_points,
    rank_recommendations,
)
from drep_scoring.scoring.classifier import classify_vote
from drep_scoring.scoring.contracts import to_percentage
from drep_scoring.scoring.profile import FIELD_LABELS, SOCIAL_REFERENCE_FIELD
from drep_scoring.scoring.rationale import compute_rationale, missing_rationale_votes
from drep_scoring.taxonomy.governance_taxonomy import Pillar, Priority


def generate_recommendations(
    pillars:       PillarScores,
    participation: ParticipationBreakdown,
    rationale:     RationaleBreakdown,
    reliability:   ReliabilityBreakdown,
    profile:       ProfileBreakdown,
    votes:         Sequence[VoteRecord],
    config:        ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> list[Recommendation]:
    """Build the ranked recommendation list for one DRep.

    Args:
        pillars:       Pillar values of the current result.
        participation: Participation breakdown.
        rationale:     Rationale breakdown.
        reliability:   Reliability breakdown.
        profile:       Profile breakdown.
        votes:         The DRep's votes (used to simulate rationale gains
                       and to name the proposals concerned).
        config:        Scoring configuration.

    Returns:
        Recommendations ranked by gain, then priority.  Empty when every
        pillar meets its threshold.
    """
    recs: list[Recommendation] = []
    recs.extend(_profile_recommendations(pillars.profile, profile, config))
    recs.extend(_reference_recommendations(pillars.profile, profile, config))
    recs.extend(_rationale_recommendations(pillars.rationale, rationale, votes, config))
    recs.extend(_participation_recommendations(pillars.participation, participation, config))
    recs.extend(_reliability_recommendations(pillars.reliability, reliability, config))
    return rank_recommendations(recs)


# ── Per-pillar rules ──────────────────────────────────────────────────────────


def _profile_recommendations(
    value: int,
    breakdown: ProfileBreakdown,
    config: ScoringConfig,
) -> list[Recommendation]:
    thresholds = config.recommendations
    if value >= thresholds.profile_threshold or not breakdown.missing_fields:
        return []

    points = config.profile.points()
    missing_points = min(
        sum(points[field] for field in breakdown.missing_fields), 100 - value
    )
    labels = [FIELD_LABELS.get(field, field) for field in breakdown.missing_fields]
    description = f"Add your {_join(labels)} to your DRep metadata."

    return [
        Recommendation(
            pillar=Pillar.PROFILE,
            priority=_priority(value, thresholds.high_priority_below),
            title="Complete your DRep profile",
            description=description,
            potential_gain=cap_gain(
                missing_points * config.pillar_weights.profile,
                Pillar.PROFILE,
                config=config,
            ),
        )
    ]


def _reference_recommendations(
    value: int,
    breakdown: ProfileBreakdown,
    config: ScoringConfig,
) -> list[Recommendation]:
    invalid = breakdown.invalid_references
    if not invalid:
        return []

    if breakdown.valid_references:
        priority = Priority.MEDIUM
        points = 0
        consequence = "Your other links already count toward your profile score."
    else:
        priority = Priority.HIGH
        points = min(config.profile.points()[SOCIAL_REFERENCE_FIELD], 100 - value)
        consequence = "Until one of them works, your profile earns no points for links."

    return [
        Recommendation(
            pillar=Pillar.PROFILE,
            priority=priority,
            title="Fix your profile links",
            description=(
                f"{_count(len(invalid), 'link')} could not be verified: "
                f"{', '.join(invalid)}. {consequence}"
            ),
            potential_gain=cap_gain(
                points * config.pillar_weights.profile,
                Pillar.PROFILE,
                config=config,
            ),
        )
    ]


def _rationale_recommendations(
    value: int,
    breakdown: RationaleBreakdown,
    votes: Sequence[VoteRecord],
    config: ScoringConfig,
) -> list[Recommendation]:
    thresholds = config.recommendations
    if value >= thresholds.rationale_threshold or breakdown.missing_rationale == 0:
        return []

    weight = config.pillar_weights.rationale
    missing = missing_rationale_votes(votes, config)
    critical = [v for v in missing if classify_vote(v, config).is_critical]
    backlog = [v for v in missing if not classify_vote(v, config).is_critical]
    recs: list[Recommendation] = []

    if critical:
        simulated = compute_rationale(
            votes, config, assume_rationale={v.proposal_key for v in critical}
        )
        recs.append(
            Recommendation(
                pillar=Pillar.RATIONALE,
                priority=Priority.HIGH,
                title="Explain your votes on critical proposals",
                description=(
                    f"{_count(len(critical), 'vote')} on critical governance actions "
                    f"{'has' if len(critical) == 1 else 'have'} no rationale: "
                    f"{_titles(critical, thresholds.max_listed_titles)}. "
                    "Critical proposals weigh three times a standard one."
                ),
                potential_gain=cap_gain(
                    (simulated.score - value) * weight,
                    Pillar.RATIONALE,
                    cap=thresholds.critical_rationale_gain_cap,
                    config=config,
                ),
            )
        )

    if backlog:
        simulated = compute_rationale(
            votes, config, assume_rationale={v.proposal_key for v in backlog}
        )
        recs.append(
            Recommendation(
                pillar=Pillar.RATIONALE,
                priority=_priority(value, thresholds.rationale_high_priority_below),
                title="Publish rationales for your votes",
                description=(
                    f"{_count(len(backlog), 'binding vote')} "
                    f"{'lacks' if len(backlog) == 1 else 'lack'} a rationale of at least "
                    f"{config.rationale.min_length} characters. Attach a CIP-100 "
                    "rationale anchor explaining your reasoning."
                ),
                potential_gain=cap_gain(
                    (simulated.score - value) * weight,
                    Pillar.RATIONALE,
                    cap=thresholds.rationale_backlog_gain_cap,
                    config=config,
                ),
            )
        )

    return recs


def _participation_recommendations(
    value: int,
    breakdown: ParticipationBreakdown,
    config: ScoringConfig,
) -> list[Recommendation]:
    thresholds = config.recommendations
    if value >= thresholds.participation_threshold:
        return []

    weight = config.pillar_weights.participation
    modifier = breakdown.deliberation_modifier
    recs: list[Recommendation] = []

    if breakdown.eligible_proposals > 0 and breakdown.votes_cast < breakdown.eligible_proposals:
        headroom = min(
            (100.0 - breakdown.raw_rate) * modifier,
            thresholds.participation_threshold - value,
        )
        unvoted = breakdown.eligible_proposals - breakdown.votes_cast
        recs.append(
            Recommendation(
                pillar=Pillar.PARTICIPATION,
                priority=_priority(value, thresholds.high_priority_below),
                title="Vote on more proposals",
                description=(
                    f"You voted on {breakdown.votes_cast} of "
                    f"{breakdown.eligible_proposals} eligible proposals "
                    f"({breakdown.raw_rate:.0f}%). "
                    f"{_count(unvoted, 'proposal')} went without your vote."
                ),
                potential_gain=cap_gain(
                    headroom * weight,
                    Pillar.PARTICIPATION,
                    cap=thresholds.participation_gain_cap,
                    config=config,
                ),
            )
        )

    if modifier < 1.0:
        recs.append(
            Recommendation(
                pillar=Pillar.PARTICIPATION,
                priority=Priority.LOW,
                title="Diversify your voting pattern",
                description=(
                    f"{breakdown.dominant_share:.0%} of your votes go the same way, "
                    f"which reduces your participation score by {1.0 - modifier:.0%}. "
                    "Weigh each proposal on its merits."
                ),
                potential_gain=cap_gain(
                    (to_percentage(breakdown.raw_rate) - value) * weight,
                    Pillar.PARTICIPATION,
                    config=config,
                ),
            )
        )

    return recs


def _reliability_recommendations(
    value: int,
    breakdown: ReliabilityBreakdown,
    config: ScoringConfig,
) -> list[Recommendation]:
    thresholds = config.recommendations
    if value >= thresholds.reliability_threshold:
        return []

    pillar_gain = floor_points(
        (100.0 - breakdown.streak_score) * config.reliability_weights.streak
    )
    gain = pillar_gain * config.pillar_weights.reliability
    return [
        Recommendation(
            pillar=Pillar.RELIABILITY,
            priority=_priority(value, thresholds.high_priority_below),
            title="Vote every epoch",
            description=(
                f"{breakdown.hint}. Voting in every epoch with open proposals "
                "builds your streak and closes gaps in your record."
            ),
            potential_gain=cap_gain(
                gain,
                Pillar.RELIABILITY,
                cap=thresholds.reliability_gain_cap,
                config=config,
            ),
        )
    ]


# ── Helpers ───────────────────────────────────────────────────────────────────


def _priority(value: int, high_below: int) -> Priority:
    return Priority.HIGH if value < high_below else Priority.MEDIUM


def _count(n: int, noun: str) -> str:
    return f"{n} {noun}{'' if n == 1 else 's'}"


def _join(items: list[str]) -> str:
    if len(items) <= 1:
        return "".join(items)
    return ", ".join(items[:-1]) + " and " + items[-1]


def _titles(votes: Sequence[VoteRecord], limit: int) -> str:
    names = [v.title or v.proposal_key for v in votes[:limit]]
    extra = len(votes) - len(names)
    text = "; ".join(names)
    if extra > 0:
        text += f" (+{extra} more)"
    return text
