"""
Recommendation ranker: gain capping, ordering and the "easiest win".

Gains are conservative lower bounds on composite points.  Every gain is
floored (never rounded up), never negative, at most the recommendation's own
cap and at most the pillar's full weight contribution (weight x 100).  A gain
of 0 means the action does not move the published score by a whole point
on its own.

Ordering
--------
Gain descending; ties broken by priority (high > medium > low); remaining
ties keep emission order (``sorted`` is stable).
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import PillarScores, Recommendation
from drep_scoring.scoring.composite import pillar_status
from drep_scoring.taxonomy.governance_taxonomy import (
    PRIORITY_RANK,
    Pillar,
    PillarStatus,
)


def floor_points(value: float) -> int:
    """Floor ``value`` after snapping float noise (20.999999... -> 21)."""
    return int(math.floor(round(value, 9)))


def cap_gain(
    raw_gain: float,
    pillar: Pillar,
    cap: Optional[int] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> int:
    """Apply the flooring and ceiling rules to an estimated gain.

    Args:
        raw_gain: Estimated composite gain in points (may be fractional).
        pillar:   Pillar the recommendation improves.
        cap:      Per-recommendation cap, or ``None`` for none.
        config:   Scoring configuration (pillar weights).

    Returns:
        Integer gain in ``[0, weight x 100]``.
    """
    ceiling = floor_points(config.pillar_weights.for_pillar(pillar) * 100)
    if cap is not None:
        ceiling = min(ceiling, cap)
    return max(0, min(floor_points(raw_gain), ceiling))


def rank_recommendations(
    recommendations: Sequence[Recommendation],
) -> list[Recommendation]:
    """Sort by gain descending, then priority; stable for remaining ties."""
    return sorted(
        recommendations,
        key=lambda r: (-r.potential_gain, PRIORITY_RANK[r.priority]),
    )


def easiest_win(
    pillars: PillarScores,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> Optional[Pillar]:
    """Pillar with the largest weighted headroom among those not yet strong.

    Returns ``None`` when every pillar is strong.  Ties go to the pillar
    listed first in ``Pillar``.
    """
    best: Optional[Pillar] = None
    best_headroom = 0.0
    for pillar in Pillar:
        value = pillars.value_of(pillar)
        if pillar_status(value) == PillarStatus.STRONG:
            continue
        headroom = (100 - value) * config.pillar_weights.for_pillar(pillar)
        if best is None or headroom > best_headroom:
            best, best_headroom = pillar, headroom
    return best
