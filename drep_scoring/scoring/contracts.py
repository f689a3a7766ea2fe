"""
Input contracts and numeric helpers shared by every pillar calculator.

Pillar calculators are total over absent data: no votes, no profile and zero
eligible proposals are all ordinary states that score 0 (or the documented
neutral value).  Only inputs that no indexer could legitimately produce are
rejected, with ``ScoringInputError``:

  - a negative eligible-proposal count
  - a negative current epoch
  - a vote cast in an epoch later than the current epoch

Rounding
--------
Published scores round half up (``round_half_up(12.5) == 13``).  Python's
built-in ``round()`` uses banker's rounding and must not be used for scores.
"""

from __future__ import annotations

import math
from typing import Iterable, Sequence

from drep_scoring.models.vote import VoteRecord


class ScoringInputError(ValueError):
    """Raised when scoring inputs violate a programming contract."""


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves up.

    ``value`` is first snapped to 9 decimals so that weighted sums such as
    ``30 * 0.35`` (10.499999...) round the way they read.
    """
    return int(math.floor(round(value, 9) + 0.5))


def clamp(value: float, lo: float = 0.0, hi: float = 100.0) -> float:
    return max(lo, min(hi, value))


def to_percentage(value: float) -> int:
    """Round half up and clamp to an integer percentage in [0, 100]."""
    if math.isnan(value):
        return 0
    return int(clamp(round_half_up(value), 0, 100))


def interpolate(points: Sequence[tuple[float, float]], x: float) -> float:
    """Piecewise-linear interpolation through ``points`` (sorted by x).

    Values left of the first point take its y; values right of the last
    point take the last y.
    """
    first_x, first_y = points[0]
    if x <= first_x:
        return float(first_y)
    for (x0, y0), (x1, y1) in zip(points, points[1:]):
        if x <= x1:
            if x1 == x0:
                return float(y1)
            return y0 + (y1 - y0) * (x - x0) / (x1 - x0)
    return float(points[-1][1])


# ── Contract checks ───────────────────────────────────────────────────────────


def check_eligible_proposals(eligible_proposals: int) -> None:
    if eligible_proposals < 0:
        raise ScoringInputError(
            f"eligible_proposals must be non-negative, got {eligible_proposals}."
        )


def check_current_epoch(current_epoch: int) -> None:
    if current_epoch < 0:
        raise ScoringInputError(
            f"current_epoch must be non-negative, got {current_epoch}."
        )


def check_vote_epochs(votes: Iterable[VoteRecord], current_epoch: int) -> None:
    """Reject votes from the future relative to ``current_epoch``."""
    check_current_epoch(current_epoch)
    for vote in votes:
        if vote.epoch > current_epoch:
            raise ScoringInputError(
                f"Vote on {vote.proposal_key} is in epoch {vote.epoch}, "
                f"after current epoch {current_epoch}."
            )
