"""
drep_scoring.scoring — Pillar calculators and the composite aggregator.

Every function in this package is pure: no I/O, no clock, no shared state.
Identical inputs always produce identical outputs.

Modules:
  contracts     — ScoringInputError, input checks, half-up rounding, clamping.
  votes         — Re-vote de-duplication and vote-direction distribution.
  classifier    — Proposal importance class, weight and treasury tier.
  participation — Effective Participation (raw rate x Deliberation Modifier).
  rationale     — Rationale Quality (importance-weighted rate, forgiving curve).
  reliability   — Reliability (streak, recency, gap, tenure) + status hint.
  profile       — Profile Completeness checklist and reference validation.
  composite     — Weighted composite, pillar status, score deltas.
  engine        — score_drep() / score_many() orchestration.
"""
