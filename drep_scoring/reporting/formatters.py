"""
ASCII terminal formatters for CLI reporting commands.

All formatters accept ``DRepScoreResult`` objects (or a ``ScoringConfig``)
and return plain multi-line strings suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).

Pillar status tags
------------------
Every pillar line carries a status tag so readers can tell at a glance
where the score is lost::

  [STRONG]      value >= 80
  [NEEDS WORK]  value >= 50
  [LOW]         value <  50
"""

from __future__ import annotations

from typing import Sequence

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.score import DRepScoreResult, ScoreDelta
from drep_scoring.recommendations.ranker import easiest_win
from drep_scoring.scoring.composite import pillar_status
from drep_scoring.taxonomy.governance_taxonomy import Pillar, PillarStatus

_STATUS_TAGS: dict[PillarStatus, str] = {
    PillarStatus.STRONG:     "[STRONG]",
    PillarStatus.NEEDS_WORK: "[NEEDS WORK]",
    PillarStatus.LOW:        "[LOW]",
}

_PILLAR_NAMES: dict[Pillar, str] = {
    Pillar.PARTICIPATION: "Effective Participation",
    Pillar.RATIONALE:     "Rationale Quality",
    Pillar.RELIABILITY:   "Reliability",
    Pillar.PROFILE:       "Profile Completeness",
}


def format_status_tag(value: int) -> str:
    """Status tag for a 0–100 value, e.g. ``"[NEEDS WORK]"``."""
    return _STATUS_TAGS[pillar_status(value)]


def _bar(value: int, width: int = 20) -> str:
    filled = round(value / 100 * width)
    return "#" * filled + "." * (width - filled)


def _format_delta(delta: ScoreDelta) -> str:
    note = "" if delta.comparable else "  (different scoring version)"
    flag = "  significant" if delta.significant and delta.comparable else ""
    return f"{delta.score:+d} since last snapshot{flag}{note}"


# ── Single DRep ───────────────────────────────────────────────────────────────


def format_score_report(
    result: DRepScoreResult,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> str:
    """Format one DRep's score, pillar breakdown and recommendations.

    Args:
        result: Output of ``score_drep()``.
        config: Scoring configuration (for pillar weights and the easiest win).

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== DRep Score ===")
    lines.append(f"  DRep:     {result.drep_id}")
    lines.append(f"  Epoch:    {result.current_epoch}   (scoring {result.scoring_version})")
    lines.append(f"  Score:    {result.score:>3} / 100  {format_status_tag(result.score)}")
    if result.delta is not None:
        lines.append(f"  Change:   {_format_delta(result.delta)}")

    lines.append("")
    header = f"  {'Pillar':<24}  {'Weight':>6}  {'Value':>5}  {'':<20}  Status"
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))
    for pillar in Pillar:
        value = result.pillars.value_of(pillar)
        weight = config.pillar_weights.for_pillar(pillar)
        lines.append(
            f"  {_PILLAR_NAMES[pillar]:<24}  {weight:>6.0%}  {value:>5}  "
            f"{_bar(value):<20}  {format_status_tag(value)}"
        )

    p = result.participation
    r = result.rationale
    rel = result.reliability
    lines.append("")
    lines.append("  Details:")
    lines.append(
        f"    Participation : {p.votes_cast}/{p.eligible_proposals} proposals "
        f"({p.raw_rate:.0f}%), dominant direction {p.dominant_share:.0%}, "
        f"modifier x{p.deliberation_modifier:.2f}"
    )
    lines.append(
        f"    Rationale     : {r.with_rationale}/{r.binding_votes} binding votes explained "
        f"(weighted {r.weighted_rate:.0f}%), {r.critical_missing} critical missing"
    )
    lines.append(
        f"    Reliability   : {rel.hint}; longest gap {rel.longest_gap} epochs, "
        f"tenure {rel.tenure} epochs"
    )
    if result.profile.missing_fields:
        lines.append(f"    Profile       : missing {', '.join(result.profile.missing_fields)}")
    else:
        lines.append("    Profile       : complete")

    win = easiest_win(result.pillars, config)
    if win is not None:
        lines.append("")
        lines.append(f"  Easiest win: {_PILLAR_NAMES[win]}")

    lines.append("")
    if not result.recommendations:
        lines.append("  (no recommendations — every pillar meets its target)")
        return "\n".join(lines)

    lines.append("  Recommendations:")
    for i, rec in enumerate(result.recommendations, start=1):
        lines.append(
            f"    {i}. [{rec.priority.upper():<6}] {rec.title}  (+{rec.potential_gain} pts)"
        )
        lines.append(f"       {rec.description}")

    return "\n".join(lines)


# ── Batch leaderboard ─────────────────────────────────────────────────────────


def format_leaderboard(
    results: Sequence[DRepScoreResult],
    top_n: int = 25,
) -> str:
    """Format a batch of results as a ranked ASCII table.

    Sorted by score descending; ties keep input order.

    Args:
        results: Outputs of ``score_many()``.
        top_n:   How many rows to show.

    Returns:
        Multi-line string.
    """
    lines: list[str] = []
    lines.append("")
    lines.append("=== DRep Leaderboard ===")

    if not results:
        lines.append("")
        lines.append("  (no DReps scored)")
        return "\n".join(lines)

    ranked = sorted(results, key=lambda r: -r.score)
    shown = ranked[:top_n]

    lines.append("")
    header = (
        f"  {'#':>3}  {'DRep':<28}  {'Score':>5}  {'Part':>4}  {'Rat':>4}  "
        f"{'Rel':>4}  {'Prof':>4}  {'Delta':>5}  Top recommendation"
    )
    lines.append(header)
    lines.append("  " + "-" * (len(header) - 2))

    for rank, result in enumerate(shown, start=1):
        drep = result.drep_id if len(result.drep_id) <= 28 else result.drep_id[:25] + "..."
        delta = f"{result.delta.score:+d}" if result.delta else "-"
        top = result.recommendations[0].title if result.recommendations else "-"
        pl = result.pillars
        lines.append(
            f"  {rank:>3}  {drep:<28}  {result.score:>5}  {pl.participation:>4}  "
            f"{pl.rationale:>4}  {pl.reliability:>4}  {pl.profile:>4}  {delta:>5}  {top}"
        )

    total = len(ranked)
    if total > top_n:
        lines.append(f"  ... showing {top_n} of {total} DReps (use --top-n N to show more)")

    return "\n".join(lines)


# ── Weights ───────────────────────────────────────────────────────────────────


def format_weights_table(config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> str:
    """Format the versioned weighting tables."""
    lines: list[str] = []
    lines.append("")
    lines.append(f"=== Scoring Weights ({config.version}) ===")

    lines.append("")
    lines.append("  Pillars:")
    for pillar in Pillar:
        lines.append(
            f"    {_PILLAR_NAMES[pillar]:<24} {config.pillar_weights.for_pillar(pillar):>6.0%}"
        )

    rw = config.reliability_weights
    lines.append("")
    lines.append("  Reliability sub-scores:")
    lines.append(f"    {'Active streak':<24} {rw.streak:>6.0%}")
    lines.append(f"    {'Recency':<24} {rw.recency:>6.0%}")
    lines.append(f"    {'Gap penalty':<24} {rw.gap:>6.0%}")
    lines.append(f"    {'Tenure':<24} {rw.tenure:>6.0%}")

    imp = config.importance
    lines.append("")
    lines.append("  Proposal importance (rationale weight):")
    lines.append(f"    {'Critical':<24} {imp.critical_weight:>6}")
    lines.append(f"    {'Important':<24} {imp.important_weight:>6}")
    lines.append(f"    {'Standard':<24} {imp.standard_weight:>6}")
    lines.append(
        f"    Treasury tiers: routine < {imp.treasury_routine_max_ada:,.0f} ADA"
        f" <= significant < {imp.treasury_significant_max_ada:,.0f} ADA <= major"
    )

    lines.append("")
    lines.append("  Deliberation modifier (dominant share -> multiplier):")
    for share, multiplier in config.deliberation.breakpoints:
        lines.append(f"    {share:>6.0%} -> x{multiplier:.2f}")

    lines.append("")
    lines.append("  Rationale curve (weighted rate -> score):")
    for x, y in config.rationale.curve_points:
        lines.append(f"    {x:>6.0f} -> {y:.0f}")

    lines.append("")
    lines.append("  Profile checklist:")
    for field, points in config.profile.points().items():
        lines.append(f"    {field:<24} {points:>6}")

    return "\n".join(lines)
