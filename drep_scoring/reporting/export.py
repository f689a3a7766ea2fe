"""
Export helpers for scoring results.

All writers create parent directories and return the written ``Path``.
They accept generic ``list[dict]`` data to stay decoupled from specific
result shapes.

CSV exports are flat (no nested dicts): ``flatten_results_for_export()``
turns each ``DRepScoreResult`` into one row with the composite, the four
pillars, the status of each and the top recommendation as separate columns.
JSON exports keep the full nested result (``model_dump(mode="json")``).
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Sequence

from drep_scoring.models.score import DRepScoreResult
from drep_scoring.scoring.composite import pillar_status
from drep_scoring.taxonomy.governance_taxonomy import Pillar

RESULT_CSV_COLUMNS: list[str] = [
    "drep_id",
    "current_epoch",
    "scoring_version",
    "score",
    "status",
    "participation",
    "rationale",
    "reliability",
    "profile",
    "score_delta",
    "recommendation_count",
    "top_recommendation",
    "top_recommendation_gain",
]


def export_to_csv(
    records: list[dict],
    path: Path,
    fieldnames: list[str] | None = None,
) -> Path:
    """Write ``records`` to a UTF-8 CSV file.

    Args:
        records:    List of row dicts.
        path:       Destination file path (parent dirs created if missing).
        fieldnames: Column order.  If None, uses the keys of the first record.

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    if not records:
        path.write_text("", encoding="utf-8")
        return path
    cols = fieldnames or list(records[0].keys())
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=cols, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(records)
    return path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed JSON file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, default=str), encoding="utf-8")
    return path


def results_to_json(results: Sequence[DRepScoreResult]) -> list[dict]:
    """Full nested JSON-ready dicts, one per result."""
    return [result.model_dump(mode="json") for result in results]


def flatten_results_for_export(results: Sequence[DRepScoreResult]) -> list[dict]:
    """Flatten results into one CSV row per DRep.

    Returns:
        List of flat dicts keyed by ``RESULT_CSV_COLUMNS``.  Pillar columns
        hold the integer value; ``status`` is the composite's pillar status.
    """
    rows: list[dict] = []
    for result in results:
        top = result.recommendations[0] if result.recommendations else None
        row = {
            "drep_id":         result.drep_id,
            "current_epoch":   result.current_epoch,
            "scoring_version": result.scoring_version,
            "score":           result.score,
            "status":          str(pillar_status(result.score)),
            "score_delta":     result.delta.score if result.delta else "",
            "recommendation_count":    len(result.recommendations),
            "top_recommendation":      top.title if top else "",
            "top_recommendation_gain": top.potential_gain if top else "",
        }
        for pillar in Pillar:
            row[str(pillar)] = result.pillars.value_of(pillar)
        rows.append(row)
    return rows
