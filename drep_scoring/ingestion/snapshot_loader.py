"""
JSON snapshot loader: local snapshot files -> ``DRepScoringInput``.

Single-DRep snapshot format::

    {
      "drep_id": "drep1...",
      "current_epoch": 540,
      "eligible_proposals": 42,            # optional; defaults to len(proposals)
      "votes": [ {VoteRecord fields}, ... ],
      "proposals": [ {ProposalRecord fields}, ... ],   # optional
      "proposal_epochs": [530, 531, ...],  # optional
      "profile": { raw CIP-119 metadata or typed fields },  # optional
      "broken_uris": ["https://..."],      # optional
      "previous": { ScoreSnapshot fields } # optional
    }

A batch file is a JSON array of snapshots, or ``{"dreps": [...]}``.

Proposal embedding
------------------
Votes may omit ``proposal_type`` / ``withdrawal_amount_ada`` / ``title``
when the snapshot lists the proposals separately.  Missing fields are copied
from the matching ``ProposalRecord`` (matched on ``tx_hash#index``); fields
present on the vote win.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from drep_scoring.models.profile import ProfileMetadata
from drep_scoring.models.score import DRepScoringInput, ScoreSnapshot
from drep_scoring.models.vote import ProposalRecord, VoteRecord, proposal_key

logger = logging.getLogger(__name__)

REQUIRED_SNAPSHOT_KEYS = frozenset({"drep_id", "current_epoch"})

_EMBEDDED_FIELDS = ("proposal_type", "withdrawal_amount_ada", "title")


def load_snapshot(path: Path) -> DRepScoringInput:
    """Load one DRep snapshot file.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On invalid JSON or a snapshot that fails validation.
    """
    raw = _read_json(path)
    if not isinstance(raw, dict):
        raise ValueError(f"Snapshot file must contain a JSON object: {path}")
    try:
        scoring_input = parse_snapshot(raw)
    except (ValueError, ValidationError) as exc:
        raise ValueError(f"Invalid snapshot in {path.name}: {exc}") from exc
    logger.info(
        "Loaded snapshot for %s (%d votes) from %s",
        scoring_input.drep_id,
        len(scoring_input.votes),
        path.name,
    )
    return scoring_input


def load_batch(path: Path) -> list[DRepScoringInput]:
    """Load a batch file of DRep snapshots.

    All entries are validated before any are returned.  If **any** entry
    fails, a single ``ValueError`` lists the first 10 failures.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: On invalid JSON, an unexpected top-level shape, or any
            entry failing validation.
    """
    raw = _read_json(path)
    if isinstance(raw, dict) and isinstance(raw.get("dreps"), list):
        entries = raw["dreps"]
    elif isinstance(raw, list):
        entries = raw
    else:
        raise ValueError(
            f"Batch file must be a JSON array or an object with a 'dreps' array: {path}"
        )

    if not entries:
        logger.warning("Batch file contains no DRep snapshots: %s", path)
        return []

    inputs: list[DRepScoringInput] = []
    errors: list[tuple[int, str]] = []
    for i, entry in enumerate(entries):
        try:
            if not isinstance(entry, dict):
                raise ValueError("entry is not a JSON object")
            inputs.append(parse_snapshot(entry))
        except (ValueError, ValidationError) as exc:
            errors.append((i, str(exc)))

    if errors:
        max_shown = 10
        detail = "\n".join(f"  Entry {i}: {msg}" for i, msg in errors[:max_shown])
        suffix = f"\n  … and {len(errors) - max_shown} more" if len(errors) > max_shown else ""
        raise ValueError(
            f"{len(errors)} snapshot(s) failed validation in {path.name}:\n{detail}{suffix}"
        )

    logger.info("Loaded %d DRep snapshots from %s", len(inputs), path.name)
    return inputs


def parse_snapshot(raw: dict[str, Any]) -> DRepScoringInput:
    """Convert a raw snapshot dict into a validated ``DRepScoringInput``.

    Raises:
        ValueError: If a required key is missing.
        pydantic.ValidationError: If any record fails model validation.
    """
    missing = REQUIRED_SNAPSHOT_KEYS - raw.keys()
    if missing:
        raise ValueError(f"Snapshot missing required keys: {sorted(missing)}")

    proposals = [ProposalRecord.model_validate(p) for p in raw.get("proposals") or []]
    votes = embed_proposals(raw.get("votes") or [], proposals)

    eligible = raw.get("eligible_proposals")
    if eligible is None:
        eligible = len(proposals)

    proposal_epochs = raw.get("proposal_epochs")
    previous = raw.get("previous")
    profile = raw.get("profile")

    return DRepScoringInput(
        drep_id=str(raw["drep_id"]),
        current_epoch=raw["current_epoch"],
        eligible_proposals=eligible,
        votes=tuple(votes),
        profile=ProfileMetadata.from_raw(profile) if isinstance(profile, dict) else None,
        proposal_epochs=frozenset(proposal_epochs) if proposal_epochs is not None else None,
        broken_uris=frozenset(raw.get("broken_uris") or []),
        previous=ScoreSnapshot.model_validate(previous) if previous else None,
    )


def embed_proposals(
    raw_votes: list[dict[str, Any]],
    proposals: list[ProposalRecord],
) -> list[VoteRecord]:
    """Build ``VoteRecord``s, filling proposal fields the votes leave out."""
    by_key = {p.key: p for p in proposals}
    votes: list[VoteRecord] = []
    for raw_vote in raw_votes:
        data = dict(raw_vote)
        tx_hash = data.get("proposal_tx_hash")
        index = data.get("proposal_index")
        proposal = by_key.get(proposal_key(tx_hash, index)) if tx_hash is not None else None
        if proposal is not None:
            for field in _EMBEDDED_FIELDS:
                if data.get(field) is None:
                    data[field] = getattr(proposal, field)
        votes.append(VoteRecord.model_validate(data))
    return votes


# ── Private helpers ────────────────────────────────────────────────────────────


def _read_json(path: Path) -> Any:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot file not found: {path}")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path.name}: {exc}") from exc
