"""
Vote and proposal models — read-only on-chain records supplied by the caller.

``VoteRecord`` is one DRep ballot on one governance action, already enriched
with the proposal fields the scorer needs (type, treasury tier, withdrawal
amount).  ``ProposalRecord`` is the referenced proposal; it is only used to
fill those fields in when a snapshot carries them separately.

Both models are frozen — on-chain votes never change after they are cast.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from drep_scoring.taxonomy.governance_taxonomy import TreasuryTier, VoteChoice


def proposal_key(tx_hash: str, index: int) -> str:
    """Canonical proposal reference, e.g. ``"ab12...#0"``."""
    return f"{tx_hash}#{index}"


class VoteRecord(BaseModel):
    """A single DRep vote on a governance action.

    Attributes:
        proposal_tx_hash: Transaction hash of the governance action.
        proposal_index: Index of the action within that transaction.
        vote: ``"Yes"``, ``"No"`` or ``"Abstain"``.
        epoch: Epoch in which the vote was cast.
        has_rationale: ``True`` if a rationale anchor was attached.
        rationale_text: Resolved rationale text, or ``None`` if not fetched.
        rationale_length: Character length of the rationale when the text
            itself was not kept, or ``None``.
        rationale_url: Anchor URL of the rationale, or ``None``.
        proposal_type: CIP-1694 action type (see ``ProposalType``); unknown
            strings are accepted and scored as standard importance.
        treasury_tier: Pre-computed treasury tier, if the indexer supplied one.
        withdrawal_amount_ada: Total treasury withdrawal in ADA, if applicable.
        title: Proposal title for display.
        relevant_prefs: Preference tags attached by the alignment classifier.
    """

    model_config = ConfigDict(frozen=True)

    proposal_tx_hash: str
    proposal_index: int
    vote: VoteChoice
    epoch: int
    has_rationale: bool = False
    rationale_text: Optional[str] = None
    rationale_length: Optional[int] = None
    rationale_url: Optional[str] = None
    proposal_type: Optional[str] = None
    treasury_tier: Optional[TreasuryTier] = None
    withdrawal_amount_ada: Optional[float] = None
    title: Optional[str] = None
    relevant_prefs: tuple[str, ...] = ()

    @field_validator("proposal_tx_hash")
    @classmethod
    def validate_tx_hash(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("proposal_tx_hash must not be empty.")
        return v.strip()

    @field_validator("proposal_index", "epoch")
    @classmethod
    def validate_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("proposal_index and epoch must be non-negative.")
        return v

    @field_validator("rationale_length")
    @classmethod
    def validate_length(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v < 0:
            raise ValueError("rationale_length must be non-negative.")
        return v

    @field_validator("withdrawal_amount_ada")
    @classmethod
    def validate_withdrawal(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("withdrawal_amount_ada must be non-negative.")
        return v

    @property
    def proposal_key(self) -> str:
        return proposal_key(self.proposal_tx_hash, self.proposal_index)


class ProposalRecord(BaseModel):
    """A governance action as referenced by votes.

    Attributes:
        tx_hash: Transaction hash of the governance action.
        index: Index within the transaction.
        proposal_type: CIP-1694 action type.
        withdrawal_amount_ada: Total treasury withdrawal in ADA, or ``None``.
        proposed_epoch: Epoch the action was submitted.
        title: Human-readable title, if known.
    """

    model_config = ConfigDict(frozen=True)

    tx_hash: str
    index: int
    proposal_type: str
    withdrawal_amount_ada: Optional[float] = None
    proposed_epoch: Optional[int] = None
    title: Optional[str] = None

    @field_validator("index")
    @classmethod
    def validate_index(cls, v: int) -> int:
        if v < 0:
            raise ValueError("index must be non-negative.")
        return v

    @field_validator("withdrawal_amount_ada")
    @classmethod
    def validate_withdrawal(cls, v: Optional[float]) -> Optional[float]:
        if v is not None and v < 0:
            raise ValueError("withdrawal_amount_ada must be non-negative.")
        return v

    @property
    def key(self) -> str:
        return proposal_key(self.tx_hash, self.index)
