"""
Proposal importance classifier.

Maps a governance action type (plus, for treasury withdrawals, the ADA
amount) to the importance class that weights its rationale:

    critical  (3) : HardForkInitiation, NoConfidence, NewConstitutionalCommittee /
                    NewCommittee, NewConstitution / UpdateConstitution
    important (2) : ParameterChange; TreasuryWithdrawals above the routine tier
    standard  (1) : everything else, including unknown types
    exempt    (0) : InfoAction (excluded from rationale accounting)

Treasury tiers (ADA):
    routine     : amount < 1M
    significant : 1M <= amount < 20M
    major       : amount >= 20M

Weights and tier ceilings come from ``ScoringConfig.importance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from drep_scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from drep_scoring.models.vote import VoteRecord
from drep_scoring.taxonomy.governance_taxonomy import (
    CRITICAL_TYPES,
    IMPORTANT_TYPES,
    RATIONALE_EXEMPT_TYPES,
    ImportanceClass,
    ProposalType,
    TreasuryTier,
)


@dataclass(frozen=True)
class ProposalImportance:
    """Classification of one proposal.

    Attributes:
        importance:    Importance class.
        weight:        Rationale weight (0 when exempt).
        exempt:        ``True`` for actions excluded from rationale accounting.
        treasury_tier: Size tier for treasury withdrawals, else ``None``.
    """

    importance:    ImportanceClass
    weight:        int
    exempt:        bool = False
    treasury_tier: Optional[TreasuryTier] = None

    @property
    def is_critical(self) -> bool:
        return self.importance == ImportanceClass.CRITICAL


def treasury_tier(
    amount_ada: float,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> TreasuryTier:
    """Size tier of a treasury withdrawal of ``amount_ada``."""
    if amount_ada < config.importance.treasury_routine_max_ada:
        return TreasuryTier.ROUTINE
    if amount_ada < config.importance.treasury_significant_max_ada:
        return TreasuryTier.SIGNIFICANT
    return TreasuryTier.MAJOR


def classify_proposal(
    proposal_type: Optional[str],
    withdrawal_amount_ada: Optional[float] = None,
    tier: Optional[TreasuryTier] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ProposalImportance:
    """Classify a proposal by type and, for treasury actions, amount.

    Args:
        proposal_type:         CIP-1694 action type; ``None`` or unknown
                               strings classify as standard.
        withdrawal_amount_ada: Withdrawal amount, used to derive the tier.
        tier:                  Pre-computed tier; wins over the amount.
        config:                Scoring configuration.

    Returns:
        ProposalImportance for the proposal.
    """
    weights = config.importance

    if proposal_type in RATIONALE_EXEMPT_TYPES:
        return ProposalImportance(ImportanceClass.STANDARD, 0, exempt=True)

    if proposal_type in CRITICAL_TYPES:
        return ProposalImportance(ImportanceClass.CRITICAL, weights.critical_weight)

    if proposal_type in IMPORTANT_TYPES:
        return ProposalImportance(ImportanceClass.IMPORTANT, weights.important_weight)

    if proposal_type == ProposalType.TREASURY_WITHDRAWALS:
        if tier is None and withdrawal_amount_ada is not None:
            tier = treasury_tier(withdrawal_amount_ada, config)
        if tier in (TreasuryTier.SIGNIFICANT, TreasuryTier.MAJOR):
            return ProposalImportance(
                ImportanceClass.IMPORTANT, weights.important_weight, treasury_tier=tier
            )
        return ProposalImportance(
            ImportanceClass.STANDARD, weights.standard_weight, treasury_tier=tier
        )

    return ProposalImportance(ImportanceClass.STANDARD, weights.standard_weight)


def classify_vote(
    vote: VoteRecord,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
) -> ProposalImportance:
    """Classify the proposal a vote was cast on."""
    return classify_proposal(
        vote.proposal_type,
        withdrawal_amount_ada=vote.withdrawal_amount_ada,
        tier=vote.treasury_tier,
        config=config,
    )
