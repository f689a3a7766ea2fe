"""
Shared pytest fixtures for the DRep scoring test suite.

Provides:
  - ``complete_profile``: a profile that earns every checklist point.
  - ``ideal_drep_input``: a DRep who votes on everything, every epoch, with
    varied directions and full rationales (scores 99).
  - ``newcomer_drep_input``: a rubber-stamping newcomer — all "Yes", one
    epoch of history, no rationales, no profile (scores 32).
"""

from __future__ import annotations

import pytest

from drep_scoring.models.profile import ProfileMetadata, SocialReference
from drep_scoring.models.score import DRepScoringInput
from drep_scoring.models.vote import VoteRecord
from drep_scoring.taxonomy.governance_taxonomy import ProposalType, VoteChoice

CURRENT_EPOCH = 500

LONG_RATIONALE = (
    "I support this action because the budget is itemised, milestones are "
    "public and the team has delivered on previous treasury grants."
)


# ── Sample domain object factories ────────────────────────────────────────────

@pytest.fixture
def complete_profile() -> ProfileMetadata:
    """A ``ProfileMetadata`` with every checklist field filled in."""
    return ProfileMetadata(
        name="Ada Delegate",
        bio="Stake pool operator and governance researcher.",
        objectives="Fiscal prudence and transparent treasury spending.",
        motivations="Keep Cardano governance accountable to ada holders.",
        qualifications="Six years operating infrastructure on mainnet.",
        payment_address="addr1qxy8ac9l2ws7w9hr4t0hz2fz0e3sw8lkh6x8ddpg3ne7zfyjq",
        references=(
            SocialReference(uri="https://x.com/ada_delegate", label="X"),
            SocialReference(uri="https://ada-delegate.io", label="Website"),
        ),
    )


@pytest.fixture
def ideal_drep_input(complete_profile: ProfileMetadata) -> DRepScoringInput:
    """Two votes per epoch for epochs 491–500, all with rationale.

    Directions: 12 Yes, 6 No, 2 Abstain (dominant share 0.60).
    """
    types = [
        ProposalType.HARD_FORK_INITIATION,
        ProposalType.PARAMETER_CHANGE,
        ProposalType.TREASURY_WITHDRAWALS,
        ProposalType.INFO_ACTION,
    ]
    choices = [VoteChoice.YES] * 12 + [VoteChoice.NO] * 6 + [VoteChoice.ABSTAIN] * 2
    votes = []
    for i in range(20):
        ptype = types[i % len(types)]
        votes.append(
            VoteRecord(
                proposal_tx_hash=f"{i:064x}",
                proposal_index=0,
                vote=choices[i],
                epoch=CURRENT_EPOCH - 9 + i // 2,
                has_rationale=True,
                rationale_text=LONG_RATIONALE,
                proposal_type=ptype,
                withdrawal_amount_ada=(
                    250_000 if ptype == ProposalType.TREASURY_WITHDRAWALS else None
                ),
                title=f"Proposal {i}",
            )
        )
    return DRepScoringInput(
        drep_id="drep1ideal",
        votes=tuple(votes),
        eligible_proposals=20,
        current_epoch=CURRENT_EPOCH,
        profile=complete_profile,
    )


@pytest.fixture
def newcomer_drep_input() -> DRepScoringInput:
    """Ten "Yes" votes cast in epoch 499, no rationale, no profile.

    Proposals: 2 critical, 2 ParameterChange, 5 routine treasury
    withdrawals and 1 InfoAction.
    """
    types = (
        [ProposalType.HARD_FORK_INITIATION, ProposalType.NO_CONFIDENCE]
        + [ProposalType.PARAMETER_CHANGE] * 2
        + [ProposalType.TREASURY_WITHDRAWALS] * 5
        + [ProposalType.INFO_ACTION]
    )
    votes = tuple(
        VoteRecord(
            proposal_tx_hash=f"{i + 100:064x}",
            proposal_index=0,
            vote=VoteChoice.YES,
            epoch=CURRENT_EPOCH - 1,
            proposal_type=ptype,
            withdrawal_amount_ada=50_000 if ptype == ProposalType.TREASURY_WITHDRAWALS else None,
            title=f"Newcomer proposal {i}",
        )
        for i, ptype in enumerate(types)
    )
    return DRepScoringInput(
        drep_id="drep1newcomer",
        votes=votes,
        eligible_proposals=10,
        current_epoch=CURRENT_EPOCH,
    )
