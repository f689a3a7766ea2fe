"""
Governance taxonomy for DRep scoring.

Two groups of enums:
  - On-chain vocabulary: ``ProposalType``, ``VoteChoice``, ``TreasuryTier``.
  - Scoring vocabulary:  ``ImportanceClass``, ``Pillar``, ``Priority``,
    ``PillarStatus``.

``ProposalType`` values are the CIP-1694 governance action names as reported
by the chain indexer, including the aliases different indexer versions use
(``NewCommittee`` / ``NewConstitutionalCommittee``, ``NewConstitution`` /
``UpdateConstitution``).

Usage example::

    from drep_scoring.taxonomy.governance_taxonomy import ProposalType, CRITICAL_TYPES

    ProposalType.HARD_FORK_INITIATION in CRITICAL_TYPES   # True

This module has NO imports from any other ``drep_scoring`` package.
"""

from enum import StrEnum


class ProposalType(StrEnum):
    """CIP-1694 governance action type."""

    HARD_FORK_INITIATION = "HardForkInitiation"
    """Protocol upgrade; irreversible change to how the chain works."""

    NO_CONFIDENCE = "NoConfidence"
    """Motion of no confidence in the Constitutional Committee."""

    NEW_CONSTITUTIONAL_COMMITTEE = "NewConstitutionalCommittee"
    """Replace or update the Constitutional Committee."""

    NEW_COMMITTEE = "NewCommittee"
    """Alias of ``NewConstitutionalCommittee`` used by some indexer versions."""

    NEW_CONSTITUTION = "NewConstitution"
    """Entirely new constitution."""

    UPDATE_CONSTITUTION = "UpdateConstitution"
    """Amendment of the existing constitution."""

    PARAMETER_CHANGE = "ParameterChange"
    """Protocol parameter update (fees, block size, staking rewards...)."""

    TREASURY_WITHDRAWALS = "TreasuryWithdrawals"
    """Request for ADA from the community treasury."""

    INFO_ACTION = "InfoAction"
    """Non-binding poll; exempt from rationale accounting."""


CRITICAL_TYPES: frozenset[str] = frozenset({
    ProposalType.HARD_FORK_INITIATION,
    ProposalType.NO_CONFIDENCE,
    ProposalType.NEW_CONSTITUTIONAL_COMMITTEE,
    ProposalType.NEW_COMMITTEE,
    ProposalType.NEW_CONSTITUTION,
    ProposalType.UPDATE_CONSTITUTION,
})

IMPORTANT_TYPES: frozenset[str] = frozenset({ProposalType.PARAMETER_CHANGE})

RATIONALE_EXEMPT_TYPES: frozenset[str] = frozenset({ProposalType.INFO_ACTION})


class VoteChoice(StrEnum):
    """Ballot cast by a DRep."""

    YES = "Yes"
    NO = "No"
    ABSTAIN = "Abstain"


class TreasuryTier(StrEnum):
    """Size class of a treasury withdrawal, by ADA amount."""

    ROUTINE = "routine"
    """Below the routine ceiling (1M ADA by default)."""

    SIGNIFICANT = "significant"
    """Between the routine and significant ceilings (1M–20M ADA)."""

    MAJOR = "major"
    """At or above the significant ceiling (20M ADA)."""


class ImportanceClass(StrEnum):
    """How much a proposal counts toward rationale accounting."""

    CRITICAL = "critical"
    IMPORTANT = "important"
    STANDARD = "standard"


class Pillar(StrEnum):
    """The four independently weighted components of the DRep score."""

    PARTICIPATION = "participation"
    RATIONALE = "rationale"
    RELIABILITY = "reliability"
    PROFILE = "profile"


class Priority(StrEnum):
    """Urgency of a recommendation."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


PRIORITY_RANK: dict[Priority, int] = {
    Priority.HIGH: 0,
    Priority.MEDIUM: 1,
    Priority.LOW: 2,
}


class PillarStatus(StrEnum):
    """Traffic-light status of a single pillar value."""

    STRONG = "strong"
    NEEDS_WORK = "needs-work"
    LOW = "low"
