from __future__ import annotations


class GovernorError(Exception):
    """Base class for indexer errors."""


class StateStoreError(GovernorError):
    """A StateStore write failed."""


class ProposalNotFound(StateStoreError):
    """Status update for a (contract, proposal number) that was never created."""

    def __init__(self, contract: str, proposal_number: int) -> None:
        super().__init__(f"proposal {proposal_number} not found for contract {contract}")
        self.contract = contract
        self.proposal_number = proposal_number


class InvalidValue(StateStoreError):
    """A record field carries a value the store cannot persist."""

    def __init__(self, field: str, expected: str, got: str) -> None:
        super().__init__(f"{field}: expected {expected}, got {got}")
        self.field = field
        self.expected = expected
        self.got = got


class LedgerFormatError(GovernorError):
    """A host ledger export could not be read."""
