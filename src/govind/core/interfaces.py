from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from govind.core.models import Proposal, TransactionResultMeta, Vote
from govind.core.scval import ScVal


# ---------------------------------------------------------------------------
# ILedgerReader
# ---------------------------------------------------------------------------

@runtime_checkable
class ILedgerReader(Protocol):
    """
    Host view of one closed ledger.

    Domain expectations:
    - Ledgers are handed over in non-decreasing sequence order.
    - Records are already decoded from the wire into the models in
      `govind.core.models`, in ledger application order.
    """

    def ledger_sequence(self) -> int:
        """Return the sequence number of the closed ledger."""
        ...

    def tx_processing(self) -> Sequence[TransactionResultMeta]:
        """
        Return the ordered transaction-processing records of the ledger.

        Implementations:
        - In-memory reader over prebuilt models (tests, embedding hosts)
        - JSON ledger export reader (CLI)
        """
        ...


# ---------------------------------------------------------------------------
# IStateStore
# ---------------------------------------------------------------------------

@runtime_checkable
class IStateStore(Protocol):
    """
    Sink for governor domain records.

    Domain expectations:
    - Every call either persists its record or raises `StateStoreError`.
    - Field types are validated here, not by the decoders.
    - The indexer holds no reference to a record once the call returns.
    """

    def write_vote(self, vote: Vote) -> None:
        """Append a vote row. No existence or uniqueness check."""
        ...

    def create_proposal(self, proposal: Proposal) -> None:
        """Insert a proposal keyed by (contract, proposal number), status 0."""
        ...

    def update_proposal_status(self, status: ScVal, contract: bytes, proposal_number: ScVal) -> None:
        """
        Set the status of an existing proposal.

        Raises
        ------
        ProposalNotFound
            If no proposal matches (contract, proposal_number).
        """
        ...
