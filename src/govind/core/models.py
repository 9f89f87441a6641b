"""Core data models: host ledger records and governor domain records.

This module defines:
- Ledger side (supplied by the host, already decoded from the wire):
  `ContractEventV0`, `UnsupportedEventBody`, `ContractEvent`,
  `SorobanTransactionMeta`, `TransactionMeta`, `TransactionResultMeta`.
- Domain side (produced by the decoders): `Vote`, `Proposal`,
  `ProposalStatusUpdate`.
- Run bookkeeping: `StoreFailure`, `LedgerStats`.

Design notes
------------
- Domain records keep the extracted `ScVal`s untouched; converting them into
  column values (and rejecting wrong types) is the StateStore's job.
- `contract_id` is the raw 32-byte contract hash as carried by the event.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from govind.core.scval import ScVal

# === Ledger records (host supplied) ===


@dataclass(slots=True, frozen=True)
class ContractEventV0:
    """Version 0 event body: ordered topics plus a single data value."""

    topics: tuple[ScVal, ...]
    data: ScVal


@dataclass(slots=True, frozen=True)
class UnsupportedEventBody:
    """Any event body shape other than V0."""

    version: int


ContractEventBody = ContractEventV0 | UnsupportedEventBody


@dataclass(slots=True, frozen=True)
class ContractEvent:
    """One contract event; `contract_id` is None when the emitter is unknown."""

    contract_id: bytes | None
    body: ContractEventBody


@dataclass(slots=True, frozen=True)
class SorobanTransactionMeta:
    events: tuple[ContractEvent, ...] = ()


@dataclass(slots=True, frozen=True)
class TransactionMeta:
    """Apply-processing result tagged by metadata format version.

    Only version 3 carries a Soroban execution summary.
    """

    version: int
    soroban_meta: SorobanTransactionMeta | None = None


@dataclass(slots=True, frozen=True)
class TransactionResultMeta:
    """One transaction-processing record of a closed ledger."""

    tx_apply_processing: TransactionMeta
    tx_hash: str = ""


# === Domain records ===


@dataclass(slots=True, frozen=True)
class Vote:
    contract: bytes
    proposal_number: ScVal
    voter: ScVal
    support: ScVal
    amount: ScVal
    ledger: int


@dataclass(slots=True, frozen=True)
class Proposal:
    contract: bytes
    proposal_number: ScVal
    title: ScVal
    description: ScVal
    action: ScVal
    creator: ScVal
    status: ScVal
    ledger: int


@dataclass(slots=True, frozen=True)
class ProposalStatusUpdate:
    contract: bytes
    proposal_number: ScVal
    status: ScVal
    ledger: int


# === Run bookkeeping ===


@dataclass(slots=True)
class StoreFailure:
    """A StateStore call that raised while indexing one event."""

    tx_hash: str
    event_index: int  # position of the event within its transaction
    kind: str
    error: str


@dataclass(kw_only=True)
class LedgerStats:
    """Counters for one `on_close` invocation."""

    ledger: int
    tx_seen: int = 0
    events_seen: int = 0
    votes_written: int = 0
    proposals_created: int = 0
    status_updates: int = 0
    failures: list[StoreFailure] = field(default_factory=list)

    @property
    def writes(self) -> int:
        return self.votes_written + self.proposals_created + self.status_updates
