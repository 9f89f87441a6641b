"""Core data models, configuration, interfaces and errors.

This package provides:
- Wire values (ScVal, ScAddress)
- Ledger and domain models (ContractEvent, TransactionResultMeta, Vote, Proposal)
- Configuration (IndexerConfig)
- Error taxonomy (GovernorError, StateStoreError, ProposalNotFound)
"""

from govind.core.config import IndexerConfig
from govind.core.errors import GovernorError, InvalidValue, LedgerFormatError, ProposalNotFound, StateStoreError
from govind.core.models import (
    ContractEvent,
    ContractEventV0,
    LedgerStats,
    Proposal,
    ProposalStatusUpdate,
    SorobanTransactionMeta,
    StoreFailure,
    TransactionMeta,
    TransactionResultMeta,
    UnsupportedEventBody,
    Vote,
)
from govind.core.scval import ScAddress, ScVal, ScValType

__all__ = [
    "IndexerConfig",
    "GovernorError",
    "InvalidValue",
    "LedgerFormatError",
    "ProposalNotFound",
    "StateStoreError",
    "ContractEvent",
    "ContractEventV0",
    "LedgerStats",
    "Proposal",
    "ProposalStatusUpdate",
    "SorobanTransactionMeta",
    "StoreFailure",
    "TransactionMeta",
    "TransactionResultMeta",
    "UnsupportedEventBody",
    "Vote",
    "ScAddress",
    "ScVal",
    "ScValType",
]
