from __future__ import annotations

from .core.config import IndexerConfig
from .core.models import LedgerStats, Proposal, ProposalStatusUpdate, Vote
from .core.scval import ScAddress, ScVal
from .core.use_cases.index_ledger import LedgerIndexService, index_ledger, make_on_close
from .decoding.catalog import EVENT_CATALOG, EventKinds, classify_event
from .storage.duckdb_store import DuckDBStateStore

__all__ = [
    "IndexerConfig",
    "LedgerStats",
    "Proposal",
    "ProposalStatusUpdate",
    "Vote",
    "ScAddress",
    "ScVal",
    "LedgerIndexService",
    "index_ledger",
    "make_on_close",
    "EVENT_CATALOG",
    "EventKinds",
    "classify_event",
    "DuckDBStateStore",
]
