from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from contextlib import AbstractContextManager
from dataclasses import dataclass

from govind.constants import SUPPORTED_META_VERSION
from govind.core.config import IndexerConfig
from govind.core.errors import StateStoreError
from govind.core.interfaces import ILedgerReader, IStateStore
from govind.core.models import (
    ContractEventV0,
    LedgerStats,
    Proposal,
    ProposalStatusUpdate,
    StoreFailure,
    TransactionResultMeta,
    Vote,
)
from govind.decoding.catalog import classify_event
from govind.decoding.decoder import DecodedRecord, decode_event

logger = logging.getLogger(__name__)

StoreFactory = Callable[[], AbstractContextManager[IStateStore]]
ReaderFactory = Callable[[], ILedgerReader]


# ---------------------------------------------------------------------------
# Event filtering
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class IndexableEvent:
    """A V0 contract event with a known emitter, ready for classification."""

    tx_hash: str
    event_index: int
    contract: bytes
    body: ContractEventV0


def iter_indexable_events(records: Sequence[TransactionResultMeta]) -> Iterator[IndexableEvent]:
    """
    Walk the ledger's transaction records in order and yield the events worth
    classifying.

    Skipped silently:
    - records whose apply-processing is not the current metadata version
    - records without Soroban meta or with an empty event list
    - events without a contract id (no address-from-hash resolution yet)
    - event bodies other than V0, and V0 bodies without any topic
    """
    for rec in records:
        meta = rec.tx_apply_processing
        if meta.version != SUPPORTED_META_VERSION:
            logger.debug("tx %s: skipping metadata v%d", rec.tx_hash, meta.version)
            continue

        soroban = meta.soroban_meta
        if soroban is None or not soroban.events:
            continue

        for idx, event in enumerate(soroban.events):
            # Contract-less events cannot be attributed until addresses can be
            # resolved from their hash; they are dropped, not retried.
            if event.contract_id is None:
                logger.debug("tx %s event %d: no contract id", rec.tx_hash, idx)
                continue
            match event.body:
                case ContractEventV0() as body if body.topics:
                    yield IndexableEvent(
                        tx_hash=rec.tx_hash,
                        event_index=idx,
                        contract=event.contract_id,
                        body=body,
                    )
                case _:
                    continue


# ---------------------------------------------------------------------------
# Store writes
# ---------------------------------------------------------------------------


def write_record(store: IStateStore, record: DecodedRecord, stats: LedgerStats) -> None:
    """Issue the single StateStore call for one decoded record."""
    match record:
        case Vote():
            store.write_vote(record)
            stats.votes_written += 1
        case Proposal():
            store.create_proposal(record)
            stats.proposals_created += 1
        case ProposalStatusUpdate():
            store.update_proposal_status(record.status, record.contract, record.proposal_number)
            stats.status_updates += 1
        case _:
            raise RuntimeError(f"Unsupported record type {type(record).__name__}")


# ---------------------------------------------------------------------------
# Use case
# ---------------------------------------------------------------------------


def index_ledger(
    reader: ILedgerReader,
    store: IStateStore,
    config: IndexerConfig | None = None,
) -> LedgerStats:
    """
    Index every governor event of one closed ledger into `store`.

    Events are classified and written strictly in ledger order, one store call
    per decoded event, with nothing buffered in between.

    Notes
    -----
    - Malformed or unrecognized events produce no call and no error.
    - A failing store call is logged and recorded in `LedgerStats.failures`,
      then indexing continues with the next event. With
      `config.on_store_error == "raise"` the first failure propagates instead.
    - Replayed ledgers are written again; nothing is deduplicated.
    """
    config = config or IndexerConfig()
    ledger = reader.ledger_sequence()
    records = reader.tx_processing()
    stats = LedgerStats(ledger=ledger, tx_seen=len(records))

    for ev in iter_indexable_events(records):
        stats.events_seen += 1
        kind = classify_event(ev.body.topics[0])
        record = decode_event(kind, contract=ev.contract, event=ev.body, ledger=ledger)
        if record is None:
            continue

        try:
            write_record(store, record, stats)
        except StateStoreError as e:
            if config.on_store_error == "raise":
                raise
            kind_name = kind.spec.symbol
            logger.warning(
                "ledger %d tx %s event %d (%s): store write failed: %s",
                ledger,
                ev.tx_hash,
                ev.event_index,
                kind_name,
                e,
            )
            stats.failures.append(
                StoreFailure(
                    tx_hash=ev.tx_hash,
                    event_index=ev.event_index,
                    kind=kind_name,
                    error=f"{type(e).__name__}: {e}",
                )
            )

    logger.info(
        "ledger %d: %d events, %d votes, %d proposals, %d status updates, %d failures",
        ledger,
        stats.events_seen,
        stats.votes_written,
        stats.proposals_created,
        stats.status_updates,
        len(stats.failures),
    )
    return stats


# ---------------------------------------------------------------------------
# Domain service: LedgerIndexService
# ---------------------------------------------------------------------------


class LedgerIndexService:
    """
    Runs `index_ledger` once per closed ledger.

    The store is acquired through `store_factory` at the start of each ledger
    and released when the ledger is done, so no two ledgers ever share a
    store handle.
    """

    def __init__(self, store_factory: StoreFactory, config: IndexerConfig | None = None) -> None:
        self._store_factory = store_factory
        self._config = config or IndexerConfig()

    def on_close(self, reader: ILedgerReader) -> LedgerStats:
        with self._store_factory() as store:
            return index_ledger(reader, store, self._config)


def make_on_close(
    reader_factory: ReaderFactory,
    store_factory: StoreFactory,
    config: IndexerConfig | None = None,
) -> Callable[[], None]:
    """Build the zero-argument callback a ledger host invokes per closed ledger."""
    service = LedgerIndexService(store_factory, config)

    def on_close() -> None:
        service.on_close(reader_factory())

    return on_close
