import logging
from contextlib import nullcontext
from unittest.mock import MagicMock, call

import pytest
from builders import (
    CONTRACT,
    OTHER_CONTRACT,
    VOTER,
    event,
    ledger,
    proposal_created_body,
    proposal_updated_body,
    tx,
    vote_cast_body,
)

from govind.core.config import IndexerConfig
from govind.core.errors import ProposalNotFound
from govind.core.models import (
    ContractEventV0,
    SorobanTransactionMeta,
    TransactionMeta,
    TransactionResultMeta,
    UnsupportedEventBody,
    Vote,
)
from govind.core.scval import ScVal
from govind.core.use_cases.index_ledger import LedgerIndexService, index_ledger, make_on_close


def _call_names(store: MagicMock) -> list[str]:
    return [c[0] for c in store.mock_calls]


def test_empty_ledger_makes_no_calls(store: MagicMock) -> None:
    stats = index_ledger(ledger(10), store)

    assert store.mock_calls == []
    assert stats.ledger == 10
    assert stats.writes == 0


def test_non_qualifying_events_make_no_calls(store: MagicMock) -> None:
    reader = ledger(
        10,
        # legacy metadata version carrying an otherwise valid event
        TransactionResultMeta(
            tx_apply_processing=TransactionMeta(
                version=2,
                soroban_meta=SorobanTransactionMeta(events=(event(vote_cast_body()),)),
            )
        ),
        # v3 without soroban meta / with an empty event list
        tx(),
        TransactionResultMeta(tx_apply_processing=TransactionMeta(version=3, soroban_meta=SorobanTransactionMeta())),
        tx(
            event(vote_cast_body(), contract=None),
            event(UnsupportedEventBody(version=1)),
            event(ContractEventV0(topics=(), data=ScVal.void())),
        ),
    )

    stats = index_ledger(reader, store)

    assert store.mock_calls == []
    assert stats.tx_seen == 4
    assert stats.events_seen == 0


def test_vote_cast_writes_one_vote(store: MagicMock) -> None:
    reader = ledger(51234, tx(event(vote_cast_body(prop=7, support=1, amount=1_000_000_000_000))))

    stats = index_ledger(reader, store)

    store.write_vote.assert_called_once_with(
        Vote(
            contract=CONTRACT,
            proposal_number=ScVal.u32(7),
            voter=ScVal.address(VOTER),
            support=ScVal.u32(1),
            amount=ScVal.i128(1_000_000_000_000),
            ledger=51234,
        )
    )
    assert _call_names(store) == ["write_vote"]
    assert stats.votes_written == 1


def test_vote_cast_missing_amount_makes_no_calls(store: MagicMock) -> None:
    body = vote_cast_body()
    short = ContractEventV0(topics=body.topics, data=ScVal.vec([ScVal.u32(1)]))

    index_ledger(ledger(1, tx(event(short))), store)

    assert store.mock_calls == []


def test_proposal_created_forces_status_zero(store: MagicMock) -> None:
    index_ledger(ledger(1, tx(event(proposal_created_body(prop=4)))), store)

    store.create_proposal.assert_called_once()
    proposal = store.create_proposal.call_args.args[0]
    assert proposal.status == ScVal.u32(0)
    assert proposal.proposal_number == ScVal.u32(4)
    assert proposal.ledger == 1


def test_proposal_updated_updates_status_only(store: MagicMock) -> None:
    index_ledger(ledger(1, tx(event(proposal_updated_body(prop=7, status=2)))), store)

    assert store.mock_calls == [call.update_proposal_status(ScVal.u32(2), CONTRACT, ScVal.u32(7))]


def test_unrecognized_events_are_ignored(store: MagicMock) -> None:
    unknown = [
        event(ContractEventV0(topics=(ScVal.symbol(f"event_{i}"), ScVal.u32(i)), data=ScVal.void()))
        for i in range(25)
    ]
    unknown.append(event(ContractEventV0(topics=(ScVal.u32(1),), data=ScVal.void())))

    stats = index_ledger(ledger(1, tx(*unknown)), store)

    assert store.mock_calls == []
    assert stats.events_seen == 26


def test_store_calls_follow_ledger_order(store: MagicMock) -> None:
    reader = ledger(
        77,
        tx(
            event(proposal_created_body(prop=1)),
            event(ContractEventV0(topics=(ScVal.symbol("transfer"),), data=ScVal.void())),
            event(vote_cast_body(prop=1)),
            tx_hash="a",
        ),
        tx(version=2, tx_hash="legacy"),
        tx(
            event(proposal_updated_body(prop=1, status=1), contract=OTHER_CONTRACT),
            event(vote_cast_body(prop=1, support=0), contract=None),
            event(vote_cast_body(prop=1, support=2)),
            tx_hash="b",
        ),
    )

    index_ledger(reader, store)

    assert _call_names(store) == ["create_proposal", "write_vote", "update_proposal_status", "write_vote"]
    assert store.write_vote.call_args_list[1].args[0].support == ScVal.u32(2)


def test_replayed_ledger_is_not_deduplicated(store: MagicMock) -> None:
    reader = ledger(5, tx(event(vote_cast_body())))

    index_ledger(reader, store)
    index_ledger(reader, store)

    assert store.write_vote.call_count == 2
    first, second = (c.args[0] for c in store.write_vote.call_args_list)
    assert first == second


def test_store_failure_is_recorded_and_indexing_continues(
    store: MagicMock, caplog: pytest.LogCaptureFixture
) -> None:
    store.update_proposal_status.side_effect = ProposalNotFound(CONTRACT.hex(), 9)
    reader = ledger(
        12,
        tx(event(proposal_updated_body(prop=9, status=3)), event(vote_cast_body()), tx_hash="abc"),
    )

    with caplog.at_level(logging.WARNING, logger="govind.core.use_cases.index_ledger"):
        stats = index_ledger(reader, store)

    assert _call_names(store) == ["update_proposal_status", "write_vote"]
    assert stats.status_updates == 0
    assert stats.votes_written == 1
    assert len(stats.failures) == 1
    failure = stats.failures[0]
    assert (failure.tx_hash, failure.event_index, failure.kind) == ("abc", 0, "proposal_updated")
    assert failure.error.startswith("ProposalNotFound")
    assert "store write failed" in caplog.text


def test_store_failure_raises_when_configured(store: MagicMock) -> None:
    store.update_proposal_status.side_effect = ProposalNotFound(CONTRACT.hex(), 9)
    reader = ledger(12, tx(event(proposal_updated_body(prop=9)), event(vote_cast_body())))

    with pytest.raises(ProposalNotFound):
        index_ledger(reader, store, IndexerConfig(on_store_error="raise"))

    store.write_vote.assert_not_called()


def test_service_acquires_store_once_per_ledger(store: MagicMock) -> None:
    factory = MagicMock(side_effect=lambda: nullcontext(store))
    service = LedgerIndexService(factory)

    service.on_close(ledger(1, tx(event(vote_cast_body()))))
    stats = service.on_close(ledger(2, tx(event(vote_cast_body()))))

    assert factory.call_count == 2
    assert stats.ledger == 2
    assert [c.args[0].ledger for c in store.write_vote.call_args_list] == [1, 2]


def test_make_on_close_is_a_zero_argument_callback(store: MagicMock) -> None:
    on_close = make_on_close(
        reader_factory=lambda: ledger(3, tx(event(proposal_created_body()))),
        store_factory=lambda: nullcontext(store),
    )

    assert on_close() is None
    assert _call_names(store) == ["create_proposal"]
