"""Governor event decoders.

Each decoder applies one positional `EventSpec` to a V0 event body and either
returns a fully populated domain record or None when a required position is
missing. Nothing here raises on malformed input: a short event is simply not
indexed. Field values are forwarded as the extracted `ScVal`s without type
checks.
"""

from __future__ import annotations

from collections.abc import Sequence

from govind.constants import INITIAL_PROPOSAL_STATUS
from govind.core.models import ContractEventV0, Proposal, ProposalStatusUpdate, Vote
from govind.core.scval import ScVal
from govind.decoding.catalog import EventKind, EventKinds
from govind.decoding.specs import (
    PROPOSAL_CREATED_SPEC,
    PROPOSAL_UPDATED_SPEC,
    VOTE_CAST_SPEC,
    EventSpec,
)
from govind.decoding.utils import data_vec, item_at, topic_at

DecodedRecord = Vote | Proposal | ProposalStatusUpdate


# ---------- helper functions ----------


def extract_fields(
    spec: EventSpec,
    topics: Sequence[ScVal],
    data: ScVal | None,
) -> dict[str, ScVal] | None:
    """Pull every field of `spec` by position; None as soon as one is missing."""
    values: dict[str, ScVal] = {}
    for tf in spec.topic_fields:
        v = topic_at(topics, tf.index)
        if v is None:
            return None
        values[tf.name] = v

    if not spec.needs_data:
        return values

    items = data_vec(data)
    if items is None:
        return None
    for df in spec.data_fields:
        v = item_at(items, df.position)
        if v is None:
            return None
        values[df.name] = v
    return values


# ---------- per-kind decoders ----------


def decode_vote_cast(
    contract: bytes,
    topics: Sequence[ScVal],
    data: ScVal | None,
    ledger: int,
) -> Vote | None:
    """Decode `vote_cast`.

    - topics - `["vote_cast", proposal_number: u32, voter: Address]`
    - data - `[support: u32, amount: i128]`
    """
    f = extract_fields(VOTE_CAST_SPEC, topics, data)
    if f is None:
        return None
    return Vote(
        contract=contract,
        proposal_number=f["proposal_number"],
        voter=f["voter"],
        support=f["support"],
        amount=f["amount"],
        ledger=ledger,
    )


def decode_proposal_created(
    contract: bytes,
    topics: Sequence[ScVal],
    data: ScVal | None,
    ledger: int,
) -> Proposal | None:
    """Decode `proposal_created`; the status always starts at 0.

    - topics - `["proposal_created", proposal_number: u32, proposer: Address]`
    - data - `[title: String, desc: String, action: ProposalAction]`
    """
    f = extract_fields(PROPOSAL_CREATED_SPEC, topics, data)
    if f is None:
        return None
    return Proposal(
        contract=contract,
        proposal_number=f["proposal_number"],
        title=f["title"],
        description=f["description"],
        action=f["action"],
        creator=f["proposer"],
        status=ScVal.u32(INITIAL_PROPOSAL_STATUS),
        ledger=ledger,
    )


def decode_proposal_updated(
    contract: bytes,
    topics: Sequence[ScVal],
    data: ScVal | None,
    ledger: int,
) -> ProposalStatusUpdate | None:
    """Decode `proposal_updated`.

    - topics - `["proposal_updated", proposal_number: u32, status: u32]`
    - data - unused
    """
    f = extract_fields(PROPOSAL_UPDATED_SPEC, topics, data)
    if f is None:
        return None
    return ProposalStatusUpdate(
        contract=contract,
        proposal_number=f["proposal_number"],
        status=f["status"],
        ledger=ledger,
    )


# ---------- routing ----------


def decode_event(
    kind: EventKind,
    *,
    contract: bytes,
    event: ContractEventV0,
    ledger: int,
) -> DecodedRecord | None:
    """Run the decoder for `kind`; unrecognized kinds decode to None."""
    match kind:
        case EventKinds.VoteCast():
            return decode_vote_cast(contract, event.topics, event.data, ledger)
        case EventKinds.ProposalCreated():
            return decode_proposal_created(contract, event.topics, event.data, ledger)
        case EventKinds.ProposalUpdated():
            return decode_proposal_updated(contract, event.topics, event.data, ledger)
        case EventKinds.Unrecognized():
            return None
    raise RuntimeError(f"Unsupported event kind {kind!r}")
