"""Event catalog: discriminator -> event kind.

This module exposes:
- `EventKinds`: closed set of kinds an event can classify as
- `EVENT_CATALOG`: static table keyed by the encoded topic0 symbol
- `classify_event(topic0)`: one lookup per event, never raises

Matching is done on the encoded `ScVal` (type tag + raw symbol bytes), so no
symbol is ever decoded back to text on the hot path.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import ClassVar

from govind.core.scval import ScVal
from govind.decoding.specs import (
    PROPOSAL_CREATED_SPEC,
    PROPOSAL_UPDATED_SPEC,
    VOTE_CAST_SPEC,
    EventSpec,
)


class EventKinds:
    @dataclass(frozen=True)
    class VoteCast:
        spec: ClassVar[EventSpec] = VOTE_CAST_SPEC

    @dataclass(frozen=True)
    class ProposalCreated:
        spec: ClassVar[EventSpec] = PROPOSAL_CREATED_SPEC

    @dataclass(frozen=True)
    class ProposalUpdated:
        spec: ClassVar[EventSpec] = PROPOSAL_UPDATED_SPEC

    @dataclass(frozen=True)
    class Unrecognized:
        raw: ScVal


RecognizedKind = EventKinds.VoteCast | EventKinds.ProposalCreated | EventKinds.ProposalUpdated
EventKind = RecognizedKind | EventKinds.Unrecognized


def make_catalog(kinds: Iterable[RecognizedKind]) -> Mapping[ScVal, RecognizedKind]:
    """Build a read-only topic0 table; discriminators must be distinct."""
    table: dict[ScVal, RecognizedKind] = {}
    for kind in kinds:
        topic0 = kind.spec.topic0
        if topic0 in table:
            raise ValueError(f"duplicate discriminator {kind.spec.symbol!r} in event catalog")
        table[topic0] = kind
    return MappingProxyType(table)


EVENT_CATALOG: Mapping[ScVal, RecognizedKind] = make_catalog(
    [
        EventKinds.VoteCast(),
        EventKinds.ProposalCreated(),
        EventKinds.ProposalUpdated(),
    ]
)


def classify_event(topic0: ScVal, catalog: Mapping[ScVal, RecognizedKind] = EVENT_CATALOG) -> EventKind:
    """Return the catalog kind for `topic0`, or `Unrecognized(topic0)`."""
    kind = catalog.get(topic0)
    if kind is None:
        return EventKinds.Unrecognized(raw=topic0)
    return kind


def catalog_specs(catalog: Mapping[ScVal, RecognizedKind] = EVENT_CATALOG) -> list[EventSpec]:
    return [kind.spec for kind in catalog.values()]
