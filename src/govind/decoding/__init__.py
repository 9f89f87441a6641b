"""Governor event recognition and decoding.

This package provides:
- Positional event schemas (EventSpec, TopicFieldSpec, DataFieldSpec)
- The static event catalog and `classify_event`
- Per-kind decoders producing Vote / Proposal / ProposalStatusUpdate records
"""

from govind.decoding.catalog import EVENT_CATALOG, EventKind, EventKinds, classify_event
from govind.decoding.decoder import (
    DecodedRecord,
    decode_event,
    decode_proposal_created,
    decode_proposal_updated,
    decode_vote_cast,
)
from govind.decoding.specs import (
    PROPOSAL_CREATED_SPEC,
    PROPOSAL_UPDATED_SPEC,
    VOTE_CAST_SPEC,
    DataFieldSpec,
    EventSpec,
    TopicFieldSpec,
)

__all__ = [
    "EVENT_CATALOG",
    "EventKind",
    "EventKinds",
    "classify_event",
    "DecodedRecord",
    "decode_event",
    "decode_proposal_created",
    "decode_proposal_updated",
    "decode_vote_cast",
    "PROPOSAL_CREATED_SPEC",
    "PROPOSAL_UPDATED_SPEC",
    "VOTE_CAST_SPEC",
    "DataFieldSpec",
    "EventSpec",
    "TopicFieldSpec",
]
