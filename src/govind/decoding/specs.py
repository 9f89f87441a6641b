"""Positional event schemas.

Defines lightweight dataclasses to describe where each field of a governor
event lives:
- `TopicFieldSpec` / `DataFieldSpec`: 0-based position in the topics / data vec
- `EventSpec`: one event kind (discriminator symbol + field positions)

Field `type` strings document the expected contract type; they are never
checked during decoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from govind.constants import PROPOSAL_CREATED_SYMBOL, PROPOSAL_UPDATED_SYMBOL, VOTE_CAST_SYMBOL
from govind.core.scval import ScVal


@dataclass(frozen=True)
class TopicFieldSpec:
    """Describe one topic field (by 0-based topic index; index 0 is the discriminator)."""

    name: str
    index: int
    type: str  # e.g., "u32", "address"


@dataclass(frozen=True)
class DataFieldSpec:
    """Describe one element of the data vec (0-based position)."""

    name: str
    position: int
    type: str  # e.g., "u32", "i128", "string"


@dataclass(frozen=True)
class EventSpec:
    """One governor event kind: discriminator symbol + positional fields."""

    symbol: str
    topic_fields: tuple[TopicFieldSpec, ...]
    data_fields: tuple[DataFieldSpec, ...] = ()
    topic0: ScVal = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "topic0", ScVal.symbol(self.symbol))

        names = [f.name for f in self.topic_fields] + [f.name for f in self.data_fields]
        if len(names) != len(set(names)):
            raise ValueError(f"{self.symbol}: duplicate field names {names}")
        for tf in self.topic_fields:
            if tf.index < 1:
                raise ValueError(f"{self.symbol}.{tf.name}: topic index 0 is the discriminator")
        for df in self.data_fields:
            if df.position < 0:
                raise ValueError(f"{self.symbol}.{df.name}: negative data position")

    @property
    def needs_data(self) -> bool:
        return bool(self.data_fields)


# ---- governor event schemas ----

# topics: ["vote_cast", proposal_number: u32, voter: address]
# data:   [support: u32, amount: i128]
VOTE_CAST_SPEC = EventSpec(
    symbol=VOTE_CAST_SYMBOL,
    topic_fields=(
        TopicFieldSpec("proposal_number", 1, "u32"),
        TopicFieldSpec("voter", 2, "address"),
    ),
    data_fields=(
        DataFieldSpec("support", 0, "u32"),
        DataFieldSpec("amount", 1, "i128"),
    ),
)

# topics: ["proposal_created", proposal_number: u32, proposer: address]
# data:   [title: string, description: string, action: ProposalAction]
PROPOSAL_CREATED_SPEC = EventSpec(
    symbol=PROPOSAL_CREATED_SYMBOL,
    topic_fields=(
        TopicFieldSpec("proposal_number", 1, "u32"),
        TopicFieldSpec("proposer", 2, "address"),
    ),
    data_fields=(
        DataFieldSpec("title", 0, "string"),
        DataFieldSpec("description", 1, "string"),
        DataFieldSpec("action", 2, "opaque"),
    ),
)

# topics: ["proposal_updated", proposal_number: u32, status: u32]
# data:   unused
PROPOSAL_UPDATED_SPEC = EventSpec(
    symbol=PROPOSAL_UPDATED_SYMBOL,
    topic_fields=(
        TopicFieldSpec("proposal_number", 1, "u32"),
        TopicFieldSpec("status", 2, "u32"),
    ),
)
