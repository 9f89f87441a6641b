import pytest

from govind.core.scval import ScVal
from govind.decoding.catalog import EVENT_CATALOG, EventKinds, catalog_specs, classify_event, make_catalog
from govind.decoding.specs import EventSpec, TopicFieldSpec


def test_catalog_has_three_distinct_discriminators() -> None:
    assert len(EVENT_CATALOG) == 3
    assert {spec.symbol for spec in catalog_specs()} == {"vote_cast", "proposal_created", "proposal_updated"}


@pytest.mark.parametrize(
    "symbol, kind",
    [
        ("vote_cast", EventKinds.VoteCast),
        ("proposal_created", EventKinds.ProposalCreated),
        ("proposal_updated", EventKinds.ProposalUpdated),
    ],
)
def test_classify_known_symbols(symbol: str, kind: type) -> None:
    assert isinstance(classify_event(ScVal.symbol(symbol)), kind)


def test_classify_unknown_symbol_keeps_raw() -> None:
    raw = ScVal.symbol("transfer")

    assert classify_event(raw) == EventKinds.Unrecognized(raw=raw)


def test_classify_compares_encoded_values() -> None:
    # same text, different wire type: not a match
    assert isinstance(classify_event(ScVal.string("vote_cast")), EventKinds.Unrecognized)


def test_catalog_is_read_only() -> None:
    with pytest.raises(TypeError):
        EVENT_CATALOG[ScVal.symbol("transfer")] = EventKinds.VoteCast()  # type: ignore[index]


def test_make_catalog_rejects_duplicates() -> None:
    with pytest.raises(ValueError):
        make_catalog([EventKinds.VoteCast(), EventKinds.VoteCast()])


def test_event_spec_rejects_discriminator_position() -> None:
    with pytest.raises(ValueError):
        EventSpec(symbol="bad", topic_fields=(TopicFieldSpec("x", 0, "u32"),))


def test_event_spec_rejects_invalid_symbol() -> None:
    with pytest.raises(ValueError):
        EventSpec(symbol="not-a-symbol", topic_fields=())
