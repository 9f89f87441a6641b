"""Decoding utilities: optional positional access into topics and data."""

from __future__ import annotations

from collections.abc import Sequence

from govind.core.scval import ScVal, ScValType


def topic_at(topics: Sequence[ScVal], i: int) -> ScVal | None:
    """Return the i-th topic, or None if the event has fewer topics."""
    return topics[i] if 0 <= i < len(topics) else None


def data_vec(data: ScVal | None) -> tuple[ScVal, ...] | None:
    """Return the elements of a vec payload; None if absent or not a vec."""
    if data is None or data.type is not ScValType.VEC:
        return None
    return data.value


def item_at(items: Sequence[ScVal], i: int) -> ScVal | None:
    """Return the i-th data element, or None if out of range."""
    return items[i] if 0 <= i < len(items) else None
