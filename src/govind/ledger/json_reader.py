"""JSON ledger exports -> ledger models.

Expected layout (one closed ledger per file)::

    {
      "ledger_sequence": 51234,
      "tx_processing": [
        {
          "tx_hash": "ab12...",
          "tx_apply_processing": {
            "version": 3,
            "soroban_meta": {
              "events": [
                {
                  "contract_id": "<64 hex chars or C... strkey, or null>",
                  "body": {"version": 0, "topics": [<ScVal>...], "data": <ScVal>}
                }
              ]
            }
          }
        }
      ]
    }

`<ScVal>` is the tagged form handled by `ScVal.from_json`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from govind.constants import SUPPORTED_EVENT_BODY_VERSION
from govind.core.errors import LedgerFormatError
from govind.core.models import (
    ContractEvent,
    ContractEventBody,
    ContractEventV0,
    SorobanTransactionMeta,
    TransactionMeta,
    TransactionResultMeta,
    UnsupportedEventBody,
)
from govind.core.scval import ScAddress, ScVal
from govind.ledger.reader import InMemoryLedgerReader


class EventBodyJson(BaseModel):
    version: int = SUPPORTED_EVENT_BODY_VERSION
    topics: list[dict[str, Any]] = []
    data: dict[str, Any] | None = None


class ContractEventJson(BaseModel):
    contract_id: str | None = None
    body: EventBodyJson


class SorobanMetaJson(BaseModel):
    events: list[ContractEventJson] = []


class TransactionMetaJson(BaseModel):
    version: int
    soroban_meta: SorobanMetaJson | None = None


class TransactionResultMetaJson(BaseModel):
    tx_hash: str = ""
    tx_apply_processing: TransactionMetaJson


class LedgerJson(BaseModel):
    ledger_sequence: int = Field(ge=0, lt=2**32)
    tx_processing: list[TransactionResultMetaJson] = []


# ---------- conversion ----------


def parse_contract_id(raw: str) -> bytes:
    """Accept a 32-byte hash as hex or as a contract (C...) strkey."""
    s = raw.strip()
    if len(s) == 64:
        return bytes.fromhex(s)
    addr = ScAddress.from_strkey(s)
    if addr.kind != "contract":
        raise ValueError(f"contract_id must be a contract address, got {addr.kind} {raw!r}")
    return addr.payload


def _to_body(body: EventBodyJson) -> ContractEventBody:
    if body.version != SUPPORTED_EVENT_BODY_VERSION:
        return UnsupportedEventBody(version=body.version)
    return ContractEventV0(
        topics=tuple(ScVal.from_json(t) for t in body.topics),
        data=ScVal.void() if body.data is None else ScVal.from_json(body.data),
    )


def _to_event(ev: ContractEventJson) -> ContractEvent:
    return ContractEvent(
        contract_id=None if ev.contract_id is None else parse_contract_id(ev.contract_id),
        body=_to_body(ev.body),
    )


def _to_record(rec: TransactionResultMetaJson) -> TransactionResultMeta:
    meta = rec.tx_apply_processing
    soroban = None
    if meta.soroban_meta is not None:
        soroban = SorobanTransactionMeta(events=tuple(_to_event(e) for e in meta.soroban_meta.events))
    return TransactionResultMeta(
        tx_hash=rec.tx_hash,
        tx_apply_processing=TransactionMeta(version=meta.version, soroban_meta=soroban),
    )


def load_ledger(obj: Any) -> InMemoryLedgerReader:
    """Build a ledger reader from an already-parsed JSON document."""
    try:
        ledger = LedgerJson.model_validate(obj)
        records = tuple(_to_record(r) for r in ledger.tx_processing)
    except (ValidationError, ValueError) as e:
        raise LedgerFormatError(str(e)) from e
    return InMemoryLedgerReader(sequence=ledger.ledger_sequence, records=records)


def load_ledger_file(path: Path | str) -> InMemoryLedgerReader:
    """Read one JSON ledger export from disk."""
    p = Path(path)
    try:
        obj = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise LedgerFormatError(f"{p}: {e}") from e
    return load_ledger(obj)
