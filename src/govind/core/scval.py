"""Soroban contract values as already-decoded tagged unions.

This module defines:
- `ScValType`: the value tags the indexer understands.
- `ScVal`: one tagged value (hashable, compared on its encoded form).
- `ScAddress`: account / contract address with StrKey rendering.

Design notes
------------
- Symbols and strings keep their raw bytes so two `ScVal`s are equal exactly
  when their wire encodings are equal; no string decode is needed to compare.
- Wide integers (u64 and above) travel as decimal strings in the JSON form.
- Tags outside this model decode to `OTHER`, so a ledger carrying newer value
  types still loads; such values never match a governor field.
- `vec` / `map` may be *absent* (value `None`), mirroring the optional
  container in the ledger wire format.
"""

from __future__ import annotations

import base64
import json
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal


class ScValType(str, Enum):
    BOOL = "bool"
    VOID = "void"
    U32 = "u32"
    I32 = "i32"
    U64 = "u64"
    I64 = "i64"
    U128 = "u128"
    I128 = "i128"
    STRING = "string"
    SYMBOL = "symbol"
    BYTES = "bytes"
    ADDRESS = "address"
    VEC = "vec"
    MAP = "map"
    # any tag not modelled here (u256, timepoint, error, ...); keeps the raw JSON
    OTHER = "other"


_INT_RANGES: dict[ScValType, tuple[int, int]] = {
    ScValType.U32: (0, 2**32 - 1),
    ScValType.I32: (-(2**31), 2**31 - 1),
    ScValType.U64: (0, 2**64 - 1),
    ScValType.I64: (-(2**63), 2**63 - 1),
    ScValType.U128: (0, 2**128 - 1),
    ScValType.I128: (-(2**127), 2**127 - 1),
}

# 64-bit and wider integers travel as decimal strings in JSON
_WIDE_INTS = (ScValType.U64, ScValType.I64, ScValType.U128, ScValType.I128)

SYMBOL_MAX_LEN = 32
_SYMBOL_RE = re.compile(r"^[A-Za-z0-9_]*$")


# ---------- StrKey ----------

AddressKind = Literal["account", "contract"]

_STRKEY_VERSION: dict[str, int] = {
    "account": 6 << 3,  # 'G...'
    "contract": 2 << 3,  # 'C...'
}
_STRKEY_KIND = {v: k for k, v in _STRKEY_VERSION.items()}


def _crc16_xmodem(data: bytes) -> int:
    crc = 0
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            crc = ((crc << 1) ^ 0x1021) if crc & 0x8000 else (crc << 1)
            crc &= 0xFFFF
    return crc


@dataclass(frozen=True, slots=True)
class ScAddress:
    """Account (ed25519 public key) or contract (hash) address."""

    kind: AddressKind
    payload: bytes  # 32 bytes

    def __post_init__(self) -> None:
        if self.kind not in _STRKEY_VERSION:
            raise ValueError(f"unknown address kind: {self.kind!r}")
        if len(self.payload) != 32:
            raise ValueError(f"address payload must be 32 bytes, got {len(self.payload)}")

    def to_strkey(self) -> str:
        body = bytes([_STRKEY_VERSION[self.kind]]) + self.payload
        checksum = _crc16_xmodem(body).to_bytes(2, "little")
        return base64.b32encode(body + checksum).decode("ascii").rstrip("=")

    @classmethod
    def from_strkey(cls, strkey: str) -> ScAddress:
        """Parse a `G...` / `C...` StrKey, verifying version byte and checksum."""
        s = strkey.strip().upper()
        if len(s) != 56:
            raise ValueError(f"invalid strkey length: {strkey!r}")
        try:
            raw = base64.b32decode(s)
        except ValueError as e:
            raise ValueError(f"invalid strkey encoding: {strkey!r}") from e
        body, checksum = raw[:-2], raw[-2:]
        if _crc16_xmodem(body).to_bytes(2, "little") != checksum:
            raise ValueError(f"invalid strkey checksum: {strkey!r}")
        kind = _STRKEY_KIND.get(body[0])
        if kind is None:
            raise ValueError(f"unsupported strkey version byte: {body[0]}")
        return cls(kind=kind, payload=body[1:])

    def __str__(self) -> str:
        return self.to_strkey()


# ---------- ScVal ----------


@dataclass(frozen=True, slots=True)
class ScVal:
    """One tagged contract value.

    `value` holds: bool, None (void), int, bytes (string / symbol / bytes),
    `ScAddress`, `tuple[ScVal, ...] | None` (vec) or
    `tuple[tuple[ScVal, ScVal], ...] | None` (map).
    """

    type: ScValType
    value: Any = None

    # ---- constructors ----

    @classmethod
    def _int(cls, typ: ScValType, n: int) -> ScVal:
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError(f"{typ.value} expects an int, got {type(n).__name__}")
        lo, hi = _INT_RANGES[typ]
        if not lo <= n <= hi:
            raise ValueError(f"{n} out of range for {typ.value}")
        return cls(typ, n)

    @classmethod
    def u32(cls, n: int) -> ScVal:
        return cls._int(ScValType.U32, n)

    @classmethod
    def i32(cls, n: int) -> ScVal:
        return cls._int(ScValType.I32, n)

    @classmethod
    def u64(cls, n: int) -> ScVal:
        return cls._int(ScValType.U64, n)

    @classmethod
    def i64(cls, n: int) -> ScVal:
        return cls._int(ScValType.I64, n)

    @classmethod
    def u128(cls, n: int) -> ScVal:
        return cls._int(ScValType.U128, n)

    @classmethod
    def i128(cls, n: int) -> ScVal:
        return cls._int(ScValType.I128, n)

    @classmethod
    def symbol(cls, name: str) -> ScVal:
        """Encode a symbol (at most 32 chars from [A-Za-z0-9_])."""
        if len(name) > SYMBOL_MAX_LEN or not _SYMBOL_RE.match(name):
            raise ValueError(f"invalid symbol: {name!r}")
        return cls(ScValType.SYMBOL, name.encode("ascii"))

    @classmethod
    def string(cls, s: str | bytes) -> ScVal:
        return cls(ScValType.STRING, s.encode("utf-8") if isinstance(s, str) else bytes(s))

    @classmethod
    def bytes_(cls, b: bytes) -> ScVal:
        return cls(ScValType.BYTES, bytes(b))

    @classmethod
    def bool_(cls, b: bool) -> ScVal:
        return cls(ScValType.BOOL, bool(b))

    @classmethod
    def void(cls) -> ScVal:
        return cls(ScValType.VOID, None)

    @classmethod
    def address(cls, addr: ScAddress | str) -> ScVal:
        if isinstance(addr, str):
            addr = ScAddress.from_strkey(addr)
        return cls(ScValType.ADDRESS, addr)

    @classmethod
    def vec(cls, items: Any | None) -> ScVal:
        """Build a vec; `None` means the vec itself is absent."""
        return cls(ScValType.VEC, None if items is None else tuple(items))

    @classmethod
    def map(cls, pairs: Any | None) -> ScVal:
        return cls(ScValType.MAP, None if pairs is None else tuple((k, v) for k, v in pairs))

    @classmethod
    def other(cls, raw: dict[str, Any]) -> ScVal:
        """Wrap a value whose tag is not modelled, keeping its JSON form."""
        return cls(ScValType.OTHER, json.dumps(raw, sort_keys=True, separators=(",", ":")))

    # ---- accessors ----

    def is_type(self, typ: ScValType) -> bool:
        return self.type is typ

    def as_text(self) -> str:
        """Decode a string / symbol payload as UTF-8."""
        if self.type not in (ScValType.STRING, ScValType.SYMBOL):
            raise TypeError(f"{self.type.value} is not textual")
        return self.value.decode("utf-8", errors="replace")

    # ---- JSON form ----

    def to_json(self) -> dict[str, Any]:
        """Return the tagged JSON form `{"type": ..., "value": ...}`."""
        t = self.type
        match t:
            case ScValType.VOID:
                return {"type": t.value}
            case ScValType.BOOL | ScValType.U32 | ScValType.I32:
                return {"type": t.value, "value": self.value}
            case ScValType.U64 | ScValType.I64 | ScValType.U128 | ScValType.I128:
                return {"type": t.value, "value": str(self.value)}
            case ScValType.STRING | ScValType.SYMBOL:
                return {"type": t.value, "value": self.as_text()}
            case ScValType.BYTES:
                return {"type": t.value, "value": self.value.hex()}
            case ScValType.ADDRESS:
                return {"type": t.value, "value": self.value.to_strkey()}
            case ScValType.VEC:
                items = None if self.value is None else [v.to_json() for v in self.value]
                return {"type": t.value, "value": items}
            case ScValType.MAP:
                pairs = (
                    None
                    if self.value is None
                    else [{"key": k.to_json(), "val": v.to_json()} for k, v in self.value]
                )
                return {"type": t.value, "value": pairs}
            case ScValType.OTHER:
                return json.loads(self.value)
        raise RuntimeError(f"Unsupported ScVal type {t!r}")

    @classmethod
    def from_json(cls, obj: Any) -> ScVal:
        """Parse the tagged JSON form; raises ValueError on malformed input."""
        if not isinstance(obj, dict) or "type" not in obj:
            raise ValueError(f"ScVal JSON must be an object with a 'type': {obj!r}")
        tag = obj["type"]
        if not isinstance(tag, str):
            raise ValueError(f"ScVal type must be a string, got {tag!r}")
        try:
            t = ScValType(tag)
        except ValueError:
            t = ScValType.OTHER
        v = obj.get("value")

        if t is ScValType.OTHER:
            return cls.other(obj)
        if t is ScValType.VOID:
            return cls.void()
        if t is ScValType.BOOL:
            if not isinstance(v, bool):
                raise ValueError(f"bool expects true/false, got {v!r}")
            return cls.bool_(v)
        if t in _INT_RANGES:
            if t in _WIDE_INTS and isinstance(v, str):
                try:
                    v = int(v, 10)
                except ValueError as e:
                    raise ValueError(f"{t.value} expects a decimal string, got {v!r}") from e
            try:
                return cls._int(t, v)
            except TypeError as e:
                raise ValueError(str(e)) from e
        if t is ScValType.SYMBOL:
            return cls.symbol(_require_str(t, v))
        if t is ScValType.STRING:
            return cls.string(_require_str(t, v))
        if t is ScValType.BYTES:
            return cls.bytes_(bytes.fromhex(_require_str(t, v)))
        if t is ScValType.ADDRESS:
            return cls.address(_require_str(t, v))
        if t is ScValType.VEC:
            if v is None:
                return cls.vec(None)
            if not isinstance(v, list):
                raise ValueError(f"vec expects a list or null, got {v!r}")
            return cls.vec(cls.from_json(item) for item in v)
        if t is ScValType.MAP:
            if v is None:
                return cls.map(None)
            if not isinstance(v, list):
                raise ValueError(f"map expects a list or null, got {v!r}")
            try:
                return cls.map((cls.from_json(e["key"]), cls.from_json(e["val"])) for e in v)
            except (KeyError, TypeError) as e:
                raise ValueError(f"map entries need 'key' and 'val': {v!r}") from e
        raise RuntimeError(f"Unsupported ScVal type {t!r}")


def _require_str(t: ScValType, v: Any) -> str:
    if not isinstance(v, str):
        raise ValueError(f"{t.value} expects a string, got {v!r}")
    return v
