"""DuckDB-backed StateStore.

`DuckDBStateStore` persists governor records into two tables (`votes`,
`proposals`). It is the only place where extracted `ScVal`s are checked
against the types the governor contract is expected to emit:

- proposal number, support, status: u32
- amount: i128 (stored as HUGEINT)
- voter / creator: address (stored as StrKey)
- title / description: string
- action: any value (stored as tagged JSON)

Every failure surfaces as `StateStoreError` (or one of its subclasses), so
callers only need to handle the one exception family.
"""

from __future__ import annotations

import json
from pathlib import Path
from types import TracebackType

import duckdb

from govind.constants import INITIAL_PROPOSAL_STATUS
from govind.core.errors import InvalidValue, ProposalNotFound, StateStoreError
from govind.core.interfaces import IStateStore
from govind.core.models import Proposal, Vote
from govind.core.scval import ScVal, ScValType

from . import sql_queries


# ---------- value conversion ----------


def _expect(field: str, v: ScVal, typ: ScValType) -> None:
    if v.type is not typ:
        raise InvalidValue(field, typ.value, v.type.value)


def contract_key(contract: bytes) -> str:
    """Column value for a 32-byte contract hash (lowercase hex)."""
    if len(contract) != 32:
        raise InvalidValue("contract", "32-byte hash", f"{len(contract)} bytes")
    return contract.hex()


def u32_value(field: str, v: ScVal) -> int:
    _expect(field, v, ScValType.U32)
    return v.value


def i128_value(field: str, v: ScVal) -> str:
    _expect(field, v, ScValType.I128)
    return str(v.value)


def address_value(field: str, v: ScVal) -> str:
    _expect(field, v, ScValType.ADDRESS)
    return v.value.to_strkey()


def string_value(field: str, v: ScVal) -> str:
    _expect(field, v, ScValType.STRING)
    return v.as_text()


def opaque_value(v: ScVal) -> str:
    return json.dumps(v.to_json(), separators=(",", ":"))


# ---------- store ----------


class DuckDBStateStore(IStateStore):
    """
    StateStore on a DuckDB database file (or ":memory:").

    Use as a context manager: the connection is opened and the schema created
    on enter, and the connection is closed on exit.

    Parameters
    ----------
    path : Path | str
        Database file; parent directories are created. ":memory:" keeps
        everything in-process.
    """

    def __init__(self, path: Path | str = ":memory:") -> None:
        self.path = str(path)
        self._con: duckdb.DuckDBPyConnection | None = None

    # ---------- lifecycle ----------

    def open(self) -> DuckDBStateStore:
        if self._con is not None:
            return self
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        try:
            self._con = duckdb.connect(self.path)
            self._con.execute(sql_queries.CREATE_SCHEMA)
        except duckdb.Error as e:
            raise StateStoreError(f"cannot open {self.path}: {e}") from e
        return self

    def close(self) -> None:
        if self._con is not None:
            self._con.close()
            self._con = None

    def __enter__(self) -> DuckDBStateStore:
        return self.open()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def connection(self) -> duckdb.DuckDBPyConnection:
        if self._con is None:
            raise StateStoreError("store is not open")
        return self._con

    def _execute(self, query: str, params: list) -> list[tuple]:
        try:
            return self.connection.execute(query, params).fetchall()
        except duckdb.Error as e:
            raise StateStoreError(f"{type(e).__name__}: {e}") from e

    # ---------- IStateStore ----------

    def write_vote(self, vote: Vote) -> None:
        params = [
            contract_key(vote.contract),
            u32_value("proposal_number", vote.proposal_number),
            address_value("voter", vote.voter),
            u32_value("support", vote.support),
            i128_value("amount", vote.amount),
            vote.ledger,
        ]
        self._execute(sql_queries.INSERT_VOTE, params)

    def create_proposal(self, proposal: Proposal) -> None:
        params = [
            contract_key(proposal.contract),
            u32_value("proposal_number", proposal.proposal_number),
            string_value("title", proposal.title),
            string_value("description", proposal.description),
            opaque_value(proposal.action),
            address_value("creator", proposal.creator),
            INITIAL_PROPOSAL_STATUS,
            proposal.ledger,
        ]
        self._execute(sql_queries.INSERT_PROPOSAL, params)

    def update_proposal_status(self, status: ScVal, contract: bytes, proposal_number: ScVal) -> None:
        key = contract_key(contract)
        num = u32_value("proposal_number", proposal_number)
        rows = self._execute(
            sql_queries.UPDATE_PROPOSAL_STATUS,
            [u32_value("status", status), key, num],
        )
        if not rows:
            raise ProposalNotFound(key, num)
