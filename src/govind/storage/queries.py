"""
queries.py
----------

Read-side helpers over a govind DuckDB database.

Each function opens its own read-only connection and returns a pandas
DataFrame. Amounts come back as decimal strings so i128 values stay exact.
"""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

import duckdb
import pandas as pd

from . import sql_queries


# =====================================================================
# DuckDB connection setup
# =====================================================================

@contextmanager
def get_connection(db_path: Path | str, threads: int = 4) -> Iterator[duckdb.DuckDBPyConnection]:
    """Context manager for a read-only DuckDB connection.

    Args:
        db_path: Database file written by `DuckDBStateStore`.
        threads: Number of threads for query execution.

    Yields:
        DuckDB connection with the thread PRAGMA applied.
    """
    con = duckdb.connect(str(db_path), read_only=True)
    try:
        con.execute(f"PRAGMA threads={threads}")
        yield con
    finally:
        con.close()


def _where(conditions: list[str]) -> str:
    return "WHERE " + " AND ".join(conditions) if conditions else ""


# =====================================================================
# VOTES
# =====================================================================

def fetch_votes(
    db_path: Path | str,
    *,
    contract: str | None = None,
    proposal_number: int | None = None,
) -> pd.DataFrame:
    """Fetch vote rows in insertion order.

    Args:
        db_path: Database file.
        contract: Optional contract hash (hex) filter.
        proposal_number: Optional proposal number filter.

    Returns:
        DataFrame with one row per recorded vote (replays included).
    """
    conditions: list[str] = []
    params: list = []
    if contract is not None:
        conditions.append("contract = ?")
        params.append(contract.lower())
    if proposal_number is not None:
        conditions.append("prop_num = ?")
        params.append(proposal_number)

    with get_connection(db_path) as con:
        return con.execute(sql_queries.SELECT_VOTES.format(where=_where(conditions)), params).df()


# =====================================================================
# PROPOSALS
# =====================================================================

def fetch_proposals(db_path: Path | str, *, contract: str | None = None) -> pd.DataFrame:
    """Fetch proposals, oldest first.

    Args:
        db_path: Database file.
        contract: Optional contract hash (hex) filter.

    Returns:
        DataFrame with one row per proposal and its current status.
    """
    conditions: list[str] = []
    params: list = []
    if contract is not None:
        conditions.append("contract = ?")
        params.append(contract.lower())

    with get_connection(db_path) as con:
        return con.execute(sql_queries.SELECT_PROPOSALS.format(where=_where(conditions)), params).df()
