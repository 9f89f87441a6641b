"""Storage components for governor records.

This package provides:
- DuckDBStateStore: IStateStore on a DuckDB database
- fetch_votes / fetch_proposals: read-side DataFrame queries
- export_parquet: Parquet dump of both tables
"""

from govind.storage.duckdb_store import DuckDBStateStore
from govind.storage.export import export_parquet
from govind.storage.queries import fetch_proposals, fetch_votes

__all__ = [
    "DuckDBStateStore",
    "export_parquet",
    "fetch_proposals",
    "fetch_votes",
]
