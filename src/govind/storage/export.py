from __future__ import annotations

import logging
import os
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

from govind.storage.queries import get_connection

from . import sql_queries

logger = logging.getLogger(__name__)

_EXPORTS: tuple[tuple[str, str], ...] = (
    ("votes", sql_queries.SELECT_VOTES.format(where="")),
    ("proposals", sql_queries.SELECT_PROPOSALS.format(where="")),
)


def _atomic_write(out_path: Path, table: pa.Table, codec: str) -> Path:
    """Write Parquet atomically (tmp + replace)."""
    tmp = out_path.with_suffix(".tmp")
    pq.write_table(table, tmp, compression=codec)
    os.replace(tmp, out_path)
    logger.info("wrote %s (rows=%d, cols=%d)", out_path, len(table), len(table.schema))
    return out_path


def export_parquet(db_path: Path | str, out_dir: Path | str, *, codec: str = "zstd") -> list[Path]:
    """Dump the `votes` and `proposals` tables to `<out_dir>/<table>.parquet`.

    Tables are written even when empty so downstream readers always find a
    schema. Returns the written paths.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    with get_connection(db_path) as con:
        for name, query in _EXPORTS:
            table = con.execute(query).fetch_arrow_table()
            written.append(_atomic_write(out / f"{name}.parquet", table, codec))
    return written
