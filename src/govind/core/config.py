from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

StoreErrorPolicy = Literal["continue", "raise"]


@dataclass(frozen=True)
class IndexerConfig:
    """Configuration for the per-ledger indexer."""

    db_path: Path = Path("./data/govind.duckdb")
    # "continue": log + record the failure, move on to the next event
    # "raise": abort the ledger on the first failed write
    on_store_error: StoreErrorPolicy = "continue"

    def __post_init__(self) -> None:
        if self.on_store_error not in ("continue", "raise"):
            raise ValueError(f"on_store_error must be 'continue' or 'raise', got {self.on_store_error!r}")
