"""Host-side ledger readers.

This package provides:
- InMemoryLedgerReader: ILedgerReader over prebuilt models
- load_ledger / load_ledger_file: JSON ledger exports -> InMemoryLedgerReader
"""

from govind.ledger.json_reader import load_ledger, load_ledger_file
from govind.ledger.reader import InMemoryLedgerReader

__all__ = [
    "InMemoryLedgerReader",
    "load_ledger",
    "load_ledger_file",
]
