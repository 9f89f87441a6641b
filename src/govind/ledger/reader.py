from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from govind.core.interfaces import ILedgerReader
from govind.core.models import TransactionResultMeta


@dataclass
class InMemoryLedgerReader(ILedgerReader):
    """Ledger reader over already-built transaction records."""

    sequence: int
    records: Sequence[TransactionResultMeta] = field(default_factory=tuple)

    def ledger_sequence(self) -> int:
        return self.sequence

    def tx_processing(self) -> Sequence[TransactionResultMeta]:
        return self.records
