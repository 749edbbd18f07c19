"""Batch-scoped duplicate suppression."""
from decimal import Decimal
from typing import List, Set, Tuple

from rupiya.llm.models import TransactionRecord

DedupKey = Tuple[Decimal, str, str]


class Deduplicator:
    """Keeps the first record for each (amount, merchant, original text)."""

    def __init__(self):
        self._seen: Set[DedupKey] = set()
        self.records: List[TransactionRecord] = []
        self.duplicates = 0

    @staticmethod
    def key(record: TransactionRecord) -> DedupKey:
        return (record.amount, record.merchant, record.original_text)

    def is_duplicate(self, record: TransactionRecord) -> bool:
        return self.key(record) in self._seen

    def add(self, record: TransactionRecord) -> bool:
        """Append the record unless an equivalent one was seen; return True if kept."""
        key = self.key(record)
        if key in self._seen:
            self.duplicates += 1
            return False

        self._seen.add(key)
        self.records.append(record)
        return True
