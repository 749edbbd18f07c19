"""Transaction aggregation module."""
from decimal import Decimal
from collections import defaultdict
from typing import Sequence

from .models import TransactionRecord, AnalysisSummary, TransactionType, TransactionStatus
from rupiya.utils.logger import get_logger

logger = get_logger()


class Aggregator:
    """Folds a record batch into an AnalysisSummary."""

    def aggregate(self, records: Sequence[TransactionRecord]) -> AnalysisSummary:
        """
        Build a summary from scratch for the given batch.

        Only successful records contribute to totals; every other status
        counts as failed. The category breakdown covers successful debits.

        Args:
            records: Deduplicated record batch

        Returns:
            AnalysisSummary object
        """
        total_spent = Decimal("0")
        total_income = Decimal("0")
        failed_count = 0
        breakdown = defaultdict(Decimal)

        for record in records:
            if record.status != TransactionStatus.SUCCESS:
                failed_count += 1
                continue

            if record.type == TransactionType.DEBIT:
                total_spent += record.amount
                breakdown[record.category] += record.amount
            else:
                total_income += record.amount

        logger.info(
            f"Aggregated {len(records)} transactions into {len(breakdown)} categories "
            f"(spent {total_spent}, income {total_income}, failed {failed_count})"
        )

        return AnalysisSummary(
            total_spent=total_spent,
            total_income=total_income,
            transaction_count=len(records),
            failed_count=failed_count,
            category_breakdown=dict(breakdown)
        )
