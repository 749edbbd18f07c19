"""Per-line parsing, normalization and validation."""
from decimal import Decimal
from typing import Optional

from rupiya.llm.models import TransactionRecord, PartialRecord, TransactionType, TransactionStatus
from rupiya.sms.extractor import LineExtractor
from rupiya.sms.regex_extractor import UNKNOWN_MERCHANT
from rupiya.utils.logger import get_logger
from .config import PipelineConfig

logger = get_logger()


class LineParser:
    """Turns candidate lines into validated TransactionRecords."""

    def __init__(self, extractor: LineExtractor, config: PipelineConfig, run_stamp: int, run_date: str):
        """
        Initialize the parser for one run.

        Args:
            extractor: Extractor selected for this run
            config: Run configuration
            run_stamp: Millisecond timestamp used in record ids
            run_date: ISO processing date stamped on every record
        """
        self.extractor = extractor
        self.config = config
        self.run_stamp = run_stamp
        self.run_date = run_date

    def is_parsable(self, line: str) -> bool:
        return len(line.strip()) >= self.config.min_line_length

    def parse(self, line: str, index: int) -> Optional[TransactionRecord]:
        """
        Extract and normalize one line.

        Args:
            line: Candidate line (untrimmed)
            index: Position of the line among candidate lines

        Returns:
            TransactionRecord, or None if the amount is not positive
        """
        text = line.strip()
        partial = self.extractor.extract(text)

        amount = partial.amount if partial.amount is not None else Decimal("0")
        if amount <= 0:
            logger.debug(f"Dropping line {index}: no positive amount")
            return None

        return self._build_record(text, index, amount, partial)

    def _build_record(self, text: str, index: int, amount: Decimal, partial: PartialRecord) -> TransactionRecord:
        return TransactionRecord(
            id=f"txn-{self.run_stamp}-{index}",
            original_text=text,
            date=self.run_date,
            amount=amount,
            merchant=partial.merchant or UNKNOWN_MERCHANT,
            category=partial.category or self.config.default_category,
            bank_name=self.config.default_bank_name,
            payment_mode=self.config.default_payment_mode,
            type=coerce_type(partial.type),
            status=coerce_status(partial.status)
        )


def coerce_type(value: Optional[str]) -> TransactionType:
    """Map a raw type onto TransactionType; unknown values become debit."""
    try:
        return TransactionType((value or "").strip().lower())
    except ValueError:
        return TransactionType.DEBIT


def coerce_status(value: Optional[str]) -> TransactionStatus:
    """Map a raw status onto TransactionStatus; unknown values become success."""
    try:
        return TransactionStatus((value or "").strip().lower())
    except ValueError:
        return TransactionStatus.SUCCESS
