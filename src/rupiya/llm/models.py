"""Data models for transaction extraction."""
from dataclasses import dataclass, field, asdict
from decimal import Decimal
from enum import Enum
from typing import Dict, Optional


class TransactionType(str, Enum):
    DEBIT = "debit"
    CREDIT = "credit"


class TransactionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    CANCELLED = "cancelled"
    PENDING = "pending"


@dataclass
class PartialRecord:
    """Best-effort fields produced by one extractor for one line."""
    amount: Optional[Decimal] = None
    merchant: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None


@dataclass(frozen=True)
class TransactionRecord:
    """Transaction extracted from one message line."""
    id: str
    original_text: str
    date: str
    amount: Decimal
    merchant: str
    category: str
    bank_name: str
    payment_mode: str
    type: TransactionType
    status: TransactionStatus

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["amount"] = str(self.amount)
        data["type"] = self.type.value
        data["status"] = self.status.value
        return data


@dataclass
class AnalysisSummary:
    """Totals derived from one record batch."""
    total_spent: Decimal = Decimal("0")
    total_income: Decimal = Decimal("0")
    transaction_count: int = 0
    failed_count: int = 0
    category_breakdown: Dict[str, Decimal] = field(default_factory=dict)  # category -> amount

    def to_dict(self) -> Dict:
        return {
            "total_spent": str(self.total_spent),
            "total_income": str(self.total_income),
            "transaction_count": self.transaction_count,
            "failed_count": self.failed_count,
            "category_breakdown": {k: str(v) for k, v in self.category_breakdown.items()},
        }
