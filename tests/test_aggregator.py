"""Tests for transaction aggregator."""
import unittest
from decimal import Decimal

from rupiya.llm.models import TransactionRecord, TransactionType, TransactionStatus
from rupiya.llm.aggregator import Aggregator


def make_record(index, amount, category, txn_type=TransactionType.DEBIT, status=TransactionStatus.SUCCESS):
    return TransactionRecord(
        id=f"txn-1-{index}",
        original_text=f"line {index}",
        date="2024-05-12",
        amount=Decimal(amount),
        merchant="Merchant",
        category=category,
        bank_name="Bank",
        payment_mode="UPI",
        type=txn_type,
        status=status
    )


class TestAggregator(unittest.TestCase):
    """Test Aggregator functionality."""

    def setUp(self):
        """Set up test fixtures."""
        self.aggregator = Aggregator()
        self.records = [
            make_record(0, "540.00", "Food"),
            make_record(1, "12000.00", "General", TransactionType.CREDIT),
            make_record(2, "2499.00", "General", status=TransactionStatus.FAILED),
            make_record(3, "150", "Travel"),
            make_record(4, "60.50", "Food"),
            make_record(5, "450.00", "Travel", TransactionType.CREDIT),
            make_record(6, "30", "Bills", status=TransactionStatus.PENDING),
            make_record(7, "99", "Shopping", TransactionType.CREDIT, TransactionStatus.CANCELLED),
        ]

    def test_aggregate_transactions(self):
        """Test basic aggregation."""
        result = self.aggregator.aggregate(self.records)

        self.assertEqual(result.total_spent, Decimal("750.50"))
        self.assertEqual(result.total_income, Decimal("12450.00"))
        self.assertEqual(result.transaction_count, 8)
        self.assertEqual(result.failed_count, 3)
        self.assertEqual(result.category_breakdown, {"Food": Decimal("600.50"), "Travel": Decimal("150")})

    def test_breakdown_sums_to_total_spent(self):
        """Category totals add up to total spent."""
        result = self.aggregator.aggregate(self.records)
        self.assertEqual(sum(result.category_breakdown.values(), Decimal("0")), result.total_spent)

    def test_idempotent(self):
        """Aggregating the same batch twice gives the same summary."""
        self.assertEqual(self.aggregator.aggregate(self.records), self.aggregator.aggregate(self.records))

    def test_empty_batch(self):
        """Empty batch gives an all-zero summary."""
        result = self.aggregator.aggregate([])

        self.assertEqual(result.total_spent, Decimal("0"))
        self.assertEqual(result.total_income, Decimal("0"))
        self.assertEqual(result.transaction_count, 0)
        self.assertEqual(result.failed_count, 0)
        self.assertEqual(result.category_breakdown, {})

    def test_to_dict(self):
        """Summary serializes amounts as strings."""
        data = self.aggregator.aggregate(self.records[:1]).to_dict()

        self.assertEqual(data["total_spent"], "540.00")
        self.assertEqual(data["category_breakdown"], {"Food": "540.00"})


if __name__ == "__main__":
    unittest.main()
