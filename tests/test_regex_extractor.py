"""Tests for the regex extractor."""
import unittest
from decimal import Decimal

from rupiya.sms.regex_extractor import RegexExtractor, parse_amount, parse_merchant, categorize_merchant


class TestRegexExtractor(unittest.TestCase):
    """Test heuristic field extraction."""

    def setUp(self):
        """Set up test fixtures."""
        self.extractor = RegexExtractor()

    def test_upi_debit(self):
        """Standard UPI debit message."""
        line = "Rs. 540.00 debited from HDFC Bank A/c XX8921 via UPI to Zomato Pvt Ltd on 12-05-24."
        result = self.extractor.extract(line)

        self.assertEqual(result.amount, Decimal("540.00"))
        self.assertEqual(result.merchant, "Zomato Pvt Ltd")
        self.assertEqual(result.type, "debit")
        self.assertEqual(result.status, "success")
        self.assertEqual(result.category, "Food")

    def test_amount_with_thousands_separator(self):
        """Commas are stripped from amounts."""
        self.assertEqual(
            parse_amount("Credited Rs. 12,000.00 to SBI A/c XX1234 via IMPS"),
            Decimal("12000.00")
        )

    def test_inr_prefix_without_fraction(self):
        """INR prefix and whole amounts are accepted."""
        self.assertEqual(parse_amount("Sent INR 300 to Ravi via UPI"), Decimal("300"))

    def test_missing_amount_is_zero(self):
        """No currency marker yields zero."""
        self.assertEqual(parse_amount("Your UPI PIN was changed successfully."), Decimal("0"))

    def test_merchant_before_via(self):
        """Merchant stops at the 'via' boundary."""
        self.assertEqual(parse_merchant("Paid Rs 150 to Uber via Paytm Wallet."), "Uber")

    def test_merchant_unknown(self):
        """No preposition anchor yields the placeholder."""
        self.assertEqual(parse_merchant("Rs 45.00 spent on Chai Point."), "Unknown")

    def test_credit_detection(self):
        """Credit verbs mark the record as credit."""
        result = self.extractor.extract("Credited Rs. 12,000.00 to SBI A/c XX1234 on 10-05-24 via IMPS")
        self.assertEqual(result.type, "credit")

    def test_failed_status(self):
        """Failed or declined transactions are marked failed."""
        failed = self.extractor.extract(
            "Txn of INR 2,499.00 on your ICICI Credit Card XX4001 at Amazon Retail failed due to incorrect OTP."
        )
        declined = self.extractor.extract("Txn of INR 300.00 declined at Big Bazaar.")

        self.assertEqual(failed.status, "failed")
        self.assertEqual(failed.type, "debit")
        self.assertEqual(declined.status, "failed")

    def test_refund_with_credit_verb_is_income(self):
        """Documented tie-break: refund plus a credit verb stays a successful credit."""
        result = self.extractor.extract("Refund of Rs. 450.00 received from Uber India for cancelled ride.")

        self.assertEqual(result.type, "credit")
        self.assertEqual(result.status, "success")
        self.assertEqual(result.category, "Travel")

    def test_refund_without_credit_verb_is_cancelled(self):
        """Documented tie-break: refund wording alone means cancelled."""
        refund = self.extractor.extract("Refund of Rs. 200.00 processed for order 123.")
        reversed_txn = self.extractor.extract("Txn of Rs. 99.00 reversed to your A/c.")

        self.assertEqual(refund.status, "cancelled")
        self.assertEqual(refund.type, "debit")
        self.assertEqual(reversed_txn.status, "cancelled")

    def test_failed_takes_precedence_over_refund(self):
        """A failed refund is failed, not cancelled."""
        result = self.extractor.extract("Refund of Rs. 80.00 failed for order 881.")
        self.assertEqual(result.status, "failed")

    def test_categorize_merchant(self):
        """Merchant keyword groups map onto categories."""
        self.assertEqual(categorize_merchant("Swiggy"), "Food")
        self.assertEqual(categorize_merchant("Indian Oil Fuel Station"), "Travel")
        self.assertEqual(categorize_merchant("Reliance Digital"), "General")
        self.assertEqual(categorize_merchant("Unknown"), "General")

    def test_never_raises_on_noise(self):
        """Unmatched text degrades to placeholders."""
        result = self.extractor.extract("txn ###")

        self.assertEqual(result.amount, Decimal("0"))
        self.assertEqual(result.merchant, "Unknown")
        self.assertEqual(result.category, "General")


if __name__ == "__main__":
    unittest.main()
