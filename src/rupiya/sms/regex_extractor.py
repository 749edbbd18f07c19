"""Heuristic regex parser for bank SMS lines."""
import re
from decimal import Decimal, InvalidOperation

from rupiya.llm.models import PartialRecord, TransactionType, TransactionStatus
from .extractor import LineExtractor

AMOUNT_RE = re.compile(r"(?:rs\.?|inr)\s*([\d,]+(?:\.\d{2})?)", re.IGNORECASE)
MERCHANT_RE = re.compile(
    r"(?:at|to|from)\s+([a-zA-Z0-9\s&]+?)(?=\s*(?:on|via|using|through|ref|bal|is|ending|\.))",
    re.IGNORECASE
)
CREDIT_RE = re.compile(r"credited|received", re.IGNORECASE)
FAILED_RE = re.compile(r"failed|declined", re.IGNORECASE)
REFUND_RE = re.compile(r"refund|reversed", re.IGNORECASE)

# Merchant keyword groups, checked in order
CATEGORY_RULES = (
    ("Food", re.compile(r"zomato|swiggy|food", re.IGNORECASE)),
    ("Travel", re.compile(r"uber|ola|fuel|petrol", re.IGNORECASE)),
)
FALLBACK_CATEGORY = "General"
UNKNOWN_MERCHANT = "Unknown"


def parse_amount(line: str) -> Decimal:
    """Return the first currency-prefixed amount, or 0 when there is none."""
    match = AMOUNT_RE.search(line)
    if not match:
        return Decimal("0")
    try:
        return Decimal(match.group(1).replace(",", ""))
    except InvalidOperation:
        return Decimal("0")


def parse_merchant(line: str) -> str:
    match = MERCHANT_RE.search(line)
    if not match:
        return UNKNOWN_MERCHANT
    return match.group(1).strip() or UNKNOWN_MERCHANT


def categorize_merchant(merchant: str) -> str:
    """Map a merchant name onto a coarse category."""
    for category, pattern in CATEGORY_RULES:
        if pattern.search(merchant or ""):
            return category
    return FALLBACK_CATEGORY


class RegexExtractor(LineExtractor):
    """Deterministic extractor; never raises, degrades to placeholders."""

    name = "regex"

    def extract(self, line: str) -> PartialRecord:
        merchant = parse_merchant(line)
        is_credit = bool(CREDIT_RE.search(line))

        # Refund wording without a credit verb is a cancellation, not income
        if FAILED_RE.search(line):
            status = TransactionStatus.FAILED
        elif REFUND_RE.search(line) and not is_credit:
            status = TransactionStatus.CANCELLED
        else:
            status = TransactionStatus.SUCCESS

        return PartialRecord(
            amount=parse_amount(line),
            merchant=merchant,
            category=categorize_merchant(merchant),
            type=(TransactionType.CREDIT if is_credit else TransactionType.DEBIT).value,
            status=status.value
        )
