"""Keyword pre-filter for bank notification text."""
import re
from typing import Iterable, List

DEFAULT_KEYWORDS = (
    "debited", "credited", "upi", "imps", "neft", "spent", "paid",
    "sent", "received", "txn", "refund", "ac", "a/c",
)

# Messages are newline separated; other Unicode line breaks stay inside a line
LINE_BREAK_RE = re.compile(r"\r?\n")


def contains_keyword(line: str, keywords: Iterable[str] = DEFAULT_KEYWORDS) -> bool:
    """Return True if the line mentions any transaction keyword (case-insensitive)."""
    lower = line.lower()
    return any(keyword in lower for keyword in keywords)


def filter_candidate_lines(text: str, keywords: Iterable[str] = DEFAULT_KEYWORDS) -> List[str]:
    """
    Split raw text into lines and keep those with transaction keywords.

    Order and duplicates are preserved; lines are returned untrimmed.

    Args:
        text: Raw multi-line message text
        keywords: Lower-case keyword set

    Returns:
        Candidate lines in input order
    """
    if not text:
        return []

    keywords = tuple(k.lower() for k in keywords)
    return [line for line in LINE_BREAK_RE.split(text) if contains_keyword(line, keywords)]
