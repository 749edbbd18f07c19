"""SMS text processing: keyword pre-filter and regex extraction."""
from .extractor import LineExtractor
from .prefilter import DEFAULT_KEYWORDS, filter_candidate_lines, contains_keyword
from .regex_extractor import RegexExtractor, categorize_merchant

__all__ = [
    "LineExtractor",
    "DEFAULT_KEYWORDS",
    "filter_candidate_lines",
    "contains_keyword",
    "RegexExtractor",
    "categorize_merchant",
]
