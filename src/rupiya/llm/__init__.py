"""LLM processing module."""
from .models import (
    TransactionRecord,
    AnalysisSummary,
    PartialRecord,
    TransactionType,
    TransactionStatus
)
from .aggregator import Aggregator
from .session import (
    ModelAvailability,
    ModelSession,
    ModelSessionFactory,
    GeminiSession,
    GeminiSessionFactory
)

__all__ = [
    "TransactionRecord",
    "AnalysisSummary",
    "PartialRecord",
    "TransactionType",
    "TransactionStatus",
    "Aggregator",
    "ModelAvailability",
    "ModelSession",
    "ModelSessionFactory",
    "GeminiSession",
    "GeminiSessionFactory"
]
