"""Rupiya: transaction extraction from bank SMS text."""
from rupiya.llm.models import TransactionRecord, AnalysisSummary, TransactionType, TransactionStatus
from rupiya.orchestrator import PipelineConfig, PipelineOrchestrator, PipelineResult, run_pipeline

__version__ = "0.1.0"

__all__ = [
    "TransactionRecord",
    "AnalysisSummary",
    "TransactionType",
    "TransactionStatus",
    "PipelineConfig",
    "PipelineOrchestrator",
    "PipelineResult",
    "run_pipeline",
]
