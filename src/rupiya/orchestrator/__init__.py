"""Processing orchestrator module."""
from .config import PipelineConfig
from .processor import PipelineOrchestrator, PipelineResult, run_pipeline

__all__ = ["PipelineConfig", "PipelineOrchestrator", "PipelineResult", "run_pipeline"]
