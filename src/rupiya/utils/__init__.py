"""Utility modules."""
from .logger import get_logger, set_run_context, get_app_home
from .exceptions import (
    RupiyaError,
    ConfigError,
    LLMError,
    ModelUnavailableError,
    PipelineError,
    RetryableError,
    RetryableLLMError
)
from .retry import retry_with_backoff

__all__ = [
    "get_logger",
    "set_run_context",
    "get_app_home",
    "RupiyaError",
    "ConfigError",
    "LLMError",
    "ModelUnavailableError",
    "PipelineError",
    "RetryableError",
    "RetryableLLMError",
    "retry_with_backoff"
]
