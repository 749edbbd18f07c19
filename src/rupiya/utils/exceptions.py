"""Custom exception classes for Rupiya."""


class RupiyaError(Exception):
    """Base exception for Rupiya."""
    pass


class ConfigError(RupiyaError):
    """Configuration-related errors."""
    pass


class LLMError(RupiyaError):
    """Model response and session errors."""
    pass


class ModelUnavailableError(LLMError):
    """No usable model session could be created."""
    pass


class PipelineError(RupiyaError):
    """Run-level failure; no partial batch is returned."""
    pass


# Retryable errors
class RetryableError(RupiyaError):
    """Base class for errors that should trigger retry."""
    pass


class RetryableLLMError(RetryableError, LLMError):
    """Model errors that can be retried."""
    pass
